# src/lendrate/api/http.py
from __future__ import annotations

from typing import Any, Optional

from fastapi import Body, Depends, FastAPI, HTTPException, Query
from pydantic import ValidationError

from lendrate.adapters.providers import default_providers
from lendrate.domain.errors import InvalidLoanInput, UnknownRateProvider
from lendrate.domain.pricing import PricingRequest
from lendrate.services.catalog import RateCatalog
from lendrate.services.pricing_engine import PricingEngine
from .schemas import (
    AmortizationResponse,
    AmortizeRequest,
    FeeScheduleResponse,
    FeesRequest,
    OfferOut,
    PricingResponse,
    RateSummaryOut,
    SyncRequest,
    SyncResponse,
)

app = FastAPI(title="lendrate")

# single engine for the process; tests swap it through dependency_overrides
_engine = PricingEngine(RateCatalog(providers=default_providers()))


def get_engine() -> PricingEngine:
    return _engine


# -----------------------------
# Pricing
# -----------------------------
@app.post("/pricing/quote", response_model=PricingResponse)
def pricing_quote(
    payload: dict[str, Any] = Body(...),
    engine: PricingEngine = Depends(get_engine),
) -> PricingResponse:
    try:
        request = PricingRequest.model_validate(payload)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return PricingResponse.from_result(engine.get_pricing(request))


@app.get("/pricing/lenders/{loan_type}", response_model=dict[str, list[OfferOut]])
def rates_by_lender(loan_type: str, engine: PricingEngine = Depends(get_engine)) -> dict[str, list[OfferOut]]:
    grouped = engine.get_rates_by_lender(loan_type)
    return {name: [OfferOut.from_offer(o) for o in offers] for name, offers in grouped.items()}


@app.get("/pricing/summary/{loan_type}", response_model=Optional[RateSummaryOut])
def rate_summary(loan_type: str, engine: PricingEngine = Depends(get_engine)) -> Optional[RateSummaryOut]:
    summary = engine.summarize_rates(loan_type)
    return RateSummaryOut.from_summary(summary) if summary else None


@app.post("/pricing/sync-rates", response_model=SyncResponse)
def sync_rates(body: SyncRequest, engine: PricingEngine = Depends(get_engine)) -> SyncResponse:
    try:
        success = engine.sync_from_provider(body.source)
    except UnknownRateProvider as e:
        raise HTTPException(status_code=400, detail="Invalid rate source") from e
    return SyncResponse(success=success, source=body.source)


# -----------------------------
# Loan math
# -----------------------------
@app.post("/loans/amortize", response_model=AmortizationResponse)
def loans_amortize(body: AmortizeRequest, engine: PricingEngine = Depends(get_engine)) -> AmortizationResponse:
    try:
        result = engine.amortize(
            body.principal,
            body.annual_rate_percent,
            body.term_years,
            body.frequency,
            start_date=body.start_date,
        )
    except InvalidLoanInput as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return AmortizationResponse.from_result(result)


@app.post("/loans/fees", response_model=FeeScheduleResponse)
def loans_fees(body: FeesRequest, engine: PricingEngine = Depends(get_engine)) -> FeeScheduleResponse:
    try:
        schedule = engine.calculate_fees(body.loan_amount, body.loan_type)
    except InvalidLoanInput as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return FeeScheduleResponse.from_schedule(schedule)


@app.get("/loans/dscr")
def loans_dscr(
    monthly_rent: float = Query(...),
    loan_amount: float = Query(...),
    monthly_expenses: float = Query(0.0),
    annual_rate_percent: float | None = Query(None, description="Quoted rate; omit for the reference estimate"),
    term_years: int | None = Query(None),
    engine: PricingEngine = Depends(get_engine),
) -> dict[str, Any]:
    try:
        if annual_rate_percent is not None:
            value = engine.calculate_quoted_dscr(
                monthly_rent, loan_amount, monthly_expenses, annual_rate_percent, term_years or 30
            )
            basis = "quoted"
        else:
            value = engine.calculate_dscr(monthly_rent, loan_amount, monthly_expenses)
            basis = "reference"
    except InvalidLoanInput as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return {"dscr": value, "basis": basis}


@app.get("/loans/ltv")
def loans_ltv(
    loan_amount: float = Query(...),
    property_value: float = Query(...),
    engine: PricingEngine = Depends(get_engine),
) -> dict[str, Any]:
    try:
        value = engine.calculate_ltv(loan_amount, property_value)
    except InvalidLoanInput as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return {"ltv": value}
