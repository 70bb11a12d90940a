# src/lendrate/api/schemas.py
from __future__ import annotations

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

from lendrate.domain.amortization import AmortizationResult
from lendrate.domain.fees import FeeSchedule
from lendrate.domain.offers import LenderRateOffer
from lendrate.domain.pricing import PricingResult
from lendrate.services.ranking import RateSummary, effective_cost


# --------------------------------------------
# Pricing
# --------------------------------------------

class OfferOut(BaseModel):
    lender_id: str
    lender_name: str
    loan_program: str
    loan_type: str
    rate: float
    points: float
    fees: float
    max_ltv: float
    min_dscr: Optional[float] = None
    min_credit_score: int
    min_loan_amount: float
    max_loan_amount: float
    terms: str
    prepayment_penalty: bool
    is_active: bool
    last_updated: datetime
    conditions: list[str]
    effective_cost: float

    @classmethod
    def from_offer(cls, o: LenderRateOffer) -> "OfferOut":
        return cls(
            lender_id=o.lender_id,
            lender_name=o.lender_name,
            loan_program=o.loan_program,
            loan_type=o.loan_type.value,
            rate=float(o.rate),
            points=float(o.points),
            fees=float(o.fees),
            max_ltv=float(o.max_ltv),
            min_dscr=float(o.min_dscr) if o.min_dscr is not None else None,
            min_credit_score=o.min_credit_score,
            min_loan_amount=float(o.min_loan_amount),
            max_loan_amount=float(o.max_loan_amount),
            terms=o.terms,
            prepayment_penalty=o.prepayment_penalty,
            is_active=o.is_active,
            last_updated=o.last_updated,
            conditions=sorted(c.value for c in o.conditions),
            effective_cost=float(effective_cost(o, o.loan_type)),
        )


class MarketConditionsOut(BaseModel):
    trend: str
    volatility: str
    last_update: datetime


class PricingResponse(BaseModel):
    status: Literal["matched", "no_matching_program"]
    recommended_option: Optional[OfferOut] = None
    all_options: list[OfferOut]
    pricing_date: datetime
    expires_at: datetime
    market_conditions: MarketConditionsOut

    @classmethod
    def from_result(cls, r: PricingResult) -> "PricingResponse":
        mc = r.market_conditions
        return cls(
            status=r.status,
            recommended_option=OfferOut.from_offer(r.recommended_option) if r.recommended_option else None,
            all_options=[OfferOut.from_offer(o) for o in r.all_options],
            pricing_date=r.pricing_date,
            expires_at=r.expires_at,
            market_conditions=MarketConditionsOut(
                trend=mc.trend, volatility=mc.volatility, last_update=mc.last_update
            ),
        )


class RateSummaryOut(BaseModel):
    best_rate: float
    average_rate: float
    lowest_fees: float
    total_options: int
    rate_spread: float

    @classmethod
    def from_summary(cls, s: RateSummary) -> "RateSummaryOut":
        return cls(
            best_rate=float(s.best_rate),
            average_rate=float(s.average_rate),
            lowest_fees=float(s.lowest_fees),
            total_options=s.total_options,
            rate_spread=float(s.rate_spread),
        )


class SyncRequest(BaseModel):
    source: str


class SyncResponse(BaseModel):
    success: bool
    source: str


# --------------------------------------------
# Loan math
# --------------------------------------------

class AmortizeRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    principal: float
    annual_rate_percent: float
    term_years: float
    frequency: str = "monthly"
    start_date: Optional[date] = None


class ScheduleEntryOut(BaseModel):
    period: int
    payment_date: date
    principal: float
    interest: float
    total_payment: float
    remaining_balance: float


class AmortizationResponse(BaseModel):
    payment: float
    total_payment: float
    total_interest: float
    nominal_rate: float
    effective_rate: float
    frequency: str
    number_of_payments: int
    payoff_date: date
    schedule: list[ScheduleEntryOut]

    @classmethod
    def from_result(cls, r: AmortizationResult) -> "AmortizationResponse":
        return cls(
            payment=float(r.payment),
            total_payment=float(r.total_payment),
            total_interest=float(r.total_interest),
            nominal_rate=float(r.nominal_rate),
            effective_rate=float(r.effective_rate),
            frequency=r.frequency.value,
            number_of_payments=r.number_of_payments,
            payoff_date=r.payoff_date,
            schedule=[
                ScheduleEntryOut(
                    period=e.period,
                    payment_date=e.payment_date,
                    principal=float(e.principal),
                    interest=float(e.interest),
                    total_payment=float(e.total_payment),
                    remaining_balance=float(e.remaining_balance),
                )
                for e in r.schedule
            ],
        )


class FeesRequest(BaseModel):
    loan_amount: float
    loan_type: str


class FeeItemOut(BaseModel):
    fee_type: str
    description: str
    amount: float
    percentage: Optional[float] = None
    is_required: bool
    category: str


class FeeScheduleResponse(BaseModel):
    loan_type: str
    loan_amount: float
    total_required: float
    total: float
    items: list[FeeItemOut]

    @classmethod
    def from_schedule(cls, s: FeeSchedule) -> "FeeScheduleResponse":
        return cls(
            loan_type=s.loan_type,
            loan_amount=float(s.loan_amount),
            total_required=float(s.total_required),
            total=float(s.total),
            items=[
                FeeItemOut(
                    fee_type=f.fee_type,
                    description=f.description,
                    amount=float(f.amount),
                    percentage=float(f.percentage) if f.percentage is not None else None,
                    is_required=f.is_required,
                    category=f.category,
                )
                for f in s.items
            ],
        )
