from __future__ import annotations

import json
from typing import Optional

import typer
from loguru import logger
from pydantic import ValidationError

from lendrate.adapters.providers import PROVIDER_NAMES, default_providers
from lendrate.api.schemas import AmortizationResponse, FeeScheduleResponse, PricingResponse
from lendrate.domain.errors import InvalidLoanInput
from lendrate.domain.pricing import PricingRequest
from lendrate.services.catalog import RateCatalog
from lendrate.services.catalog_refresh import CatalogRefresher
from lendrate.services.pricing_engine import PricingEngine

app = typer.Typer(help="Lender rate matching and loan cost calculations.")


def _engine() -> PricingEngine:
    return PricingEngine(RateCatalog(providers=default_providers()))


@app.command()
def quote(
    loan_type: str = typer.Option(..., help="dscr | fix_flip | bridge | construction | commercial"),
    loan_amount: float = typer.Option(...),
    property_value: float = typer.Option(...),
    credit_score: int = typer.Option(...),
    dscr_ratio: Optional[float] = typer.Option(None),
    property_type: str = typer.Option("single_family"),
    experience: str = typer.Option("experienced", help="first_time | intermediate | experienced"),
    timeline: str = typer.Option("standard", help="urgent | standard | flexible"),
) -> None:
    """
    Rank the lender programs a borrower qualifies for.
    """
    try:
        request = PricingRequest(
            loan_type=loan_type,
            loan_amount=loan_amount,
            property_value=property_value,
            credit_score=credit_score,
            dscr_ratio=dscr_ratio,
            property_type=property_type,
            borrower_experience=experience,
            timeline=timeline,
        )
    except ValidationError as e:
        raise typer.BadParameter(str(e)) from e
    result = _engine().get_pricing(request)
    typer.echo(PricingResponse.from_result(result).model_dump_json(indent=2))


@app.command()
def amortize(
    principal: float = typer.Option(...),
    rate: float = typer.Option(..., help="Annual rate in percent, e.g. 7.5"),
    years: float = typer.Option(...),
    frequency: str = typer.Option("monthly", help="monthly | quarterly | annually"),
    summary_only: bool = typer.Option(False, "--summary-only", help="Drop the per-period schedule"),
) -> None:
    """
    Level-payment amortization schedule.
    """
    try:
        result = _engine().amortize(principal, rate, years, frequency)
    except InvalidLoanInput as e:
        raise typer.BadParameter(str(e)) from e

    out = AmortizationResponse.from_result(result)
    if summary_only:
        typer.echo(out.model_dump_json(indent=2, exclude={"schedule"}))
    else:
        typer.echo(out.model_dump_json(indent=2))


@app.command()
def fees(
    loan_amount: float = typer.Option(...),
    loan_type: str = typer.Option(...),
) -> None:
    """
    Closing-cost fee schedule for a loan.
    """
    schedule = _engine().calculate_fees(loan_amount, loan_type)
    typer.echo(FeeScheduleResponse.from_schedule(schedule).model_dump_json(indent=2))


@app.command()
def sync(
    source: list[str] = typer.Option(list(PROVIDER_NAMES), "--source", help="Provider(s) to pull rates from"),
) -> None:
    """
    Refresh the rate catalog from external providers.
    """
    engine = _engine()
    logger.info("Starting rate sync", sources=source)

    with CatalogRefresher(engine.catalog) as refresher:
        futures = {name: refresher.submit(name) for name in source}
        results = {name: fut.result() for name, fut in futures.items()}

    for name, ok in results.items():
        if ok:
            logger.info("Rate sync finished", source=name)
        else:
            logger.warning("Rate sync failed; catalog left unchanged", source=name)

    typer.echo(json.dumps(results, indent=2))
    if not all(results.values()):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
