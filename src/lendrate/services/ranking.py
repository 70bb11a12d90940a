# src/lendrate/services/ranking.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from lendrate.domain.offers import LenderRateOffer, LoanType

# Expected years a borrower keeps each kind of loan
HOLD_PERIOD_YEARS: dict[str, Decimal] = {
    LoanType.FIX_FLIP.value: Decimal("1"),
    LoanType.BRIDGE.value: Decimal("1.5"),
    LoanType.CONSTRUCTION.value: Decimal("2"),
    LoanType.COMMERCIAL.value: Decimal("7"),
    LoanType.DSCR.value: Decimal("5"),
}
DEFAULT_HOLD_PERIOD_YEARS = Decimal("3")


def hold_period_years(loan_type: object) -> Decimal:
    key = str(getattr(loan_type, "value", loan_type))
    return HOLD_PERIOD_YEARS.get(key, DEFAULT_HOLD_PERIOD_YEARS)


def effective_cost(offer: LenderRateOffer, loan_type: object) -> Decimal:
    """
    rate + points spread over the expected hold period.

    Lets a one-year flip loan and a five-year DSCR loan compare on an
    annualized basis.
    """
    return offer.rate + offer.points / hold_period_years(loan_type)


def rank_offers(offers: Iterable[LenderRateOffer], loan_type: object) -> list[LenderRateOffer]:
    """
    Best first: ascending effective cost, then ascending flat fees.

    The lender/program ids close out the key so equal offers always come
    back in the same order.
    """
    return sorted(
        offers,
        key=lambda o: (effective_cost(o, loan_type), o.fees, o.lender_id, o.loan_program),
    )


@dataclass(frozen=True)
class RateSummary:
    best_rate: Decimal
    average_rate: Decimal
    lowest_fees: Decimal
    total_options: int
    rate_spread: Decimal


def summarize_rates(offers: Iterable[LenderRateOffer]) -> Optional[RateSummary]:
    items = list(offers)
    if not items:
        return None

    rates = [o.rate for o in items]
    best = min(rates)
    return RateSummary(
        best_rate=best,
        average_rate=sum(rates, Decimal("0")) / len(rates),
        lowest_fees=min(o.fees for o in items),
        total_options=len(items),
        rate_spread=max(rates) - best,
    )
