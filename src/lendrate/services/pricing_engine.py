# src/lendrate/services/pricing_engine.py
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Callable, Optional, Union

from lendrate.adapters.config import AppConfig, config as default_config
from lendrate.adapters.logging_utils import get_logger
from lendrate.domain.amortization import AmortizationResult, Number, PaymentFrequency, amortize
from lendrate.domain.fees import FeeSchedule, calculate_fees
from lendrate.domain.offers import LenderRateOffer, LoanType
from lendrate.domain.ports import MarketConditionsSource
from lendrate.domain.pricing import MarketConditions, PricingRequest, PricingResult
from lendrate.domain.ratios import ltv, quoted_dscr, reference_dscr
from lendrate.domain.rules import filter_eligible
from lendrate.services.catalog import RateCatalog
from lendrate.services.ranking import RateSummary, rank_offers, summarize_rates

logger = get_logger(__name__)


class NeutralMarket:
    def latest(self) -> MarketConditions:
        return MarketConditions(trend="stable", volatility="low")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PricingEngine:
    """
    Entry point for pricing and loan math.

    Pricing runs against a single catalog snapshot taken at the start of the
    request; the loan-math calls are pure and need no catalog at all.
    """

    def __init__(
        self,
        catalog: Optional[RateCatalog] = None,
        *,
        market: Optional[MarketConditionsSource] = None,
        cfg: Optional[AppConfig] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.catalog = catalog if catalog is not None else RateCatalog()
        self.market = market or NeutralMarket()
        self.cfg = cfg or default_config
        self._clock = clock

    # -----------------------------
    # Pricing
    # -----------------------------
    def get_pricing(self, request: PricingRequest) -> PricingResult:
        offers = self.catalog.snapshot().get(request.loan_type, ())
        eligible = filter_eligible(offers, request)
        ranked = rank_offers(eligible, request.loan_type)
        top = ranked[: self.cfg.PRICING_MAX_OPTIONS]

        now = self._clock()
        result = PricingResult(
            recommended_option=top[0] if top else None,
            all_options=top,
            pricing_date=now,
            expires_at=now + timedelta(hours=self.cfg.PRICING_TTL_HOURS),
            market_conditions=self.market.latest(),
        )

        if not result.has_match:
            logger.info(
                "pricing_no_match",
                extra={
                    "loan_type": request.loan_type.value,
                    "loan_amount": str(request.loan_amount),
                    "candidates": len(offers),
                },
            )
        return result

    def get_rates_by_lender(self, loan_type: LoanType | str) -> dict[str, list[LenderRateOffer]]:
        grouped: dict[str, list[LenderRateOffer]] = {}
        for offer in self.catalog.get_offers(loan_type):
            grouped.setdefault(offer.lender_name, []).append(offer)
        return grouped

    def summarize_rates(self, loan_type: LoanType | str) -> Optional[RateSummary]:
        return summarize_rates(o for o in self.catalog.get_offers(loan_type) if o.is_active)

    def sync_from_provider(self, provider_name: str) -> bool:
        return self.catalog.sync_from_provider(provider_name)

    # -----------------------------
    # Loan math
    # -----------------------------
    def amortize(
        self,
        principal: Number,
        annual_rate_percent: Number,
        term_years: Number,
        frequency: Union[str, PaymentFrequency] = PaymentFrequency.MONTHLY,
        *,
        start_date: Optional[date] = None,
    ) -> AmortizationResult:
        return amortize(principal, annual_rate_percent, term_years, frequency, start_date=start_date)

    def calculate_fees(self, loan_amount: Number, loan_type: object) -> FeeSchedule:
        return calculate_fees(loan_amount, loan_type)

    def calculate_dscr(self, monthly_rent: Number, loan_amount: Number, monthly_expenses: Number) -> float:
        return reference_dscr(
            monthly_rent,
            loan_amount,
            monthly_expenses,
            reference_rate=self.cfg.DSCR_REFERENCE_RATE,
            reference_term_years=self.cfg.DSCR_REFERENCE_TERM_YEARS,
        )

    def calculate_quoted_dscr(
        self,
        monthly_rent: Number,
        loan_amount: Number,
        monthly_expenses: Number,
        annual_rate_percent: Number,
        term_years: int,
    ) -> float:
        return quoted_dscr(monthly_rent, loan_amount, monthly_expenses, annual_rate_percent, term_years)

    def calculate_ltv(self, loan_amount: Number, property_value: Number) -> float:
        return ltv(loan_amount, property_value)
