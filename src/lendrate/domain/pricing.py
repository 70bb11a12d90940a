# src/lendrate/domain/pricing.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from lendrate.domain.offers import LenderRateOffer, LoanType, PropertyType

BorrowerExperience = Literal["first_time", "intermediate", "experienced"]
Timeline = Literal["urgent", "standard", "flexible"]
LoanPurpose = Literal["purchase", "refinance", "cash_out_refinance", "construction"]


class PricingRequest(BaseModel):
    """
    One borrower/property/loan combination to price.

    Accepts snake_case or the camelCase names the web client sends.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    loan_type: LoanType
    loan_amount: Decimal = Field(..., gt=0)
    property_value: Optional[Decimal] = Field(default=None, ge=0)
    credit_score: int = Field(..., ge=300, le=850)
    dscr_ratio: Optional[Decimal] = None

    loan_purpose: LoanPurpose = "purchase"
    property_type: PropertyType = PropertyType.SINGLE_FAMILY
    borrower_experience: BorrowerExperience = "experienced"
    timeline: Timeline = "standard"
    state: str = ""


@dataclass(frozen=True)
class MarketConditions:
    trend: str = "stable"
    volatility: str = "low"
    last_update: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class PricingResult:
    recommended_option: Optional[LenderRateOffer]
    all_options: list[LenderRateOffer]
    pricing_date: datetime
    expires_at: datetime
    market_conditions: MarketConditions

    @property
    def has_match(self) -> bool:
        return self.recommended_option is not None

    @property
    def status(self) -> str:
        return "matched" if self.has_match else "no_matching_program"
