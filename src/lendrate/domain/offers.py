# src/lendrate/domain/offers.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional


class LoanType(str, Enum):
    DSCR = "dscr"
    FIX_FLIP = "fix_flip"
    BRIDGE = "bridge"
    CONSTRUCTION = "construction"
    COMMERCIAL = "commercial"


class PropertyType(str, Enum):
    SINGLE_FAMILY = "single_family"
    CONDO = "condo"
    TOWNHOUSE = "townhouse"
    MULTIFAMILY = "multifamily"
    MIXED_USE = "mixed_use"
    MANUFACTURED = "manufactured"
    LAND = "land"
    COMMERCIAL = "commercial"


class OfferCondition(str, Enum):
    """
    Tags a lender attaches to a program.

    Only EXPERIENCED_ONLY, SLOW_PROCESSING and the NO_<property type> tags
    exclude borrowers; the rest are informational.
    """
    EXPERIENCED_ONLY = "experienced_only"
    EXPERIENCED_PREFERRED = "experienced_preferred"
    SLOW_PROCESSING = "slow_processing"
    FAST_PROCESSING = "fast_processing"
    DETAILED_PLANS_REQUIRED = "detailed_plans_required"
    LICENSED_BUILDER_REQUIRED = "licensed_builder_required"
    COMMERCIAL_EXPERIENCE_REQUIRED = "commercial_experience_required"

    NO_SINGLE_FAMILY = "no_single_family"
    NO_CONDO = "no_condo"
    NO_TOWNHOUSE = "no_townhouse"
    NO_MULTIFAMILY = "no_multifamily"
    NO_MIXED_USE = "no_mixed_use"
    NO_MANUFACTURED = "no_manufactured"
    NO_LAND = "no_land"
    NO_COMMERCIAL = "no_commercial"

    @classmethod
    def excluding(cls, property_type: PropertyType) -> "OfferCondition":
        return cls(f"no_{property_type.value}")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class LenderRateOffer:
    lender_id: str
    lender_name: str
    loan_program: str
    loan_type: LoanType

    rate: Decimal           # annual, e.g. 0.075
    points: Decimal         # percent of principal charged upfront, e.g. 2.0
    fees: Decimal           # flat fees in dollars
    max_ltv: Decimal        # fraction, e.g. 0.80
    min_credit_score: int
    min_loan_amount: Decimal
    max_loan_amount: Decimal

    min_dscr: Optional[Decimal] = None
    terms: str = ""
    prepayment_penalty: bool = False
    is_active: bool = True
    last_updated: datetime = field(default_factory=_utcnow)
    conditions: frozenset[OfferCondition] = frozenset()

    def __post_init__(self) -> None:
        if self.min_loan_amount > self.max_loan_amount:
            raise ValueError(
                f"{self.lender_id}: min_loan_amount {self.min_loan_amount} exceeds "
                f"max_loan_amount {self.max_loan_amount}"
            )
        if not (Decimal("0") < self.max_ltv <= Decimal("1")):
            raise ValueError(f"{self.lender_id}: max_ltv must be in (0, 1], got {self.max_ltv}")
        # accept any iterable of tags, store an immutable set
        object.__setattr__(
            self, "conditions", frozenset(OfferCondition(c) for c in self.conditions)
        )

    def has_condition(self, condition: OfferCondition) -> bool:
        return condition in self.conditions
