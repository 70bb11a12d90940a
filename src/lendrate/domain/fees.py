# src/lendrate/domain/fees.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal, Optional

from lendrate.domain.amortization import Number, _to_decimal, to_money

FeeCategory = Literal["origination", "processing", "underwriting", "closing", "service"]

DEFAULT_ORIGINATION_RATE = Decimal("0.02")
ORIGINATION_RATES: dict[str, Decimal] = {
    "dscr": Decimal("0.015"),
    "fix_flip": Decimal("0.025"),
    "bridge": Decimal("0.02"),
    "commercial": Decimal("0.01"),
}

DEFAULT_APPRAISAL_FEE = Decimal("650")
APPRAISAL_FEES: dict[str, Decimal] = {
    "dscr": Decimal("650"),
    "fix_flip": Decimal("750"),   # may need multiple appraisals
    "bridge": Decimal("700"),
    "commercial": Decimal("2500"),
}

ENVIRONMENTAL_LOAN_TYPES = frozenset({"commercial", "bridge"})

# Upstream forms still seen in older payloads
_LOAN_TYPE_ALIASES = {
    "fix_and_flip": "fix_flip",
    "fix-and-flip": "fix_flip",
    "fix-flip": "fix_flip",
}


@dataclass(frozen=True)
class FeeLineItem:
    fee_type: str
    description: str
    amount: Decimal
    is_required: bool
    category: FeeCategory
    percentage: Optional[Decimal] = None


@dataclass(frozen=True)
class FeeSchedule:
    loan_type: str
    loan_amount: Decimal
    items: list[FeeLineItem]

    @property
    def total_required(self) -> Decimal:
        return sum((f.amount for f in self.items if f.is_required), Decimal("0"))

    @property
    def total(self) -> Decimal:
        return sum((f.amount for f in self.items), Decimal("0"))

    def get(self, fee_type: str) -> Optional[FeeLineItem]:
        return next((f for f in self.items if f.fee_type == fee_type), None)


def normalize_loan_type(loan_type: object) -> str:
    t = str(getattr(loan_type, "value", loan_type) or "").strip().lower()
    return _LOAN_TYPE_ALIASES.get(t, t)


def origination_rate(loan_type: object) -> Decimal:
    return ORIGINATION_RATES.get(normalize_loan_type(loan_type), DEFAULT_ORIGINATION_RATE)


def appraisal_fee(loan_type: object) -> Decimal:
    return APPRAISAL_FEES.get(normalize_loan_type(loan_type), DEFAULT_APPRAISAL_FEE)


def calculate_fees(loan_amount: Number, loan_type: object) -> FeeSchedule:
    """
    Standard closing-cost schedule for a loan.

    Unknown loan types get the default origination rate and appraisal fee.
    """
    amount = _to_decimal(loan_amount, "loan_amount")
    t = normalize_loan_type(loan_type)
    rate = origination_rate(t)

    items: list[FeeLineItem] = [
        FeeLineItem(
            fee_type="origination",
            description="Loan origination fee",
            amount=to_money(amount * rate),
            percentage=rate * 100,
            is_required=True,
            category="origination",
        ),
        FeeLineItem("processing", "Application processing fee", Decimal("495"), True, "processing"),
        FeeLineItem("underwriting", "Underwriting and credit analysis", Decimal("750"), True, "underwriting"),
        FeeLineItem("appraisal", "Property appraisal", appraisal_fee(t), True, "underwriting"),
    ]

    if t in ENVIRONMENTAL_LOAN_TYPES:
        items.append(
            FeeLineItem("environmental", "Environmental assessment", Decimal("1250"), True, "underwriting")
        )

    items += [
        FeeLineItem("document_prep", "Document preparation and review", Decimal("350"), True, "closing"),
        FeeLineItem("wire_transfer", "Wire transfer fee", Decimal("35"), False, "closing"),
        FeeLineItem("tax_service", "Tax monitoring service", Decimal("89"), False, "service"),
        FeeLineItem("flood_cert", "Flood zone certification", Decimal("25"), True, "underwriting"),
    ]

    return FeeSchedule(loan_type=t, loan_amount=amount, items=items)
