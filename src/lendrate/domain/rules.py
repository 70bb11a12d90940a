# src/lendrate/domain/rules.py
from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from lendrate.domain.offers import LenderRateOffer, OfferCondition
from lendrate.domain.pricing import PricingRequest


def request_ltv(request: PricingRequest) -> Decimal | None:
    """Loan-to-value as a fraction, or None when the property value is missing or zero."""
    value = request.property_value
    if value is None or value <= 0:
        return None
    return request.loan_amount / value


def eligibility_failures(offer: LenderRateOffer, request: PricingRequest) -> list[str]:
    """
    Every reason `offer` is closed to `request`. An empty list means eligible.
    """
    failures: list[str] = []

    # 1. Program status
    if not offer.is_active:
        failures.append("Program inactive")

    # 2. Loan size
    if request.loan_amount < offer.min_loan_amount:
        failures.append(f"Loan amount below minimum ({offer.min_loan_amount:,.0f})")
    if request.loan_amount > offer.max_loan_amount:
        failures.append(f"Loan amount above maximum ({offer.max_loan_amount:,.0f})")

    # 3. Credit
    if request.credit_score < offer.min_credit_score:
        failures.append(f"Credit score {request.credit_score} < {offer.min_credit_score}")

    # 4. LTV (no property value means we cannot qualify it)
    ltv = request_ltv(request)
    if ltv is None:
        failures.append("Property value missing or zero")
    elif ltv > offer.max_ltv:
        failures.append(f"LTV {ltv:.2%} > {offer.max_ltv:.2%}")

    # 5. DSCR, only when both sides carry one
    if offer.min_dscr is not None and request.dscr_ratio is not None:
        if request.dscr_ratio < offer.min_dscr:
            failures.append(f"DSCR {request.dscr_ratio} < {offer.min_dscr}")

    # 6. Borrower / property exclusions
    if request.borrower_experience == "first_time" and offer.has_condition(OfferCondition.EXPERIENCED_ONLY):
        failures.append("Experienced borrowers only")
    if request.timeline == "urgent" and offer.has_condition(OfferCondition.SLOW_PROCESSING):
        failures.append("Processing too slow for urgent timeline")
    if offer.has_condition(OfferCondition.excluding(request.property_type)):
        failures.append(f"Property type {request.property_type.value} excluded")

    return failures


def is_eligible(offer: LenderRateOffer, request: PricingRequest) -> bool:
    return not eligibility_failures(offer, request)


def filter_eligible(offers: Iterable[LenderRateOffer], request: PricingRequest) -> list[LenderRateOffer]:
    return [o for o in offers if is_eligible(o, request)]
