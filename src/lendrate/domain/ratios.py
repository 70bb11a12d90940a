# src/lendrate/domain/ratios.py
from __future__ import annotations

from decimal import Decimal
from typing import Optional

from lendrate.domain.amortization import Number, _to_decimal, level_payment

REFERENCE_RATE = Decimal("0.065")
REFERENCE_TERM_YEARS = 30


def ltv(loan_amount: Number, property_value: Number) -> float:
    """
    Loan-to-value as a percentage (75.0 means 75%).

    A zero or negative property value yields 0 instead of dividing by zero.
    """
    loan = _to_decimal(loan_amount, "loan_amount")
    value = _to_decimal(property_value, "property_value")
    if value <= 0:
        return 0.0
    return float(loan / value * 100)


def monthly_debt_service(loan_amount: Decimal, annual_rate: Decimal, term_years: int) -> Decimal:
    return level_payment(loan_amount, annual_rate / 12, int(term_years) * 12)


def quoted_dscr(
    monthly_rent: Number,
    loan_amount: Number,
    monthly_expenses: Number,
    annual_rate_percent: Number,
    term_years: int,
) -> float:
    """
    DSCR = (rent - expenses) / monthly payment at the rate actually quoted.

    Unfavorable results (below 1, or negative) are returned as-is.
    """
    loan = _to_decimal(loan_amount, "loan_amount")
    if loan <= 0:
        return 0.0
    rent = _to_decimal(monthly_rent, "monthly_rent")
    expenses = _to_decimal(monthly_expenses, "monthly_expenses")
    rate = _to_decimal(annual_rate_percent, "annual_rate_percent") / 100

    payment = monthly_debt_service(loan, rate, term_years)
    return float((rent - expenses) / payment)


def reference_dscr(
    monthly_rent: Number,
    loan_amount: Number,
    monthly_expenses: Number,
    *,
    reference_rate: Optional[Number] = None,
    reference_term_years: Optional[int] = None,
) -> float:
    """
    Estimated DSCR against a fixed reference loan (6.5% / 30 years by default).

    This is a screening estimate for leads that have no quote yet; use
    quoted_dscr once a program has been selected.
    """
    rate = _to_decimal(reference_rate, "reference_rate") if reference_rate is not None else REFERENCE_RATE
    if rate > 1:
        rate = rate / 100
    term = reference_term_years or REFERENCE_TERM_YEARS
    return quoted_dscr(monthly_rent, loan_amount, monthly_expenses, rate * 100, term)


# Default DSCR helper is the reference estimate
dscr = reference_dscr
