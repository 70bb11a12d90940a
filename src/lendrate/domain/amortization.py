# src/lendrate/domain/amortization.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

from lendrate.domain.errors import InvalidLoanInput

Number = Union[int, float, str, Decimal]

CENT = Decimal("0.01")
_ZERO = Decimal("0")


class PaymentFrequency(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUALLY = "annually"

    @property
    def periods_per_year(self) -> int:
        return _PERIODS_PER_YEAR[self]

    @property
    def months_per_period(self) -> int:
        return 12 // self.periods_per_year


_PERIODS_PER_YEAR = {
    PaymentFrequency.MONTHLY: 12,
    PaymentFrequency.QUARTERLY: 4,
    PaymentFrequency.ANNUALLY: 1,
}


@dataclass(frozen=True)
class ScheduleEntry:
    period: int
    payment_date: date
    principal: Decimal
    interest: Decimal
    total_payment: Decimal
    remaining_balance: Decimal


@dataclass(frozen=True)
class AmortizationResult:
    principal: Decimal
    payment: Decimal                 # level payment, rounded to cents
    schedule: list[ScheduleEntry]
    total_payment: Decimal           # payment * n
    total_interest: Decimal          # total_payment - principal
    nominal_rate: Decimal            # annual, as a fraction
    effective_rate: Decimal          # annual, compounded at the payment frequency
    frequency: PaymentFrequency
    payoff_date: date

    @property
    def number_of_payments(self) -> int:
        return len(self.schedule)


def to_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _to_decimal(value: Number, field_name: str) -> Decimal:
    if isinstance(value, bool):
        raise InvalidLoanInput(f"Invalid type for {field_name}: bool")
    try:
        d = Decimal(str(value).strip()) if not isinstance(value, Decimal) else value
    except Exception as err:
        raise InvalidLoanInput(f"Invalid numeric value for {field_name}: {value!r}") from err
    if not d.is_finite():
        raise InvalidLoanInput(f"{field_name} must be finite")
    return d


def parse_frequency(frequency: Union[str, PaymentFrequency]) -> PaymentFrequency:
    try:
        return PaymentFrequency(str(getattr(frequency, "value", frequency)).strip().lower())
    except ValueError as err:
        raise InvalidLoanInput(f"Invalid payment frequency: {frequency!r}") from err


def level_payment(principal: Decimal, periodic_rate: Decimal, n_periods: int) -> Decimal:
    """
    Unrounded level payment that retires `principal` in `n_periods`.

    payment = P * r * (1+r)^n / ((1+r)^n - 1), or P / n when r == 0.
    """
    if n_periods <= 0:
        raise InvalidLoanInput("Number of payments must be positive")
    r = periodic_rate
    if r == 0:
        return principal / n_periods
    growth = (1 + r) ** n_periods
    return principal * r * growth / (growth - 1)


def amortize(
    principal: Number,
    annual_rate_percent: Number,
    term_years: Number,
    frequency: Union[str, PaymentFrequency] = PaymentFrequency.MONTHLY,
    *,
    start_date: Optional[date] = None,
) -> AmortizationResult:
    """
    Level-payment amortization schedule.

    Figures are rounded to cents every period, the way a lender statement
    shows them, and the balance carried forward is the rounded one. The final
    period pays off whatever balance is left, so principal portions always sum
    to the original principal and the last remaining balance is exactly zero.
    """
    p = to_money(_to_decimal(principal, "principal"))
    rate_pct = _to_decimal(annual_rate_percent, "annual_rate_percent")
    years = _to_decimal(term_years, "term_years")
    freq = parse_frequency(frequency)

    if p <= 0:
        raise InvalidLoanInput("principal must be positive")
    if years <= 0:
        raise InvalidLoanInput("term_years must be positive")
    if rate_pct < 0:
        raise InvalidLoanInput("annual_rate_percent must not be negative")

    periods = years * freq.periods_per_year
    if periods != periods.to_integral_value():
        raise InvalidLoanInput(
            f"term of {years} years is not a whole number of {freq.value} payments"
        )
    n = int(periods)

    annual_rate = rate_pct / 100
    r = annual_rate / freq.periods_per_year

    exact_payment = level_payment(p, r, n)
    payment = to_money(exact_payment)

    start = start_date or date.today()
    schedule: list[ScheduleEntry] = []
    balance = p

    for i in range(1, n + 1):
        interest = to_money(balance * r)
        principal_part = payment - interest
        if i == n or principal_part > balance:
            principal_part = balance
        principal_part = max(principal_part, _ZERO)
        balance = max(balance - principal_part, _ZERO)

        schedule.append(
            ScheduleEntry(
                period=i,
                payment_date=start + relativedelta(months=i * freq.months_per_period),
                principal=principal_part,
                interest=interest,
                total_payment=principal_part + interest,
                remaining_balance=balance,
            )
        )

    total_payment = to_money(exact_payment * n)
    effective_rate = (1 + r) ** freq.periods_per_year - 1

    return AmortizationResult(
        principal=p,
        payment=payment,
        schedule=schedule,
        total_payment=total_payment,
        total_interest=total_payment - p,
        nominal_rate=annual_rate,
        effective_rate=effective_rate,
        frequency=freq,
        payoff_date=schedule[-1].payment_date,
    )
