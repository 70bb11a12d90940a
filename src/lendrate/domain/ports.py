# src/lendrate/domain/ports.py
from __future__ import annotations

from typing import Any, Protocol, TypedDict

from lendrate.domain.pricing import MarketConditions


# ----------------------------
# Rate providers
# ----------------------------

class RawRateRecord(TypedDict, total=False):
    lenderId: str
    lenderName: str
    loanProgram: str
    rate: float
    points: float
    fees: float
    maxLTV: float
    minDSCR: float | None
    minCreditScore: int
    maxLoanAmount: float
    minLoanAmount: float
    terms: str
    prepaymentPenalty: bool
    isActive: bool
    lastUpdated: str
    conditions: list[str]
    raw: dict[str, Any]


class RateProvider(Protocol):
    name: str

    def fetch_latest_rates(self, loan_type: str) -> list[RawRateRecord]:
        ...


# ----------------------------
# Market data
# ----------------------------

class MarketConditionsSource(Protocol):
    def latest(self) -> MarketConditions:
        ...
