# src/lendrate/adapters/fallback_rates.py
"""
Built-in lender programs used until a provider sync succeeds.
"""
from __future__ import annotations

from lendrate.adapters.rate_records import offer_from_record
from lendrate.domain.offers import LenderRateOffer, LoanType
from lendrate.domain.ports import RawRateRecord

FALLBACK_RECORDS: dict[LoanType, list[RawRateRecord]] = {
    LoanType.DSCR: [
        {
            "lenderId": "lima_one", "lenderName": "Lima One Capital", "loanProgram": "DSCR Investment",
            "rate": 0.075, "points": 2.0, "fees": 3500, "maxLTV": 0.80, "minDSCR": 1.0,
            "minCreditScore": 640, "maxLoanAmount": 3_000_000, "minLoanAmount": 75_000,
            "terms": "30 years", "prepaymentPenalty": False, "conditions": [],
        },
        {
            "lenderId": "anchor_loans", "lenderName": "Anchor Loans", "loanProgram": "DSCR Rental",
            "rate": 0.085, "points": 1.5, "fees": 4000, "maxLTV": 0.75, "minDSCR": 1.1,
            "minCreditScore": 620, "maxLoanAmount": 2_500_000, "minLoanAmount": 100_000,
            "terms": "30 years", "prepaymentPenalty": False, "conditions": [],
        },
        {
            "lenderId": "groundfloor", "lenderName": "Groundfloor", "loanProgram": "DSCR Plus",
            "rate": 0.079, "points": 2.5, "fees": 2995, "maxLTV": 0.80, "minDSCR": 0.9,
            "minCreditScore": 660, "maxLoanAmount": 5_000_000, "minLoanAmount": 125_000,
            "terms": "30 years", "prepaymentPenalty": False, "conditions": [],
        },
    ],
    LoanType.FIX_FLIP: [
        {
            "lenderId": "rehab_financial", "lenderName": "Rehab Financial Group", "loanProgram": "Fix & Flip",
            "rate": 0.105, "points": 2.0, "fees": 5000, "maxLTV": 0.90,
            "minCreditScore": 640, "maxLoanAmount": 2_000_000, "minLoanAmount": 50_000,
            "terms": "12 months", "prepaymentPenalty": True, "conditions": ["experienced_preferred"],
        },
        {
            "lenderId": "flip_funding", "lenderName": "Flip Funding", "loanProgram": "Quick Flip",
            "rate": 0.115, "points": 1.0, "fees": 3500, "maxLTV": 0.85,
            "minCreditScore": 620, "maxLoanAmount": 1_500_000, "minLoanAmount": 75_000,
            "terms": "18 months", "prepaymentPenalty": True, "conditions": [],
        },
        {
            "lenderId": "hard_money_bankers", "lenderName": "Hard Money Bankers", "loanProgram": "Renovation Loan",
            "rate": 0.125, "points": 3.0, "fees": 6000, "maxLTV": 0.95,
            "minCreditScore": 600, "maxLoanAmount": 3_000_000, "minLoanAmount": 100_000,
            "terms": "24 months", "prepaymentPenalty": True, "conditions": ["experienced_only"],
        },
    ],
    LoanType.BRIDGE: [
        {
            "lenderId": "bridge_investment", "lenderName": "Bridge Investment Group", "loanProgram": "Bridge Plus",
            "rate": 0.095, "points": 2.0, "fees": 4500, "maxLTV": 0.75,
            "minCreditScore": 660, "maxLoanAmount": 5_000_000, "minLoanAmount": 100_000,
            "terms": "24 months", "prepaymentPenalty": False, "conditions": [],
        },
        {
            "lenderId": "capital_bridge", "lenderName": "Capital Bridge Lending", "loanProgram": "Fast Close Bridge",
            "rate": 0.089, "points": 1.5, "fees": 3995, "maxLTV": 0.70,
            "minCreditScore": 680, "maxLoanAmount": 2_500_000, "minLoanAmount": 150_000,
            "terms": "18 months", "prepaymentPenalty": False, "conditions": ["fast_processing"],
        },
    ],
    LoanType.CONSTRUCTION: [
        {
            "lenderId": "construction_capital", "lenderName": "Construction Capital",
            "loanProgram": "Ground Up Construction",
            "rate": 0.095, "points": 2.5, "fees": 7500, "maxLTV": 0.80,
            "minCreditScore": 680, "maxLoanAmount": 10_000_000, "minLoanAmount": 200_000,
            "terms": "24 months construction + 30 year perm", "prepaymentPenalty": False,
            "conditions": ["experienced_only", "detailed_plans_required"],
        },
        {
            "lenderId": "builders_capital", "lenderName": "Builders Capital", "loanProgram": "Custom Construction",
            "rate": 0.105, "points": 3.0, "fees": 8500, "maxLTV": 0.85,
            "minCreditScore": 700, "maxLoanAmount": 5_000_000, "minLoanAmount": 250_000,
            "terms": "18 months interest only", "prepaymentPenalty": True,
            "conditions": ["licensed_builder_required"],
        },
    ],
    LoanType.COMMERCIAL: [
        {
            "lenderId": "commercial_funding", "lenderName": "Commercial Funding Inc",
            "loanProgram": "Commercial Real Estate",
            "rate": 0.065, "points": 1.0, "fees": 5000, "maxLTV": 0.75, "minDSCR": 1.25,
            "minCreditScore": 680, "maxLoanAmount": 50_000_000, "minLoanAmount": 500_000,
            "terms": "25 years", "prepaymentPenalty": False,
            "conditions": ["commercial_experience_required"],
        },
    ],
}


def load_fallback_offers() -> dict[LoanType, tuple[LenderRateOffer, ...]]:
    return {
        loan_type: tuple(offer_from_record(r, loan_type) for r in records)
        for loan_type, records in FALLBACK_RECORDS.items()
    }
