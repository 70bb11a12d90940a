# tests/test_fees.py
from decimal import Decimal

import pytest

from lendrate.domain.fees import calculate_fees
from lendrate.domain.offers import LoanType


def test_commercial_fee_schedule():
    s = calculate_fees(500_000, "commercial")

    assert s.get("origination").amount == Decimal("5000.00")
    assert s.get("origination").percentage == Decimal("1.00")
    assert s.get("environmental").amount == Decimal("1250")
    assert s.get("appraisal").amount == Decimal("2500")
    assert [f.fee_type for f in s.items] == [
        "origination",
        "processing",
        "underwriting",
        "appraisal",
        "environmental",
        "document_prep",
        "wire_transfer",
        "tax_service",
        "flood_cert",
    ]


def test_dscr_fee_totals():
    s = calculate_fees(300_000, LoanType.DSCR)

    assert s.get("environmental") is None
    # 4500 origination + 495 + 750 + 650 appraisal + 350 + 25
    assert s.total_required == Decimal("6770.00")
    assert s.total == Decimal("6894.00")


def test_optional_fees_always_listed():
    s = calculate_fees(150_000, "dscr")

    assert s.get("wire_transfer").amount == Decimal("35")
    assert s.get("wire_transfer").is_required is False
    assert s.get("tax_service").amount == Decimal("89")
    assert s.get("tax_service").is_required is False
    assert s.get("flood_cert").is_required is True


@pytest.mark.parametrize(
    "loan_type, rate, appraisal, environmental",
    [
        ("dscr", "0.015", "650", False),
        ("fix_flip", "0.025", "750", False),
        ("fix-and-flip", "0.025", "750", False),
        ("bridge", "0.02", "700", True),
        ("commercial", "0.01", "2500", True),
        ("construction", "0.02", "650", False),
        ("something_new", "0.02", "650", False),
    ],
)
def test_rates_by_loan_type(loan_type, rate, appraisal, environmental):
    s = calculate_fees(100_000, loan_type)

    assert s.get("origination").amount == Decimal("100000") * Decimal(rate)
    assert s.get("appraisal").amount == Decimal(appraisal)
    assert (s.get("environmental") is not None) is environmental


def test_origination_rounds_to_cents():
    s = calculate_fees(123_456.789, "dscr")
    assert s.get("origination").amount == Decimal("1851.85")
