# tests/test_pricing_engine.py
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from lendrate.domain.offers import LoanType
from lendrate.domain.pricing import MarketConditions, PricingRequest
from lendrate.services.catalog import RateCatalog
from lendrate.services.pricing_engine import PricingEngine
from lendrate.services.ranking import effective_cost

from fixtures.offers import make_offer

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


def _engine(catalog=None, **kwargs):
    return PricingEngine(catalog or RateCatalog(), clock=lambda: NOW, **kwargs)


def test_dscr_scenario_recommends_lima_one():
    req = PricingRequest(
        loan_type="dscr",
        loan_amount=300_000,
        property_value=400_000,
        credit_score=650,
        dscr_ratio=1.0,
    )
    res = _engine().get_pricing(req)

    ids = [o.lender_id for o in res.all_options]
    assert res.recommended_option.lender_name == "Lima One Capital"
    assert "groundfloor" not in ids      # 650 < 660
    assert "anchor_loans" not in ids     # DSCR 1.0 < 1.1
    assert res.status == "matched"


def test_best_effective_cost_wins_when_all_qualify():
    req = PricingRequest(
        loan_type="dscr", loan_amount=300_000, property_value=400_000, credit_score=700, dscr_ratio=1.2
    )
    res = _engine().get_pricing(req)

    # anchor 0.085 + 1.5/5, lima 0.075 + 2/5, groundfloor 0.079 + 2.5/5
    assert [o.lender_id for o in res.all_options] == ["anchor_loans", "lima_one", "groundfloor"]
    costs = [effective_cost(o, "dscr") for o in res.all_options]
    assert costs == sorted(costs)


def test_first_time_flipper_skips_experienced_only_lender():
    req = PricingRequest(
        loan_type="fix_flip",
        loan_amount=200_000,
        property_value=250_000,
        credit_score=650,
        borrower_experience="first_time",
    )
    res = _engine().get_pricing(req)

    ids = [o.lender_id for o in res.all_options]
    assert "hard_money_bankers" not in ids
    assert ids == ["flip_funding", "rehab_financial"]


def test_no_match_is_a_result_not_a_fault():
    req = PricingRequest(loan_type="commercial", loan_amount=100_000, property_value=200_000, credit_score=700)
    res = _engine().get_pricing(req)

    assert res.recommended_option is None
    assert res.all_options == []
    assert res.status == "no_matching_program"
    assert not res.has_match


def test_zero_property_value_prices_to_no_match():
    req = PricingRequest(loan_type="dscr", loan_amount=300_000, property_value=0, credit_score=750)
    assert _engine().get_pricing(req).all_options == []


def test_keeps_top_ten():
    offers = tuple(make_offer(lender_id=f"l{i:02d}", rate=Decimal("0.06") + Decimal(i) / 1000) for i in range(15))
    engine = _engine(RateCatalog({LoanType.DSCR: offers}))

    res = engine.get_pricing(
        PricingRequest(loan_type="dscr", loan_amount=300_000, property_value=400_000, credit_score=700)
    )
    assert len(res.all_options) == 10
    assert res.recommended_option.lender_id == "l00"
    assert res.all_options[-1].lender_id == "l09"


def test_pricing_expires_after_a_day():
    req = PricingRequest(loan_type="dscr", loan_amount=300_000, property_value=400_000, credit_score=700)
    res = _engine().get_pricing(req)

    assert res.pricing_date == NOW
    assert res.expires_at == NOW + timedelta(hours=24)


def test_neutral_market_by_default():
    req = PricingRequest(loan_type="dscr", loan_amount=300_000, property_value=400_000, credit_score=700)
    mc = _engine().get_pricing(req).market_conditions
    assert (mc.trend, mc.volatility) == ("stable", "low")


def test_market_source_is_injected():
    class RisingMarket:
        def latest(self):
            return MarketConditions(trend="rising", volatility="high", last_update=NOW)

    req = PricingRequest(loan_type="dscr", loan_amount=300_000, property_value=400_000, credit_score=700)
    mc = _engine(market=RisingMarket()).get_pricing(req).market_conditions
    assert mc.trend == "rising"


def test_rates_by_lender_groups_catalog():
    offers = (
        make_offer(lender_id="a1", lender_name="Alpha", loan_program="One"),
        make_offer(lender_id="b1", lender_name="Beta"),
        make_offer(lender_id="a2", lender_name="Alpha", loan_program="Two"),
    )
    grouped = _engine(RateCatalog({LoanType.DSCR: offers})).get_rates_by_lender("dscr")

    assert list(grouped) == ["Alpha", "Beta"]
    assert [o.loan_program for o in grouped["Alpha"]] == ["One", "Two"]
    assert _engine().get_rates_by_lender("unknown") == {}


def test_summary_for_loan_type():
    s = _engine().summarize_rates("bridge")
    assert s.best_rate == Decimal("0.089")
    assert s.total_options == 2
    assert _engine().summarize_rates("nothing") is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"credit_score": "excellent"},
        {"credit_score": 200},
        {"credit_score": 900},
        {"loan_amount": 0},
        {"loan_amount": -5},
        {"loan_type": "timeshare"},
        {"property_value": -1},
    ],
)
def test_malformed_request_is_rejected(overrides):
    fields = dict(loan_type="dscr", loan_amount=300_000, property_value=400_000, credit_score=700)
    fields.update(overrides)
    with pytest.raises(ValidationError):
        PricingRequest(**fields)


def test_request_accepts_camel_case():
    req = PricingRequest.model_validate(
        {
            "loanType": "bridge",
            "loanAmount": 500000,
            "propertyValue": 800000,
            "creditScore": 700,
            "dscrRatio": "1.3",
            "borrowerExperience": "first_time",
            "propertyType": "condo",
        }
    )
    assert req.loan_type is LoanType.BRIDGE
    assert req.dscr_ratio == Decimal("1.3")
    assert req.property_type.value == "condo"
