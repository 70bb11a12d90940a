# tests/test_catalog.py
from decimal import Decimal

import pytest

from lendrate.domain.errors import UnknownRateProvider
from lendrate.domain.offers import LoanType
from lendrate.services.catalog import RateCatalog

from fixtures.offers import FailingProvider, StubProvider, make_offer, record


def test_starts_from_fallback_programs():
    catalog = RateCatalog()

    assert {o.lender_name for o in catalog.get_offers("dscr")} == {
        "Lima One Capital",
        "Anchor Loans",
        "Groundfloor",
    }
    assert len(catalog.get_offers(LoanType.FIX_FLIP)) == 3
    assert len(catalog.get_offers(LoanType.BRIDGE)) == 2
    assert len(catalog.get_offers(LoanType.CONSTRUCTION)) == 2
    assert len(catalog.get_offers(LoanType.COMMERCIAL)) == 1


def test_unknown_loan_type_has_no_offers():
    assert RateCatalog().get_offers("timeshare") == ()


def test_fixture_catalog_replaces_fallback():
    catalog = RateCatalog({LoanType.DSCR: (make_offer(),)})
    assert len(catalog.get_offers("dscr")) == 1
    assert catalog.get_offers("bridge") == ()


def test_snapshot_is_read_only():
    snap = RateCatalog().snapshot()
    with pytest.raises(TypeError):
        snap[LoanType.DSCR] = ()


def test_sync_replaces_returned_buckets_and_keeps_the_rest():
    provider = StubProvider({"dscr": [record(), record(lenderId="second", lenderName="Second")]})
    catalog = RateCatalog(providers={"stub": provider})
    bridge_before = catalog.get_offers("bridge")

    assert catalog.sync_from_provider("stub") is True

    assert [o.lender_id for o in catalog.get_offers("dscr")] == ["new_lender", "second"]
    assert catalog.get_offers("bridge") == bridge_before
    assert provider.calls == [t.value for t in LoanType]


def test_sync_does_not_disturb_a_snapshot_already_in_use():
    catalog = RateCatalog(providers={"stub": StubProvider({"dscr": [record()]})})
    held = catalog.snapshot()

    catalog.sync_from_provider("stub")

    assert len(held[LoanType.DSCR]) == 3
    assert catalog.snapshot() is not held


def test_failed_sync_leaves_catalog_untouched():
    provider = FailingProvider(fail_on="bridge", rates={"dscr": [record()]})
    catalog = RateCatalog(providers={"failing": provider})
    before = catalog.snapshot()

    assert catalog.sync_from_provider("failing") is False
    assert catalog.snapshot() is before
    assert "new_lender" not in {o.lender_id for o in catalog.get_offers("dscr")}


def test_malformed_records_are_skipped():
    provider = StubProvider({"dscr": [record(conditions=["no_houseboats"]), record(lenderId="ok")]})
    catalog = RateCatalog(providers={"stub": provider})

    assert catalog.sync_from_provider("stub") is True
    assert [o.lender_id for o in catalog.get_offers("dscr")] == ["ok"]


def test_non_finite_rate_is_skipped_not_fatal():
    provider = StubProvider({"dscr": [record(rate="nan"), record(lenderId="ok")]})
    catalog = RateCatalog(providers={"stub": provider})

    assert catalog.sync_from_provider("stub") is True
    assert [o.lender_id for o in catalog.get_offers("dscr")] == ["ok"]


def test_sync_with_unknown_provider_raises():
    with pytest.raises(UnknownRateProvider):
        RateCatalog().sync_from_provider("loansifter")


def test_register_provider_normalizes_name():
    catalog = RateCatalog()
    catalog.register_provider("  LenderPrice ", StubProvider({"commercial": [record(minLoanAmount=0)]}))

    assert catalog.provider_names == ["lenderprice"]
    assert catalog.sync_from_provider("LENDERPRICE") is True
    assert catalog.get_offers("commercial")[0].rate == Decimal("0.069")
