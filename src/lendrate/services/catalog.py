# src/lendrate/services/catalog.py
from __future__ import annotations

import threading
from types import MappingProxyType
from typing import Mapping, Optional

from lendrate.adapters.fallback_rates import load_fallback_offers
from lendrate.adapters.logging_utils import get_logger
from lendrate.adapters.rate_records import offer_from_record
from lendrate.domain.errors import InvalidRateRecord, UnknownRateProvider
from lendrate.domain.offers import LenderRateOffer, LoanType
from lendrate.domain.ports import RateProvider

logger = get_logger(__name__)

CatalogSnapshot = Mapping[LoanType, tuple[LenderRateOffer, ...]]


def _freeze(offers: Mapping[LoanType, tuple[LenderRateOffer, ...]]) -> CatalogSnapshot:
    return MappingProxyType({LoanType(k): tuple(v) for k, v in offers.items()})


class RateCatalog:
    """
    Lender offers bucketed by loan type.

    Readers take one snapshot reference and never see it change. A sync builds
    a complete new snapshot off to the side and swaps the reference in one
    assignment; a failed sync leaves the current snapshot as it was.
    """

    def __init__(
        self,
        offers: Optional[Mapping[LoanType, tuple[LenderRateOffer, ...]]] = None,
        providers: Optional[Mapping[str, RateProvider]] = None,
    ) -> None:
        self._snapshot: CatalogSnapshot = _freeze(offers if offers is not None else load_fallback_offers())
        self._providers: dict[str, RateProvider] = dict(providers or {})
        self._write_lock = threading.Lock()

    # -----------------------------
    # Reads
    # -----------------------------
    def snapshot(self) -> CatalogSnapshot:
        return self._snapshot

    def get_offers(self, loan_type: LoanType | str) -> tuple[LenderRateOffer, ...]:
        try:
            key = LoanType(getattr(loan_type, "value", loan_type))
        except ValueError:
            return ()
        return self._snapshot.get(key, ())

    @property
    def provider_names(self) -> list[str]:
        return sorted(self._providers)

    # -----------------------------
    # Writes
    # -----------------------------
    def register_provider(self, name: str, provider: RateProvider) -> None:
        self._providers[name.strip().lower()] = provider

    def sync_from_provider(self, provider_name: str) -> bool:
        """
        Pull fresh offers for every loan type from one provider.

        Loan types the provider returns nothing for keep their current offers.
        Malformed records are skipped. Any fetch failure aborts the whole sync
        and returns False without touching the catalog.
        """
        key = provider_name.strip().lower()
        provider = self._providers.get(key)
        if provider is None:
            raise UnknownRateProvider(provider_name)

        fetched: dict[LoanType, tuple[LenderRateOffer, ...]] = {}
        skipped = 0
        try:
            for loan_type in LoanType:
                records = provider.fetch_latest_rates(loan_type.value)
                offers: list[LenderRateOffer] = []
                for rec in records:
                    try:
                        offers.append(offer_from_record(rec, loan_type))
                    except InvalidRateRecord as e:
                        skipped += 1
                        logger.warning(
                            "rate_record_skipped",
                            extra={"provider": key, "loan_type": loan_type.value, "error": str(e)},
                        )
                if offers:
                    fetched[loan_type] = tuple(offers)
        except Exception as e:
            logger.error("catalog_sync_failed", extra={"provider": key, "error": repr(e)})
            return False

        with self._write_lock:
            merged = dict(self._snapshot)
            merged.update(fetched)
            self._snapshot = _freeze(merged)

        logger.info(
            "catalog_sync_complete",
            extra={
                "provider": key,
                "loan_types": sorted(t.value for t in fetched),
                "offers": sum(len(v) for v in fetched.values()),
                "skipped": skipped,
            },
        )
        return True
