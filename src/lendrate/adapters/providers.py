# src/lendrate/adapters/providers.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from lendrate.adapters.config import AppConfig, config as default_config
from lendrate.adapters.logging_utils import get_logger
from lendrate.adapters.rate_provider_client import RateProviderClient
from lendrate.domain.errors import RateProviderError, UnknownRateProvider
from lendrate.domain.ports import RateProvider, RawRateRecord

logger = get_logger(__name__)

PROVIDER_NAMES = ("loansifter", "lenderprice")


@dataclass(frozen=True)
class HttpRateProvider:
    """
    Rate feed served over HTTP as JSON.

    GET {path}?loanType=<type> must return a list of rate records, or an
    object holding them under "rates".
    """
    name: str
    client: RateProviderClient
    path: str = "/rates"

    def fetch_latest_rates(self, loan_type: str) -> list[RawRateRecord]:
        data: Any = self.client.get(self.path, params={"loanType": loan_type})

        if isinstance(data, dict):
            data = data.get("rates", [])
        if not isinstance(data, list):
            raise RateProviderError(
                f"{self.name}: unexpected response type {type(data).__name__}"
            )

        records = [it for it in data if isinstance(it, dict)]
        logger.info(
            "provider_rates_fetched",
            extra={"provider": self.name, "loan_type": loan_type, "count": len(records)},
        )
        return records


def make_provider(name: str, cfg: AppConfig | None = None) -> RateProvider:
    cfg = cfg or default_config
    key = name.strip().lower()

    if key == "loansifter":
        api_key, base_url = cfg.LOANSIFTER_API_KEY, cfg.LOANSIFTER_BASE_URL
    elif key == "lenderprice":
        api_key, base_url = cfg.LENDERPRICE_API_KEY, cfg.LENDERPRICE_BASE_URL
    else:
        raise UnknownRateProvider(name)

    if not api_key:
        raise RateProviderError(
            f"Missing LENDRATE_{key.upper()}_API_KEY. Set it in your environment before syncing {key}."
        )

    client = RateProviderClient(
        base_url=base_url,
        api_key=api_key,
        timeout_s=cfg.PROVIDER_TIMEOUT_S,
        max_retries=cfg.PROVIDER_MAX_RETRIES,
        backoff_base_s=cfg.PROVIDER_BACKOFF_BASE_S,
    )
    return HttpRateProvider(name=key, client=client)


@dataclass(frozen=True)
class LazyRateProvider:
    """
    Defers building the HTTP provider until the first sync, so a missing API
    key shows up as a failed sync rather than a startup crash.
    """
    name: str
    cfg: AppConfig | None = None

    def fetch_latest_rates(self, loan_type: str) -> list[RawRateRecord]:
        return make_provider(self.name, self.cfg).fetch_latest_rates(loan_type)


def default_providers(cfg: AppConfig | None = None) -> dict[str, RateProvider]:
    return {name: LazyRateProvider(name, cfg) for name in PROVIDER_NAMES}
