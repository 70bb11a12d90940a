# src/lendrate/services/catalog_refresh.py
from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from lendrate.adapters.config import config
from lendrate.adapters.logging_utils import get_logger
from lendrate.services.catalog import RateCatalog

logger = get_logger(__name__)


class CatalogRefresher:
    """
    Runs provider syncs off the request path.

    submit() hands back a Future[bool]; cancel() on it drops a sync that has
    not started yet. A sync that blows up resolves to False.
    """

    def __init__(self, catalog: RateCatalog, *, workers: Optional[int] = None) -> None:
        self.catalog = catalog
        self._pool = ThreadPoolExecutor(
            max_workers=max(1, int(workers or config.SYNC_WORKERS)),
            thread_name_prefix="rate-sync",
        )

    def _run(self, provider_name: str) -> bool:
        try:
            return self.catalog.sync_from_provider(provider_name)
        except Exception as e:
            logger.error("catalog_refresh_failed", extra={"provider": provider_name, "error": repr(e)})
            return False

    def submit(self, provider_name: str) -> "Future[bool]":
        return self._pool.submit(self._run, provider_name)

    def sync_all(self) -> dict[str, "Future[bool]"]:
        return {name: self.submit(name) for name in self.catalog.provider_names}

    def shutdown(self, *, wait: bool = True, cancel_pending: bool = False) -> None:
        self._pool.shutdown(wait=wait, cancel_futures=cancel_pending)

    def __enter__(self) -> "CatalogRefresher":
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown(cancel_pending=True)
