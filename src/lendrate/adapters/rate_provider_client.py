# src/lendrate/adapters/rate_provider_client.py
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from lendrate.domain.errors import RateProviderError


@dataclass(frozen=True)
class RateProviderClient:
    base_url: str
    api_key: str
    timeout_s: float = 20.0
    max_retries: int = 3
    backoff_base_s: float = 0.8

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = self.base_url.rstrip("/") + "/" + path.lstrip("/")

        headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

        last_err: Exception | None = None

        for attempt in range(self.max_retries + 1):
            try:
                resp = requests.get(
                    url,
                    headers=headers,
                    params=params or {},
                    timeout=self.timeout_s,
                )
            except requests.RequestException as e:
                # network errors -> retry with backoff
                last_err = e
                if attempt < self.max_retries:
                    time.sleep(self.backoff_base_s * (2**attempt))
                    continue
                break

            # Rate limiting / transient gateway errors
            if resp.status_code in (429, 502, 503, 504):
                last_err = RateProviderError(f"HTTP {resp.status_code} from {url}")
                if attempt >= self.max_retries:
                    break
                wait = self.backoff_base_s * (2**attempt)
                ra = resp.headers.get("Retry-After")
                if ra:
                    try:
                        wait = max(wait, float(ra))
                    except ValueError:
                        pass
                time.sleep(wait)
                continue

            if resp.status_code >= 400:
                raise RateProviderError(f"HTTP {resp.status_code} from {url}: {resp.text}")

            try:
                return resp.json()
            except ValueError as e:
                raise RateProviderError(f"Non-JSON response from {url}") from e

        raise RateProviderError(f"Request to {url} failed after retries: {last_err!r}")
