# src/services/search_client.py

"""Google Shopping search via SerpAPI."""

import logging
import os
import time
from typing import Any

from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.models.product import Product

logger = logging.getLogger("veribuy.search")

# HTTP statuses worth another attempt
_RETRYABLE_STATUSES: frozenset[int] = frozenset({429, 500, 502, 503, 504})


class SearchError(Exception):
    """Base class for search failures surfaced to the caller."""


class EmptyQueryError(SearchError):
    """The query string was blank."""


class MissingApiKeyError(SearchError):
    """No SerpAPI key was configured."""

    def __init__(self) -> None:
        super().__init__(
            f"Missing {Settings.API_KEY_ENV} env var. "
            f"Add it to your environment or .env file."
        )


class UpstreamError(SearchError):
    """The search provider failed or returned an unusable response."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        detail: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail[: Settings.ERROR_DETAIL_CHARS]

    def __str__(self) -> str:
        base = super().__str__()
        if self.status_code is not None:
            base = f"{base} (HTTP {self.status_code})"
        return f"{base}: {self.detail}" if self.detail else base


def parse_shopping_result(raw: dict[str, Any]) -> Product:
    """Map one SerpAPI ``shopping_results`` entry onto a Product."""
    return Product.from_record(
        {
            "title": raw.get("title"),
            "source": raw.get("source"),
            "link": raw.get("link") or raw.get("product_link"),
            "thumbnail": raw.get("thumbnail"),
            "price": raw.get("extracted_price"),
            "priceText": raw.get("price"),
            "rating": raw.get("rating"),
            "reviews": raw.get("reviews"),
            "delivery": raw.get("delivery"),
        }
    )


class SerpApiClient:
    """Fetch shopping results for a free-text query."""

    def __init__(self, api_key: str | None = None) -> None:
        self.settings = Settings()
        self.api_key = (
            api_key
            if api_key is not None
            else os.getenv(self.settings.API_KEY_ENV, "")
        )
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )

    def _params(self, query: str) -> dict[str, str]:
        """Query-string parameters for a shopping search."""
        return {
            "engine": self.settings.SEARCH_ENGINE,
            "q": query,
            "hl": self.settings.SEARCH_LANGUAGE,
            "gl": self.settings.SEARCH_COUNTRY,
            "num": str(self.settings.MAX_RESULTS),
            "api_key": self.api_key,
        }

    def _fetch(self, query: str) -> curl_requests.Response:
        """GET the search endpoint, retrying transient failures.

        Raises:
            UpstreamError: on a non-retryable status, or once retries
                are exhausted.
        """
        last_error = UpstreamError("Search request failed")
        for attempt in range(self.settings.MAX_RETRIES):
            try:
                resp = self.session.get(
                    self.settings.SEARCH_ENDPOINT,
                    params=self._params(query),
                    headers=self.settings.DEFAULT_HEADERS,
                    timeout=self.settings.REQUEST_TIMEOUT,
                )
            except Exception as exc:
                logger.warning(
                    "Search request error on attempt %d: %s",
                    attempt + 1,
                    exc,
                    exc_info=True,
                )
                last_error = UpstreamError(
                    "Search request failed", detail=str(exc)
                )
            else:
                if resp.status_code == 200:
                    return resp
                logger.warning(
                    "Search returned HTTP %d on attempt %d",
                    resp.status_code,
                    attempt + 1,
                )
                last_error = UpstreamError(
                    "SerpAPI request failed",
                    status_code=resp.status_code,
                    detail=resp.text,
                )
                if resp.status_code not in _RETRYABLE_STATUSES:
                    raise last_error
            time.sleep(self.settings.RETRY_DELAY * (attempt + 1))

        logger.error(
            "Search gave up after %d attempts: %s",
            self.settings.MAX_RETRIES,
            last_error,
        )
        raise last_error

    def search(self, query: str) -> list[Product]:
        """Search Google Shopping and return up to 40 products.

        Raises:
            EmptyQueryError: when *query* is blank.
            MissingApiKeyError: when no API key is configured.
            UpstreamError: when the provider fails.
        """
        q = (query or "").strip()
        if not q:
            raise EmptyQueryError("Missing query")
        if not self.api_key:
            raise MissingApiKeyError()

        logger.info("Searching shopping results for '%s'", q)
        resp = self._fetch(q)
        try:
            data: Any = resp.json()
        except ValueError as exc:
            raise UpstreamError(
                "SerpAPI returned invalid JSON",
                status_code=resp.status_code,
                detail=resp.text,
            ) from exc

        results: Any = (
            data.get("shopping_results", [])
            if isinstance(data, dict)
            else []
        )
        if not isinstance(results, list):
            results = []

        products = [
            parse_shopping_result(r)
            for r in results[: self.settings.MAX_RESULTS]
            if isinstance(r, dict)
        ]
        logger.info("Search for '%s' returned %d products", q, len(products))
        return products
