"""
Infrastructure layer: catalog sources (bundled JSON file or remote service).
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from landscape_studio.config import settings
from landscape_studio.domain.catalog import Catalog, CatalogError

logger = logging.getLogger(__name__)


def load_catalog_file(path: Path) -> Catalog:
    """
    Load a catalog from a JSON file.

    Args:
        path: Path to the catalog JSON document

    Returns:
        Catalog instance

    Raises:
        CatalogError: If the file cannot be read or is not valid JSON
    """
    try:
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
    except OSError as e:
        raise CatalogError(f"Cannot read catalog file: {e}", source=str(path)) from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog file is not valid JSON: {e}", source=str(path)) from e

    logger.info(f"Loading catalog from {path}")
    return Catalog.from_dict(data)


class CatalogClient:
    """
    Client for a remote plant catalog service.
    Implements retry logic with exponential backoff.
    """

    def __init__(self, base_url: Optional[str] = None, api_key: Optional[str] = None):
        """Initialize the client from explicit values or settings."""
        self.base_url = base_url or settings.catalog_url or "http://localhost"
        self.api_key = api_key if api_key is not None else settings.catalog_api_key

        headers = {"accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=30.0,
        )

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    @retry(
        stop=stop_after_attempt(settings.max_retry_attempts),
        wait=wait_exponential(
            multiplier=settings.retry_backoff_multiplier,
            min=settings.retry_min_wait,
            max=settings.retry_max_wait,
        ),
        retry=retry_if_exception_type((httpx.HTTPStatusError, httpx.RequestError)),
        reraise=True,
    )
    async def _make_request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> Dict[str, Any]:
        """
        Make an HTTP request with retry logic.

        Server errors (5xx) and transport errors are retried; client errors
        (4xx) fail immediately.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path
            **kwargs: Additional arguments for the request

        Returns:
            Response data as dictionary

        Raises:
            CatalogError: On a 4xx response or a body that is not JSON
            httpx.HTTPStatusError: On a 5xx response once retries run out
            httpx.RequestError: On a transport error once retries run out
        """
        try:
            response = await self.client.request(method, endpoint, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            if e.response.status_code >= 500:
                logger.warning(f"Catalog service returned {e.response.status_code}; retrying")
                raise
            raise CatalogError(
                f"Catalog request failed: {e.response.status_code} - {e.response.text}",
                source=str(e.request.url),
            )

        try:
            return response.json()
        except ValueError as e:
            raise CatalogError(f"Catalog response is not JSON: {e}", source=str(response.url)) from e

    async def fetch_catalog(self, endpoint: str = "/catalog") -> Catalog:
        """
        Fetch and normalize the remote catalog.

        Returns:
            Catalog instance

        Raises:
            CatalogError: If the catalog cannot be fetched after retries
        """
        try:
            data = await self._make_request("GET", endpoint)
        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            raise CatalogError(f"Catalog service unavailable: {e}", source=self.base_url) from e
        return Catalog.from_dict(data)


# Process-wide catalog, loaded once at startup
_catalog: Optional[Catalog] = None


async def load_catalog() -> Catalog:
    """
    Load the configured catalog and make it the process-wide instance.

    A configured ``catalog_url`` takes precedence over ``catalog_path``.

    Raises:
        CatalogError: If the configured source cannot be loaded
    """
    global _catalog
    if settings.catalog_url:
        async with CatalogClient() as client:
            _catalog = await client.fetch_catalog()
    else:
        _catalog = load_catalog_file(settings.catalog_path)
    return _catalog


def get_catalog() -> Catalog:
    """
    Get the process-wide catalog, loading the bundled file on first use.

    Returns:
        Catalog instance
    """
    global _catalog
    if _catalog is None:
        _catalog = load_catalog_file(settings.catalog_path)
    return _catalog


def set_catalog(catalog: Optional[Catalog]) -> None:
    """Replace the process-wide catalog (None forces a reload on next use)."""
    global _catalog
    _catalog = catalog
