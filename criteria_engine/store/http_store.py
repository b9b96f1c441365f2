"""
Async HTTP document store for a JSON document API.

Endpoints:
  GET    {base}/{collection}/{key}   → document, 404 if missing
  PUT    {base}/{collection}/{key}   → full replace
  DELETE {base}/{collection}/{key}
  GET    {base}/{collection}         → {"documents": [{"id": ..., ...}, ...]}
"""

from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from ..config import DEFAULT_HTTP_TIMEOUT_SECONDS
from .base import DocumentStore, DocumentStoreError

logger = logging.getLogger("criteria_engine.store")


class HttpDocumentStore(DocumentStore):
    """
    Document store client over httpx.
    Use as an async context manager so the connection pool is released.
    Failures surface as DocumentStoreError; nothing is retried here.
    """

    name = "http"

    def __init__(
        self,
        base_url: str,
        api_token: str = "",
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=min(self.timeout, 10.0)),
            headers=headers,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args):
        await self.close()

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _build_url(self, collection: str, key: Optional[str] = None) -> str:
        path = "/".join(quote(part, safe="") for part in collection.strip("/").split("/"))
        if key is not None:
            path = f"{path}/{quote(key, safe='')}"
        return f"{self.base_url}/{path}"

    async def get(self, collection: str, key: str) -> Optional[dict]:
        url = self._build_url(collection, key)
        response = await self._request("GET", url, key)
        if response.status_code == 404:
            logger.debug(f"404 Not Found: {url}")
            return None
        self._raise_for_status(response, key)
        return response.json()

    async def set(self, collection: str, key: str, document: dict) -> None:
        url = self._build_url(collection, key)
        response = await self._request("PUT", url, key, json_body=document)
        self._raise_for_status(response, key)

    async def delete(self, collection: str, key: str) -> None:
        url = self._build_url(collection, key)
        response = await self._request("DELETE", url, key)
        if response.status_code == 404:
            return
        self._raise_for_status(response, key)

    async def list_documents(self, collection: str) -> list[dict]:
        url = self._build_url(collection)
        response = await self._request("GET", url, collection)
        if response.status_code == 404:
            return []
        self._raise_for_status(response, collection)
        return list(response.json().get("documents", []))

    async def _request(
        self,
        method: str,
        url: str,
        key: str,
        json_body: Optional[dict] = None,
    ) -> httpx.Response:
        """Execute raw HTTP request, mapping transport failures to DocumentStoreError."""
        if not self._client:
            raise RuntimeError("HttpDocumentStore not initialized. Use 'async with' context.")
        try:
            return await self._client.request(method, url, json=json_body)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {url} failed: {type(e).__name__}: {e}")
            raise DocumentStoreError(f"{type(e).__name__}: {e}", key=key) from e

    @staticmethod
    def _raise_for_status(response: httpx.Response, key: str):
        if response.is_success:
            return
        message: Any = response.text[:200]
        try:
            message = response.json().get("error", {}).get("message", message)
        except (ValueError, AttributeError):
            pass
        raise DocumentStoreError(str(message), key=key, status_code=response.status_code)
