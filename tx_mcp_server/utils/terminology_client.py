# tx_mcp_server/utils/terminology_client.py
"""Thin async wrapper around the FHIR terminology server.

• One short-lived ``httpx.AsyncClient`` per tool call, nothing shared.
• Uses the public CSIRO Ontoserver by default; set TX_SERVER to point elsewhere.
"""
from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

HEADERS = {"Accept": "application/fhir+json"}

EXPAND = "ValueSet/$expand"
VALIDATE_CODE = "ValueSet/$validate-code"


class ClientConfig(BaseModel):
    """Where and how to reach the terminology server."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    timeout_s: float | None = None

    def endpoint(self, operation: str) -> str:
        return f"{self.base_url.rstrip('/')}/{operation.lstrip('/')}"


class TerminologyClient:
    """Async context manager issuing GETs against a terminology server.

    ``transport`` is handed straight to httpx (tests pass an
    ``httpx.MockTransport``).
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "TerminologyClient":
        kwargs: dict[str, Any] = {"headers": HEADERS, "transport": self._transport}
        if self.config.timeout_s is not None:
            kwargs["timeout"] = self.config.timeout_s
        self._client = httpx.AsyncClient(**kwargs)
        return self

    async def __aexit__(self, *exc_info) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get(self, operation: str, params: dict[str, str]) -> httpx.Response:
        """GET ``{base}/{operation}`` with ``params`` as the query string.

        The response is returned whatever its status; callers decide what a
        rejection means.
        """
        if self._client is None:
            raise RuntimeError("TerminologyClient used outside 'async with'")
        url = self.config.endpoint(operation)
        logger.debug("GET %s params=%s", url, params)
        return await self._client.get(url, params=params)

    async def expand(self, url: str, filter: str) -> httpx.Response:
        return await self.get(EXPAND, {"url": url, "filter": filter})

    async def validate_code(
        self,
        url: str,
        system: str,
        code: str,
        version: str | None = None,
    ) -> httpx.Response:
        params = {"url": url, "system": system, "code": code}
        if version:
            params["version"] = version
        return await self.get(VALIDATE_CODE, params)
