"""Async HTTP client shared by the provider connectors."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

logger = logging.getLogger(__name__)


@dataclass
class HttpClientConfig:
    """HTTP client configuration."""

    timeout_seconds: float = 10.0
    max_retries: int = 0
    backoff_base_seconds: float = 0.5
    backoff_max_seconds: float = 4.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True
    transport: httpx.AsyncBaseTransport | None = None


class HttpError(Exception):
    """HTTP request failure without sensitive data in the message."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        is_retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_retryable = is_retryable


class HttpClient:
    """Thin POST client over one pooled ``httpx.AsyncClient``.

    Retries 429, 5xx and any transport-level ``httpx.RequestError`` up to
    ``max_retries`` times. Other 4xx responses raise immediately.
    """

    def __init__(self, config: HttpClientConfig | None = None) -> None:
        self._config = config or HttpClientConfig()
        self._client = httpx.AsyncClient(
            verify=self._config.verify_ssl,
            transport=self._config.transport,
            headers=self._config.default_headers,
        )

    async def post(
        self,
        url: str,
        json: dict[str, Any],
        headers: dict[str, str] | None = None,
        *,
        params: dict[str, str] | None = None,
        timeout_seconds: float | None = None,
        max_retries: int | None = None,
    ) -> httpx.Response:
        retries = self._config.max_retries if max_retries is None else max_retries
        timeout = timeout_seconds or self._config.timeout_seconds
        for attempt in range(retries + 1):
            try:
                response = await self._client.post(
                    url,
                    json=json,
                    headers=headers,
                    params=params,
                    timeout=timeout,
                )
                if response.status_code == 429 or response.status_code >= 500:
                    raise HttpError(
                        "http_retryable_status",
                        status_code=response.status_code,
                        is_retryable=True,
                    )
                if response.status_code >= 400:
                    raise HttpError(
                        "http_client_error",
                        status_code=response.status_code,
                        is_retryable=False,
                    )
                return response
            except HttpError as exc:
                if not exc.is_retryable or attempt >= retries:
                    raise
                await _backoff_sleep(
                    attempt,
                    self._config.backoff_base_seconds,
                    self._config.backoff_max_seconds,
                )
            except httpx.RequestError as exc:
                if attempt >= retries:
                    raise HttpError("http_request_error", is_retryable=True) from exc
                await _backoff_sleep(
                    attempt,
                    self._config.backoff_base_seconds,
                    self._config.backoff_max_seconds,
                )
        raise HttpError("http_retry_exhausted", is_retryable=True)

    async def aclose(self) -> None:
        await self._client.aclose()


async def _backoff_sleep(attempt: int, base: float, max_seconds: float) -> None:
    backoff = min((2**attempt) * base, max_seconds)
    logger.info("http_backoff", extra={"backoff_seconds": backoff})
    await asyncio.sleep(backoff)
