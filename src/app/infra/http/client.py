"""Cliente HTTP base para integrações externas (pagamento, notificação)."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

logger = logging.getLogger(__name__)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float = 10.0
    max_retries: int = 2
    backoff_base_seconds: float = 0.5
    backoff_max_seconds: float = 5.0
    default_headers: dict[str, str] = field(default_factory=dict)


class HttpError(Exception):
    """Erro de requisição HTTP sem dados sensíveis."""

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
    """POST JSON com retry em 429/5xx e falhas de conexão.

    Aceita um `httpx.AsyncClient` pronto (ex.: com `MockTransport` em testes);
    sem ele, abre um cliente por requisição.
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._client = client

    async def post(
        self,
        url: str,
        json: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        merged_headers = {**self._config.default_headers, **(headers or {})}
        for attempt in range(self._config.max_retries + 1):
            try:
                response = await self._send(url, json, merged_headers)
                if response.status_code == 429 or response.status_code >= 500:
                    raise HttpError(
                        "http_retryable_status",
                        status_code=response.status_code,
                        is_retryable=True,
                    )
                if response.status_code >= 400:
                    raise HttpError("http_client_error", status_code=response.status_code)
                return response
            except HttpError as exc:
                if not exc.is_retryable or attempt >= self._config.max_retries:
                    raise
            except (httpx.TimeoutException, httpx.ConnectError) as exc:
                if attempt >= self._config.max_retries:
                    raise HttpError("http_connection_error", is_retryable=True) from exc
            await _backoff_sleep(
                attempt,
                self._config.backoff_base_seconds,
                self._config.backoff_max_seconds,
            )
        raise HttpError("http_retry_exhausted", is_retryable=True)

    async def get(self, url: str, headers: dict[str, str] | None = None) -> httpx.Response | None:
        """GET simples; 404 retorna None, demais erros viram HttpError."""
        merged_headers = {**self._config.default_headers, **(headers or {})}
        try:
            if self._client is not None:
                response = await self._client.get(
                    url, headers=merged_headers, timeout=self._config.timeout_seconds
                )
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(
                        url, headers=merged_headers, timeout=self._config.timeout_seconds
                    )
        except (httpx.TimeoutException, httpx.ConnectError) as exc:
            raise HttpError("http_connection_error", is_retryable=True) from exc
        if response.status_code == 404:
            return None
        if response.status_code >= 400:
            raise HttpError(
                "http_error_status",
                status_code=response.status_code,
                is_retryable=response.status_code == 429 or response.status_code >= 500,
            )
        return response

    async def _send(self, url: str, payload: dict[str, Any], headers: dict[str, str]) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(
                url, json=payload, headers=headers, timeout=self._config.timeout_seconds
            )
        async with httpx.AsyncClient() as client:
            return await client.post(
                url, json=payload, headers=headers, timeout=self._config.timeout_seconds
            )


async def _backoff_sleep(attempt: int, base: float, max_seconds: float) -> None:
    backoff = min((2**attempt) * base, max_seconds)
    logger.info("http_backoff", extra={"backoff_seconds": backoff})
    await asyncio.sleep(backoff)
