"""Factories dos clientes Redis e HTTP."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from app.infra.http import HttpClient, HttpClientConfig
from config.settings import get_base_settings, get_integration_settings

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def create_async_redis_client() -> AsyncRedis:
    """Cria cliente Redis assíncrono (singleton).

    Raises:
        ValueError: Se REDIS_URL não configurado
    """
    from redis.asyncio import Redis as AsyncRedis

    redis_url = get_base_settings().redis_url
    if not redis_url:
        msg = "REDIS_URL não configurado"
        raise ValueError(msg)

    client: AsyncRedis = AsyncRedis.from_url(
        redis_url,
        decode_responses=False,
        socket_timeout=5.0,
        socket_connect_timeout=5.0,
    )

    logger.info("async_redis_client_created")
    return client


def create_http_client() -> HttpClient:
    """Cliente HTTP compartilhado pelas integrações (timeout de IntegrationSettings)."""
    settings = get_integration_settings()
    return HttpClient(HttpClientConfig(timeout_seconds=settings.integration_http_timeout_seconds))
