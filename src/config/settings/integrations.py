"""Settings dos colaboradores externos (catalogo, pagamento e notificacao).

Sem URL configurada, o bootstrap usa os adaptadores que apenas logam.
"""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field


class IntegrationSettings(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    payment_gateway_url: str | None = Field(
        default=None,
        description="Base URL do gateway de pagamento (POST /payments).",
    )
    payment_gateway_api_key: str | None = Field(default=None, repr=False)
    notification_webhook_url: str | None = Field(
        default=None,
        description="Webhook que recebe eventos de agenda.",
    )
    service_catalog_url: str | None = Field(
        default=None,
        description="Base URL do catalogo de servicos (GET /services/{id}).",
    )
    integration_http_timeout_seconds: float = Field(default=10.0, gt=0)

    @property
    def payment_enabled(self) -> bool:
        return bool(self.payment_gateway_url)

    @property
    def notifications_enabled(self) -> bool:
        return bool(self.notification_webhook_url)

    def validate(self) -> list[str]:
        errors: list[str] = []
        if self.payment_gateway_url and not self.payment_gateway_api_key:
            errors.append("PAYMENT_GATEWAY_URL requer PAYMENT_GATEWAY_API_KEY")
        return errors


def _read_optional_env(key: str) -> str | None:
    """Retorna valor opcional da env sem propagar string vazia."""
    raw_value = os.getenv(key)
    if raw_value is None:
        return None
    stripped_value = raw_value.strip()
    return stripped_value or None


def _load_integrations_from_env() -> IntegrationSettings:
    return IntegrationSettings(
        payment_gateway_url=_read_optional_env("PAYMENT_GATEWAY_URL"),
        payment_gateway_api_key=_read_optional_env("PAYMENT_GATEWAY_API_KEY"),
        notification_webhook_url=_read_optional_env("NOTIFICATION_WEBHOOK_URL"),
        service_catalog_url=_read_optional_env("SERVICE_CATALOG_URL"),
        integration_http_timeout_seconds=float(os.getenv("INTEGRATION_HTTP_TIMEOUT_SECONDS", "10")),
    )


@lru_cache(maxsize=1)
def get_integration_settings() -> IntegrationSettings:
    """Retorna instancia cacheada de IntegrationSettings."""
    return _load_integrations_from_env()


__all__ = ["IntegrationSettings", "get_integration_settings"]
