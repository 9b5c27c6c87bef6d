"""Gateways de pagamento: HTTP (produção) e log-only (desenvolvimento)."""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from app.infra.http import HttpClient, HttpError
from app.observability import get_correlation_id

if TYPE_CHECKING:
    from app.domain.appointment import Appointment

logger = logging.getLogger(__name__)

_COMPONENT = "payment_gateway"


class PaymentGatewayError(Exception):
    """Falha ao iniciar o checkout; tratada pelo disparo em background."""


class HttpPaymentGateway:
    """Inicia checkout via POST `{base_url}/payments`.

    Resposta esperada: `{"reference": "..."}`.
    """

    def __init__(self, *, base_url: str, api_key: str, http_client: HttpClient) -> None:
        self._url = f"{base_url.rstrip('/')}/payments"
        self._api_key = api_key
        self._http = http_client

    async def initialize_payment(self, appointment: Appointment) -> str:
        payload = {
            "appointment_id": appointment.id,
            "business_id": appointment.business_id,
            "service_id": appointment.service_id,
            "customer_id": appointment.customer_id,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}
        correlation_id = get_correlation_id()
        if correlation_id:
            headers["X-Correlation-ID"] = correlation_id
        try:
            response = await self._http.post(self._url, json=payload, headers=headers)
        except HttpError as exc:
            logger.warning(
                "payment_initialize_failed",
                extra={
                    "component": _COMPONENT,
                    "appointment_id": appointment.id,
                    "status_code": exc.status_code,
                },
            )
            raise PaymentGatewayError(str(exc)) from exc

        reference = response.json().get("reference")
        if not isinstance(reference, str) or not reference:
            raise PaymentGatewayError("payment_reference_missing")
        logger.info(
            "payment_initialized",
            extra={"component": _COMPONENT, "appointment_id": appointment.id},
        )
        return reference


class LoggingPaymentGateway:
    """Gera referência local e apenas loga (sem cobrança real)."""

    async def initialize_payment(self, appointment: Appointment) -> str:
        reference = f"local-{uuid.uuid4().hex[:12]}"
        logger.info(
            "payment_initialized",
            extra={
                "component": _COMPONENT,
                "appointment_id": appointment.id,
                "gateway": "logging",
            },
        )
        return reference
