"""Adaptadores do colaborador de pagamento."""

from app.infra.payments.gateways import HttpPaymentGateway, LoggingPaymentGateway

__all__ = ["HttpPaymentGateway", "LoggingPaymentGateway"]
