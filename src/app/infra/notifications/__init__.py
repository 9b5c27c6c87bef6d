"""Adaptadores do colaborador de notificações."""

from app.infra.notifications.notifiers import LoggingNotifier, WebhookNotifier

__all__ = ["LoggingNotifier", "WebhookNotifier"]
