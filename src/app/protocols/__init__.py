"""Protocolos e contratos do core da aplicação."""

from .appointment_store import AppointmentStoreProtocol, SlotConflictError
from .booking_lock import BookingLockProtocol
from .clock import ClockProtocol
from .notifier import NotifierProtocol
from .payment_gateway import PaymentGatewayProtocol
from .recurring_store import RecurringStoreProtocol
from .service_catalog import ServiceCatalogProtocol

__all__ = [
    "AppointmentStoreProtocol",
    "BookingLockProtocol",
    "ClockProtocol",
    "NotifierProtocol",
    "PaymentGatewayProtocol",
    "RecurringStoreProtocol",
    "ServiceCatalogProtocol",
    "SlotConflictError",
]
