"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    AppointmentNotFoundError,
    ConflictError,
    InfrastructureError,
    InvalidDayError,
    InvalidTransitionError,
    LockAcquisitionError,
    NotFoundError,
    RedisConnectionError,
    SchedulingError,
    SeriesNotFoundError,
    ServiceDisabledError,
    ServiceNotFoundError,
    SlotNoLongerAvailableError,
    StorageUnavailableError,
    ValidationError,
)

__all__ = [
    "AppointmentNotFoundError",
    "ConflictError",
    "InfrastructureError",
    "InvalidDayError",
    "InvalidTransitionError",
    "LockAcquisitionError",
    "NotFoundError",
    "RedisConnectionError",
    "SchedulingError",
    "SeriesNotFoundError",
    "ServiceDisabledError",
    "ServiceNotFoundError",
    "SlotNoLongerAvailableError",
    "StorageUnavailableError",
    "ValidationError",
]
