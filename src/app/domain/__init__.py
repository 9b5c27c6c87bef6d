"""Entidades de dominio do agendamento."""

from app.domain.appointment import (
    Appointment,
    AvailabilityReason,
    BookingRequest,
    SlotComputation,
    TimeSlot,
)
from app.domain.notifications import AppointmentEvent, EventType, Recipient, RecipientKind
from app.domain.recurring_appointment import (
    RecurrencePattern,
    RecurringAppointment,
    SeriesDefinition,
)
from app.domain.service import Service, ServiceAvailability, Weekday

__all__ = [
    "Appointment",
    "AppointmentEvent",
    "AvailabilityReason",
    "BookingRequest",
    "EventType",
    "Recipient",
    "RecipientKind",
    "RecurrencePattern",
    "RecurringAppointment",
    "SeriesDefinition",
    "Service",
    "ServiceAvailability",
    "SlotComputation",
    "TimeSlot",
    "Weekday",
]
