"""Reserva de slots com serialização por recurso."""

from app.coordinators.booking.coordinator import BookingCoordinator, booking_lock_key

__all__ = ["BookingCoordinator", "booking_lock_key"]
