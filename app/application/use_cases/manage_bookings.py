from __future__ import annotations

import logging

from app.application.ports.booking_store import BookingStorePort
from app.domain.entities.booking import BookingRecord, BookingStatus


class ManageBookingsUseCase:
    def __init__(self, booking_store: BookingStorePort) -> None:
        self._booking_store = booking_store
        self._logger = logging.getLogger(__name__)

    def list_bookings(self, include_cancelled: bool = True) -> list[BookingRecord]:
        bookings = self._booking_store.list()
        if include_cancelled:
            return bookings
        return [booking for booking in bookings if booking.is_active]

    def cancel(self, booking_id: str) -> BookingRecord:
        """Cancel a booking. Already-cancelled bookings are returned unchanged."""
        booking = self._booking_store.get(booking_id)
        if booking.status == BookingStatus.cancelled:
            return booking
        updated = self._booking_store.update_status(booking_id, BookingStatus.cancelled)
        self._logger.info("Booking cancelled", extra={"booking_id": booking_id})
        return updated
