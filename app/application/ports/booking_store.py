from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.booking import BookingRecord, BookingStatus


class BookingStorePort(ABC):
    @abstractmethod
    def append(self, booking: BookingRecord) -> None:
        raise NotImplementedError

    @abstractmethod
    def list(self) -> list[BookingRecord]:
        """All bookings in insertion order, cancelled ones included."""
        raise NotImplementedError

    @abstractmethod
    def get(self, booking_id: str) -> BookingRecord:
        """Raises BookingNotFoundError for unknown ids."""
        raise NotImplementedError

    @abstractmethod
    def update_status(self, booking_id: str, status: BookingStatus) -> BookingRecord:
        """Used by the cancellation flow only. Raises BookingNotFoundError for unknown ids."""
        raise NotImplementedError
