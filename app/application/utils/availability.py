from __future__ import annotations

from typing import Iterable

from app.domain.entities.booking import BookingRecord


def overlaps(start: str, end: str, other_start: str, other_end: str) -> bool:
    """Half-open [start, end) overlap; touching intervals do not overlap."""
    return not (end <= other_start or start >= other_end)


def has_conflict(bookings: Iterable[BookingRecord], date_iso: str, start: str, end: str) -> bool:
    for booking in bookings:
        if not booking.is_active or booking.date_iso != date_iso:
            continue
        if overlaps(start, end, booking.start_time, booking.end_time):
            return True
    return False
