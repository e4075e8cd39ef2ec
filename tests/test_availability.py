from __future__ import annotations

from app.application.utils.availability import has_conflict, overlaps
from app.domain.entities.booking import BookingRecord, BookingStatus


def _booking(start: str, end: str, status: BookingStatus = BookingStatus.confirmed, date_iso: str = "2025-12-02"):
    return BookingRecord(
        id=f"bk_{start}_{status.value}",
        service_id="natural",
        service_name="Natural Beat",
        duration_minutes=60,
        date_iso=date_iso,
        start_time=start,
        end_time=end,
        name="Existing Client",
        email="client@example.com",
        status=status,
        created_at=0.0,
    )


def test_overlap_is_half_open():
    assert overlaps("14:30", "15:30", "14:00", "15:00") is True
    assert overlaps("15:00", "16:00", "14:00", "15:00") is False
    assert overlaps("13:00", "14:00", "14:00", "15:00") is False
    assert overlaps("13:00", "16:00", "14:00", "15:00") is True


def test_conflict_with_confirmed_booking():
    bookings = [_booking("14:00", "15:00")]
    assert has_conflict(bookings, "2025-12-02", "14:30", "15:30") is True
    assert has_conflict(bookings, "2025-12-02", "15:00", "16:00") is False


def test_cancelled_booking_does_not_block():
    bookings = [_booking("14:00", "15:00", status=BookingStatus.cancelled)]
    assert has_conflict(bookings, "2025-12-02", "14:00", "15:00") is False


def test_other_dates_do_not_block():
    bookings = [_booking("14:00", "15:00", date_iso="2025-12-03")]
    assert has_conflict(bookings, "2025-12-02", "14:00", "15:00") is False
