from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class BookingStatus(str, Enum):
    tentative = "tentative"
    confirmed = "confirmed"
    cancelled = "cancelled"


@dataclass(frozen=True)
class BookingRecord:
    id: str
    service_id: str
    service_name: str
    duration_minutes: int
    date_iso: str  # YYYY-MM-DD
    start_time: str  # HH:MM, 24h
    end_time: str  # HH:MM, 24h
    name: str
    email: str
    status: BookingStatus
    created_at: float
    phone: str | None = None
    notes: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status != BookingStatus.cancelled

    def with_status(self, status: BookingStatus) -> "BookingRecord":
        return replace(self, status=status)
