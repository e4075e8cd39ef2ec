from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Step(str, Enum):
    idle = "idle"
    ask_service = "ask_service"
    ask_date = "ask_date"
    ask_time = "ask_time"
    ask_name = "ask_name"
    ask_email = "ask_email"
    ask_phone = "ask_phone"
    confirm = "confirm"
    completed = "completed"


@dataclass(frozen=True)
class PendingBooking:
    """Booking fields collected so far, filled in step order."""

    service_id: str | None = None
    service_name: str | None = None
    duration_minutes: int | None = None
    date_iso: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class AgentState:
    step: Step = Step.idle
    pending: PendingBooking = field(default_factory=PendingBooking)
    last_prompt: str | None = None
