from __future__ import annotations

import re
from datetime import date
from typing import Any

from app.domain.entities.agent_state import AgentState, PendingBooking, Step
from app.domain.entities.booking import BookingRecord, BookingStatus
from app.domain.entities.message import ChatMessage, ChatRole

_HHMM_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

PENDING_FIELDS = (
    "service_id",
    "service_name",
    "duration_minutes",
    "date_iso",
    "start_time",
    "end_time",
    "name",
    "email",
    "phone",
    "notes",
)


def serialize_state(state: AgentState) -> dict[str, Any]:
    """Serialize AgentState to dict."""
    return {
        "step": state.step.value,
        "pending": {key: getattr(state.pending, key) for key in PENDING_FIELDS},
        "last_prompt": state.last_prompt,
    }


def deserialize_state(data: dict[str, Any]) -> AgentState:
    """Deserialize dict to AgentState. Raises ValueError/TypeError/KeyError on malformed data."""
    if not isinstance(data, dict):
        raise TypeError("state must be an object")
    pending_data = data.get("pending") or {}
    if not isinstance(pending_data, dict):
        raise TypeError("pending must be an object")
    # unknown keys are dropped so pending only carries booking fields
    values = {key: pending_data.get(key) for key in PENDING_FIELDS}
    _validate_pending(values)
    last_prompt = data.get("last_prompt")
    if last_prompt is not None and not isinstance(last_prompt, str):
        raise TypeError("last_prompt must be a string")
    return AgentState(
        step=Step(data["step"]),
        pending=PendingBooking(**values),
        last_prompt=last_prompt,
    )


def _validate_pending(values: dict[str, Any]) -> None:
    for key, value in values.items():
        if value is None:
            continue
        if key == "duration_minutes":
            # bool is an int subclass
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise TypeError("duration_minutes must be a positive integer")
        elif not isinstance(value, str):
            raise TypeError(f"{key} must be a string")

    date_iso = values["date_iso"]
    if date_iso is not None and date.fromisoformat(date_iso).isoformat() != date_iso:
        raise ValueError("date_iso must be YYYY-MM-DD")
    for key in ("start_time", "end_time"):
        if values[key] is not None and not _HHMM_PATTERN.match(values[key]):
            raise ValueError(f"{key} must be HH:MM")


def serialize_booking(booking: BookingRecord) -> dict[str, Any]:
    return {
        "id": booking.id,
        "service_id": booking.service_id,
        "service_name": booking.service_name,
        "duration_minutes": booking.duration_minutes,
        "date_iso": booking.date_iso,
        "start_time": booking.start_time,
        "end_time": booking.end_time,
        "name": booking.name,
        "email": booking.email,
        "phone": booking.phone,
        "notes": booking.notes,
        "status": booking.status.value,
        "created_at": booking.created_at,
    }


def deserialize_booking(data: dict[str, Any]) -> BookingRecord:
    return BookingRecord(
        id=data["id"],
        service_id=data["service_id"],
        service_name=data["service_name"],
        duration_minutes=int(data["duration_minutes"]),
        date_iso=data["date_iso"],
        start_time=data["start_time"],
        end_time=data["end_time"],
        name=data["name"],
        email=data["email"],
        phone=data.get("phone"),
        notes=data.get("notes"),
        status=BookingStatus(data.get("status", BookingStatus.confirmed.value)),
        created_at=float(data.get("created_at") or 0.0),
    )


def serialize_message(message: ChatMessage) -> dict[str, Any]:
    return {
        "id": message.id,
        "role": message.role.value,
        "content": message.content,
        "created_at": message.created_at,
    }


def deserialize_message(data: dict[str, Any]) -> ChatMessage:
    return ChatMessage(
        id=data["id"],
        role=ChatRole(data["role"]),
        content=data["content"],
        created_at=float(data.get("created_at") or 0.0),
    )
