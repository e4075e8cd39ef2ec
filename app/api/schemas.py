from __future__ import annotations

from pydantic import BaseModel, Field

from app.domain.entities.agent_state import AgentState
from app.domain.entities.booking import BookingRecord
from app.domain.entities.message import ChatMessage


class ChatRequestSchema(BaseModel):
    thread_id: str = Field(min_length=1, max_length=128, pattern=r"^[A-Za-z0-9_\-]+$")
    text: str = Field(min_length=1, max_length=2000)


class ChatMessageSchema(BaseModel):
    id: str
    role: str
    content: str
    created_at: float

    @staticmethod
    def from_entity(message: ChatMessage) -> "ChatMessageSchema":
        return ChatMessageSchema(
            id=message.id,
            role=message.role.value,
            content=message.content,
            created_at=message.created_at,
        )


class ChatResponseSchema(BaseModel):
    thread_id: str
    step: str
    last_prompt: str | None = None
    messages: list[ChatMessageSchema]

    @staticmethod
    def from_turn(thread_id: str, messages: list[ChatMessage], state: AgentState) -> "ChatResponseSchema":
        return ChatResponseSchema(
            thread_id=thread_id,
            step=state.step.value,
            last_prompt=state.last_prompt,
            messages=[ChatMessageSchema.from_entity(m) for m in messages],
        )


class BookingSchema(BaseModel):
    id: str
    service_id: str
    service_name: str
    duration_minutes: int
    date_iso: str
    start_time: str
    end_time: str
    name: str
    email: str
    phone: str | None = None
    notes: str | None = None
    status: str
    created_at: float

    @staticmethod
    def from_entity(booking: BookingRecord) -> "BookingSchema":
        return BookingSchema(
            id=booking.id,
            service_id=booking.service_id,
            service_name=booking.service_name,
            duration_minutes=booking.duration_minutes,
            date_iso=booking.date_iso,
            start_time=booking.start_time,
            end_time=booking.end_time,
            name=booking.name,
            email=booking.email,
            phone=booking.phone,
            notes=booking.notes,
            status=booking.status.value,
            created_at=booking.created_at,
        )


class BookingListSchema(BaseModel):
    bookings: list[BookingSchema] = Field(default_factory=list)
