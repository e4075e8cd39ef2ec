from __future__ import annotations

from app.application.exceptions import BookingNotFoundError
from app.application.ports.booking_store import BookingStorePort
from app.application.ports.conversation_store import ConversationStorePort
from app.domain.entities.agent_state import AgentState
from app.domain.entities.booking import BookingRecord, BookingStatus
from app.domain.entities.message import ChatMessage


class MemoryConversationStore(ConversationStorePort):
    def __init__(self, history_limit: int = 200) -> None:
        self._threads: dict[str, list[ChatMessage]] = {}
        self._states: dict[str, AgentState] = {}
        self._history_limit = history_limit

    def get_state(self, thread_id: str) -> AgentState:
        return self._states.get(thread_id, AgentState())

    def set_state(self, thread_id: str, state: AgentState) -> None:
        self._states[thread_id] = state

    def get_history(self, thread_id: str) -> list[ChatMessage]:
        return list(self._threads.get(thread_id, []))

    def append_messages(self, thread_id: str, messages: list[ChatMessage]) -> None:
        self._threads.setdefault(thread_id, [])
        self._threads[thread_id].extend(messages)
        if len(self._threads[thread_id]) > self._history_limit:
            self._threads[thread_id] = self._threads[thread_id][-self._history_limit :]

    def reset(self, thread_id: str) -> None:
        self._threads.pop(thread_id, None)
        self._states.pop(thread_id, None)


class MemoryBookingStore(BookingStorePort):
    def __init__(self, bookings: list[BookingRecord] | None = None) -> None:
        self._bookings: list[BookingRecord] = list(bookings or [])

    def append(self, booking: BookingRecord) -> None:
        self._bookings.append(booking)

    def list(self) -> list[BookingRecord]:
        return list(self._bookings)

    def get(self, booking_id: str) -> BookingRecord:
        for booking in self._bookings:
            if booking.id == booking_id:
                return booking
        raise BookingNotFoundError(booking_id)

    def update_status(self, booking_id: str, status: BookingStatus) -> BookingRecord:
        for index, booking in enumerate(self._bookings):
            if booking.id == booking_id:
                updated = booking.with_status(status)
                self._bookings[index] = updated
                return updated
        raise BookingNotFoundError(booking_id)
