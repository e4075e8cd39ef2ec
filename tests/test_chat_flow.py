from __future__ import annotations

from datetime import datetime

from app.application.use_cases.booking_agent import BookingAgentUseCase
from app.application.use_cases.handle_chat_message import HandleChatMessageUseCase
from app.application.use_cases.manage_bookings import ManageBookingsUseCase
from app.core.config import Settings
from app.domain.entities.agent_state import Step
from app.domain.entities.booking import BookingStatus
from app.domain.entities.message import ChatRole
from app.infrastructure.knowledge.assistant_config import build_assistant_config
from app.infrastructure.store.memory_store import MemoryBookingStore, MemoryConversationStore

NOW = datetime(2025, 11, 20, 9, 0)


def _use_cases():
    config = build_assistant_config(Settings(_env_file=None))
    bookings = MemoryBookingStore()
    conversations = MemoryConversationStore()
    agent = BookingAgentUseCase(config=config, booking_store=bookings, clock=lambda: NOW)
    chat = HandleChatMessageUseCase(
        store=conversations,
        agent=agent,
        owner_name=config.owner_name,
        clock=lambda: NOW,
    )
    return chat, ManageBookingsUseCase(bookings), conversations


def _run(chat: HandleChatMessageUseCase, thread_id: str, *texts: str):
    result = None
    for text in texts:
        result = chat.handle(thread_id, text)
    return result


def test_transcript_starts_with_welcome_and_records_turns():
    chat, _, conversations = _use_cases()
    result = chat.handle("t1", "book")

    history = conversations.get_history("t1")
    assert history[0].id == "welcome"
    assert history[1].role == ChatRole.user
    assert history[1].content == "book"
    assert [m.id for m in history[2:]] == [m.id for m in result.replies]
    assert conversations.get_state("t1").step == Step.ask_service


def test_state_is_threaded_between_turns():
    chat, admin, _ = _use_cases()
    result = _run(
        chat, "t2",
        "book", "natural", "2025-12-03", "2pm", "Jane Doe", "jane@example.com", "555-0100", "yes",
    )
    assert result.state.step == Step.completed

    bookings = admin.list_bookings()
    assert len(bookings) == 1
    assert bookings[0].phone == "555-0100"
    assert bookings[0].start_time == "14:00"
    assert bookings[0].end_time == "15:00"


def test_second_conversation_sees_first_booking():
    chat, _, _ = _use_cases()
    _run(chat, "first", "book", "natural", "2025-12-03", "2pm", "Jane Doe", "jane@example.com", "skip", "yes")
    result = _run(chat, "second", "book", "natural", "2025-12-03", "2:30pm")
    assert result.state.step == Step.ask_time
    assert "already booked" in result.replies[0].content


def test_cancelled_slot_can_be_rebooked():
    chat, admin, _ = _use_cases()
    _run(chat, "first", "book", "natural", "2025-12-03", "2pm", "Jane Doe", "jane@example.com", "skip", "yes")
    booking = admin.list_bookings()[0]

    cancelled = admin.cancel(booking.id)
    assert cancelled.status == BookingStatus.cancelled
    assert admin.cancel(booking.id).status == BookingStatus.cancelled
    assert admin.list_bookings(include_cancelled=False) == []

    result = _run(chat, "second", "book", "natural", "2025-12-03", "2pm")
    assert result.state.step == Step.ask_name


def test_reset_clears_thread():
    chat, _, conversations = _use_cases()
    _run(chat, "t3", "book", "party")
    chat.reset("t3")
    assert conversations.get_state("t3").step == Step.idle
    assert [m.id for m in chat.history("t3")] == ["welcome"]
