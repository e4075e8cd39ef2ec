"""
Conversation-level tests for the booking step machine.
"""

from __future__ import annotations

from datetime import datetime

from app.application.use_cases.booking_agent import BookingAgentUseCase, create_initial_state
from app.domain.entities.agent_state import AgentState, PendingBooking, Step
from app.domain.entities.assistant_config import AssistantConfig
from app.domain.entities.booking import BookingRecord, BookingStatus
from app.domain.entities.message import ChatRole
from app.domain.entities.working_hours import WorkingHours
from app.infrastructure.knowledge.service_catalog_data import SERVICE_CATALOG
from app.infrastructure.store.memory_store import MemoryBookingStore

NOW = datetime(2025, 11, 20, 9, 0)

CONFIG = AssistantConfig(
    business_name="Sasha K Makeup",
    owner_name="Sasha",
    location="125 Bloom St, Suite 3B",
    contact_email="bookings@example.com",
    services=SERVICE_CATALOG,
    working_hours=WorkingHours(open="10:00", close="18:00", days_open=frozenset({2, 3, 4, 5, 6, 0})),
    blackout_dates=frozenset({"2025-12-24"}),
)


def _agent(store: MemoryBookingStore | None = None) -> tuple[BookingAgentUseCase, MemoryBookingStore]:
    store = store if store is not None else MemoryBookingStore()
    return BookingAgentUseCase(config=CONFIG, booking_store=store, clock=lambda: NOW), store


def _state_at(step: Step, **pending) -> AgentState:
    return AgentState(step=step, pending=PendingBooking(**pending))


def _existing(start: str, end: str, status: BookingStatus = BookingStatus.confirmed) -> BookingRecord:
    return BookingRecord(
        id=f"bk_existing_{start}",
        service_id="natural",
        service_name="Natural Beat",
        duration_minutes=60,
        date_iso="2025-12-02",
        start_time=start,
        end_time=end,
        name="Existing Client",
        email="client@example.com",
        status=status,
        created_at=0.0,
    )


def _texts(result) -> str:
    return "\n".join(m.content for m in result.messages)


def test_full_booking_conversation():
    agent, store = _agent()
    state = create_initial_state()

    result = agent.reply("book", state)
    assert result.state.step == Step.ask_service

    result = agent.reply("bridal glam", result.state)
    assert result.state.step == Step.ask_date
    assert result.state.pending.service_id == "bridal"
    assert result.state.pending.duration_minutes == 120

    rejected = agent.reply("2025-12-01", result.state)
    assert rejected.state.step == Step.ask_date
    assert rejected.state == result.state
    assert "closed on Mondays" in _texts(rejected)

    result = agent.reply("2025-12-02", rejected.state)
    assert result.state.step == Step.ask_time
    assert result.state.pending.date_iso == "2025-12-02"

    result = agent.reply("11am", result.state)
    assert result.state.step == Step.ask_name
    assert result.state.pending.start_time == "11:00"
    assert result.state.pending.end_time == "13:00"

    result = agent.reply("Jane Doe", result.state)
    assert result.state.step == Step.ask_email

    result = agent.reply("jane@example.com", result.state)
    assert result.state.step == Step.ask_phone

    result = agent.reply("skip", result.state)
    assert result.state.step == Step.confirm
    assert result.state.pending.phone is None
    summary = _texts(result)
    for expected in ("Bridal Glam", "2025-12-02", "11:00–13:00", "Jane Doe", "jane@example.com"):
        assert expected in summary
    assert result.state.last_prompt == summary

    result = agent.reply("yes", result.state)
    assert result.state.step == Step.completed
    assert result.state.pending == PendingBooking()

    bookings = store.list()
    assert len(bookings) == 1
    booking = bookings[0]
    assert booking.status == BookingStatus.confirmed
    assert booking.service_id == "bridal"
    assert booking.service_name == "Bridal Glam"
    assert booking.duration_minutes == 120
    assert booking.date_iso == "2025-12-02"
    assert booking.start_time == "11:00"
    assert booking.end_time == "13:00"
    assert booking.name == "Jane Doe"
    assert booking.email == "jane@example.com"
    assert booking.phone is None
    assert booking.created_at == NOW.timestamp()
    assert booking.id.startswith("bk_")


def test_replies_are_assistant_messages_with_ids():
    agent, _ = _agent()
    result = agent.reply("hello", create_initial_state())
    assert result.state.step == Step.ask_service
    assert len(result.messages) == 2
    assert all(m.role == ChatRole.assistant for m in result.messages)
    assert all(m.created_at == NOW.timestamp() for m in result.messages)
    assert len({m.id for m in result.messages}) == 2
    assert "Sasha K Makeup" in result.messages[0].content


def test_global_intents_do_not_advance():
    agent, _ = _agent()
    state = _state_at(Step.ask_date, service_id="natural", service_name="Natural Beat", duration_minutes=60)

    result = agent.reply("how much does it cost?", state)
    assert result.state.step == Step.ask_date
    assert result.state.pending == state.pending
    assert "$150.00" in _texts(result)
    assert result.state.last_prompt == agent.prompt_for(Step.ask_date, state)

    result = agent.reply("what do you offer", state)
    assert result.state.step == Step.ask_date
    assert "Available services" in _texts(result)

    result = agent.reply("help", state)
    assert result.state == state


def test_unknown_service_reprompts():
    agent, _ = _agent()
    state = _state_at(Step.ask_service)
    result = agent.reply("haircut", state)
    assert result.state == state
    assert "didn't catch the service" in result.messages[0].content
    assert "Bridal Glam" in result.messages[1].content


def test_date_failures_have_distinct_messages():
    agent, _ = _agent()
    state = _state_at(Step.ask_date, service_id="natural", service_name="Natural Beat", duration_minutes=60)

    unparseable = agent.reply("someday", state)
    blackout = agent.reply("2025-12-24", state)
    closed = agent.reply("12/1", state)

    assert unparseable.state == blackout.state == closed.state == state
    messages = {_texts(unparseable), _texts(blackout), _texts(closed)}
    assert len(messages) == 3
    assert "unavailable" in _texts(blackout)


def test_relative_dates_use_clock():
    agent, _ = _agent()
    state = _state_at(Step.ask_date, service_id="natural", service_name="Natural Beat", duration_minutes=60)
    result = agent.reply("tomorrow", state)
    assert result.state.pending.date_iso == "2025-11-21"


def test_time_failures_have_distinct_messages():
    store = MemoryBookingStore([_existing("14:00", "15:00")])
    agent, _ = _agent(store)
    state = _state_at(
        Step.ask_time, service_id="natural", service_name="Natural Beat", duration_minutes=60, date_iso="2025-12-02"
    )

    unparseable = agent.reply("whenever", state)
    early = agent.reply("9:30am", state)
    late = agent.reply("5:30pm", state)
    conflict = agent.reply("2:30pm", state)

    for result in (unparseable, early, late, conflict):
        assert result.state == state
    assert "like 2pm" in _texts(unparseable)
    assert "outside working hours (10:00-18:00)" in _texts(early)
    assert "outside working hours" in _texts(late)
    assert "already booked" in _texts(conflict)


def test_touching_and_cancelled_slots_are_bookable():
    store = MemoryBookingStore([_existing("14:00", "15:00"), _existing("16:00", "17:00", BookingStatus.cancelled)])
    agent, _ = _agent(store)
    state = _state_at(
        Step.ask_time, service_id="natural", service_name="Natural Beat", duration_minutes=60, date_iso="2025-12-02"
    )

    assert agent.reply("15:00", state).state.step == Step.ask_name
    assert agent.reply("4pm", state).state.step == Step.ask_name


def test_missing_duration_defaults_to_an_hour():
    agent, _ = _agent()
    state = _state_at(Step.ask_time, date_iso="2025-12-02")
    result = agent.reply("17:00", state)
    assert result.state.pending.end_time == "18:00"


def test_invalid_name_and_email_reprompt():
    agent, _ = _agent()
    name_state = _state_at(Step.ask_name)
    assert agent.reply("7", name_state).state == name_state

    email_state = _state_at(Step.ask_email, name="Jane Doe")
    assert agent.reply("jane at example dot com", email_state).state == email_state


def test_phone_is_kept_in_summary():
    agent, _ = _agent()
    state = _state_at(
        Step.ask_phone,
        service_id="party",
        service_name="Party Glam",
        duration_minutes=90,
        date_iso="2025-12-02",
        start_time="12:00",
        end_time="13:30",
        name="Jane Doe",
        email="jane@example.com",
    )
    result = agent.reply("555-0100", state)
    assert result.state.step == Step.confirm
    assert result.state.pending.phone == "555-0100"
    assert "Phone: 555-0100" in _texts(result)
    assert "Rate: $220.00" in _texts(result)


def _confirm_state() -> AgentState:
    return _state_at(
        Step.confirm,
        service_id="natural",
        service_name="Natural Beat",
        duration_minutes=60,
        date_iso="2025-12-02",
        start_time="14:00",
        end_time="15:00",
        name="Jane Doe",
        email="jane@example.com",
    )


def test_confirm_no_returns_to_time_and_keeps_pending():
    agent, store = _agent()
    state = _confirm_state()
    result = agent.reply("no", state)
    assert result.state.step == Step.ask_time
    assert result.state.pending == state.pending
    assert store.list() == []


def test_confirm_unrecognized_answer_reprompts():
    agent, store = _agent()
    state = _confirm_state()
    result = agent.reply("maybe", state)
    assert result.state == state
    assert "'yes'" in _texts(result)
    assert store.list() == []


def test_confirm_rechecks_conflicts():
    store = MemoryBookingStore([_existing("14:30", "15:30")])
    agent, _ = _agent(store)
    result = agent.reply("y", _confirm_state())
    assert result.state.step == Step.ask_time
    assert len(store.list()) == 1


def test_incomplete_pending_at_confirm_restarts():
    agent, store = _agent()
    result = agent.reply("yes", _state_at(Step.confirm, service_id="natural"))
    assert result.state.step == Step.ask_service
    assert result.state.pending == PendingBooking()
    assert store.list() == []


def test_completed_conversation_can_book_again():
    agent, _ = _agent()
    state = AgentState(step=Step.completed)

    idle_chat = agent.reply("thanks!", state)
    assert idle_chat.state == state

    again = agent.reply("I want to book again", state)
    assert again.state.step == Step.ask_service


def test_reply_is_repeatable_without_store_changes():
    agent, _ = _agent()
    state = _state_at(Step.ask_service)
    first = agent.reply("party", state)
    second = agent.reply("party", state)
    assert first.state == second.state
    assert [m.content for m in first.messages] == [m.content for m in second.messages]
