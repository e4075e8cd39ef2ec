from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable

from app.application.ports.booking_store import BookingStorePort
from app.application.utils.availability import has_conflict
from app.application.utils.date_parser import (
    crosses_midnight,
    get_end_time,
    is_open_on,
    is_within_working_hours,
    normalize_date,
    parse_time_24h,
    weekday_of,
)
from app.application.utils.message_rules import (
    clean_email,
    clean_name,
    has_price_intent,
    has_service_list_intent,
    is_booking_request,
    is_confirmation,
    is_help_request,
    is_rejection,
    is_skip,
)
from app.application.utils.service_resolver import find_service, format_price, list_services_summary
from app.domain.entities.agent_state import AgentState, PendingBooking, Step
from app.domain.entities.assistant_config import AssistantConfig
from app.domain.entities.booking import BookingRecord, BookingStatus
from app.domain.entities.message import ChatMessage, ChatRole

DEFAULT_DURATION_MINUTES = 60

WEEKDAY_NAMES = ("Sundays", "Mondays", "Tuesdays", "Wednesdays", "Thursdays", "Fridays", "Saturdays")


@dataclass(frozen=True)
class AgentReply:
    messages: list[ChatMessage]
    state: AgentState


@dataclass(frozen=True)
class _Turn:
    replies: list[str]
    state: AgentState


def create_initial_state() -> AgentState:
    return AgentState(step=Step.idle, pending=PendingBooking(), last_prompt=None)


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


class BookingAgentUseCase:
    """
    Step machine that turns one line of user text into assistant replies and the next state.
    Holds no per-conversation data: state comes in and goes out with every call.
    """

    def __init__(
        self,
        config: AssistantConfig,
        booking_store: BookingStorePort,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._config = config
        self._booking_store = booking_store
        self._clock = clock or datetime.now
        self._logger = logging.getLogger(__name__)

    def reply(self, input_text: str, state: AgentState) -> AgentReply:
        now = self._clock()
        turn = self._dispatch(input_text.strip(), state, now)
        if turn.state.step != state.step:
            self._logger.debug(
                "Step transition",
                extra={"step": turn.state.step.value, "previous_step": state.step.value},
            )
        messages = [
            ChatMessage(id=new_id("m"), role=ChatRole.assistant, content=content, created_at=now.timestamp())
            for content in turn.replies
        ]
        return AgentReply(messages=messages, state=turn.state)

    def _dispatch(self, text: str, state: AgentState, now: datetime) -> _Turn:
        if has_price_intent(text):
            return _Turn(
                [f"Here are current rates:\n{self._services_summary()}"],
                replace(state, last_prompt=self.prompt_for(state.step, state)),
            )
        if has_service_list_intent(text):
            return _Turn(
                [f"Available services:\n{self._services_summary()}"],
                replace(state, last_prompt=self.prompt_for(state.step, state)),
            )
        if is_help_request(text):
            return _Turn(
                ["I can help you choose a service, check availability, and secure a booking. Say 'book' to begin."],
                state,
            )

        match state.step:
            case Step.idle:
                return self._start_booking(state)
            case Step.ask_service:
                return self._process_service(text, state)
            case Step.ask_date:
                return self._process_date(text, state, now)
            case Step.ask_time:
                return self._process_time(text, state)
            case Step.ask_name:
                return self._process_name(text, state)
            case Step.ask_email:
                return self._process_email(text, state)
            case Step.ask_phone:
                return self._process_phone(text, state)
            case Step.confirm:
                return self._process_confirmation(text, state, now)
            case Step.completed:
                return self._process_completed(text, state)
        raise AssertionError(f"Unhandled step: {state.step!r}")

    def _start_booking(self, state: AgentState) -> _Turn:
        greeting = (
            f"Hi! I'm {self._config.owner_name}'s assistant. "
            f"Let's get you booked at {self._config.business_name}."
        )
        return self._advance(Step.ask_service, PendingBooking(), greeting)

    def _process_service(self, text: str, state: AgentState) -> _Turn:
        service = find_service(text, self._config.services)
        if not service:
            return self._reject(
                state,
                "unknown_service",
                "I didn't catch the service. Please choose from the list above.",
                self.prompt_for(Step.ask_service, state),
            )
        pending = replace(
            state.pending,
            service_id=service.id,
            service_name=service.name,
            duration_minutes=service.duration_minutes,
        )
        return self._advance(Step.ask_date, pending, f"Lovely — {service.name}.")

    def _process_date(self, text: str, state: AgentState, now: datetime) -> _Turn:
        date_iso = normalize_date(text, now.date())
        if not date_iso:
            return self._reject(state, "unparseable_date", "Please provide a date like 2025-11-05 or Nov 5.")
        if date_iso in self._config.blackout_dates:
            return self._reject(state, "blackout_date", "Sorry, that date is unavailable. Try another date?")
        if not is_open_on(date_iso, self._config.working_hours):
            return self._reject(
                state,
                "closed_day",
                f"Sorry, the studio is closed on {WEEKDAY_NAMES[weekday_of(date_iso)]}. Could you pick another date?",
            )
        pending = replace(state.pending, date_iso=date_iso)
        return self._advance(Step.ask_time, pending, f"Thanks — {date_iso}.")

    def _process_time(self, text: str, state: AgentState) -> _Turn:
        date_iso = state.pending.date_iso
        if not date_iso:
            return self._advance(Step.ask_date, state.pending, "Let's pick a date first.")

        start = parse_time_24h(text)
        if not start:
            return self._reject(state, "unparseable_time", "Please share a time like 2pm or 14:30.")

        duration = state.pending.duration_minutes or DEFAULT_DURATION_MINUTES
        end = get_end_time(start, duration)
        hours = self._config.working_hours
        if crosses_midnight(start, duration) or not is_within_working_hours(date_iso, start, end, hours):
            return self._reject(
                state,
                "outside_hours",
                f"That time is outside working hours ({hours.open}-{hours.close}). Please suggest another time.",
            )
        if has_conflict(self._booking_store.list(), date_iso, start, end):
            return self._reject(state, "slot_conflict", "That slot is already booked. Could you try a different time?")

        pending = replace(state.pending, start_time=start, end_time=end)
        return self._advance(Step.ask_name, pending, f"Perfect — {start} to {end}.")

    def _process_name(self, text: str, state: AgentState) -> _Turn:
        name = clean_name(text)
        if not name:
            return self._reject(state, "invalid_name", "Please provide your full name.")
        return self._advance(Step.ask_email, replace(state.pending, name=name), "Thanks!")

    def _process_email(self, text: str, state: AgentState) -> _Turn:
        email = clean_email(text)
        if not email:
            return self._reject(state, "invalid_email", "That email doesn't look right. Could you check it?")
        return self._advance(Step.ask_phone, replace(state.pending, email=email), "Great!")

    def _process_phone(self, text: str, state: AgentState) -> _Turn:
        phone = None if is_skip(text) or not text else text
        return self._advance(Step.confirm, replace(state.pending, phone=phone))

    def _process_confirmation(self, text: str, state: AgentState, now: datetime) -> _Turn:
        if is_rejection(text):
            return self._advance(Step.ask_time, state.pending, "No worries.")
        if not is_confirmation(text):
            return self._reject(state, "unrecognized_answer", "Please reply with 'yes' to confirm or 'no' to adjust.")

        pending = state.pending
        if not _is_complete(pending):
            self._logger.warning("Confirm reached with incomplete booking", extra={"reason": "incomplete_pending"})
            return self._advance(
                Step.ask_service,
                PendingBooking(),
                "Sorry, I lost track of your booking details. Let's start again.",
            )

        if has_conflict(self._booking_store.list(), pending.date_iso, pending.start_time, pending.end_time):
            self._logger.info("Slot taken before confirmation", extra={"reason": "slot_conflict"})
            return self._advance(
                Step.ask_time,
                pending,
                "Sorry, that slot was just booked by someone else.",
            )

        booking = BookingRecord(
            id=new_id("bk"),
            service_id=pending.service_id,
            service_name=pending.service_name,
            duration_minutes=pending.duration_minutes,
            date_iso=pending.date_iso,
            start_time=pending.start_time,
            end_time=pending.end_time,
            name=pending.name,
            email=pending.email,
            phone=pending.phone,
            notes=pending.notes,
            status=BookingStatus.confirmed,
            created_at=now.timestamp(),
        )
        self._booking_store.append(booking)
        self._logger.info(
            "Booking confirmed",
            extra={"booking_id": booking.id, "service": booking.service_id, "date": booking.date_iso},
        )

        return _Turn(
            [
                f"You're all set, {booking.name}!\n"
                f"{booking.service_name} on {booking.date_iso} at {booking.start_time}.\n"
                f"A confirmation will be sent to {booking.email}.",
                f"Studio: {self._config.location}. If you need changes, just say 'reschedule' or 'cancel'.",
            ],
            AgentState(step=Step.completed, pending=PendingBooking(), last_prompt=None),
        )

    def _process_completed(self, text: str, state: AgentState) -> _Turn:
        if is_booking_request(text):
            return self._start_booking(state)
        return _Turn(["I'm here to help you book — say 'book' to start."], state)

    def _advance(self, step: Step, pending: PendingBooking, *lead: str) -> _Turn:
        next_state = AgentState(step=step, pending=pending)
        prompt = self.prompt_for(step, next_state)
        return _Turn([*lead, prompt], replace(next_state, last_prompt=prompt))

    def _reject(self, state: AgentState, reason: str, *replies: str) -> _Turn:
        self._logger.info("Input rejected", extra={"step": state.step.value, "reason": reason})
        return _Turn(list(replies), state)

    def _services_summary(self) -> str:
        return list_services_summary(self._config.services)

    def prompt_for(self, step: Step, state: AgentState) -> str:
        match step:
            case Step.ask_service:
                return (
                    f"Which service would you like? Here are options:\n{self._services_summary()}\n"
                    "You can reply with the service name."
                )
            case Step.ask_date:
                return "Great! What date works for you? (e.g., 2025-11-05 or Nov 5)"
            case Step.ask_time:
                return "What start time would you prefer? (e.g., 2pm or 14:30)"
            case Step.ask_name:
                return "Got it. What is your full name?"
            case Step.ask_email:
                return "And your email for the confirmation?"
            case Step.ask_phone:
                return "Optional: a phone number to reach you? (or say skip)"
            case Step.confirm:
                return self._build_summary(state.pending)
            case Step.idle | Step.completed:
                return "How can I help with your makeup booking today?"
        raise AssertionError(f"Unhandled step: {step!r}")

    def _build_summary(self, pending: PendingBooking) -> str:
        service = self._config.get_service(pending.service_id) if pending.service_id else None
        lines = [
            "Please confirm:",
            f"Service: {pending.service_name}",
            f"Date: {pending.date_iso}",
            f"Time: {pending.start_time}–{pending.end_time}",
            f"Name: {pending.name}",
            f"Email: {pending.email}",
        ]
        if pending.phone:
            lines.append(f"Phone: {pending.phone}")
        if service:
            lines.append(f"Rate: {format_price(service.price_cents)}")
        lines.append("Reply 'yes' to confirm or 'no' to change.")
        return "\n".join(lines)


def _is_complete(pending: PendingBooking) -> bool:
    required = (
        pending.service_id,
        pending.service_name,
        pending.duration_minutes,
        pending.date_iso,
        pending.start_time,
        pending.end_time,
        pending.name,
        pending.email,
    )
    return all(value is not None for value in required)
