from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any

from app.application.exceptions import BookingNotFoundError
from app.application.ports.booking_store import BookingStorePort
from app.application.ports.conversation_store import ConversationStorePort
from app.domain.entities.agent_state import AgentState
from app.domain.entities.booking import BookingRecord, BookingStatus
from app.domain.entities.message import ChatMessage
from app.infrastructure.store.serialization import (
    deserialize_booking,
    deserialize_message,
    deserialize_state,
    serialize_booking,
    serialize_message,
    serialize_state,
)

logger = logging.getLogger(__name__)


def _write_json_atomic(file_path: Path, data: Any) -> None:
    """Write JSON to a temp file and rename it over the target."""
    temp_path = file_path.with_suffix(file_path.suffix + ".tmp")
    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        temp_path.replace(file_path)
    except OSError:
        if temp_path.exists():
            temp_path.unlink(missing_ok=True)
        raise


class JsonConversationStore(ConversationStorePort):
    def __init__(self, data_dir: str = "./data/threads", history_limit: int = 200) -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._history_limit = history_limit
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()  # Lock for managing locks dict

    def _get_lock(self, thread_id: str) -> threading.Lock:
        """Get or create a lock for a thread_id."""
        with self._lock_lock:
            if thread_id not in self._locks:
                self._locks[thread_id] = threading.Lock()
            return self._locks[thread_id]

    def _get_file_path(self, thread_id: str) -> Path:
        return self._data_dir / f"{thread_id}.json"

    def _default_thread_data(self, thread_id: str) -> dict[str, Any]:
        return {
            "thread_id": thread_id,
            "state": serialize_state(AgentState()),
            "messages": [],
            "version": 1,
        }

    def _load_thread_data(self, thread_id: str) -> dict[str, Any]:
        """Load thread data from JSON file, return default if missing or corrupted."""
        file_path = self._get_file_path(thread_id)
        if not file_path.exists():
            return self._default_thread_data(thread_id)

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Corrupted thread file, using defaults", extra={"thread_id": thread_id, "error": str(e)})
            return self._default_thread_data(thread_id)

        if not isinstance(data, dict):
            return self._default_thread_data(thread_id)
        data.setdefault("messages", [])
        data.setdefault("version", 1)
        return data

    def _save_thread_data(self, thread_id: str, data: dict[str, Any]) -> None:
        _write_json_atomic(self._get_file_path(thread_id), data)

    def get_state(self, thread_id: str) -> AgentState:
        with self._get_lock(thread_id):
            data = self._load_thread_data(thread_id)
        try:
            return deserialize_state(data.get("state") or {})
        except (KeyError, ValueError, TypeError) as e:
            logger.warning("Unreadable agent state, starting fresh", extra={"thread_id": thread_id, "error": str(e)})
            return AgentState()

    def set_state(self, thread_id: str, state: AgentState) -> None:
        with self._get_lock(thread_id):
            data = self._load_thread_data(thread_id)
            data["state"] = serialize_state(state)
            self._save_thread_data(thread_id, data)

    def get_history(self, thread_id: str) -> list[ChatMessage]:
        with self._get_lock(thread_id):
            data = self._load_thread_data(thread_id)
        messages: list[ChatMessage] = []
        for item in data.get("messages", []):
            try:
                messages.append(deserialize_message(item))
            except (KeyError, ValueError, TypeError):
                continue
        return messages

    def append_messages(self, thread_id: str, messages: list[ChatMessage]) -> None:
        with self._get_lock(thread_id):
            data = self._load_thread_data(thread_id)
            stored = data.get("messages", [])
            stored.extend(serialize_message(message) for message in messages)

            # Keep last N messages
            if len(stored) > self._history_limit:
                stored = stored[-self._history_limit :]

            data["messages"] = stored
            self._save_thread_data(thread_id, data)

    def reset(self, thread_id: str) -> None:
        with self._get_lock(thread_id):
            self._get_file_path(thread_id).unlink(missing_ok=True)
        with self._lock_lock:
            self._locks.pop(thread_id, None)


class JsonBookingStore(BookingStorePort):
    def __init__(self, file_path: str = "./data/bookings.json") -> None:
        self._file_path = Path(file_path)
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _load(self) -> list[BookingRecord]:
        if not self._file_path.exists():
            return []
        try:
            with open(self._file_path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Corrupted bookings file, treating as empty", extra={"error": str(e)})
            return []

        bookings: list[BookingRecord] = []
        for item in raw if isinstance(raw, list) else []:
            try:
                bookings.append(deserialize_booking(item))
            except (KeyError, ValueError, TypeError) as e:
                logger.warning("Skipping unreadable booking", extra={"error": str(e)})
        return bookings

    def _save(self, bookings: list[BookingRecord]) -> None:
        _write_json_atomic(self._file_path, [serialize_booking(booking) for booking in bookings])

    def append(self, booking: BookingRecord) -> None:
        with self._lock:
            bookings = self._load()
            bookings.append(booking)
            self._save(bookings)

    def list(self) -> list[BookingRecord]:
        with self._lock:
            return self._load()

    def get(self, booking_id: str) -> BookingRecord:
        for booking in self.list():
            if booking.id == booking_id:
                return booking
        raise BookingNotFoundError(booking_id)

    def update_status(self, booking_id: str, status: BookingStatus) -> BookingRecord:
        with self._lock:
            bookings = self._load()
            for index, booking in enumerate(bookings):
                if booking.id == booking_id:
                    updated = booking.with_status(status)
                    bookings[index] = updated
                    self._save(bookings)
                    return updated
        raise BookingNotFoundError(booking_id)
