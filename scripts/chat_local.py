#!/usr/bin/env python3
"""
Interactive local chat harness (no HTTP).

Usage:
  python3 scripts/chat_local.py

What it does:
- Keeps a stable thread_id for the session
- Sends your typed messages through the same HandleChatMessageUseCase the API uses
- Prints the current step and the assistant replies after a short pacing delay
"""

from __future__ import annotations

import os
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.core.config import settings
from app.core.logging_setup import configure_logging
from app.wiring.dependencies import get_container


def _print_header(thread_id: str, business_name: str) -> None:
    print(f"\n{business_name} — Booking Assistant")
    print("-" * 60)
    print(f"thread_id: {thread_id}")
    print("Type your message and press Enter.")
    print("Commands: /new, /reset, /history, /bookings, /quit, /help")
    print("-" * 60)


def _print_bookings(admin) -> None:
    bookings = admin.list_bookings()
    if not bookings:
        print("No bookings yet.")
        return
    for b in bookings:
        print(
            f"{b.id}  {b.date_iso} {b.start_time}-{b.end_time}  {b.service_name}  "
            f"{b.name} <{b.email}>  {b.phone or '-'}  [{b.status.value}]"
        )


def main() -> None:
    configure_logging(os.getenv("CHAT_LOG_LEVEL", "WARNING"))
    thread_id = os.getenv("CHAT_THREAD_ID", "local_user_1")
    container = get_container()
    use_case = container["use_case"]
    admin = container["admin"]
    _print_header(thread_id, container["config"].business_name)

    for message in use_case.history(thread_id)[-5:]:
        print(f"({message.role.value}) {message.content}")

    while True:
        try:
            user_text = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_text:
            continue

        cmd = user_text.lower()
        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return
        if cmd == "/help":
            print("Commands:")
            print("  /new      -> start a new thread_id")
            print("  /reset    -> clear this thread's transcript and state")
            print("  /history  -> show last 10 messages")
            print("  /bookings -> list stored bookings")
            print("  /cancel <booking_id> -> cancel a booking")
            print("  /quit     -> exit")
            continue
        if cmd == "/new":
            thread_id = f"local_user_{int(time.time())}"
            print(f"New thread_id: {thread_id}")
            continue
        if cmd == "/reset":
            use_case.reset(thread_id)
            print("Thread reset.")
            continue
        if cmd == "/history":
            print("\n--- History (last 10) ---")
            for message in use_case.history(thread_id)[-10:]:
                print(f"{message.role.value}: {message.content}")
            continue
        if cmd == "/bookings":
            _print_bookings(admin)
            continue
        if cmd.startswith("/cancel"):
            parts = user_text.split(maxsplit=1)
            if len(parts) != 2:
                print("Usage: /cancel <booking_id>")
                continue
            try:
                booking = admin.cancel(parts[1].strip())
            except LookupError:
                print(f"No booking with id {parts[1].strip()}")
                continue
            print(f"Booking {booking.id} is now {booking.status.value}.")
            continue

        result = use_case.handle(thread_id, user_text)

        # pacing only; the turn is already complete
        if settings.REPLY_DELAY_MS > 0:
            time.sleep(settings.REPLY_DELAY_MS / 1000)

        for reply in result.replies:
            print(f"\n(assistant) {reply.content}")
        print(f"\n[step: {result.state.step.value}]")


if __name__ == "__main__":
    main()
