from __future__ import annotations

import re

PRICE_PATTERNS = (
    "price",
    "cost",
    "how much",
)

SERVICE_LIST_PATTERNS = (
    "service",
    "menu",
    "what do you offer",
)

YES_ANSWERS = ("yes", "y")
NO_ANSWERS = ("no", "n")

_NAME_DISALLOWED = re.compile(r"[^a-zA-Z\s\-'.]")
_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_text(text: str) -> str:
    return text.strip().lower()


def has_price_intent(text: str) -> bool:
    normalized = normalize_text(text)
    return any(pattern in normalized for pattern in PRICE_PATTERNS)


def has_service_list_intent(text: str) -> bool:
    normalized = normalize_text(text)
    return any(pattern in normalized for pattern in SERVICE_LIST_PATTERNS)


def is_help_request(text: str) -> bool:
    return normalize_text(text) == "help"


def is_booking_request(text: str) -> bool:
    return "book" in normalize_text(text)


def is_confirmation(text: str) -> bool:
    return normalize_text(text) in YES_ANSWERS


def is_rejection(text: str) -> bool:
    return normalize_text(text) in NO_ANSWERS


def is_skip(text: str) -> bool:
    return normalize_text(text) == "skip"


def clean_name(text: str) -> str | None:
    """Keep letters, spaces, hyphens, apostrophes and periods. None if under 2 chars remain."""
    name = _NAME_DISALLOWED.sub("", text).strip()
    if len(name) < 2:
        return None
    return name


def clean_email(text: str) -> str | None:
    email = text.strip()
    if not _EMAIL_PATTERN.match(email):
        return None
    return email
