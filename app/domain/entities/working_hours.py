from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WorkingHours:
    open: str  # HH:MM
    close: str  # HH:MM
    days_open: frozenset[int] = frozenset({0, 1, 2, 3, 4, 5, 6})  # 0=Sunday .. 6=Saturday
