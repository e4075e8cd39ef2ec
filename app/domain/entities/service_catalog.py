from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ServiceOption:
    id: str
    name: str
    duration_minutes: int
    price_cents: int
    description: str = ""
