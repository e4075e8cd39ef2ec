from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ChatRole(str, Enum):
    user = "user"
    assistant = "assistant"
    system = "system"


@dataclass(frozen=True)
class ChatMessage:
    id: str
    role: ChatRole
    content: str
    created_at: float
