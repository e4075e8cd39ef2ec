from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from app.application.ports.conversation_store import ConversationStorePort
from app.application.use_cases.booking_agent import BookingAgentUseCase, new_id
from app.domain.entities.agent_state import AgentState
from app.domain.entities.message import ChatMessage, ChatRole


@dataclass(frozen=True)
class ChatTurnResult:
    user_message: ChatMessage
    replies: list[ChatMessage]
    state: AgentState


class HandleChatMessageUseCase:
    def __init__(
        self,
        store: ConversationStorePort,
        agent: BookingAgentUseCase,
        owner_name: str,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._agent = agent
        self._owner_name = owner_name
        self._clock = clock or datetime.now
        self._logger = logging.getLogger(__name__)

    def handle(self, thread_id: str, text: str) -> ChatTurnResult:
        now_ts = self._clock().timestamp()
        self.ensure_welcome(thread_id)

        user_message = ChatMessage(id=new_id("u"), role=ChatRole.user, content=text, created_at=now_ts)
        self._store.append_messages(thread_id, [user_message])

        state = self._store.get_state(thread_id)
        result = self._agent.reply(text, state)

        self._store.append_messages(thread_id, result.messages)
        self._store.set_state(thread_id, result.state)

        self._logger.info(
            "Chat turn handled",
            extra={"thread_id": thread_id, "step": result.state.step.value, "reply_count": len(result.messages)},
        )
        return ChatTurnResult(user_message=user_message, replies=result.messages, state=result.state)

    def ensure_welcome(self, thread_id: str) -> list[ChatMessage]:
        """Seed an empty transcript with the welcome message and return the transcript."""
        history = self._store.get_history(thread_id)
        if history:
            return history
        welcome = ChatMessage(
            id="welcome",
            role=ChatRole.assistant,
            content=build_welcome(self._owner_name),
            created_at=self._clock().timestamp(),
        )
        self._store.append_messages(thread_id, [welcome])
        return [welcome]

    def history(self, thread_id: str) -> list[ChatMessage]:
        return self.ensure_welcome(thread_id)

    def reset(self, thread_id: str) -> None:
        self._store.reset(thread_id)
        self._logger.info("Conversation reset", extra={"thread_id": thread_id})


def build_welcome(owner_name: str) -> str:
    return (
        f"Hi! I'm {owner_name}'s booking assistant. I can help you choose a service, "
        "check availability, and confirm your appointment. Say 'book' to begin."
    )
