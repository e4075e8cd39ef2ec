from abc import ABC, abstractmethod

from app.domain.entities.agent_state import AgentState
from app.domain.entities.message import ChatMessage


class ConversationStorePort(ABC):
    @abstractmethod
    def get_state(self, thread_id: str) -> AgentState:
        """
        Return the saved state for a thread.
        Missing or unreadable state yields a fresh initial AgentState.
        """
        raise NotImplementedError

    @abstractmethod
    def set_state(self, thread_id: str, state: AgentState) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_history(self, thread_id: str) -> list[ChatMessage]:
        raise NotImplementedError

    @abstractmethod
    def append_messages(self, thread_id: str, messages: list[ChatMessage]) -> None:
        raise NotImplementedError

    @abstractmethod
    def reset(self, thread_id: str) -> None:
        """Drop both state and transcript for a thread."""
        raise NotImplementedError
