import logging
from functools import lru_cache
from pathlib import Path

from app.core.config import settings
from app.application.ports.booking_store import BookingStorePort
from app.application.ports.conversation_store import ConversationStorePort
from app.application.use_cases.booking_agent import BookingAgentUseCase
from app.application.use_cases.handle_chat_message import HandleChatMessageUseCase
from app.application.use_cases.manage_bookings import ManageBookingsUseCase
from app.domain.entities.assistant_config import AssistantConfig
from app.infrastructure.knowledge.assistant_config import build_assistant_config
from app.infrastructure.store.json_store import JsonBookingStore, JsonConversationStore
from app.infrastructure.store.memory_store import MemoryBookingStore, MemoryConversationStore


@lru_cache
def get_assistant_config() -> AssistantConfig:
    return build_assistant_config(settings)


@lru_cache
def get_conversation_store() -> ConversationStorePort:
    if settings.STORE_PROVIDER.lower() == "json":
        return JsonConversationStore(data_dir=str(Path(settings.DATA_DIR) / "threads"))
    return MemoryConversationStore()


@lru_cache
def get_booking_store() -> BookingStorePort:
    logger = logging.getLogger(__name__)
    if settings.STORE_PROVIDER.lower() == "json":
        file_path = Path(settings.DATA_DIR) / "bookings.json"
        logger.info("Using JsonBookingStore path=%s", file_path)
        return JsonBookingStore(file_path=str(file_path))
    logger.info("Using MemoryBookingStore (STORE_PROVIDER=%s)", settings.STORE_PROVIDER)
    return MemoryBookingStore()


def get_booking_agent() -> BookingAgentUseCase:
    return BookingAgentUseCase(config=get_assistant_config(), booking_store=get_booking_store())


def get_handle_chat_message_use_case() -> HandleChatMessageUseCase:
    config = get_assistant_config()
    return HandleChatMessageUseCase(
        store=get_conversation_store(),
        agent=get_booking_agent(),
        owner_name=config.owner_name,
    )


def get_manage_bookings_use_case() -> ManageBookingsUseCase:
    return ManageBookingsUseCase(booking_store=get_booking_store())


def get_container() -> dict[str, object]:
    return {
        "use_case": get_handle_chat_message_use_case(),
        "admin": get_manage_bookings_use_case(),
        "config": get_assistant_config(),
    }
