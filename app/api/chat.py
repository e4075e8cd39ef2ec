from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.api.schemas import ChatMessageSchema, ChatRequestSchema, ChatResponseSchema
from app.application.use_cases.handle_chat_message import HandleChatMessageUseCase
from app.wiring.dependencies import get_handle_chat_message_use_case

router = APIRouter()

# thread ids double as file names in the JSON store
ThreadId = Annotated[str, Path(min_length=1, max_length=128, pattern=r"^[A-Za-z0-9_\-]+$")]


@router.post("/chat", response_model=ChatResponseSchema)
def post_message(
    req: ChatRequestSchema,
    uc: HandleChatMessageUseCase = Depends(get_handle_chat_message_use_case),
) -> ChatResponseSchema:
    result = uc.handle(thread_id=req.thread_id, text=req.text)
    return ChatResponseSchema.from_turn(req.thread_id, result.replies, result.state)


@router.get("/chat/{thread_id}/history", response_model=list[ChatMessageSchema])
def get_history(
    thread_id: ThreadId,
    uc: HandleChatMessageUseCase = Depends(get_handle_chat_message_use_case),
) -> list[ChatMessageSchema]:
    return [ChatMessageSchema.from_entity(m) for m in uc.history(thread_id)]


@router.post("/chat/{thread_id}/reset", status_code=204)
def reset_thread(
    thread_id: ThreadId,
    uc: HandleChatMessageUseCase = Depends(get_handle_chat_message_use_case),
) -> None:
    uc.reset(thread_id)
