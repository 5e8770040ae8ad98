"""Per-request conversation buffer.

Nothing here is kept between requests: callers start a conversation, pass
it through a turn, and get the extended conversation back.
"""

from __future__ import annotations

from typing import List, Literal, Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"] = Field(..., description="'user' or 'assistant'")
    content: str


def start_conversation(user_input: str) -> List[ChatMessage]:
    return [ChatMessage(role="user", content=user_input)]


def to_lc_messages(conversation: Sequence[ChatMessage]) -> List[BaseMessage]:
    messages: List[BaseMessage] = []
    for item in conversation:
        if item.role == "assistant":
            messages.append(AIMessage(content=item.content))
        else:
            messages.append(HumanMessage(content=item.content))
    return messages


def message_text(message: BaseMessage) -> str:
    content = message.content
    if isinstance(content, str):
        return content
    # Multi-part content: keep only the text blocks
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


def append_reply(conversation: Sequence[ChatMessage], reply: str) -> List[ChatMessage]:
    return [*conversation, ChatMessage(role="assistant", content=reply)]
