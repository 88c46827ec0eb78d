"""Formatting utilities"""
import base64
from typing import Sequence

from ..config import MAX_CHAT_HISTORY_MESSAGES, MAX_CHAT_MESSAGE_CHARS
from ..models import ChatMessage


def format_chat_history(messages: Sequence[ChatMessage],
                        max_messages: int = MAX_CHAT_HISTORY_MESSAGES,
                        max_chars: int = MAX_CHAT_MESSAGE_CHARS) -> str:
    """Render the most recent chat turns as prompt context."""
    if not messages:
        return ""

    context_parts = []
    for msg in list(messages)[-max_messages:]:
        content = msg.content
        if len(content) > max_chars:
            content = content[:max_chars] + "..."
        context_parts.append(f"{msg.role.value.upper()}: {content}")

    return "Previous conversation:\n" + "\n".join(context_parts)


def to_data_uri(payload: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(payload).decode('ascii')}"
