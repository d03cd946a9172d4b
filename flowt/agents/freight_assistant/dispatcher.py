# --------------------------- flowt/agents/freight_assistant/dispatcher.py ----------------------------
"""
FLOWT · Conversation Dispatcher helpers

OVERVIEW:
Builds the message list sent upstream and resolves the per-request model
settings.

MESSAGE LIST:
1. One system message: caller-supplied prompt verbatim, or the default
   prompt with market context injected
2. The last HISTORY_LIMIT client-held turns, in their original order
3. The new user turn, multi-part when attachments are present

SETTINGS:
Model, temperature, token limit and system prompt default to configuration.
Callers with the "developer" role may override them per request; overrides
from anyone else are ignored (and logged).
"""

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Union

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from flowt.config import settings
from flowt.errors import AuthenticationError
from flowt.models.chat import Attachment, ChatRequest, ConversationTurn
from flowt.services.listing_store import ListingStore, bearer_token

logger = logging.getLogger(__name__)

DOCUMENT_NOTE = "\n\n[User uploaded a document: {mime_type}]"


@dataclass(frozen=True)
class AgentSettings:
    """Per-request model configuration."""
    model: str = settings.LLM_MODEL
    temperature: float = settings.LLM_TEMPERATURE
    max_tokens: int = settings.LLM_MAX_TOKENS
    system_prompt: Optional[str] = None

    @classmethod
    def defaults(cls) -> "AgentSettings":
        return cls(
            model=settings.LLM_MODEL,
            temperature=settings.LLM_TEMPERATURE,
            max_tokens=settings.LLM_MAX_TOKENS,
        )

    def with_overrides(self, request: ChatRequest) -> "AgentSettings":
        overrides = {
            "model": request.model,
            "temperature": request.temperature,
            "max_tokens": request.max_tokens,
            "system_prompt": request.system_prompt,
        }
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def resolve_settings(request: ChatRequest, authorization: Optional[str],
                     store: ListingStore, base: AgentSettings = None) -> AgentSettings:
    """
    Apply request overrides only for callers holding the developer role.

    A failed role lookup never fails the chat; it just keeps the defaults.
    """
    base = base or AgentSettings.defaults()
    if not request.has_overrides():
        return base

    try:
        user_id = store.get_user_id(bearer_token(authorization))
        is_developer = store.has_role(user_id, settings.DEVELOPER_ROLE)
    except AuthenticationError:
        is_developer = False
    except Exception as e:
        logger.warning(f"Developer role lookup failed: {e}")
        is_developer = False

    if not is_developer:
        logger.warning("Ignoring model setting overrides from non-developer caller")
        return base

    return base.with_overrides(request)


def trim_history(history: Sequence[ConversationTurn], limit: int = None) -> List[ConversationTurn]:
    """Keep only the most recent `limit` turns, order preserved."""
    limit = settings.HISTORY_LIMIT if limit is None else limit
    if limit <= 0:
        return []
    return list(history)[-limit:]


def build_user_content(message: str, attachments: Sequence[Attachment]) -> Union[str, List[dict]]:
    """
    Plain string without attachments; otherwise a content-part list.

    Images become `image_url` parts. PDFs and other documents are not sent;
    a note naming their type is appended to the text part instead.
    """
    if not attachments:
        return message

    text_part = {"type": "text", "text": message}
    parts: List[dict] = [text_part]
    for attachment in attachments:
        mime_type = attachment.type or ""
        if mime_type.startswith("image/"):
            parts.append({"type": "image_url", "image_url": {"url": attachment.data}})
        elif mime_type == "application/pdf" or "document" in mime_type:
            text_part["text"] += DOCUMENT_NOTE.format(mime_type=mime_type)
    return parts


def _turn_to_message(turn: ConversationTurn) -> BaseMessage:
    if turn.role == "assistant":
        return AIMessage(content=turn.content)
    return HumanMessage(content=turn.content)


def build_messages(system_prompt: str, history: Sequence[ConversationTurn],
                   user_content: Union[str, List[dict]], history_limit: int = None) -> List[BaseMessage]:
    messages: List[BaseMessage] = [SystemMessage(content=system_prompt)]
    messages.extend(_turn_to_message(turn) for turn in trim_history(history, history_limit))
    messages.append(HumanMessage(content=user_content))
    return messages
