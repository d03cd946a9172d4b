# --------------------------- flowt/models/chat.py ----------------------------
"""
FLOWT · Chat Request & Reply Models

Wire models for the `/freight-ai-agent` endpoint. Field aliases keep the
camelCase names the marketplace frontend sends.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConversationTurn(BaseModel):
    """One prior message held by the client."""
    role: Literal["user", "assistant"]
    content: str


class Attachment(BaseModel):
    """
    File attached to a chat message.

    `type` is a MIME type; `data` is a data URL (or any URL the model can
    fetch) for images, and is ignored for documents.
    """
    type: str
    data: str = ""


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(min_length=1)
    conversation_history: List[ConversationTurn] = Field(
        default_factory=list, alias="conversationHistory"
    )
    attachments: List[Attachment] = Field(default_factory=list)
    model: Optional[str] = None
    temperature: Optional[float] = Field(default=None, ge=0, le=2)
    max_tokens: Optional[int] = Field(default=None, ge=1, alias="maxTokens")
    system_prompt: Optional[str] = Field(default=None, alias="systemPrompt")

    @field_validator("conversation_history", "attachments", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return [] if value is None else value

    def has_overrides(self) -> bool:
        return any(
            value is not None
            for value in (self.model, self.temperature, self.max_tokens, self.system_prompt)
        )


class FunctionResult(BaseModel):
    """Outcome of a fulfilled tool call."""
    success: bool
    type: Literal["offer", "request"]
    data: Dict[str, Any]


class AgentReply(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    response: Optional[str] = None
    function_result: Optional[FunctionResult] = Field(default=None, alias="functionResult")
