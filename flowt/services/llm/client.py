# --------------------------- flowt/services/llm/client.py ----------------------------
"""
FLOWT · Chat Completions Client

OVERVIEW:
Minimal client for an OpenAI-compatible `/chat/completions` endpoint
(OpenAI itself or any gateway exposing the same contract).

WIRE CONTRACT:
- model, messages
- `max_tokens` or `max_completion_tokens` depending on model family
- `temperature` only where the model family supports it
- `tools` + `tool_choice` for function calling

ERROR POLICY:
- Non-2xx answers are logged with status and body SERVER-SIDE ONLY and
  raised as UpstreamServiceError, which exposes just a fixed user message
- Transport failures (DNS, timeout, reset) map to the generic message
- No retries at this layer or any other

DEPENDENCIES:
- requests for HTTP
- langchain-core for message serialization and tool-call parsing
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import requests
from langchain_core.exceptions import OutputParserException
from langchain_core.messages import BaseMessage
from langchain_core.messages.utils import convert_to_openai_messages
from langchain_core.output_parsers.openai_tools import parse_tool_call

from flowt.config import settings
from flowt.errors import ConfigurationError, ToolCallError, UpstreamServiceError
from flowt.services.llm.capabilities import capabilities_for

logger = logging.getLogger(__name__)


@dataclass
class ChatCompletion:
    """
    Parsed first choice of a chat completion.

    FIELDS:
    - content: assistant text (None when the model only called tools)
    - tool_calls: parsed calls as {"name", "args", "id"} dicts
    - raw: full decoded response body
    """
    content: Optional[str]
    tool_calls: List[Dict[str, Any]] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def wants_tool(self) -> bool:
        return bool(self.tool_calls)


class ChatCompletionsClient:
    """Blocking chat-completions client with capability-aware payloads."""

    def __init__(self, api_key: str, base_url: str = None, timeout: float = None,
                 session: requests.Session = None):
        if not api_key:
            raise ConfigurationError("OpenAI API key not configured")
        self.api_key = api_key
        self.base_url = (base_url or settings.OPENAI_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.LLM_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls) -> "ChatCompletionsClient":
        return cls(settings.OPENAI_API_KEY)

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/chat/completions"

    def build_payload(self, model: str, messages: Sequence[BaseMessage], *,
                      temperature: float, max_tokens: int,
                      tools: Optional[List[Dict]] = None,
                      tool_choice: str = "auto") -> Dict[str, Any]:
        """
        Assemble the request body for `model`.

        Token limit and temperature follow the model's capability entry;
        messages are serialized to the OpenAI wire format.
        """
        capabilities = capabilities_for(model)
        payload: Dict[str, Any] = {
            "model": model,
            "messages": convert_to_openai_messages(list(messages)),
            capabilities.token_parameter: max_tokens,
        }
        if capabilities.supports_temperature:
            payload["temperature"] = temperature
        if tools:
            payload["tools"] = tools
            payload["tool_choice"] = tool_choice
        return payload

    def complete(self, model: str, messages: Sequence[BaseMessage], *,
                 temperature: float, max_tokens: int,
                 tools: Optional[List[Dict]] = None,
                 tool_choice: str = "auto") -> ChatCompletion:
        payload = self.build_payload(
            model, messages,
            temperature=temperature, max_tokens=max_tokens,
            tools=tools, tool_choice=tool_choice,
        )
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            response = self.session.post(
                self.endpoint, json=payload, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"[INTERNAL] Chat completion transport error: {e}")
            raise UpstreamServiceError(detail=f"Transport error: {e}") from e

        if not response.ok:
            logger.error(
                "[INTERNAL] Chat completion API error: status=%s error=%s timestamp=%s",
                response.status_code, response.text, datetime.now().isoformat(),
            )
            raise UpstreamServiceError(response.status_code)

        try:
            body = response.json()
            message = body["choices"][0]["message"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"[INTERNAL] Malformed chat completion body: {e}")
            raise UpstreamServiceError(
                response.status_code, detail=f"Malformed completion body: {e}"
            ) from e

        return ChatCompletion(
            content=message.get("content"),
            tool_calls=self._parse_tool_calls(message.get("tool_calls") or []),
            raw=body,
        )

    @staticmethod
    def _parse_tool_calls(raw_tool_calls: List[Dict]) -> List[Dict[str, Any]]:
        parsed = []
        for raw_call in raw_tool_calls:
            try:
                call = parse_tool_call(raw_call, return_id=True)
            except OutputParserException as e:
                logger.error(f"[INTERNAL] Unparseable tool call arguments: {e}")
                raise ToolCallError(f"Unparseable tool call arguments: {e}") from e
            if call:
                parsed.append(call)
        return parsed
