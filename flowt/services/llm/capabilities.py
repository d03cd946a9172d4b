"""
Model capability lookup.

Newer reasoning-model families reject `max_tokens` and `temperature` on the
chat-completions API. Parameters are picked from a prefix table instead of
inline string checks at the call site.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ModelCapabilities:
    token_parameter: str = "max_tokens"
    supports_temperature: bool = True


LEGACY_CAPABILITIES = ModelCapabilities()
REASONING_CAPABILITIES = ModelCapabilities(
    token_parameter="max_completion_tokens",
    supports_temperature=False,
)

# (prefix, capabilities); first match wins
CAPABILITY_TABLE: Tuple[Tuple[str, ModelCapabilities], ...] = (
    ("gpt-5", REASONING_CAPABILITIES),
    ("o1", REASONING_CAPABILITIES),
    ("o3", REASONING_CAPABILITIES),
    ("o4", REASONING_CAPABILITIES),
)


def base_model_name(model: str) -> str:
    """Drop a gateway vendor prefix: 'openai/gpt-5-mini' -> 'gpt-5-mini'."""
    return model.rsplit("/", 1)[-1].strip().lower()


def capabilities_for(model: str) -> ModelCapabilities:
    name = base_model_name(model)
    for prefix, capabilities in CAPABILITY_TABLE:
        if name.startswith(prefix):
            return capabilities
    return LEGACY_CAPABILITIES
