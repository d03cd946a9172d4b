"""LLM Services Module"""
from .capabilities import ModelCapabilities, capabilities_for
from .client import ChatCompletion, ChatCompletionsClient

__all__ = ["ModelCapabilities", "capabilities_for", "ChatCompletion", "ChatCompletionsClient"]
