"""Freight Assistant Agent Module"""
from .context import MarketContext, SearchIntent, build_context, classify_intent
from .dispatcher import AgentSettings, build_messages, build_user_content, resolve_settings, trim_history
from .actions import execute_tool_call
from .graph import FreightAgent, FreightAgentState, run_freight_agent

__all__ = [
    "MarketContext", "SearchIntent", "build_context", "classify_intent",
    "AgentSettings", "build_messages", "build_user_content", "resolve_settings", "trim_history",
    "execute_tool_call",
    "FreightAgent", "FreightAgentState", "run_freight_agent",
]
