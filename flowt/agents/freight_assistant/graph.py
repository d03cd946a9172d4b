# --------------------------- flowt/agents/freight_assistant/graph.py ----------------------------
"""
FLOWT · Freight Assistant Agent (LangGraph)

OVERVIEW:
Per-request workflow behind the `/freight-ai-agent` endpoint. Retrieves live
marketplace listings, asks the chat model for a reply, and fulfils a listing
write when the model calls one of the two tools.

WORKFLOW:
1. retrieve_context: keyword intent → offers/requests/bookings context block
2. call_model: system prompt + last 10 turns + new user turn → chat completion
3. Branch: tool call → execute_action, otherwise finish with the model's text
4. execute_action: bearer-token check → row mapping → single insert

BUSINESS LOGIC:
- The "matching" is done by the model from the injected context
- Only the first tool call of a reply is fulfilled
- Each call is stateless; the client re-sends its (trimmed) history

TECHNICAL ARCHITECTURE:
- LangGraph state machine with conditional routing, no checkpointer
- Node errors propagate as FreightAgentError to the HTTP layer
"""

import logging
from typing import Dict, List, Optional

from typing_extensions import TypedDict
from langchain_core.messages import BaseMessage
from langgraph.graph import END, StateGraph

from flowt.models.chat import AgentReply, ChatRequest, FunctionResult
from flowt.services.listing_store import ListingStore
from flowt.services.llm.client import ChatCompletion, ChatCompletionsClient

from .actions import execute_tool_call
from .context import MarketContext, build_context
from .dispatcher import AgentSettings, build_messages, build_user_content, resolve_settings
from .prompts import render_system_prompt
from .tools import LISTING_TOOLS

logger = logging.getLogger(__name__)


class FreightAgentState(TypedDict, total=False):
    """
    State for one chat request.

    FIELDS:
    - request: Validated chat request body
    - authorization: Raw Authorization header (may be None)
    - settings: Resolved model settings for this request
    - context: Market context built for the message
    - messages: Message list sent upstream
    - completion: Parsed upstream reply
    - response: Text returned to the client
    - function_result: Listing write result, when a tool ran
    """
    request: ChatRequest
    authorization: Optional[str]
    settings: AgentSettings
    context: MarketContext
    messages: List[BaseMessage]
    completion: ChatCompletion
    response: Optional[str]
    function_result: Optional[FunctionResult]


class FreightAgent:
    """Wires the listing store and chat client into the workflow nodes."""

    def __init__(self, store: ListingStore, llm: ChatCompletionsClient,
                 base_settings: AgentSettings = None):
        self.store = store
        self.llm = llm
        self.base_settings = base_settings
        self.graph = self._build()

    # ╔══════════ Node Functions ═══════════════════════════════════════

    def retrieve_context(self, state: FreightAgentState) -> Dict:
        request = state["request"]
        return {
            "context": build_context(request.message, self.store),
            "settings": resolve_settings(
                request, state.get("authorization"), self.store, self.base_settings
            ),
        }

    def call_model(self, state: FreightAgentState) -> Dict:
        request = state["request"]
        agent_settings = state["settings"]
        context = state["context"]

        system_prompt = agent_settings.system_prompt or render_system_prompt(
            context.text, context.booking_count
        )
        messages = build_messages(
            system_prompt,
            request.conversation_history,
            build_user_content(request.message, request.attachments),
        )

        logger.info(
            f"Calling chat model {agent_settings.model} with context length: {len(context.text)}"
        )
        completion = self.llm.complete(
            agent_settings.model,
            messages,
            temperature=agent_settings.temperature,
            max_tokens=agent_settings.max_tokens,
            tools=LISTING_TOOLS,
            tool_choice="auto",
        )

        update: Dict = {"messages": messages, "completion": completion}
        if not completion.wants_tool:
            update["response"] = completion.content
        return update

    def execute_action(self, state: FreightAgentState) -> Dict:
        tool_call = state["completion"].tool_calls[0]
        logger.info(f"AI requested function call: {tool_call['name']}")

        outcome = execute_tool_call(
            tool_call["name"],
            tool_call.get("args") or {},
            state.get("authorization"),
            self.store,
        )
        return {
            "response": outcome.confirmation,
            "function_result": outcome.result,
        }

    # ╔══════════ Conditional Routing ═══════════════════════════════════

    @staticmethod
    def route_after_model(state: FreightAgentState) -> str:
        """Route to the action executor only when the model called a tool."""
        if state["completion"].wants_tool:
            return "execute_action"
        return "finish"

    # ╔══════════ Build Workflow ════════════════════════════════════════

    def _build(self):
        workflow = StateGraph(FreightAgentState)

        workflow.add_node("retrieve_context", self.retrieve_context)
        workflow.add_node("call_model", self.call_model)
        workflow.add_node("execute_action", self.execute_action)

        workflow.set_entry_point("retrieve_context")
        workflow.add_edge("retrieve_context", "call_model")
        workflow.add_conditional_edges(
            "call_model",
            self.route_after_model,
            {"execute_action": "execute_action", "finish": END},
        )
        workflow.set_finish_point("execute_action")

        return workflow.compile()

    # ╔══════════ Integration ═══════════════════════════════════════════

    def run(self, request: ChatRequest, authorization: Optional[str] = None) -> AgentReply:
        final_state = self.graph.invoke({
            "request": request,
            "authorization": authorization,
        })
        return AgentReply(
            response=final_state.get("response"),
            function_result=final_state.get("function_result"),
        )


def run_freight_agent(request: ChatRequest, authorization: Optional[str],
                      store: ListingStore, llm: ChatCompletionsClient,
                      base_settings: AgentSettings = None) -> AgentReply:
    """Convenience wrapper: build the agent and run one chat request."""
    return FreightAgent(store, llm, base_settings).run(request, authorization)
