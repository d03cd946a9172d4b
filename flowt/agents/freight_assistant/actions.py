# --------------------------- flowt/agents/freight_assistant/actions.py ----------------------------
"""
FLOWT · Action Executor

OVERVIEW:
Fulfils a tool call requested by the chat model by writing one listing row.

WORKFLOW:
1. Resolve the caller from the bearer token (abort before any write if absent/invalid)
2. Validate the model's flat arguments against the submission model
3. Map them onto the nested row document (cross_border is the only derived field)
4. Insert the row and return {success, type, data} plus a confirmation line

BUSINESS LOGIC:
- Customs and dangerous-goods flags are taken from the arguments as given.
  The inference rules in the system prompt are the model's job; they are
  not re-checked here.
- The conversation does not continue automatically after a write. The
  client sends another turn to keep chatting.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Type

from pydantic import BaseModel, ValidationError

from flowt.errors import ToolCallError
from flowt.models.chat import FunctionResult
from flowt.models.listings import (
    OfferSubmission,
    RequestSubmission,
    build_offer_row,
    build_request_row,
)
from flowt.services.listing_store import ListingStore, bearer_token

from .tools import CREATE_OFFER_TOOL, CREATE_REQUEST_TOOL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListingAction:
    listing_type: str
    label: str
    submission_model: Type[BaseModel]
    build_row: Callable[[Any, str], Dict[str, Any]]
    insert_method: str


ACTIONS: Dict[str, ListingAction] = {
    CREATE_OFFER_TOOL: ListingAction(
        listing_type="offer",
        label="Transport offer",
        submission_model=OfferSubmission,
        build_row=build_offer_row,
        insert_method="insert_offer",
    ),
    CREATE_REQUEST_TOOL: ListingAction(
        listing_type="request",
        label="Shipping request",
        submission_model=RequestSubmission,
        build_row=build_request_row,
        insert_method="insert_request",
    ),
}


@dataclass
class ActionOutcome:
    result: FunctionResult
    confirmation: str


def confirmation_message(action: ListingAction) -> str:
    return f"Database entry created successfully! {action.label} has been saved."


def execute_tool_call(tool_name: str, arguments: Dict[str, Any],
                      authorization: Optional[str], store: ListingStore) -> ActionOutcome:
    """
    Execute one model-requested listing write.

    ARGS:
        tool_name: Function name chosen by the model
        arguments: Parsed JSON arguments
        authorization: Raw Authorization header of the chat request
        store: Listing store used for the token lookup and the insert

    RETURNS:
        ActionOutcome with the function result and confirmation text

    RAISES:
        AuthenticationError: before any write when the token is missing/invalid
        ToolCallError: unknown tool or unusable arguments
        ListingWriteError: the insert failed
    """
    user_id = store.get_user_id(bearer_token(authorization))

    action = ACTIONS.get(tool_name)
    if action is None:
        raise ToolCallError(f"Unknown function called: {tool_name}")

    try:
        submission = action.submission_model.model_validate(arguments)
    except ValidationError as e:
        logger.error(f"Invalid arguments for {tool_name}: {e}")
        raise ToolCallError(f"Invalid arguments for {tool_name}: {e}") from e

    row = action.build_row(submission, user_id)
    inserted = getattr(store, action.insert_method)(row)

    logger.info(f"{action.label} created via assistant for user {user_id}")

    return ActionOutcome(
        result=FunctionResult(success=True, type=action.listing_type, data=inserted),
        confirmation=confirmation_message(action),
    )
