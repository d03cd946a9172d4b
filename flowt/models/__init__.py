"""Listing & Chat Models"""
from .chat import AgentReply, Attachment, ChatRequest, ConversationTurn, FunctionResult
from .listings import (
    OfferSubmission,
    RequestSubmission,
    ShipmentStatus,
    build_offer_row,
    build_request_row,
)

__all__ = [
    "AgentReply",
    "Attachment",
    "ChatRequest",
    "ConversationTurn",
    "FunctionResult",
    "OfferSubmission",
    "RequestSubmission",
    "ShipmentStatus",
    "build_offer_row",
    "build_request_row",
]
