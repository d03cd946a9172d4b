# --------------------------- flowt/errors.py ----------------------------
"""
FLOWT · Error Taxonomy

OVERVIEW:
Every failure the freight assistant can surface to a client is a
FreightAgentError. The exception message carries the internal detail
(logged server-side), while `user_message` is the only text that may be
returned to the caller.

CATEGORIES:
- ConfigurationError: missing API key or database credentials
- UpstreamServiceError: chat-completion API answered with a non-2xx status
- AuthenticationError: missing or invalid bearer token for a write
- ListingWriteError: the listing store rejected an insert
- ToolCallError: the model requested an unknown or malformed tool call

No error is retried. Every failure is terminal for its request.
"""

from typing import Optional

GENERIC_ERROR_MESSAGE = "Unable to process your request. Please try again later."


class FreightAgentError(Exception):
    """Base error carrying a client-safe message."""

    user_message = GENERIC_ERROR_MESSAGE

    def __init__(self, detail: str = None, user_message: str = None):
        if user_message:
            self.user_message = user_message
        super().__init__(detail or self.user_message)


class ConfigurationError(FreightAgentError):
    """Required configuration (API key, database URL) is missing."""


class UpstreamServiceError(FreightAgentError):
    """
    Non-2xx answer (or transport failure) from the chat-completion API.

    STATUS MAPPING:
    - 429: rate limit message
    - 402: payment required message
    - anything else (including no response): temporarily unavailable
    """

    RATE_LIMIT_MESSAGE = "Rate limit reached. Please try again in a moment."
    PAYMENT_REQUIRED_MESSAGE = "AI service requires payment. Please contact support."
    UNAVAILABLE_MESSAGE = "AI service temporarily unavailable. Please try again."

    def __init__(self, status_code: Optional[int] = None, detail: str = None):
        self.status_code = status_code
        super().__init__(
            detail or f"Upstream chat completion failed with status {status_code}",
            user_message=self.message_for_status(status_code),
        )

    @classmethod
    def message_for_status(cls, status_code: Optional[int]) -> str:
        if status_code == 429:
            return cls.RATE_LIMIT_MESSAGE
        if status_code == 402:
            return cls.PAYMENT_REQUIRED_MESSAGE
        return cls.UNAVAILABLE_MESSAGE


class AuthenticationError(FreightAgentError):
    """Bearer token missing or rejected by the auth service."""

    MISSING_TOKEN_MESSAGE = "Authentication required to create offers or requests"
    INVALID_TOKEN_MESSAGE = "Invalid authentication token"

    def __init__(self, user_message: str = None, detail: str = None):
        super().__init__(detail, user_message=user_message or self.INVALID_TOKEN_MESSAGE)


class ListingWriteError(FreightAgentError):
    """Insert of an offer or request row failed."""

    def __init__(self, listing_label: str, detail: str = None):
        self.listing_label = listing_label
        super().__init__(
            detail,
            user_message=f"Failed to create {listing_label}. Please try again.",
        )


class ToolCallError(FreightAgentError):
    """The model asked for a tool we do not fulfil, or sent unusable arguments."""
