"""FastAPI dependency providers for the FLOWT service."""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException

from flowt.agents.freight_assistant.graph import FreightAgent
from flowt.errors import AuthenticationError
from flowt.services.listing_store import ListingStore, bearer_token
from flowt.services.llm.client import ChatCompletionsClient


@lru_cache(maxsize=1)
def get_store() -> ListingStore:
    return ListingStore.from_settings()


@lru_cache(maxsize=1)
def get_llm_client() -> ChatCompletionsClient:
    return ChatCompletionsClient.from_settings()


def get_freight_agent(
    store: ListingStore = Depends(get_store),
    llm: ChatCompletionsClient = Depends(get_llm_client),
) -> FreightAgent:
    return FreightAgent(store, llm)


def require_user_id(
    authorization: Optional[str] = Header(default=None),
    store: ListingStore = Depends(get_store),
) -> str:
    """Resolve the caller of a form submission; 401 when the token is missing or invalid."""
    try:
        return store.get_user_id(bearer_token(authorization))
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=e.user_message) from e
