# --------------------------- flowt/api/app.py ----------------------------
"""
FLOWT · HTTP Service

ENDPOINTS:
- POST /freight-ai-agent: chat with the freight assistant
    200 {response, functionResult?} | 500 {error} (malformed bodies included)
- OPTIONS /freight-ai-agent: empty 200 for bare OPTIONS; browser preflights
  (Origin + Access-Control-Request-Method) are answered by CORSMiddleware
- GET  /shipment-offers, /shipment-requests: active listing feeds
- POST /shipment-offers, /shipment-requests: listing form submissions (bearer required)
- GET  /health

ERROR POLICY:
Internal detail (stack traces, upstream bodies, database errors) is logged
here and never returned. Clients only ever see a FreightAgentError's
user_message or the generic fallback message.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, Header, Query, Request, Response
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from flowt.agents.freight_assistant.graph import FreightAgent
from flowt.config import settings
from flowt.errors import GENERIC_ERROR_MESSAGE, FreightAgentError
from flowt.models.chat import ChatRequest
from flowt.models.listings import (
    OfferSubmission,
    RequestSubmission,
    build_offer_row,
    build_request_row,
)
from flowt.services.listing_store import ListingStore

from .dependencies import get_freight_agent, get_store, require_user_id

logger = logging.getLogger(__name__)

AGENT_PATH = "/freight-ai-agent"


def create_app() -> FastAPI:
    app = FastAPI(title="FLOWT Freight Assistant API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    @app.exception_handler(FreightAgentError)
    async def freight_agent_error_handler(request: Request, exc: FreightAgentError):
        logger.error(f"[INTERNAL] Error handling {request.url.path}: {exc!r}")
        return JSONResponse(status_code=500, content={"error": exc.user_message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        # /freight-ai-agent answers 500 {error}; other routes keep the default 422
        if request.url.path != AGENT_PATH:
            return await request_validation_exception_handler(request, exc)
        logger.error(f"[INTERNAL] Invalid freight-ai-agent body: {exc.errors()}")
        return JSONResponse(status_code=500, content={"error": GENERIC_ERROR_MESSAGE})

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.options(AGENT_PATH)
    def freight_ai_agent_preflight() -> Response:
        return Response(status_code=200)

    @app.post(AGENT_PATH)
    def freight_ai_agent(
        payload: ChatRequest,
        authorization: Optional[str] = Header(default=None),
        agent: FreightAgent = Depends(get_freight_agent),
    ):
        try:
            reply = agent.run(payload, authorization)
        except FreightAgentError:
            raise
        except Exception:
            logger.exception("[INTERNAL] Error in freight-ai-agent")
            return JSONResponse(status_code=500, content={"error": GENERIC_ERROR_MESSAGE})

        body: Dict[str, Any] = {"response": reply.response}
        if reply.function_result is not None:
            body["functionResult"] = reply.function_result.model_dump()
        return body

    # ─── Listing feeds ────────────────────────────────────────────────

    @app.get("/shipment-offers")
    def list_offers(
        limit: int = Query(default=50, ge=1, le=100),
        store: ListingStore = Depends(get_store),
    ) -> List[Dict[str, Any]]:
        return _read_feed("offers", lambda: store.fetch_active_offers(limit))

    @app.get("/shipment-requests")
    def list_requests(
        limit: int = Query(default=50, ge=1, le=100),
        store: ListingStore = Depends(get_store),
    ) -> List[Dict[str, Any]]:
        return _read_feed("requests", lambda: store.fetch_active_requests(limit))

    # ─── Listing forms ────────────────────────────────────────────────

    @app.post("/shipment-offers", status_code=201)
    def create_offer(
        submission: OfferSubmission,
        user_id: str = Depends(require_user_id),
        store: ListingStore = Depends(get_store),
    ) -> Dict[str, Any]:
        return store.insert_offer(build_offer_row(submission, user_id))

    @app.post("/shipment-requests", status_code=201)
    def create_request(
        submission: RequestSubmission,
        user_id: str = Depends(require_user_id),
        store: ListingStore = Depends(get_store),
    ) -> Dict[str, Any]:
        return store.insert_request(build_request_row(submission, user_id))

    return app


def _read_feed(label: str, fetch) -> List[Dict[str, Any]]:
    try:
        return fetch()
    except Exception as e:
        logger.error(f"Failed to load {label} feed: {e}")
        raise FreightAgentError(f"Failed to load {label} feed: {e}") from e


app = create_app()
