# --------------------------- flowt/agents/freight_assistant/context.py ----------------------------
"""
FLOWT · Market Context Retriever (RAG)

OVERVIEW:
Turns a user message into a plain-text snapshot of the live marketplace that
is spliced into the system prompt.

INTENT HEURISTIC:
- Seeking capacity: message contains "need", "ship" or "request"
- Offering capacity: message contains "offer", "available" or "capacity"
- Offers are listed when seeking OR not offering
- Requests are listed when offering OR not seeking
So a message matching neither set, or both, gets both sections. Matching is
plain substring search on the lower-cased message: no tokenization, stemming
or negation handling.

FAILURE POLICY:
The context is advisory. A failed query is logged and its section omitted;
nothing is retried or raised.

NOTE:
Listing text is inserted verbatim (no escaping). Free-text fields such as a
cargo description reach the model exactly as users typed them.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from flowt.config import settings
from flowt.services.listing_store import ListingStore

logger = logging.getLogger(__name__)

SEEKING_KEYWORDS = ("need", "ship", "request")
OFFERING_KEYWORDS = ("offer", "available", "capacity")

OFFERS_HEADER = "Available Shipping Capacity:"
REQUESTS_HEADER = "Shipping Needs:"


@dataclass(frozen=True)
class SearchIntent:
    seeking_capacity: bool
    offering_capacity: bool

    @property
    def include_offers(self) -> bool:
        return self.seeking_capacity or not self.offering_capacity

    @property
    def include_requests(self) -> bool:
        return self.offering_capacity or not self.seeking_capacity


@dataclass
class MarketContext:
    """Request-scoped context block; rebuilt from scratch for every message."""
    text: str
    booking_count: int
    intent: SearchIntent
    offer_count: int = 0
    request_count: int = 0


def classify_intent(message: str) -> SearchIntent:
    lowered = message.lower()
    return SearchIntent(
        seeking_capacity=any(word in lowered for word in SEEKING_KEYWORDS),
        offering_capacity=any(word in lowered for word in OFFERING_KEYWORDS),
    )


# ─── Row accessors (nested documents, with flat-column fallback) ─────────

def _nested(row: Dict, *path: str) -> Any:
    value: Any = row
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def _first(*values: Any) -> Any:
    for value in values:
        if value not in (None, "", [], {}):
            return value
    return None


def _place(row: Dict, end: str) -> str:
    city = _first(_nested(row, "route", end, "city"), row.get(f"{end}_city"))
    country = _first(_nested(row, "route", end, "country_code"), row.get(f"{end}_country"))
    return f"{city}, {country}"


def _weight_volume(weight: Any, volume: Any) -> str:
    text = f"{weight}kg"
    if volume:
        text += f", {volume}m³"
    return text


def format_offer(offer: Dict) -> str:
    lines = [
        f"- From {_place(offer, 'origin')} to {_place(offer, 'destination')}",
        f"  Company: {offer.get('company_name')}",
        "  Departure: " + str(_first(
            _nested(offer, "route", "pickup_date_range", "earliest"),
            offer.get("departure_date"),
        )),
        "  Available: " + _weight_volume(
            _first(_nested(offer, "capacity", "available_weight_kg"), offer.get("available_weight_kg")),
            _first(_nested(offer, "capacity", "available_volume_m3"), offer.get("available_volume_m3")),
        ),
    ]

    cargo_types = offer.get("cargo_types")
    if cargo_types:
        lines.append(f"  Cargo types: {', '.join(cargo_types)}")

    vehicle_type = _first(_nested(offer, "vehicle", "type"), offer.get("vehicle_type"))
    if vehicle_type:
        vehicle = f"  Vehicle: {vehicle_type}"
        fuel_type = _nested(offer, "vehicle", "fuel_type")
        if fuel_type:
            vehicle += f" ({fuel_type})"
        if _nested(offer, "vehicle", "adr_certified"):
            vehicle += ", ADR certified"
        if _nested(offer, "vehicle", "temperature_controlled"):
            vehicle += ", temperature controlled"
        lines.append(vehicle)

    price = _first(_nested(offer, "pricing", "price_per_kg"), offer.get("price_per_kg"))
    if price:
        lines.append(f"  Price: €{price}/kg")

    return "\n".join(lines) + "\n"


def format_request(request: Dict) -> str:
    lines = [
        f"- From {_place(request, 'origin')} to {_place(request, 'destination')}",
        f"  Company: {request.get('company_name')}",
        "  Needed by: " + str(_first(
            _nested(request, "route", "pickup_date_required", "earliest"),
            request.get("needed_date"),
        )),
        "  Weight: " + _weight_volume(
            _first(_nested(request, "cargo", "weight_kg"), request.get("weight_kg")),
            _first(_nested(request, "cargo", "volume_m3"), request.get("volume_m3")),
        ),
        "  Cargo type: " + str(_first(
            _nested(request, "cargo", "description"), request.get("cargo_type"),
        )),
    ]

    if _nested(request, "dangerous_goods", "is_dangerous"):
        lines.append("  Dangerous goods: yes (ADR required)")
    if _nested(request, "special_requirements", "temperature_controlled"):
        lines.append("  Temperature controlled: yes")

    max_price = request.get("max_price_per_kg")
    if max_price:
        lines.append(f"  Max price: €{max_price}/kg")

    return "\n".join(lines) + "\n"


def _safe_fetch(label: str, fetch: Callable[[], List[Dict]]) -> Optional[List[Dict]]:
    try:
        return fetch()
    except Exception as e:
        logger.warning(f"Skipping {label} context section: {e}")
        return None


def build_context(message: str, store: ListingStore,
                  listing_limit: int = None, booking_limit: int = None) -> MarketContext:
    """
    Build the market context block for one user message.

    ARGS:
        message: Raw user message
        store: Listing store to query
        listing_limit: Max offers and max requests (default 10 each)
        booking_limit: Max recent bookings counted (default 5)

    RETURNS:
        MarketContext with the text block and the booking count
    """
    if listing_limit is None:
        listing_limit = settings.CONTEXT_LISTING_LIMIT
    if booking_limit is None:
        booking_limit = settings.CONTEXT_BOOKING_LIMIT
    intent = classify_intent(message)

    text = ""
    offer_count = request_count = 0

    if intent.include_offers:
        offers = _safe_fetch("offers", lambda: store.fetch_active_offers(listing_limit))
        if offers is not None:
            offer_count = len(offers)
            text += f"\n\n{OFFERS_HEADER}\n"
            for offer in offers:
                text += format_offer(offer) + "\n"

    if intent.include_requests:
        requests = _safe_fetch("requests", lambda: store.fetch_active_requests(listing_limit))
        if requests is not None:
            request_count = len(requests)
            text += f"\n\n{REQUESTS_HEADER}\n"
            for request in requests:
                text += format_request(request) + "\n"

    bookings = _safe_fetch("bookings", lambda: store.fetch_recent_bookings(booking_limit)) or []
    if bookings:
        text += f"\n\nRecent Successful Matches: {len(bookings)} bookings\n"

    logger.info(
        f"Built market context: {offer_count} offers, {request_count} requests, "
        f"{len(bookings)} bookings ({len(text)} chars)"
    )

    return MarketContext(
        text=text,
        booking_count=len(bookings),
        intent=intent,
        offer_count=offer_count,
        request_count=request_count,
    )
