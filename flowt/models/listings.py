# --------------------------- flowt/models/listings.py ----------------------------
"""
FLOWT · Listing Submissions & Row Documents

OVERVIEW:
Flat submission models for transport offers and shipping requests, plus the
builders that turn a validated submission into the nested JSON row stored in
`shipment_offers` / `shipment_requests`.

The same submission models validate two sources:
- Listing form posts from the marketplace UI
- Tool-call arguments produced by the chat model

ROW SHAPE:
Rows are nested documents (route, capacity, vehicle, pricing, cargo, ...).
The only derived field is `route.cross_border`, computed from the two
country codes. Customs and dangerous-goods flags are copied as supplied;
nothing else is inferred here.
"""

from datetime import date
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ShipmentStatus(str, Enum):
    """Listing lifecycle states. New listings always start ACTIVE."""
    ACTIVE = "active"
    MATCHED = "matched"
    IN_TRANSIT = "in_transit"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


DEFAULT_CURRENCY = "EUR"
ZERO_COORDINATES = {"latitude": 0, "longitude": 0}


class _RouteFields(BaseModel):
    """Route fields shared by offers and requests."""

    model_config = ConfigDict(str_strip_whitespace=True)

    origin_city: str = Field(min_length=1, max_length=100)
    origin_country: str = Field(pattern=r"^[A-Za-z]{2}$")
    origin_postal: Optional[str] = Field(default=None, max_length=20)
    destination_city: str = Field(min_length=1, max_length=100)
    destination_country: str = Field(pattern=r"^[A-Za-z]{2}$")
    destination_postal: Optional[str] = Field(default=None, max_length=20)

    @field_validator("origin_country", "destination_country")
    @classmethod
    def _upper_country(cls, value: str) -> str:
        return value.upper()

    @property
    def cross_border(self) -> bool:
        return self.origin_country != self.destination_country


class OfferSubmission(_RouteFields):
    """Available transport capacity posted by a carrier."""

    departure_date: date
    available_weight_kg: float = Field(gt=0, le=100000)
    available_volume_m3: Optional[float] = Field(default=None, ge=0)
    price_per_kg: Optional[float] = Field(default=None, ge=0)
    vehicle_type: str = Field(min_length=1, max_length=50)
    fuel_type: str = Field(min_length=1, max_length=50)
    adr_certified: bool
    temperature_controlled: bool


class RequestSubmission(_RouteFields):
    """Cargo that a shipper needs transported."""

    pickup_date: date
    weight_kg: float = Field(gt=0, le=100000)
    volume_m3: Optional[float] = Field(default=None, ge=0)
    cargo_description: str = Field(min_length=1, max_length=500)
    is_dangerous: bool
    requires_customs: bool
    temperature_controlled: bool
    insurance_value: Optional[float] = Field(default=None, ge=0)


def _place(city: str, country: str, postal: Optional[str]) -> Dict[str, Any]:
    return {
        "city": city,
        "country_code": country,
        "postal_code": postal or "",
        "coordinates": dict(ZERO_COORDINATES),
    }


def build_offer_row(offer: OfferSubmission, user_id: str) -> Dict[str, Any]:
    """
    Map a validated offer onto the `shipment_offers` document layout.

    ARGS:
        offer: Validated offer submission
        user_id: Owner of the new listing

    RETURNS:
        Dict ready for insertion
    """
    departure = offer.departure_date.isoformat()
    return {
        "user_id": user_id,
        "route": {
            "origin": _place(offer.origin_city, offer.origin_country, offer.origin_postal),
            "destination": _place(
                offer.destination_city, offer.destination_country, offer.destination_postal
            ),
            "pickup_date_range": {"earliest": departure, "latest": departure},
            "cross_border": offer.cross_border,
        },
        "capacity": {
            "available_weight_kg": offer.available_weight_kg,
            "available_volume_m3": offer.available_volume_m3 or 0,
            "max_dimensions": {"length_cm": 0, "width_cm": 0, "height_cm": 0},
        },
        "vehicle": {
            "type": offer.vehicle_type,
            "fuel_type": offer.fuel_type,
            "equipment": [],
            "adr_certified": offer.adr_certified,
            "temperature_controlled": offer.temperature_controlled,
        },
        "pricing": {
            "price_per_kg": offer.price_per_kg or 0,
            "currency": DEFAULT_CURRENCY,
            "pricing_model": "per_kg",
        },
        "accepted_cargo_types": {"dangerous_goods_accepted": offer.adr_certified},
        "carrier": {},
        "customs_capabilities": {"customs_clearance_service": False},
        "status": ShipmentStatus.ACTIVE.value,
    }


def build_request_row(request: RequestSubmission, user_id: str) -> Dict[str, Any]:
    """
    Map a validated request onto the `shipment_requests` document layout.

    ARGS:
        request: Validated request submission
        user_id: Owner of the new listing

    RETURNS:
        Dict ready for insertion
    """
    pickup = request.pickup_date.isoformat()
    return {
        "user_id": user_id,
        "route": {
            "origin": _place(request.origin_city, request.origin_country, request.origin_postal),
            "destination": _place(
                request.destination_city, request.destination_country, request.destination_postal
            ),
            "pickup_date_required": {"earliest": pickup, "latest": pickup},
            "cross_border": request.cross_border,
            "time_critical": False,
        },
        "cargo": {
            "description": request.cargo_description,
            "weight_kg": request.weight_kg,
            "volume_m3": request.volume_m3 or 0,
            "packaging_type": "Standard",
            "total_declared_value": request.insurance_value or 0,
            "currency": DEFAULT_CURRENCY,
        },
        "dangerous_goods": {"is_dangerous": request.is_dangerous},
        "customs_trade": {"requires_customs_clearance": request.requires_customs},
        "special_requirements": {
            "temperature_controlled": request.temperature_controlled,
            "insurance_required": bool(request.insurance_value),
            "insurance_value": request.insurance_value or 0,
        },
        "shipper": {},
        "status": ShipmentStatus.ACTIVE.value,
    }
