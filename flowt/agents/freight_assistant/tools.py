"""
Function-calling tool declarations offered to the chat model.

The model decides (tool_choice="auto") whether to answer in text or to ask
for one of these writes. Argument names match the flat submission models in
flowt.models.listings.
"""

CREATE_OFFER_TOOL = "create_shipment_offer"
CREATE_REQUEST_TOOL = "create_shipment_request"

_ROUTE_PROPERTIES = {
    "origin_city": {"type": "string", "description": "Origin city name"},
    "origin_country": {"type": "string", "description": "2-letter ISO country code (e.g., DE, FR)"},
    "origin_postal": {"type": "string", "description": "Postal code (optional)"},
    "destination_city": {"type": "string", "description": "Destination city name"},
    "destination_country": {"type": "string", "description": "2-letter ISO country code"},
    "destination_postal": {"type": "string", "description": "Postal code (optional)"},
}

_ROUTE_REQUIRED = ["origin_city", "origin_country", "destination_city", "destination_country"]


def _function_tool(name: str, description: str, properties: dict, required: list) -> dict:
    return {
        "type": "function",
        "function": {
            "name": name,
            "description": description,
            "parameters": {
                "type": "object",
                "properties": properties,
                "required": required,
            },
        },
    }


OFFER_TOOL_SPEC = _function_tool(
    CREATE_OFFER_TOOL,
    "Create a new transport capacity offer in the database after collecting all required "
    "information from the user. Call this when the user confirms they want to create the offer.",
    {
        **_ROUTE_PROPERTIES,
        "departure_date": {"type": "string", "description": "Departure date in YYYY-MM-DD format"},
        "available_weight_kg": {"type": "number", "description": "Available weight capacity in kilograms"},
        "available_volume_m3": {"type": "number", "description": "Available volume in cubic meters (optional)"},
        "price_per_kg": {"type": "number", "description": "Price per kilogram in EUR (optional, can be 0 for negotiable)"},
        "vehicle_type": {"type": "string", "description": "Vehicle type: truck, van, or semi"},
        "fuel_type": {"type": "string", "description": "Fuel type: diesel, electric, or hydrogen"},
        "adr_certified": {"type": "boolean", "description": "Whether vehicle is ADR certified for dangerous goods"},
        "temperature_controlled": {"type": "boolean", "description": "Whether vehicle has temperature control"},
    },
    _ROUTE_REQUIRED + [
        "departure_date", "available_weight_kg", "vehicle_type", "fuel_type",
        "adr_certified", "temperature_controlled",
    ],
)

REQUEST_TOOL_SPEC = _function_tool(
    CREATE_REQUEST_TOOL,
    "Create a new shipping request in the database after collecting all required information "
    "from the user. Call this when the user confirms they want to create the request.",
    {
        **_ROUTE_PROPERTIES,
        "pickup_date": {"type": "string", "description": "Pickup date in YYYY-MM-DD format"},
        "weight_kg": {"type": "number", "description": "Cargo weight in kilograms"},
        "volume_m3": {"type": "number", "description": "Cargo volume in cubic meters (optional)"},
        "cargo_description": {"type": "string", "description": "Description of cargo being shipped"},
        "is_dangerous": {"type": "boolean", "description": "Whether cargo is classified as dangerous goods"},
        "requires_customs": {"type": "boolean", "description": "Whether shipment requires customs clearance"},
        "temperature_controlled": {"type": "boolean", "description": "Whether cargo needs temperature control"},
        "insurance_value": {"type": "number", "description": "Insurance value in EUR (optional)"},
    },
    _ROUTE_REQUIRED + [
        "pickup_date", "weight_kg", "cargo_description", "is_dangerous",
        "requires_customs", "temperature_controlled",
    ],
)

LISTING_TOOLS = [OFFER_TOOL_SPEC, REQUEST_TOOL_SPEC]
