# --------------------------- tests/conftest.py ----------------------------
"""
FLOWT · Shared Test Fixtures

OVERVIEW:
In-memory stand-ins for the two external collaborators so the suite runs
without network access:
- FakeSupabase: mimics the fluent query builder (table/select/eq/in_/order/
  limit/insert/execute) and `auth.get_user`
- A real ChatCompletionsClient whose requests.Session is a Mock, so the exact
  wire payload can be asserted

SEED DATA:
- Two active offers, two active requests (nested documents), one cancelled offer
- Three bookings, public company profiles
- Tokens: "valid-token" → user-1, "dev-token" → dev-1 (developer role)
"""

import json
import uuid
from datetime import datetime, timedelta
from types import SimpleNamespace
from typing import Dict, List, Optional
from unittest.mock import Mock

import pytest
import requests

from flowt.services.listing_store import ListingStore
from flowt.services.llm.client import ChatCompletionsClient


# ===============================================================================
# FAKE SUPABASE CLIENT
# ===============================================================================

class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.filters = []
        self.in_filters = []
        self.order_by = None
        self.descending = False
        self.row_limit = None
        self.pending_insert = None

    def select(self, *columns):
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def in_(self, column, values):
        self.in_filters.append((column, set(values)))
        return self

    def order(self, column, desc=False):
        self.order_by = column
        self.descending = desc
        return self

    def limit(self, count):
        self.row_limit = count
        return self

    def insert(self, row):
        self.pending_insert = row
        return self

    def execute(self):
        self.db.executed.append(self.table)
        if self.table in self.db.failing_tables:
            raise RuntimeError(f"relation {self.table} unavailable")

        if self.pending_insert is not None:
            stored = {
                **self.pending_insert,
                "id": str(uuid.uuid4()),
                "created_at": datetime.now().isoformat(),
            }
            self.db.tables.setdefault(self.table, []).append(stored)
            return SimpleNamespace(data=[stored])

        rows = list(self.db.tables.get(self.table, []))
        for column, value in self.filters:
            rows = [row for row in rows if row.get(column) == value]
        for column, values in self.in_filters:
            rows = [row for row in rows if row.get(column) in values]
        if self.order_by:
            rows.sort(key=lambda row: row.get(self.order_by) or "", reverse=self.descending)
        if self.row_limit is not None:
            rows = rows[: self.row_limit]
        return SimpleNamespace(data=[dict(row) for row in rows])


class FakeAuth:
    def __init__(self, tokens: Dict[str, str]):
        self.tokens = tokens

    def get_user(self, token):
        if token not in self.tokens:
            raise RuntimeError("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=SimpleNamespace(id=self.tokens[token]))


class FakeSupabase:
    def __init__(self, tables: Dict[str, List[Dict]], tokens: Dict[str, str]):
        self.tables = tables
        self.auth = FakeAuth(tokens)
        self.failing_tables = set()
        self.executed: List[str] = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rows(self, table: str) -> List[Dict]:
        return self.tables.get(table, [])


def _stamp(days_ago: int) -> str:
    return (datetime(2025, 3, 1) - timedelta(days=days_ago)).isoformat()


def _route(origin, destination, date_key, date_value):
    return {
        "origin": {"city": origin[0], "country_code": origin[1], "postal_code": ""},
        "destination": {"city": destination[0], "country_code": destination[1], "postal_code": ""},
        date_key: {"earliest": date_value, "latest": date_value},
    }


@pytest.fixture
def seed_tables():
    return {
        "shipment_offers": [
            {
                "id": "offer-1", "user_id": "carrier-1", "status": "active",
                "created_at": _stamp(1),
                "route": _route(("Hamburg", "DE"), ("Warsaw", "PL"), "pickup_date_range", "2025-03-18"),
                "capacity": {"available_weight_kg": 2500, "available_volume_m3": 25},
                "vehicle": {"type": "truck", "fuel_type": "diesel", "adr_certified": False,
                            "temperature_controlled": False},
                "pricing": {"price_per_kg": 1.5, "currency": "EUR"},
            },
            {
                "id": "offer-2", "user_id": "carrier-2", "status": "active",
                "created_at": _stamp(2),
                "route": _route(("Munich", "DE"), ("Milan", "IT"), "pickup_date_range", "2025-03-20"),
                "capacity": {"available_weight_kg": 800, "available_volume_m3": 0},
                "vehicle": {"type": "van", "fuel_type": "electric", "adr_certified": True,
                            "temperature_controlled": True},
                "pricing": {"price_per_kg": 0, "currency": "EUR"},
            },
            {
                "id": "offer-old", "user_id": "carrier-1", "status": "cancelled",
                "created_at": _stamp(30),
                "route": _route(("Lyon", "FR"), ("Madrid", "ES"), "pickup_date_range", "2025-01-05"),
                "capacity": {"available_weight_kg": 1000},
            },
        ],
        "shipment_requests": [
            {
                "id": "request-1", "user_id": "shipper-1", "status": "active",
                "created_at": _stamp(1),
                "route": _route(("Berlin", "DE"), ("Paris", "FR"), "pickup_date_required", "2025-03-15"),
                "cargo": {"description": "Electronics on pallets", "weight_kg": 500, "volume_m3": 3},
                "dangerous_goods": {"is_dangerous": False},
                "special_requirements": {"temperature_controlled": False},
            },
            {
                "id": "request-2", "user_id": "shipper-2", "status": "active",
                "created_at": _stamp(3),
                "route": _route(("Rotterdam", "NL"), ("Zurich", "CH"), "pickup_date_required", "2025-03-22"),
                "cargo": {"description": "Industrial chemicals", "weight_kg": 1200},
                "dangerous_goods": {"is_dangerous": True},
                "special_requirements": {"temperature_controlled": False},
            },
        ],
        "bookings": [
            {"id": f"booking-{i}", "created_at": _stamp(i), "agreed_price": 900, "weight_kg": 400}
            for i in range(3)
        ],
        "profiles_public": [
            {"id": "carrier-1", "company_name": "TransEuro Logistics", "company_type": "carrier"},
            {"id": "carrier-2", "company_name": "Alpine Express", "company_type": "carrier"},
            {"id": "shipper-1", "company_name": "Berlin Tech GmbH", "company_type": "shipper"},
        ],
        "user_roles": [
            {"id": "role-1", "user_id": "dev-1", "role": "developer"},
            {"id": "role-2", "user_id": "user-1", "role": "user"},
        ],
    }


@pytest.fixture
def fake_supabase(seed_tables):
    return FakeSupabase(seed_tables, tokens={"valid-token": "user-1", "dev-token": "dev-1"})


@pytest.fixture
def store(fake_supabase):
    return ListingStore(fake_supabase)


# ===============================================================================
# FAKE CHAT-COMPLETIONS UPSTREAM
# ===============================================================================

def completion_body(content: Optional[str] = None, tool_calls: Optional[List[Dict]] = None) -> Dict:
    message = {"role": "assistant", "content": content}
    if tool_calls:
        message["tool_calls"] = tool_calls
    return {"id": "chatcmpl-test", "choices": [{"index": 0, "message": message}]}


def tool_call_body(name: str, arguments: Dict) -> Dict:
    return completion_body(tool_calls=[{
        "id": "call_1",
        "type": "function",
        "function": {"name": name, "arguments": json.dumps(arguments)},
    }])


def http_response(status_code: int = 200, body: Optional[Dict] = None, text: str = "") -> Mock:
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.text = text or json.dumps(body or {})
    response.json.return_value = body
    return response


@pytest.fixture
def llm_session():
    session = Mock(spec=requests.Session)
    session.post.return_value = http_response(body=completion_body("Hello from FLOWT"))
    return session


@pytest.fixture
def llm_client(llm_session):
    return ChatCompletionsClient("sk-test", base_url="https://llm.test/v1", session=llm_session)


def sent_payload(session: Mock) -> Dict:
    """JSON body of the most recent upstream call."""
    return session.post.call_args.kwargs["json"]


@pytest.fixture
def request_args():
    """Tool arguments for the Berlin → Paris scenario."""
    return {
        "origin_city": "Berlin",
        "origin_country": "DE",
        "destination_city": "Paris",
        "destination_country": "FR",
        "pickup_date": "2025-03-15",
        "weight_kg": 500,
        "cargo_description": "Electronics",
        "is_dangerous": False,
        "requires_customs": False,
        "temperature_controlled": False,
    }


@pytest.fixture
def offer_args():
    return {
        "origin_city": "Hamburg",
        "origin_country": "DE",
        "destination_city": "Warsaw",
        "destination_country": "PL",
        "departure_date": "2025-03-18",
        "available_weight_kg": 2500,
        "price_per_kg": 1.5,
        "vehicle_type": "truck",
        "fuel_type": "diesel",
        "adr_certified": False,
        "temperature_controlled": False,
    }
