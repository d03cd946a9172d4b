# --------------------------- flowt/services/listing_store.py ----------------------------
"""
FLOWT · Listing Store

OVERVIEW:
Thin adapter over the hosted Supabase backend that holds the marketplace
listings. Every read is a filtered / ordered / limited query; every write is
a single-row insert. No transaction spans a read and a write.

TABLES:
- shipment_offers: carrier capacity (nested JSON route/capacity/vehicle/pricing)
- shipment_requests: shipper cargo (nested JSON route/cargo/dangerous_goods/...)
- bookings: matched offer/request pairs (read-only here)
- profiles_public: PII-free company name and type, keyed by user id
- user_roles: role grants ("developer", "user")

DEPENDENCIES:
- Environment variables: SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from supabase import Client, create_client

from flowt.config import settings
from flowt.errors import AuthenticationError, ConfigurationError, ListingWriteError
from flowt.models.listings import ShipmentStatus

logger = logging.getLogger(__name__)

OFFERS_TABLE = "shipment_offers"
REQUESTS_TABLE = "shipment_requests"
BOOKINGS_TABLE = "bookings"
PROFILES_TABLE = "profiles_public"
ROLES_TABLE = "user_roles"

UNKNOWN_COMPANY = "Unknown Company"


class ListingStore:
    """
    Read/write access to listings, bookings, profiles and roles.

    ARCHITECTURE ROLE:
    Shared by the context retriever (reads), the action executor (inserts,
    token lookup) and the HTTP feeds/forms.
    """

    def __init__(self, client: Client):
        self.supabase = client

    @classmethod
    def from_settings(cls) -> "ListingStore":
        """Build a store from SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY."""
        if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
            raise ConfigurationError("Supabase configuration required")
        return cls(create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY))

    # ─── Listing reads ────────────────────────────────────────────────

    def fetch_active_offers(self, limit: int = 10) -> List[Dict]:
        return self._fetch_active(OFFERS_TABLE, limit)

    def fetch_active_requests(self, limit: int = 10) -> List[Dict]:
        return self._fetch_active(REQUESTS_TABLE, limit)

    def fetch_recent_bookings(self, limit: int = 5) -> List[Dict]:
        response = (
            self.supabase.table(BOOKINGS_TABLE)
            .select("*")
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return response.data or []

    def _fetch_active(self, table: str, limit: int) -> List[Dict]:
        """
        Newest active listings of one table, merged with public company fields.

        Company names come from a second query against profiles_public so
        that no private profile column is ever read.
        """
        response = (
            self.supabase.table(table)
            .select("*")
            .eq("status", ShipmentStatus.ACTIVE.value)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        rows = response.data or []
        return self._attach_company_profiles(rows)

    def _attach_company_profiles(self, rows: List[Dict]) -> List[Dict]:
        if not rows:
            return []

        user_ids = sorted({row["user_id"] for row in rows if row.get("user_id")})
        profiles = self._fetch_profiles(user_ids)

        merged = []
        for row in rows:
            profile = profiles.get(row.get("user_id"), {})
            merged.append({
                **row,
                "company_name": profile.get("company_name") or UNKNOWN_COMPANY,
                "company_type": profile.get("company_type"),
            })
        return merged

    def _fetch_profiles(self, user_ids: Iterable[str]) -> Dict[str, Dict]:
        user_ids = list(user_ids)
        if not user_ids:
            return {}
        try:
            response = (
                self.supabase.table(PROFILES_TABLE)
                .select("id, company_name, company_type")
                .in_("id", user_ids)
                .execute()
            )
        except Exception as e:
            # Listings stay usable without company names
            logger.warning(f"Company profile lookup failed: {e}")
            return {}
        return {profile["id"]: profile for profile in response.data or []}

    # ─── Listing writes ───────────────────────────────────────────────

    def insert_offer(self, row: Dict[str, Any]) -> Dict[str, Any]:
        return self._insert(OFFERS_TABLE, row, "transport offer")

    def insert_request(self, row: Dict[str, Any]) -> Dict[str, Any]:
        return self._insert(REQUESTS_TABLE, row, "shipping request")

    def _insert(self, table: str, row: Dict[str, Any], label: str) -> Dict[str, Any]:
        try:
            response = self.supabase.table(table).insert(row).execute()
        except Exception as e:
            logger.error(f"Error inserting into {table}: {e}")
            raise ListingWriteError(label, detail=str(e)) from e

        if not response.data:
            logger.error(f"Insert into {table} returned no row")
            raise ListingWriteError(label, detail=f"Insert into {table} returned no row")

        inserted = response.data[0]
        logger.info(f"Created {label} {inserted.get('id')} for user {row.get('user_id')}")
        return inserted

    # ─── Identity ─────────────────────────────────────────────────────

    def get_user_id(self, token: Optional[str]) -> str:
        """
        Exchange a bearer token for the id of the user it belongs to.

        RAISES:
            AuthenticationError: token missing, rejected, or bound to no user
        """
        if not token:
            raise AuthenticationError(AuthenticationError.MISSING_TOKEN_MESSAGE)

        try:
            response = self.supabase.auth.get_user(token)
        except Exception as e:
            logger.warning(f"Token verification failed: {e}")
            raise AuthenticationError(detail=str(e)) from e

        user = getattr(response, "user", None)
        if user is None:
            raise AuthenticationError(detail="Auth service returned no user for token")
        return user.id

    def has_role(self, user_id: str, role: str) -> bool:
        """True when `user_roles` grants `role` to `user_id`."""
        response = (
            self.supabase.table(ROLES_TABLE)
            .select("role")
            .eq("user_id", user_id)
            .eq("role", role)
            .limit(1)
            .execute()
        )
        return bool(response.data)


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Strip the `Bearer ` scheme from an Authorization header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None
