# --------------------------- tests/test_context.py ----------------------------
"""
FLOWT · Market Context Retriever Tests

OVERVIEW:
Checks the keyword intent heuristic, which listing sections end up in the
context block, row formatting for nested and flat rows, and that a failing
query only drops its own section.
"""

import pytest

from flowt.agents.freight_assistant.context import (
    OFFERS_HEADER,
    REQUESTS_HEADER,
    build_context,
    classify_intent,
    format_offer,
    format_request,
)

# ===============================================================================
# INTENT CLASSIFICATION
# ===============================================================================


class TestClassifyIntent:
    """Substring keyword matching on the lower-cased message."""

    @pytest.mark.parametrize("message, offers, requests", [
        ("I need to ship 500kg from Berlin to Paris", True, False),
        ("We have a truck available on Monday", False, True),
        ("Hello there", True, True),
        ("I need capacity for my shipment", True, True),
        ("SHIPPING pallets next week", True, False),
        ("Spare CAPACITY to Madrid", False, True),
    ])
    def test_sections_selected(self, message, offers, requests):
        intent = classify_intent(message)
        assert intent.include_offers is offers
        assert intent.include_requests is requests

    def test_matches_inside_words(self):
        # "shipment" contains "ship"
        assert classify_intent("shipment").seeking_capacity is True
        assert classify_intent("unavailable").offering_capacity is True


# ===============================================================================
# CONTEXT ASSEMBLY
# ===============================================================================


class TestBuildContext:
    """Section selection, ordering and failure isolation."""

    def test_seeking_message_lists_offers_only(self, store, fake_supabase):
        context = build_context("I need to ship 500kg from Berlin DE to Paris FR", store)

        assert OFFERS_HEADER in context.text
        assert REQUESTS_HEADER not in context.text
        assert "shipment_requests" not in fake_supabase.executed
        assert context.offer_count == 2
        assert context.request_count == 0

    def test_offering_message_lists_requests_only(self, store, fake_supabase):
        context = build_context("I have a truck available tomorrow", store)

        assert REQUESTS_HEADER in context.text
        assert OFFERS_HEADER not in context.text
        assert "shipment_offers" not in fake_supabase.executed

    def test_neutral_message_lists_both_in_order(self, store):
        context = build_context("What is happening on the market?", store)

        assert OFFERS_HEADER in context.text
        assert REQUESTS_HEADER in context.text
        assert context.text.index(OFFERS_HEADER) < context.text.index(REQUESTS_HEADER)

    def test_only_active_listings_included(self, store):
        context = build_context("hello", store)

        assert "Hamburg, DE" in context.text
        assert "Lyon" not in context.text

    def test_company_names_attached(self, store):
        context = build_context("hello", store)

        assert "Company: TransEuro Logistics" in context.text
        assert "Company: Berlin Tech GmbH" in context.text
        # shipper-2 has no public profile
        assert "Company: Unknown Company" in context.text

    def test_recent_bookings_line(self, store):
        context = build_context("hello", store)

        assert "Recent Successful Matches: 3 bookings" in context.text
        assert context.booking_count == 3

    def test_no_bookings_no_line(self, store, fake_supabase):
        fake_supabase.tables["bookings"] = []

        context = build_context("hello", store)

        assert "Recent Successful Matches" not in context.text
        assert context.booking_count == 0

    def test_failed_offer_query_drops_only_that_section(self, store, fake_supabase):
        fake_supabase.failing_tables.add("shipment_offers")

        context = build_context("hello", store)

        assert OFFERS_HEADER not in context.text
        assert REQUESTS_HEADER in context.text
        assert "Recent Successful Matches" in context.text

    def test_everything_failing_yields_empty_context(self, store, fake_supabase):
        fake_supabase.failing_tables.update({"shipment_offers", "shipment_requests", "bookings"})

        context = build_context("hello", store)

        assert context.text == ""
        assert context.booking_count == 0

    def test_failed_profile_lookup_keeps_listings(self, store, fake_supabase):
        fake_supabase.failing_tables.add("profiles_public")

        context = build_context("hello", store)

        assert "Hamburg, DE" in context.text
        assert "Company: TransEuro Logistics" not in context.text

    def test_listing_limit_applied(self, store):
        context = build_context("hello", store, listing_limit=1)

        assert context.offer_count == 1
        assert context.request_count == 1

    def test_zero_limits_respected(self, store):
        context = build_context("hello", store, listing_limit=0, booking_limit=0)

        assert context.offer_count == 0
        assert context.request_count == 0
        assert context.booking_count == 0
        assert "Hamburg" not in context.text
        assert "Recent Successful Matches" not in context.text


# ===============================================================================
# ROW FORMATTING
# ===============================================================================


class TestFormatting:
    """Entries read nested documents and fall back to flat columns."""

    def test_nested_offer(self, seed_tables):
        offer = {**seed_tables["shipment_offers"][1], "company_name": "Alpine Express"}

        text = format_offer(offer)

        assert text.startswith("- From Munich, DE to Milan, IT\n")
        assert "  Departure: 2025-03-20" in text
        assert "  Available: 800kg\n" in text
        assert "  Vehicle: van (electric), ADR certified, temperature controlled" in text
        assert "Price" not in text

    def test_nested_offer_with_price_and_volume(self, seed_tables):
        offer = {**seed_tables["shipment_offers"][0], "company_name": "TransEuro Logistics"}

        text = format_offer(offer)

        assert "  Available: 2500kg, 25m³" in text
        assert "  Price: €1.5/kg" in text

    def test_flat_offer_row(self):
        text = format_offer({
            "origin_city": "Vienna", "origin_country": "AT",
            "destination_city": "Prague", "destination_country": "CZ",
            "company_name": "Danube Haul", "departure_date": "2025-04-02",
            "available_weight_kg": 3000, "cargo_types": ["pallets", "machinery"],
            "vehicle_type": "semi", "price_per_kg": 0.9,
        })

        assert "- From Vienna, AT to Prague, CZ" in text
        assert "  Cargo types: pallets, machinery" in text
        assert "  Vehicle: semi" in text
        assert "  Price: €0.9/kg" in text

    def test_nested_request(self, seed_tables):
        request = {**seed_tables["shipment_requests"][1], "company_name": "Unknown Company"}

        text = format_request(request)

        assert "- From Rotterdam, NL to Zurich, CH" in text
        assert "  Needed by: 2025-03-22" in text
        assert "  Weight: 1200kg\n" in text
        assert "  Cargo type: Industrial chemicals" in text
        assert "Dangerous goods: yes" in text

    def test_flat_request_row(self):
        text = format_request({
            "origin_city": "Lyon", "origin_country": "FR",
            "destination_city": "Turin", "destination_country": "IT",
            "company_name": "Rhone Foods", "needed_date": "2025-05-01",
            "weight_kg": 700, "volume_m3": 4, "cargo_type": "Cheese",
            "max_price_per_kg": 2,
        })

        assert "  Weight: 700kg, 4m³" in text
        assert "  Cargo type: Cheese" in text
        assert "  Max price: €2/kg" in text
