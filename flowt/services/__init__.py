"""Marketplace Services Module"""
from .listing_store import ListingStore, bearer_token

__all__ = ["ListingStore", "bearer_token"]
