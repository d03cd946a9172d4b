"""
FLOWT - B2B freight ridesharing marketplace backend.

Listing store, listing forms/feeds, and the retrieval-augmented freight
assistant that can create offers and requests through function calling.
"""

__version__ = "0.1.0"
