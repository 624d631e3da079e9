"""Wikifeeds - most-read article feed aggregation."""

__version__ = "0.1.0"
