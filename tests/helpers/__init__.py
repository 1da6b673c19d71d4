"""Test helper utilities for event gateway tests."""

from .fixture_fetcher import TEST_API_KEY, FixtureFetcher, load_fixture

__all__ = ["FixtureFetcher", "load_fixture", "TEST_API_KEY"]
