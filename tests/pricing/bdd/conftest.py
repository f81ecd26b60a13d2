"""Shared BDD fixtures and step definitions for the Pricing domain."""

import pytest
from pricing.pricing.pricing import Pricing
from pytest_bdd import given


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured resolution errors."""
    return {"exc": None}


@pytest.fixture()
def tiers():
    return {"msrp_prices": [], "list_prices": [], "sale_prices": []}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a product priced in three tiers", target_fixture="record")
def blank_pricing():
    record = Pricing.create("prod-001")
    record._events.clear()
    return record
