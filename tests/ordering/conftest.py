import json

import pytest
from ordering.address import Address
from pricing.domain import pricing
from pricing.pricing.management import InitializePricing
from pricing.pricing.pricing import PricingItem, dump_items
from products.memory_adapter import get_catalogue
from protean import current_domain
from recommendations.memory_adapter import get_recommender

ADDRESS = {
    "street": "1 Main St",
    "city": "Springfield",
    "state_or_region": "IL",
    "country": "US",
    "postal_code": "62701",
}


def _seed_product(product_id="prod-001", price=10.0, currency="USD", zone="global", name="Widget", brand="Acme"):
    """Register a product in the catalogue with a single list price."""
    get_catalogue().add_product(product_id, name=name, brand=brand)
    with pricing.domain_context():
        current_domain.process(
            InitializePricing(
                product_id=product_id,
                list_prices=dump_items([PricingItem(price=price, currency=currency, zone=zone)]),
            ),
            asynchronous=False,
        )


@pytest.fixture(autouse=True)
def ordering_context():
    """Push the ordering domain context before each test."""
    from ordering.domain import ordering

    ctx = ordering.domain_context()
    ctx.push()

    yield

    ctx.pop()


@pytest.fixture()
def address():
    return Address(**ADDRESS)


@pytest.fixture()
def address_payload():
    return dict(ADDRESS)


@pytest.fixture()
def address_json():
    return json.dumps(ADDRESS)


@pytest.fixture()
def catalogue():
    return get_catalogue()


@pytest.fixture()
def recommender():
    return get_recommender()


@pytest.fixture()
def seed_product():
    return _seed_product
