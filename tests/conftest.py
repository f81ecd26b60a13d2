import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Select the config environment and initialize both domains once, so their
    elements are registered before any test pushes a domain context.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ["SHOPPING_ENVIRONMENT"] = session.config.option.env

    from shared.config import get_settings

    get_settings.cache_clear()

    from ordering.domain import ordering
    from pricing.domain import pricing

    pricing.init()
    ordering.init()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from ordering.domain import background, cart_locks, order_locks, ordering
    from pricing.domain import pricing
    from products.memory_adapter import reset_catalogue
    from protean import current_domain
    from recommendations.memory_adapter import reset_recommender

    for domain in (pricing, ordering):
        with domain.domain_context():
            # Clear all databases
            for _, provider in current_domain.providers.items():
                provider._data_reset()

            # Drain event stores
            current_domain.event_store.store._data_reset()

    background.reset()
    cart_locks.reset()
    order_locks.reset()
    reset_catalogue()
    reset_recommender()
