import pytest


@pytest.fixture(autouse=True)
def pricing_context():
    """Push the pricing domain context before each test."""
    from pricing.domain import pricing

    ctx = pricing.domain_context()
    ctx.push()

    yield

    ctx.pop()
