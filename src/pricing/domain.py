"""Pricing bounded context — tiered product prices.

Holds msrp, list and sale prices per product, resolves the effective price
for a currency and zone, and merges partial price updates into the stored
record.
"""

import structlog
from protean.domain import Domain

pricing = Domain(name="pricing")

logger = structlog.get_logger(__name__)
