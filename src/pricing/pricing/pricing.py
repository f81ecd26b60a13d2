"""Pricing aggregate — three price tiers per product.

Tiers:
    msrp   manufacturer's suggested price, keyed by (zone, currency)
    list   regular selling price, keyed by (zone, currency)
    sale   time-boxed price, keyed by (zone, currency, start, end)

Resolution precedence is absolute: an in-window sale price beats any list
price, which beats any msrp price, regardless of amounts.

Each tier is stored as a JSON array so that the order produced by a merge is
exactly the order read back.
"""

import json
from datetime import UTC, datetime

from protean.fields import DateTime, Float, Identifier, String, Text

from pricing.domain import pricing
from pricing.pricing.events import PricingInitialized, PricingUpdated
from shared.exceptions import PricingNotFound


def _assume_utc(value: datetime | None) -> datetime | None:
    """Naive datetimes are read as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _parse_instant(value) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return _assume_utc(value)
    return _assume_utc(datetime.fromisoformat(value))


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@pricing.value_object
class PricingItem:
    """A price in one currency for one pricing zone."""

    price = Float(required=True, min_value=0.0)
    currency = String(required=True, max_length=10)
    zone = String(required=True, max_length=50)

    @property
    def key(self) -> tuple:
        return (self.zone, self.currency)

    def matches(self, currency: str, zone: str) -> bool:
        return self.zone == zone and self.currency == currency

    def to_record(self) -> dict:
        return {"price": self.price, "currency": self.currency, "zone": self.zone}

    @classmethod
    def from_record(cls, record: dict) -> "PricingItem":
        return cls(price=record["price"], currency=record["currency"], zone=record["zone"])


@pricing.value_object
class SalePricingItem:
    """A price that only applies between ``start`` (inclusive) and ``end`` (exclusive).

    A missing bound leaves that side of the window open.
    """

    price = Float(required=True, min_value=0.0)
    currency = String(required=True, max_length=10)
    zone = String(required=True, max_length=50)
    start = DateTime()
    end = DateTime()

    @property
    def window(self) -> tuple:
        return (_assume_utc(self.start), _assume_utc(self.end))

    @property
    def key(self) -> tuple:
        return (self.zone, self.currency, *self.window)

    def matches(self, currency: str, zone: str) -> bool:
        return self.zone == zone and self.currency == currency

    def is_active(self, now: datetime) -> bool:
        now = _assume_utc(now)
        start, end = self.window
        if start is not None and now < start:
            return False
        if end is not None and now >= end:
            return False
        return True

    def to_pricing_item(self) -> PricingItem:
        return PricingItem(price=self.price, currency=self.currency, zone=self.zone)

    def to_record(self) -> dict:
        start, end = self.window
        return {
            "price": self.price,
            "currency": self.currency,
            "zone": self.zone,
            "start": start.isoformat() if start else None,
            "end": end.isoformat() if end else None,
        }

    @classmethod
    def from_record(cls, record: dict) -> "SalePricingItem":
        return cls(
            price=record["price"],
            currency=record["currency"],
            zone=record["zone"],
            start=_parse_instant(record.get("start")),
            end=_parse_instant(record.get("end")),
        )


def dump_items(items) -> str:
    return json.dumps([item.to_record() for item in items])


def load_items(raw: str | None, item_cls) -> list:
    return [item_cls.from_record(record) for record in json.loads(raw or "[]")]


# ---------------------------------------------------------------------------
# Merge
# ---------------------------------------------------------------------------
def _merge_by_key(updates, current) -> list:
    merged = {item.key: item for item in updates}
    for item in current:
        merged.setdefault(item.key, item)
    return list(merged.values())


def merge_items(updates: list[PricingItem], current: list[PricingItem]) -> list[PricingItem]:
    """Union of both lists keyed by (zone, currency); ``updates`` win on collision."""
    if not updates:
        return list(current)
    if not current:
        return list(updates)
    return _merge_by_key(updates, current)


def _sale_order(item: SalePricingItem) -> tuple:
    # Open-start entries sort before every dated entry
    start = item.window[0]
    return (start is not None, start)


def merge_sale_items(updates: list[SalePricingItem], current: list[SalePricingItem]) -> list[SalePricingItem]:
    """Union keyed by (zone, currency, start, end), ordered by start with open starts first."""
    if not updates:
        return list(current)
    if not current:
        return list(updates)
    return sorted(_merge_by_key(updates, current), key=_sale_order)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@pricing.aggregate
class Pricing:
    product_id = Identifier(identifier=True, required=True)
    msrp_prices = Text()  # JSON: list of {price, currency, zone}
    list_prices = Text()  # JSON: list of {price, currency, zone}
    sale_prices = Text()  # JSON: list of {price, currency, zone, start, end}
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, product_id):
        now = datetime.now(UTC)
        return cls(
            product_id=str(product_id),
            msrp_prices=json.dumps([]),
            list_prices=json.dumps([]),
            sale_prices=json.dumps([]),
            created_at=now,
            updated_at=now,
        )

    def msrp_items(self) -> list[PricingItem]:
        return load_items(self.msrp_prices, PricingItem)

    def list_items(self) -> list[PricingItem]:
        return load_items(self.list_prices, PricingItem)

    def sale_items(self) -> list[SalePricingItem]:
        return load_items(self.sale_prices, SalePricingItem)

    # -------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------
    def resolve(self, currency: str, zone: str, now: datetime | None = None) -> PricingItem:
        """Return the effective price for ``currency`` in ``zone``.

        Raises PricingNotFound when no tier has a matching entry.
        """
        now = _assume_utc(now) if now is not None else datetime.now(UTC)

        sale = next(
            (item for item in self.sale_items() if item.matches(currency, zone) and item.is_active(now)),
            None,
        )
        if sale is not None:
            return sale.to_pricing_item()

        for tier in (self.list_items(), self.msrp_items()):
            match = next((item for item in tier if item.matches(currency, zone)), None)
            if match is not None:
                return match

        raise PricingNotFound(self.product_id)

    # -------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------
    def _store_tiers(self, msrp_prices, list_prices, sale_prices):
        self.msrp_prices = dump_items(msrp_prices)
        self.list_prices = dump_items(list_prices)
        self.sale_prices = dump_items(sale_prices)
        now = datetime.now(UTC)
        self.updated_at = now
        return now

    def initialize(self, msrp_prices, list_prices, sale_prices) -> None:
        """Replace all three tiers."""
        now = self._store_tiers(msrp_prices, list_prices, sale_prices)

        self.raise_(
            PricingInitialized(
                product_id=self.product_id,
                msrp_count=len(msrp_prices),
                list_count=len(list_prices),
                sale_count=len(sale_prices),
                initialized_at=now,
            )
        )

    def update(self, msrp_prices, list_prices, sale_prices) -> None:
        """Merge updates into each tier, keeping entries the update does not mention."""
        msrp = merge_items(list(msrp_prices), self.msrp_items())
        list_ = merge_items(list(list_prices), self.list_items())
        sale = merge_sale_items(list(sale_prices), self.sale_items())
        now = self._store_tiers(msrp, list_, sale)

        self.raise_(
            PricingUpdated(
                product_id=self.product_id,
                msrp_count=len(msrp),
                list_count=len(list_),
                sale_count=len(sale),
                updated_at=now,
            )
        )
