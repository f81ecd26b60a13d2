"""Tests for effective price resolution across the three tiers."""

from datetime import UTC, datetime, timedelta

import pytest
from pricing.pricing.events import PricingInitialized, PricingUpdated
from pricing.pricing.pricing import Pricing, PricingItem, SalePricingItem
from protean.exceptions import ValidationError
from shared.exceptions import PricingNotFound

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


def _make_pricing(msrp=(), list_=(), sale=()):
    record = Pricing.create("prod-001")
    record.initialize(msrp_prices=list(msrp), list_prices=list(list_), sale_prices=list(sale))
    return record


def _price(amount, currency="USD", zone="global"):
    return PricingItem(price=amount, currency=currency, zone=zone)


def _sale(amount, start=None, end=None, currency="USD", zone="global"):
    return SalePricingItem(price=amount, currency=currency, zone=zone, start=start, end=end)


class TestTierPrecedence:
    def test_list_beats_msrp(self):
        record = _make_pricing(msrp=[_price(12.0)], list_=[_price(10.0)])
        assert record.resolve("USD", "global", NOW).price == 10.0

    def test_list_beats_msrp_even_when_more_expensive(self):
        record = _make_pricing(msrp=[_price(5.0)], list_=[_price(10.0)])
        assert record.resolve("USD", "global", NOW).price == 10.0

    def test_active_sale_beats_list_even_when_more_expensive(self):
        record = _make_pricing(
            list_=[_price(10.0)],
            sale=[_sale(15.0, start=NOW - timedelta(days=1), end=NOW + timedelta(days=1))],
        )
        resolved = record.resolve("USD", "global", NOW)
        assert resolved.price == 15.0
        assert type(resolved) is PricingItem

    def test_msrp_used_when_nothing_else(self):
        record = _make_pricing(msrp=[_price(12.0)])
        assert record.resolve("USD", "global", NOW).price == 12.0

    def test_no_match_raises_pricing_not_found(self):
        record = _make_pricing(list_=[_price(10.0, currency="EUR")])
        with pytest.raises(PricingNotFound) as exc:
            record.resolve("USD", "global", NOW)
        assert exc.value.product_id == "prod-001"

    def test_zone_must_match_exactly(self):
        record = _make_pricing(list_=[_price(10.0, zone="eu")])
        with pytest.raises(PricingNotFound):
            record.resolve("USD", "global", NOW)

    def test_currency_selects_entry(self):
        record = _make_pricing(list_=[_price(10.0), _price(9.0, currency="EUR")])
        resolved = record.resolve("EUR", "global", NOW)
        assert resolved.price == 9.0
        assert resolved.currency == "EUR"


class TestSaleWindow:
    def test_sale_before_start_is_ignored(self):
        record = _make_pricing(list_=[_price(10.0)], sale=[_sale(5.0, start=NOW + timedelta(hours=1))])
        assert record.resolve("USD", "global", NOW).price == 10.0

    def test_sale_start_is_inclusive(self):
        record = _make_pricing(list_=[_price(10.0)], sale=[_sale(5.0, start=NOW)])
        assert record.resolve("USD", "global", NOW).price == 5.0

    def test_sale_end_is_exclusive(self):
        record = _make_pricing(list_=[_price(10.0)], sale=[_sale(5.0, end=NOW)])
        assert record.resolve("USD", "global", NOW).price == 10.0

    def test_open_window_always_active(self):
        record = _make_pricing(list_=[_price(10.0)], sale=[_sale(5.0)])
        assert record.resolve("USD", "global", NOW).price == 5.0

    def test_first_active_sale_in_order_wins(self):
        record = _make_pricing(
            sale=[
                _sale(7.0, start=NOW - timedelta(days=2)),
                _sale(6.0, start=NOW - timedelta(days=1)),
            ]
        )
        assert record.resolve("USD", "global", NOW).price == 7.0

    def test_naive_window_bounds_are_treated_as_utc(self):
        item = _sale(5.0, start=datetime(2024, 6, 1))
        assert item.window[0].tzinfo is UTC
        assert item.is_active(NOW)

    def test_naive_now_is_treated_as_utc(self):
        record = _make_pricing(
            list_=[_price(10.0)],
            sale=[_sale(5.0, start=NOW - timedelta(hours=1), end=NOW + timedelta(hours=1))],
        )
        assert record.resolve("USD", "global", datetime(2024, 6, 1, 12, 0)).price == 5.0
        assert record.resolve("USD", "global", datetime(2024, 6, 1, 14, 0)).price == 10.0

    def test_resolve_defaults_to_current_time(self):
        record = _make_pricing(list_=[_price(10.0)], sale=[_sale(5.0, end=datetime(2000, 1, 1, tzinfo=UTC))])
        assert record.resolve("USD", "global").price == 10.0


class TestPricingEvents:
    def test_initialize_replaces_tiers_and_raises_event(self):
        record = _make_pricing(list_=[_price(10.0)])
        record._events.clear()
        record.initialize(msrp_prices=[_price(12.0)], list_prices=[], sale_prices=[])

        assert record.list_items() == []
        assert record.msrp_items() == [_price(12.0)]
        assert len(record._events) == 1
        event = record._events[0]
        assert isinstance(event, PricingInitialized)
        assert event.msrp_count == 1
        assert event.list_count == 0

    def test_update_raises_event_with_merged_counts(self):
        record = _make_pricing(list_=[_price(10.0)])
        record._events.clear()
        record.update(msrp_prices=[], list_prices=[_price(9.0, currency="EUR")], sale_prices=[])

        event = record._events[0]
        assert isinstance(event, PricingUpdated)
        assert event.list_count == 2


class TestPricingItem:
    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            PricingItem(price=-1.0, currency="USD", zone="global")

    def test_currency_is_required(self):
        with pytest.raises(ValidationError):
            PricingItem(price=1.0, zone="global")


class TestStoredTiers:
    def test_tier_order_survives_storage(self):
        record = _make_pricing(list_=[_price(10.0, zone="eu"), _price(9.0), _price(8.0, zone="apac")])
        assert [item.zone for item in record.list_items()] == ["eu", "global", "apac"]

    def test_sale_windows_read_back_timezone_aware(self):
        record = _make_pricing(sale=[_sale(5.0, start=datetime(2024, 6, 1))])
        assert record.sale_items()[0].window[0] == datetime(2024, 6, 1, tzinfo=UTC)
