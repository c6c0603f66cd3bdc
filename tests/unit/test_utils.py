"""Tests for datetime and id helpers."""

from datetime import UTC, datetime, timedelta, timezone

from restaurant_backend.shared.utils.datetime import day_bounds_utc, iso_now, to_iso
from restaurant_backend.shared.utils.generators import generate_cuid, generate_order_number


def test_to_iso_converts_to_utc_milliseconds() -> None:
    phnom_penh = timezone(timedelta(hours=7))
    dt = datetime(2026, 3, 1, 9, 30, 0, 123456, tzinfo=phnom_penh)
    assert to_iso(dt) == "2026-03-01T02:30:00.123+00:00"


def test_to_iso_assumes_utc_for_naive() -> None:
    assert to_iso(datetime(2026, 3, 1)) == "2026-03-01T00:00:00.000+00:00"


def test_day_bounds() -> None:
    start, end = day_bounds_utc(datetime(2026, 3, 1, 15, 0, tzinfo=UTC))
    assert start == datetime(2026, 3, 1, tzinfo=UTC)
    assert end.date() == start.date()
    assert end.hour == 23 and end.minute == 59


def test_iso_now_is_parseable() -> None:
    assert datetime.fromisoformat(iso_now()).tzinfo is not None


def test_cuid_is_valid_document_id() -> None:
    value = generate_cuid()
    assert value[0].isalpha()
    assert len(value) <= 36
    assert generate_cuid() != value


def test_order_number_shape() -> None:
    number = generate_order_number()
    prefix, suffix = number.split("-")
    assert prefix == "ORD"
    assert len(suffix) == 8
    assert "O" not in suffix and "0" not in suffix
