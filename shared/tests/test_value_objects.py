from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from shared.domain.value_objects import DateRange, Money

T0 = datetime(2024, 2, 1, tzinfo=timezone.utc)


def test_money_quantizes_to_cents():
    assert Money(Decimal("10.005")).amount == Decimal("10.01")
    assert Money(Decimal("1500")).minor_units == 150000


def test_money_rejects_floats_and_negatives():
    with pytest.raises(TypeError):
        Money(10.5)
    with pytest.raises(ValueError):
        Money(Decimal("-1"))
    with pytest.raises(ValueError):
        Money(Decimal("1"), "XYZ")


def test_money_from_kobo():
    assert Money.from_minor_units(3000000) == Money(Decimal("30000.00"))


def test_money_arithmetic():
    assert Money(Decimal("100")) * 3 == Money(Decimal("300"))
    assert Money(Decimal("1.50")) + Money(Decimal("2.25")) == Money(Decimal("3.75"))
    with pytest.raises(ValueError):
        Money(Decimal("1"), "NGN") + Money(Decimal("1"), "USD")


def test_date_range_requires_positive_duration():
    with pytest.raises(ValueError):
        DateRange(T0, T0)


@pytest.mark.parametrize(
    "duration, days",
    [
        (timedelta(hours=1), 1),
        (timedelta(days=1), 1),
        (timedelta(days=1, seconds=1), 2),
        (timedelta(days=4), 4),
    ],
)
def test_billable_days(duration, days):
    assert DateRange(T0, T0 + duration).billable_days == days


def test_overlap_includes_shared_boundary():
    first = DateRange(T0, T0 + timedelta(days=4))
    touching = DateRange(T0 + timedelta(days=4), T0 + timedelta(days=6))
    after = DateRange(T0 + timedelta(days=4, seconds=1), T0 + timedelta(days=6))

    assert first.overlaps_with(touching)
    assert touching.overlaps_with(first)
    assert not first.overlaps_with(after)
