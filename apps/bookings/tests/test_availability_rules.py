"""Tests for the overlap rules behind BookingService.is_available."""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime, timedelta

import pytest

from apps.bookings.domain.availability import conflicting, overlaps
from apps.cars.tests.factories import aware

BASE = aware(2024, 1, 1)


def at(hours: int) -> datetime:
    return BASE + timedelta(hours=hours)


@dataclass
class Period:
    pk: int
    status: str
    start_date: datetime
    end_date: datetime


def test_shared_boundary_is_an_overlap():
    assert overlaps(at(0), at(10), at(10), at(20))
    assert overlaps(at(10), at(20), at(0), at(10))


def test_disjoint_periods_do_not_overlap():
    assert not overlaps(at(0), at(10), at(11), at(20))


def test_enclosed_period_overlaps():
    assert overlaps(at(0), at(100), at(10), at(20))


def test_overlap_matches_brute_force_on_random_intervals():
    rng = random.Random(20240201)
    for _ in range(2000):
        a, b = sorted(rng.sample(range(0, 60), 2))
        c, d = sorted(rng.sample(range(0, 60), 2))
        hours_ab = set(range(a, b + 1))
        hours_cd = set(range(c, d + 1))
        expected = bool(hours_ab & hours_cd)
        assert overlaps(at(a), at(b), at(c), at(d)) is expected
        assert overlaps(at(c), at(d), at(a), at(b)) is expected


@pytest.mark.parametrize(
    "status, blocks",
    [
        ("pending", False),
        ("confirmed", True),
        ("active", True),
        ("completed", False),
        ("cancelled", False),
    ],
)
def test_only_confirmed_and_active_block(status, blocks):
    existing = [Period(1, status, at(0), at(48))]
    assert bool(conflicting(existing, at(24), at(72))) is blocks


def test_excluded_booking_is_ignored():
    existing = [Period(7, "confirmed", at(0), at(48)), Period(8, "active", at(100), at(120))]
    assert conflicting(existing, at(10), at(20), exclude_booking_id=7) == []
    assert [p.pk for p in conflicting(existing, at(110), at(130), exclude_booking_id=7)] == [8]


def test_check_is_idempotent():
    existing = [Period(1, "confirmed", at(0), at(48))]
    first = conflicting(existing, at(30), at(60))
    second = conflicting(existing, at(30), at(60))
    assert first == second == existing
