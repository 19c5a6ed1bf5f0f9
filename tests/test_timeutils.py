"""Tests for millisecond decomposition and unit helpers."""

import random

import pytest

from countdown.timer.timeutils import (
    DecomposedTime,
    TimeUnit,
    convert_from_ms,
    convert_to_ms,
    decompose,
    from_ms,
    hours,
    minutes,
    seconds,
    to_ms,
)


class TestDecompose:

    def test_zero(self):
        assert decompose(0) == DecomposedTime(0, 0, 0, 0)

    def test_every_field(self):
        assert decompose(3_723_004) == DecomposedTime(1, 2, 3, 4)

    def test_fields_stay_within_modulus(self):
        d = decompose(59 * 60_000 + 59_999)
        assert d == DecomposedTime(0, 59, 59, 999)

    def test_hours_unbounded(self):
        assert decompose(100 * 3_600_000).hours == 100

    def test_fraction_is_floored(self):
        assert decompose(1999.9) == DecomposedTime(0, 0, 1, 999)

    def test_from_ms_is_alias(self):
        assert from_ms is decompose


class TestToMs:

    def test_sums_fields(self):
        assert to_ms(DecomposedTime(1, 2, 3, 4)) == 3_723_004

    def test_unnormalised_fields_still_sum(self):
        assert to_ms(DecomposedTime(0, 90, 0, 0)) == 90 * 60_000

    @pytest.mark.parametrize("x", [0, 1, 999, 1000, 59_999, 60_000, 3_599_999, 3_600_000])
    def test_round_trip_boundaries(self, x):
        assert to_ms(decompose(x)) == x

    def test_round_trip_random(self):
        rng = random.Random(1234)
        for _ in range(500):
            x = rng.randrange(0, 500 * 3_600_000)
            assert to_ms(decompose(x)) == x


class TestUnits:

    def test_builders(self):
        assert seconds(5) == 5000
        assert minutes(1.5) == 90_000
        assert hours(2) == 7_200_000

    def test_convert_to_ms_floors_and_clamps(self):
        assert convert_to_ms(1.0009, TimeUnit.SECONDS) == 1000
        assert convert_to_ms(-3, TimeUnit.MINUTES) == 0

    def test_convert_accepts_unit_value(self):
        assert convert_to_ms(2, "seconds") == 2000

    def test_convert_from_ms(self):
        assert convert_from_ms(90_000, TimeUnit.MINUTES) == 1.5
        assert convert_from_ms(250, TimeUnit.MS) == 250
