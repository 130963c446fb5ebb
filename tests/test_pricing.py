"""Tests for price normalization."""

import pytest

from app.services.pricing import normalize


@pytest.mark.parametrize(
    "amount, expected",
    [
        (2.005, 2.01),
        (-2.005, -2.01),
        (9.995, 10.0),
        (4.5, 4.5),
        (1.234, 1.23),
        (-1.235, -1.24),
        (0, 0.0),
        (7, 7.0),
    ],
)
def test_normalize_rounds_half_away_from_zero(amount, expected):
    assert normalize(amount, 2) == expected


def test_normalize_defaults_to_two_places():
    assert normalize(3.14159) == 3.14


def test_normalize_other_precisions():
    assert normalize(2.5, 0) == 3.0
    assert normalize(-2.5, 0) == -3.0
    assert normalize(1.0005, 3) == 1.001


@pytest.mark.parametrize("amount", [2.005, -2.005, 0.1 + 0.2, 123.456789, 1e-7, 99999.995])
def test_normalize_is_idempotent(amount):
    once = normalize(amount, 2)
    assert normalize(once, 2) == once


@pytest.mark.parametrize("amount", [1e30, 123456789012345678901234567890.0, -4.2e40])
def test_normalize_handles_large_magnitudes(amount):
    assert normalize(amount, 2) == amount
