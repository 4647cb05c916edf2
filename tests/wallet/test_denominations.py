"""
Tests for denomination breakdown.
"""

import pytest

from cashu_notes.wallet import (
    BINARY_DENOMINATIONS,
    DenominationUnreachableError,
    breakdown_amount,
    estimate_proof_count,
)


@pytest.mark.parametrize("amount,expected", [
    (0, []),
    (1, [1]),
    (13, [1, 4, 8]),
    (21, [1, 4, 16]),
    (100, [4, 32, 64]),
])
def test_binary_breakdown(amount, expected):
    assert breakdown_amount(amount) == expected


def test_breakdown_sums_to_amount():
    parts = breakdown_amount(123456)

    assert sum(parts) == 123456
    assert all(p in BINARY_DENOMINATIONS for p in parts)


def test_custom_denominations():
    assert breakdown_amount(70, [50, 10, 5]) == [10, 10, 50]


def test_when_remainder_uncoverable_then_raises():
    with pytest.raises(DenominationUnreachableError) as exc:
        breakdown_amount(7, [5, 10])

    assert exc.value.amount == 7
    assert exc.value.remainder == 2


def test_when_negative_then_value_error():
    with pytest.raises(ValueError):
        breakdown_amount(-1)


@pytest.mark.parametrize("amount,count", [(0, 0), (1, 1), (13, 3), (255, 8)])
def test_estimate_proof_count(amount, count):
    assert estimate_proof_count(amount) == count
