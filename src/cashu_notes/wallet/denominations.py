"""
Denomination helpers at the wallet boundary.

Cashu mints issue proofs in fixed denominations, usually powers of two.
These helpers check that a note amount can be split into what the mint
offers before a token is requested.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

BINARY_DENOMINATIONS: tuple[int, ...] = tuple(2 ** i for i in range(17))  # 1 .. 65536


class DenominationUnreachableError(ValueError):
    """Amount cannot be built from the available denominations."""

    def __init__(self, amount: int, remainder: int, denominations: Sequence[int]):
        super().__init__(
            f"Cannot break down {amount} with denominations {list(denominations)} "
            f"({remainder} left over) - choose a different amount"
        )
        self.amount = amount
        self.remainder = remainder


def breakdown_amount(
    amount: int,
    available: Iterable[int] = BINARY_DENOMINATIONS,
) -> List[int]:
    """
    Split an amount greedily into available denominations.

    Args:
        amount: Amount in the mint's unit (sats)
        available: Denominations the mint offers

    Returns:
        Denominations summing to ``amount``, ascending

    Raises:
        ValueError: If amount is negative
        DenominationUnreachableError: If a remainder cannot be covered

    Example:
        >>> breakdown_amount(13)
        [1, 4, 8]
    """
    if amount < 0:
        raise ValueError(f"amount must be non-negative: {amount}")

    denominations = sorted({d for d in available if d > 0}, reverse=True)
    result: List[int] = []
    remaining = amount
    for denom in denominations:
        while remaining >= denom:
            result.append(denom)
            remaining -= denom

    if remaining > 0:
        raise DenominationUnreachableError(amount, remaining, sorted(denominations))

    return sorted(result)


def estimate_proof_count(amount: int) -> int:
    """Proofs needed for ``amount`` with binary denominations."""
    if amount < 0:
        raise ValueError(f"amount must be non-negative: {amount}")
    return bin(amount).count("1")
