"""Wallet boundary helpers."""

from .denominations import (
    BINARY_DENOMINATIONS,
    DenominationUnreachableError,
    breakdown_amount,
    estimate_proof_count,
)

__all__ = [
    "BINARY_DENOMINATIONS",
    "DenominationUnreachableError",
    "breakdown_amount",
    "estimate_proof_count",
]
