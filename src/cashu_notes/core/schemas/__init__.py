"""
Schemas Package

Validation utilities for note template bundles.
"""

from .validator import (
    validate_template,
    ValidationError,
    TEMPLATE_REQUIRED_FIELDS,
)

__all__ = [
    "validate_template",
    "ValidationError",
    "TEMPLATE_REQUIRED_FIELDS",
]
