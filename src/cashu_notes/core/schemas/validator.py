"""
Template Validation Utilities

Checks note template bundles before they are turned into NoteTemplate
objects. Basic checks cover the presence and shape of the top-level
fields; strict mode also validates against note_template.schema.json.
Module semantics belong to the designer that produced them.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from ..models.templates import ModuleKind


TEMPLATE_REQUIRED_FIELDS = ("id", "name", "modules", "dimensions", "version")

# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails template validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_template(data: Any, *, strict: bool = False) -> None:
    """
    Validate a template bundle dictionary.

    Args:
        data: Parsed JSON for one template
        strict: If True, also validate against the JSON schema

    Raises:
        ValidationError: If required fields are missing or malformed
    """
    if not isinstance(data, dict):
        raise ValidationError(
            f"Template must be an object, got {type(data).__name__}",
            path="",
        )

    missing = [f for f in TEMPLATE_REQUIRED_FIELDS if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing],
        )

    _validate_dimensions(data["dimensions"], "dimensions")

    modules = data["modules"]
    if not isinstance(modules, list):
        raise ValidationError("modules must be a list", path="modules")

    errors = []
    for i, module in enumerate(modules):
        errors.extend(_module_errors(module, f"modules[{i}]"))
    if errors:
        raise ValidationError(
            f"Invalid modules: {len(errors)} problem(s)",
            path="modules",
            errors=errors,
        )

    # Full schema validation in strict mode
    if strict:
        try:
            jsonschema.validate(data, _load_schema("note_template"))
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message],
            ) from e


def _validate_dimensions(dims: Any, path: str) -> None:
    if not isinstance(dims, dict):
        raise ValidationError(f"{path} must be an object", path=path)
    for key in ("width", "height"):
        value = dims.get(key)
        if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
            raise ValidationError(
                f"Invalid {path}.{key}: {value!r} (must be a positive number)",
                path=f"{path}.{key}",
            )


def _module_errors(module: Any, path: str) -> list[str]:
    if not isinstance(module, dict):
        return [f"{path}: must be an object"]
    errors = []
    for key in ("id", "type", "size"):
        if key not in module:
            errors.append(f"{path}: missing field {key}")
    kind = module.get("type")
    if kind is not None and kind not in {k.value for k in ModuleKind}:
        errors.append(f"{path}: unknown module type {kind!r}")
    return errors
