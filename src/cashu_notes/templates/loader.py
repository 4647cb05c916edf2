"""
Module: templates.loader

Purpose:
    Load note template bundles from JSON files or parsed dictionaries.
    A bundle is either a single template object or an object with a
    ``templates`` list.

Key Functions:
    - load_template(): One template from a path or mapping
    - load_templates(): Every template in a bundle
    - find_template(): Template by id

Dependencies:
    - core.schemas.validator: Required-field validation
    - core.models.templates: NoteTemplate

Used By:
    - cli: ``--template`` option
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Union

from cashu_notes.core.models.templates import NoteTemplate
from cashu_notes.core.schemas.validator import ValidationError, validate_template

logger = logging.getLogger(__name__)

TemplateSource = Union[Path, str, dict]


class TemplateLoadError(Exception):
    """Template bundle could not be read or validated."""
    pass


def load_templates(source: TemplateSource, *, strict: bool = False) -> List[NoteTemplate]:
    """
    Load all templates from a bundle.

    Args:
        source: Path to a JSON file, or an already-parsed mapping
        strict: Also validate each template against the JSON schema

    Returns:
        Templates in bundle order

    Raises:
        TemplateLoadError: If the file is unreadable or any template is invalid
    """
    data = _read(source)
    items = data["templates"] if isinstance(data, dict) and "templates" in data else [data]
    if not isinstance(items, list):
        raise TemplateLoadError("'templates' must be a list")

    templates = []
    for i, item in enumerate(items):
        try:
            validate_template(item, strict=strict)
            templates.append(NoteTemplate.from_dict(item))
        except ValidationError as e:
            message = f"Template #{i + 1} is invalid: {e}"
            details = [err for err in e.errors if err not in message]
            if details:
                message += f" ({'; '.join(details)})"
            raise TemplateLoadError(message) from e
        except (KeyError, TypeError, ValueError) as e:
            raise TemplateLoadError(f"Template #{i + 1} is malformed: {e}") from e

    logger.info(f"Loaded {len(templates)} template(s)")
    return templates


def load_template(source: TemplateSource, *, strict: bool = False) -> NoteTemplate:
    """Load the first template from a bundle."""
    templates = load_templates(source, strict=strict)
    if not templates:
        raise TemplateLoadError("Template bundle is empty")
    return templates[0]


def find_template(templates: List[NoteTemplate], template_id: str) -> NoteTemplate:
    for template in templates:
        if template.id == template_id:
            return template
    raise TemplateLoadError(f"No template with id {template_id!r}")


def _read(source: TemplateSource) -> Any:
    if isinstance(source, dict):
        return source
    path = Path(source)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise TemplateLoadError(f"Cannot read template file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise TemplateLoadError(f"Template file {path} is not valid JSON: {e}") from e
