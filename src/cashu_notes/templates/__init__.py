"""Note template bundle loading."""

from .loader import TemplateLoadError, find_template, load_template, load_templates

__all__ = [
    "TemplateLoadError",
    "find_template",
    "load_template",
    "load_templates",
]
