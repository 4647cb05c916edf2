"""
Cashu Notes Core Package

Shared value types and validation utilities used by the printing pipeline,
the template loader and the CLI.

1. **Immutable Data Models**
   - Frozen dataclasses, new instances created for any change

2. **Millimetres Everywhere**
   - Every length in the models is millimetres with a top-left origin
   - Conversion to points/pixels happens only at the rendering edge
"""

from .models import Box, Size, ModuleKind, NoteModule, NoteTemplate

__all__ = [
    "Box",
    "Size",
    "ModuleKind",
    "NoteModule",
    "NoteTemplate",
]
