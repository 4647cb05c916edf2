"""
Core Models Package

Immutable value types shared by the layout engine, the renderer and the
template loader. Every model is a frozen dataclass; a layout result passes from the
planner to the assembler unchanged.
"""

from .geometry import Box, Size
from .templates import ModuleKind, NoteModule, NoteTemplate

__all__ = [
    "Box",
    "Size",
    "ModuleKind",
    "NoteModule",
    "NoteTemplate",
]
