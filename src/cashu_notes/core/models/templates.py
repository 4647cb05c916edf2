"""
Module: templates

Purpose:
    Note template model. A template is a stack of modules (QR code, logo,
    text, denomination, background, image) laid out on a note of fixed
    dimensions. Each module kind carries its own config shape; the
    NoteModule.kind tag selects which one.

Key Classes:
    - ModuleKind: Tag for the module variant
    - QRConfig, LogoConfig, TextConfig, DenominationConfig,
      BackgroundConfig, ImageConfig: Per-kind module settings
    - NoteModule: One positioned module
    - NoteTemplate: Complete note side design

Dependencies:
    - core.models.geometry: Size

Used By:
    - templates.loader: Template bundle loading
    - cli: Natural size fallback for artifacts

Note:
    The layout engine only ever reads NoteTemplate.dimensions. Module
    configs are carried through so that bundles round-trip intact.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Optional, Union

from .geometry import Size


class ModuleKind(str, Enum):
    """Kind of note module."""
    QR = "qr"
    LOGO = "logo"
    TEXT = "text"
    DENOMINATION = "denomination"
    BACKGROUND = "background"
    IMAGE = "image"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class QRConfig:
    background_color: Optional[str] = None
    border_color: Optional[str] = None
    code_color: Optional[str] = None


@dataclass(frozen=True, slots=True)
class LogoConfig:
    type: str = "cashu"  # cashu | bitcoin | sats | custom
    url: Optional[str] = None
    color: Optional[str] = None
    opacity: Optional[float] = None


@dataclass(frozen=True, slots=True)
class TextConfig:
    content: str = ""
    font_size: float = 12
    font_family: str = "Helvetica"
    color: str = "#000000"
    align: str = "left"
    max_lines: Optional[int] = None


@dataclass(frozen=True, slots=True)
class DenominationConfig:
    color: str = "#000000"
    background_color: Optional[str] = None
    show_unit: bool = True
    font_size: Optional[float] = None
    font_family: Optional[str] = None


@dataclass(frozen=True, slots=True)
class BackgroundConfig:
    type: str = "solid"  # solid | gradient | image
    color: Optional[str] = None
    image_url: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ImageConfig:
    url: str = ""
    format: Optional[str] = None
    opacity: Optional[float] = None
    fit: str = "contain"


ModuleConfig = Union[
    QRConfig, LogoConfig, TextConfig, DenominationConfig, BackgroundConfig, ImageConfig
]

CONFIG_TYPES: dict[ModuleKind, type] = {
    ModuleKind.QR: QRConfig,
    ModuleKind.LOGO: LogoConfig,
    ModuleKind.TEXT: TextConfig,
    ModuleKind.DENOMINATION: DenominationConfig,
    ModuleKind.BACKGROUND: BackgroundConfig,
    ModuleKind.IMAGE: ImageConfig,
}


def _snake_case(key: str) -> str:
    out = []
    for ch in key:
        if ch.isupper():
            out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out)


def parse_module_config(kind: ModuleKind, data: dict[str, Any]) -> ModuleConfig:
    """
    Build the config object for a module kind.

    Keys may be camelCase (as saved by the browser designer) or
    snake_case. Unknown keys are ignored.

    Args:
        kind: Module kind tag
        data: Raw config mapping

    Returns:
        Config instance of the type registered for ``kind``
    """
    config_type = CONFIG_TYPES[kind]
    known = {f.name for f in fields(config_type)}
    values = {}
    for key, value in data.items():
        name = _snake_case(key)
        if name in known:
            values[name] = value
    return config_type(**values)


@dataclass(frozen=True, slots=True)
class NoteModule:
    """
    A positioned module on a note.

    Attributes:
        id: Module identifier, unique within its template
        kind: Variant tag
        x: Left offset within the note (mm)
        y: Top offset within the note (mm)
        size: Module bounding size (mm)
        z_index: Stacking order, higher draws later
        config: Kind-specific settings
    """

    id: str
    kind: ModuleKind
    x: float
    y: float
    size: Size
    z_index: int
    config: ModuleConfig
    visible: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NoteModule:
        kind = ModuleKind(data["type"])
        position = data.get("position", {})
        return cls(
            id=str(data["id"]),
            kind=kind,
            x=float(position.get("x", 0)),
            y=float(position.get("y", 0)),
            size=Size.from_dict(data["size"]),
            z_index=int(data.get("zIndex", data.get("z_index", 0))),
            config=parse_module_config(kind, data.get("config", {})),
            visible=bool(data.get("visible", True)),
        )


@dataclass(frozen=True, slots=True)
class NoteTemplate:
    """
    One side of a note design.

    Attributes:
        id: Template identifier
        name: Display name
        modules: Modules ordered by z_index
        dimensions: Note size (mm)
        version: Template format version string
    """

    id: str
    name: str
    modules: tuple[NoteModule, ...]
    dimensions: Size
    version: str
    description: Optional[str] = None
    author: Optional[str] = None
    tags: tuple[str, ...] = field(default_factory=tuple)

    def modules_of(self, kind: ModuleKind) -> tuple[NoteModule, ...]:
        """Return the modules with the given kind tag."""
        return tuple(m for m in self.modules if m.kind is kind)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NoteTemplate:
        modules = sorted(
            (NoteModule.from_dict(m) for m in data.get("modules", [])),
            key=lambda m: m.z_index,
        )
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            modules=tuple(modules),
            dimensions=Size.from_dict(data["dimensions"]),
            version=str(data["version"]),
            description=data.get("description"),
            author=data.get("author"),
            tags=tuple(data.get("tags", [])),
        )
