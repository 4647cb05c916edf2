"""
Unit tests for note template models.
"""

from cashu_notes.core.models.geometry import Size
from cashu_notes.core.models.templates import (
    DenominationConfig,
    ModuleKind,
    NoteModule,
    NoteTemplate,
    QRConfig,
    TextConfig,
    parse_module_config,
)


def _template_dict():
    return {
        "id": "classic",
        "name": "Classic",
        "version": "1.0",
        "dimensions": {"width": 80, "height": 140},
        "modules": [
            {
                "id": "amount",
                "type": "denomination",
                "position": {"x": 5, "y": 100},
                "size": {"width": 70, "height": 30},
                "zIndex": 2,
                "config": {"showUnit": False, "color": "#ff9900"},
            },
            {
                "id": "bg",
                "type": "background",
                "position": {"x": 0, "y": 0},
                "size": {"width": 80, "height": 140},
                "zIndex": 0,
                "config": {"type": "solid", "color": "#ffffff"},
            },
            {
                "id": "qr",
                "type": "qr",
                "size": {"width": 50, "height": 50},
                "zIndex": 1,
            },
        ],
    }


class TestParseModuleConfig:
    def test_when_camel_case_keys_then_mapped_to_fields(self):
        config = parse_module_config(
            ModuleKind.TEXT, {"content": "100 sats", "fontSize": 18, "maxLines": 2}
        )

        assert config == TextConfig(content="100 sats", font_size=18, max_lines=2)

    def test_when_unknown_keys_then_ignored(self):
        config = parse_module_config(ModuleKind.QR, {"codeColor": "#000", "errorLevel": "H"})

        assert isinstance(config, QRConfig)
        assert config.code_color == "#000"


class TestNoteTemplate:
    def test_when_from_dict_then_modules_sorted_by_z_index(self):
        template = NoteTemplate.from_dict(_template_dict())

        assert [m.id for m in template.modules] == ["bg", "qr", "amount"]
        assert template.dimensions == Size(80, 140)

    def test_when_module_has_no_position_then_defaults_to_origin(self):
        template = NoteTemplate.from_dict(_template_dict())
        qr = template.modules_of(ModuleKind.QR)[0]

        assert (qr.x, qr.y) == (0.0, 0.0)
        assert qr.config == QRConfig()

    def test_when_module_config_given_then_typed_by_kind(self):
        template = NoteTemplate.from_dict(_template_dict())
        (amount,) = template.modules_of(ModuleKind.DENOMINATION)

        assert isinstance(amount, NoteModule)
        assert amount.config == DenominationConfig(color="#ff9900", show_unit=False)
        assert amount.visible
