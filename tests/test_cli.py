"""
Tests for the command-line entry point.
"""

import json

import pytest

from cashu_notes import cli
from cashu_notes.core.models.geometry import Size
from cashu_notes.printing import (
    ArrangementMode,
    ConfigurationError,
    PageFormat,
    PrintConfig,
    print_notes,
)


def _config(*argv):
    return cli.build_config(cli.build_parser().parse_args([*argv, "note.svg"]))


class TestBuildConfig:
    def test_when_no_flags_then_defaults(self):
        assert _config() == PrintConfig()

    def test_flags_override_defaults(self):
        config = _config("--double-sided", "--bleed", "3", "--arrangement", "grid",
                         "--no-crop-marks", "--cut-lines")

        assert config.double_sided is True
        assert config.bleed_margin == 3
        assert config.arrangement is ArrangementMode.GRID
        assert config.crop_marks is False
        assert config.cut_lines is True

    def test_when_page_size_then_custom_format(self):
        config = _config("--page-size", "100x150")

        assert config.format is PageFormat.CUSTOM
        assert config.page_size == Size(100, 150)

    def test_when_page_size_malformed_then_raises(self):
        with pytest.raises(ConfigurationError, match="Invalid page size"):
            _config("--page-size", "big")

    def test_when_config_file_then_flags_override_it(self, tmp_path):
        path = tmp_path / "job.json"
        path.write_text(json.dumps({"doubleSided": True, "bleedMargin": 2, "format": "Letter"}))

        config = _config("--config", str(path), "--bleed", "4")

        assert config.double_sided is True
        assert config.format is PageFormat.LETTER
        assert config.bleed_margin == 4

    def test_when_config_file_unreadable_then_raises(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Cannot read config"):
            _config("--config", str(tmp_path / "missing.json"))

    @pytest.mark.parametrize("content", [b"[1, 2]", b"\xff\xfe{}"])
    def test_when_config_file_not_an_object_then_raises(self, tmp_path, content):
        path = tmp_path / "job.json"
        path.write_bytes(content)

        with pytest.raises(ConfigurationError, match="[Cc]onfig"):
            _config("--config", str(path))

    def test_manual_arrangement_not_offered(self):
        with pytest.raises(SystemExit):
            _config("--arrangement", "manual")


class TestLoadArtifacts:
    def test_front_back_pairs(self, tmp_path, svg_factory):
        front = tmp_path / "front.svg"
        back = tmp_path / "back.svg"
        front.write_text(svg_factory(96, 192))
        back.write_text(svg_factory(96, 192))

        (note,) = cli.load_artifacts([f"{front},{back}"], rotation=0)

        assert note.has_back
        assert note.label == "front"
        assert note.rotation == 0
        assert note.natural_size.height == pytest.approx(50.8)

    def test_when_artwork_has_no_size_then_fallback_used(self, tmp_path):
        front = tmp_path / "plain.svg"
        front.write_text("<svg/>")

        (note,) = cli.load_artifacts([str(front)], rotation=90, fallback_size=Size(50, 90))

        assert note.natural_size == Size(50, 90)
        assert not note.has_back


class TestMain:
    @pytest.fixture
    def fake_print(self, monkeypatch, fake_rasterizer):
        def _print(*args, **kwargs):
            return print_notes(*args, rasterizer=fake_rasterizer, **kwargs)

        monkeypatch.setattr(cli, "print_notes", _print)

    def test_when_notes_given_then_pdf_written(self, tmp_path, svg_factory, fake_print, capsys):
        notes = []
        for i in range(4):
            path = tmp_path / f"note{i}.svg"
            path.write_text(svg_factory())
            notes.append(str(path))
        out = tmp_path / "out"
        history = tmp_path / "history.json"

        code = cli.main([*notes, "-o", str(out), "--dpi", "30", "--history", str(history)])

        assert code == 0
        assert len(list(out.glob("cashu-notes-single-*.pdf"))) == 1
        assert "2 pages, 2 sheets" in capsys.readouterr().out
        assert "cashu-notes:prints" in json.loads(history.read_text())

    def test_instructions_printed_on_request(self, tmp_path, svg_factory, fake_print, capsys):
        path = tmp_path / "note.svg"
        path.write_text(svg_factory())

        code = cli.main([str(path), "-o", str(tmp_path), "--dpi", "30",
                         "--double-sided", "--instructions"])

        assert code == 0
        assert "flip on SHORT edge" in capsys.readouterr().out

    def test_when_note_missing_then_error_exit(self, tmp_path, capsys):
        code = cli.main([str(tmp_path / "missing.svg")])

        assert code == 1
        assert "cannot read note artwork" in capsys.readouterr().err

    def test_when_config_invalid_then_error_exit(self, tmp_path, capsys):
        code = cli.main([str(tmp_path / "n.svg"), "--bleed", "-1"])

        assert code == 1
        assert "bleed_margin" in capsys.readouterr().err

    def test_when_saved_config_malformed_then_error_exit(self, tmp_path, capsys):
        config = tmp_path / "job.json"
        config.write_text(json.dumps({"bleedMargin": "five"}))

        code = cli.main([str(tmp_path / "n.svg"), "--config", str(config)])

        assert code == 1
        assert "Invalid numeric print setting" in capsys.readouterr().err

    def test_when_note_not_utf8_then_error_exit(self, tmp_path, capsys):
        path = tmp_path / "latin1.svg"
        path.write_bytes(b'<svg width="96" height="96"><text>\xff</text></svg>')

        code = cli.main([str(path)])

        assert code == 1
        assert "cannot read note artwork" in capsys.readouterr().err
