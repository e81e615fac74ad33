"""Unit tests for the command-line interface."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from conscript import __version__
from conscript.cli.app import app

runner = CliRunner()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Project file with glyphs for 'a' and 'b' and unrelated data."""
    path = tmp_path / "project.json"
    document = {
        "name": "Test Language",
        "lexicon": [{"word": "ab"}],
        "scriptConfig": {
            "glyphs": [
                {
                    "char": "a",
                    "pua": "\ue061",
                    "strokes": [
                        {"id": "s1", "type": "path", "d": "M 0 0 L 200 0", "strokeWidth": 10},
                    ],
                    "viewWidth": 200,
                },
                {"char": "b", "pua": "\ue062", "strokes": [], "viewWidth": 400},
            ],
            "direction": "ltr",
            "spacingMode": "mono",
        },
    }
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


class TestVersion:
    """Tests for the --version option."""

    def test_version(self) -> None:
        """Test version output."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestRender:
    """Tests for the render command."""

    def test_render_json(self, project: Path) -> None:
        """Test the JSON layout tree."""
        result = runner.invoke(app, ["render", str(project), "ab?", "--json"])
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert data["direction"] == "ltr"
        kinds = [cell["kind"] for cell in data["lines"][0]["cells"]]
        assert kinds == ["glyph", "glyph", "notdef"]

    def test_render_overrides(self, project: Path) -> None:
        """Test direction and spacing overrides apply to this rendering only."""
        result = runner.invoke(
            app,
            ["render", str(project), "a\\nb", "-d", "ttb-rtl", "-s", "proportional", "--json"],
        )
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert data["direction"] == "ttb-rtl"
        assert data["spacing_mode"] == "proportional"
        assert len(data["lines"]) == 2
        assert data["lines"][0]["cells"][0]["advance"] == pytest.approx(0.5)

        stored = json.loads(project.read_text(encoding="utf-8"))
        assert stored["scriptConfig"]["direction"] == "ltr"

    def test_render_tree(self, project: Path) -> None:
        """Test the human-readable layout tree."""
        result = runner.invoke(app, ["render", str(project), "ab"])
        assert result.exit_code == 0
        assert "Layout" in result.output
        assert "Line 1" in result.output

    def test_invalid_direction(self, project: Path) -> None:
        """Test unknown directions are reported."""
        result = runner.invoke(app, ["render", str(project), "a", "--direction", "sideways"])
        assert result.exit_code == 1
        assert "Invalid direction" in result.output

    def test_missing_project(self, tmp_path: Path) -> None:
        """Test a missing project file is reported."""
        result = runner.invoke(app, ["render", str(tmp_path / "nope.json"), "a"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_broken_project(self, tmp_path: Path) -> None:
        """Test an unreadable project is reported."""
        path = tmp_path / "broken.json"
        path.write_text("[1, 2", encoding="utf-8")
        result = runner.invoke(app, ["render", str(path), "a"])
        assert result.exit_code == 1
        assert "Could not load project" in result.output


class TestGlyphs:
    """Tests for the glyphs command."""

    def test_list_glyphs(self, project: Path) -> None:
        """Test the glyph table."""
        result = runner.invoke(app, ["glyphs", str(project)])
        assert result.exit_code == 0
        assert "U+E061" in result.output
        assert "2 glyphs" in result.output

    def test_glyph_detail(self, project: Path) -> None:
        """Test the layer listing of one glyph."""
        result = runner.invoke(app, ["glyphs", str(project), "--char", "a"])
        assert result.exit_code == 0
        assert "1 subpaths" in result.output

    def test_missing_glyph(self, project: Path) -> None:
        """Test an unknown glyph is reported."""
        result = runner.invoke(app, ["glyphs", str(project), "--char", "z"])
        assert result.exit_code == 1
        assert "not found" in result.output


class TestConfigure:
    """Tests for the configure command."""

    def test_configure_writes_project(self, project: Path) -> None:
        """Test direction and spacing are saved without touching other data."""
        result = runner.invoke(
            app, ["configure", str(project), "--direction", "rtl", "--spacing", "proportional"]
        )
        assert result.exit_code == 0

        document = json.loads(project.read_text(encoding="utf-8"))
        assert document["scriptConfig"]["direction"] == "rtl"
        assert document["scriptConfig"]["spacingMode"] == "proportional"
        assert document["name"] == "Test Language"
        assert len(document["scriptConfig"]["glyphs"]) == 2

    def test_toggle_spacing(self, project: Path) -> None:
        """Test toggling the stored spacing mode."""
        result = runner.invoke(app, ["configure", str(project), "--toggle-spacing", "-q"])
        assert result.exit_code == 0
        document = json.loads(project.read_text(encoding="utf-8"))
        assert document["scriptConfig"]["spacingMode"] == "proportional"

    def test_nothing_to_configure(self, project: Path) -> None:
        """Test configure without options is an error."""
        result = runner.invoke(app, ["configure", str(project)])
        assert result.exit_code == 1
        assert "Nothing to configure" in result.output

    def test_invalid_spacing(self, project: Path) -> None:
        """Test unknown spacing modes leave the project untouched."""
        before = project.read_text(encoding="utf-8")
        result = runner.invoke(app, ["configure", str(project), "--spacing", "wide"])
        assert result.exit_code == 1
        assert project.read_text(encoding="utf-8") == before
