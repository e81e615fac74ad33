"""Unit tests for the project I/O layer.

Tests for ProjectReader, ProjectWriter, and converter functions.
"""

import json
from pathlib import Path

import pytest

from conscript.domain import (
    Glyph,
    GlyphSet,
    LineCap,
    PathGeometry,
    Point,
    RasterLayer,
    ScriptConfig,
    SpacingMode,
    SubPath,
    VectorLayer,
    WritingDirection,
)
from conscript.exceptions import PathDataError, ProjectFormatError, ProjectLoadError
from conscript.io import ProjectReader, ProjectWriter
from conscript.io.converter import (
    decode_alias,
    format_number,
    geometry_to_path_data,
    layer_to_record,
    path_data_to_geometry,
    record_to_glyph,
    record_to_layer,
    record_to_script,
    script_to_record,
)


@pytest.fixture
def script() -> ScriptConfig:
    """Script with one glyph made of a stroke and a reference image."""
    stroke = VectorLayer(
        id="layer-1",
        geometry=PathGeometry(
            subpaths=(
                SubPath(points=(Point(10, 20), Point(30.5, 40))),
                SubPath(points=(Point(0, 0), Point(50, 0), Point(50, 50)), closed=True),
            )
        ),
        stroke_width=12.0,
        cap=LineCap.SQUARE,
        label="Stem",
    )
    image = RasterLayer(id="img-1", image_ref="data:image/png;base64,AAAA", opacity=0.5)
    glyph = Glyph(character="a", alias="\ue061", layers=(image, stroke), bounding_width=50.0)
    return ScriptConfig(
        glyph_set=GlyphSet([glyph]),
        direction=WritingDirection.TTB_RTL,
        spacing_mode=SpacingMode.PROPORTIONAL,
    )


class TestPathData:
    """Tests for SVG path data conversion."""

    def test_format_number(self) -> None:
        """Test lossless coordinate formatting."""
        assert format_number(100.0) == "100"
        assert format_number(-3) == "-3"
        assert format_number(0.1) == "0.1"

    def test_geometry_to_path_data(self) -> None:
        """Test path data uses absolute move-to and line-to commands."""
        geometry = PathGeometry(
            subpaths=(
                SubPath(points=(Point(0, 0), Point(10, 5.5))),
                SubPath(points=(Point(1, 1), Point(2, 1), Point(2, 2)), closed=True),
            )
        )
        assert geometry_to_path_data(geometry) == "M 0 0 L 10 5.5 M 1 1 L 2 1 L 2 2 Z"

    def test_empty_path_data(self) -> None:
        """Test empty geometry and empty path data."""
        assert geometry_to_path_data(PathGeometry()) == ""
        assert path_data_to_geometry("  ").is_empty()

    def test_parse_lines_and_close(self) -> None:
        """Test parsing closes subpaths without duplicating the start point."""
        geometry = path_data_to_geometry("M 0 0 L 10 0 L 10 10 Z M 20 20 L 30 30")

        closed, open_ = geometry.subpaths
        assert closed.closed
        assert closed.points == (Point(0, 0), Point(10, 0), Point(10, 10))
        assert not open_.closed
        assert open_.points == (Point(20, 20), Point(30, 30))

    def test_parse_relative_commands(self) -> None:
        """Test relative and shorthand commands."""
        geometry = path_data_to_geometry("m 10 10 h 20 v 20 l -20 0 z")
        assert geometry.subpaths[0].points == (
            Point(10, 10),
            Point(30, 10),
            Point(30, 30),
            Point(10, 30),
        )

    def test_parse_curves_flattened(self) -> None:
        """Test curves become polylines that end on the curve end point."""
        geometry = path_data_to_geometry("M 0 0 Q 50 100 100 0 C 120 50 180 50 200 0")
        points = geometry.subpaths[0].points

        assert len(points) > 4
        assert points[0] == Point(0, 0)
        assert Point(100, 0) in points
        assert points[-1] == Point(200, 0)
        assert max(p.y for p in points) <= 50.0 + 1e-9

    def test_malformed_path_data(self) -> None:
        """Test malformed data raises PathDataError."""
        with pytest.raises(PathDataError):
            path_data_to_geometry("10 10 20 20")

    def test_closed_subpath_ending_on_start_reads_back(self) -> None:
        """Test a closed subpath whose last point repeats its first keeps that point."""
        geometry = PathGeometry(
            subpaths=(SubPath(points=(Point(0, 0), Point(10, 0), Point(0, 0)), closed=True),)
        )
        data = geometry_to_path_data(geometry)
        assert data == "M 0 0 L 10 0 L 0 0 L 0 0 Z"
        assert path_data_to_geometry(data) == geometry

    def test_closed_shapes_read_back(self) -> None:
        """Test closed subpaths with and without a repeated start point."""
        geometry = PathGeometry(
            subpaths=(
                SubPath(points=(Point(1, 1), Point(1, 1)), closed=True),
                SubPath(points=(Point(5, 5),), closed=True),
                SubPath(points=(Point(0, 0), Point(4, 0), Point(4, 4)), closed=True),
            )
        )
        assert path_data_to_geometry(geometry_to_path_data(geometry)) == geometry

    def test_written_path_data_reads_back(self, script: ScriptConfig) -> None:
        """Test written geometry parses to the same geometry."""
        stroke = script.glyph_set.get("a").layers[1]
        assert isinstance(stroke, VectorLayer)
        data = geometry_to_path_data(stroke.geometry)
        assert path_data_to_geometry(data) == stroke.geometry


class TestRecords:
    """Tests for persisted record conversion."""

    def test_decode_alias(self) -> None:
        """Test both alias encodings."""
        assert decode_alias("\ue061") == "\ue061"
        assert decode_alias("\\uE061") == "\ue061"
        assert decode_alias("\\uZZZZ") is None
        assert decode_alias(None) is None

    def test_stroke_record_shape(self) -> None:
        """Test the persisted keys of a vector stroke."""
        layer = VectorLayer(
            id="layer-1",
            geometry=PathGeometry(subpaths=(SubPath(points=(Point(0, 0), Point(1, 1))),)),
        )
        record = layer_to_record(layer)
        assert record["type"] == "path"
        assert record["d"] == "M 0 0 L 1 1"
        assert record["strokeWidth"] == 15.0
        assert "opacity" not in record

    def test_image_record(self) -> None:
        """Test image strokes keep their placement."""
        layer = record_to_layer(
            {"id": "img", "type": "image", "imageUrl": "ref", "x": 5, "y": 6, "width": 100, "height": 80}
        )
        assert isinstance(layer, RasterLayer)
        assert (layer.x, layer.y, layer.width, layer.height) == (5, 6, 100, 80)
        assert layer.image_ref == "ref"

    def test_unknown_stroke_type(self) -> None:
        """Test unknown stroke types are format errors."""
        with pytest.raises(ProjectFormatError):
            record_to_layer({"id": "x", "type": "video"})

    def test_legacy_glyph_record(self) -> None:
        """Test glyph-level images, escaped aliases and missing widths."""
        glyph = record_to_glyph(
            {
                "char": "b",
                "pua": "\\uE062",
                "imageUrl": "data:image/png;base64,BBBB",
                "strokes": [{"id": "s1", "d": "M 0 0 L 120 0"}],
            }
        )
        assert glyph.alias == "\ue062"
        assert isinstance(glyph.layers[0], RasterLayer)
        assert glyph.layers[0].image_ref == "data:image/png;base64,BBBB"
        assert glyph.layers[0].opacity == 0.8
        # The legacy image spans the canvas, so it dominates the width
        assert glyph.bounding_width == 400.0

    def test_glyph_without_strokes_gets_base_layer(self) -> None:
        """Test an empty glyph record restores one empty base layer."""
        glyph = record_to_glyph({"char": "c", "strokes": []})
        assert len(glyph.layers) == 1
        assert glyph.layers[0].is_empty()
        assert glyph.alias == "\ue063"
        assert glyph.bounding_width == 50.0

    def test_invalid_char(self) -> None:
        """Test glyph records need exactly one character."""
        with pytest.raises(ProjectFormatError):
            record_to_glyph({"char": "ab", "strokes": []})

    def test_legacy_direction(self) -> None:
        """Test the bare ttb direction of older projects is right-to-left columns."""
        script = record_to_script({"glyphs": [], "direction": "ttb"})
        assert script.direction is WritingDirection.TTB_RTL
        assert script.spacing_mode is SpacingMode.MONO

    def test_invalid_spacing(self) -> None:
        """Test unknown spacing modes are format errors."""
        with pytest.raises(ProjectFormatError):
            record_to_script({"glyphs": [], "spacingMode": "wide"})

    def test_script_record_round_trip(self, script: ScriptConfig) -> None:
        """Test a script survives conversion to records and back."""
        assert record_to_script(script_to_record(script)) == script


class TestProjectReader:
    """Tests for ProjectReader class."""

    def test_init(self) -> None:
        """Test ProjectReader initialization."""
        path = Path("project.json")
        reader = ProjectReader(path)
        assert reader._project_path == path
        assert reader._script is None

    def test_load_nonexistent_file(self, tmp_path: Path) -> None:
        """Test loading a nonexistent file raises FileNotFoundError."""
        reader = ProjectReader(tmp_path / "missing.json")
        with pytest.raises(FileNotFoundError):
            reader.load()

    def test_script_before_load(self) -> None:
        """Test accessing the script before loading raises RuntimeError."""
        reader = ProjectReader(Path("project.json"))
        with pytest.raises(RuntimeError, match="Project not loaded"):
            _ = reader.script

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Test invalid JSON raises ProjectLoadError."""
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ProjectLoadError):
            ProjectReader(path).load()

    def test_bad_path_data_is_load_error(self, tmp_path: Path) -> None:
        """Test conversion errors surface as ProjectLoadError."""
        path = tmp_path / "bad.json"
        document = {"scriptConfig": {"glyphs": [{"char": "a", "strokes": [{"d": "5 5"}]}]}}
        path.write_text(json.dumps(document), encoding="utf-8")
        with pytest.raises(ProjectLoadError):
            ProjectReader(path).load()

    def test_project_without_script(self, tmp_path: Path) -> None:
        """Test a project without scriptConfig yields an empty script."""
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"lexicon": []}), encoding="utf-8")
        with ProjectReader(path) as reader:
            assert reader.glyph_count == 0
            assert reader.script.direction is WritingDirection.LTR

    def test_bare_script_document(self, tmp_path: Path) -> None:
        """Test a document that is itself a script configuration."""
        path = tmp_path / "script.json"
        path.write_text(
            json.dumps({"glyphs": [{"char": "a", "strokes": []}], "direction": "rtl"}),
            encoding="utf-8",
        )
        with ProjectReader(path) as reader:
            assert reader.glyph_count == 1
            assert reader.script.direction is WritingDirection.RTL


class TestProjectWriter:
    """Tests for ProjectWriter class."""

    def test_save_and_reload(self, tmp_path: Path, script: ScriptConfig) -> None:
        """Test a saved project loads back to the same script."""
        path = tmp_path / "project.json"
        ProjectWriter().save(script, path)

        with ProjectReader(path) as reader:
            assert reader.script == script

    def test_preserves_other_keys(self, tmp_path: Path, script: ScriptConfig) -> None:
        """Test saving only replaces the scriptConfig member."""
        path = tmp_path / "project.json"
        path.write_text(
            json.dumps({"name": "Elvish", "lexicon": [{"word": "mae"}], "scriptConfig": {}}),
            encoding="utf-8",
        )

        ProjectWriter().save(script, path)

        document = json.loads(path.read_text(encoding="utf-8"))
        assert document["name"] == "Elvish"
        assert document["lexicon"] == [{"word": "mae"}]
        assert document["scriptConfig"]["direction"] == "ttb-rtl"
        assert document["scriptConfig"]["spacingMode"] == "proportional"
        assert document["scriptConfig"]["glyphs"][0]["char"] == "a"

    def test_build_document(self, script: ScriptConfig) -> None:
        """Test the document built for a new project."""
        document = ProjectWriter().build_document(script)
        assert list(document) == ["scriptConfig"]
