"""
Unit tests for exporter module.

Tests baking ledger edits into the map and writing the edited map file.
"""

import tempfile
from pathlib import Path

import pytest

from UVR_Libs.RasterLib.image_codec import decode_image
from UVR_Libs.RasterLib.raster_models import RasterBuffer
from UVR_Libs.RemapLib.compositor import composite
from UVR_Libs.RemapLib.edit_ledger import EditLedger
from UVR_Libs.RemapLib.exporter import bake, export_map, export_map_bytes


class TestBake:
    """Tests for bake function."""

    def test_writes_quads_verbatim(self, scenario_map):
        """Every ledger quad should appear unchanged in the baked map."""
        ledger = EditLedger()
        ledger.put((0, 0), (0, 0, 0, 255))
        ledger.put((1, 1), (5, 6, 7, 8))

        baked = bake(scenario_map, ledger)

        assert baked.pixel_at(0, 0) == (0, 0, 0, 255)
        assert baked.pixel_at(1, 1) == (5, 6, 7, 8)
        assert baked.pixel_at(1, 0) == scenario_map.pixel_at(1, 0)

    def test_leaves_source_untouched(self, scenario_map):
        """Baking should work on a copy."""
        original = scenario_map.copy()
        ledger = EditLedger()
        ledger.put((0, 0), (0, 0, 0, 0))

        bake(scenario_map, ledger)

        assert scenario_map.equals(original)

    def test_skips_out_of_bounds_edits(self, scenario_map):
        """Edits outside the map should be ignored."""
        ledger = EditLedger()
        ledger.put((2, 0), (0, 0, 0, 0))

        assert bake(scenario_map, ledger).equals(scenario_map)


class TestExportRoundTrip:
    """Baked exports should reproduce the edited composite."""

    def test_export_then_composite_with_empty_ledger(self, gradient_texture):
        """Re-decoded export + empty ledger should equal original map + ledger."""
        map_raster = RasterBuffer.filled(3, 3, (1, 1, 0, 255))
        ledger = EditLedger()
        ledger.put((0, 0), (3, 2, 0, 255))
        ledger.put((2, 1), (0, 0, 0, 255))

        expected = composite(map_raster, ledger, gradient_texture)
        reloaded = decode_image(export_map_bytes(map_raster, ledger))

        assert composite(reloaded, EditLedger(), gradient_texture).equals(expected)


class TestExportMap:
    """Tests for export_map function."""

    def test_writes_edited_map_png(self, scenario_map):
        """Should write edited-map.png into the directory."""
        ledger = EditLedger()
        ledger.put((1, 0), (1, 1, 0, 255))

        with tempfile.TemporaryDirectory() as tmpdir:
            saved = export_map(scenario_map, ledger, Path(tmpdir))

            assert saved.name == "edited-map.png"
            assert saved.parent == Path(tmpdir)
            assert decode_image(saved.read_bytes()).pixel_at(1, 0) == (1, 1, 0, 255)

    def test_same_name_on_every_export(self, scenario_map):
        """Repeated exports should overwrite the same deterministic file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            first = export_map(scenario_map, EditLedger(), Path(tmpdir))
            second = export_map(scenario_map, EditLedger(), Path(tmpdir))

            assert first == second
            assert len(list(Path(tmpdir).iterdir())) == 1

    def test_missing_directory_raises(self, scenario_map):
        """Should raise OSError when the directory does not exist."""
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(OSError):
                export_map(scenario_map, EditLedger(), Path(tmpdir) / "missing")

    def test_file_path_raises(self, scenario_map):
        """Should raise OSError when the output path is a file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            file_path = Path(tmpdir) / "file.txt"
            file_path.touch()
            with pytest.raises(OSError):
                export_map(scenario_map, EditLedger(), file_path)
