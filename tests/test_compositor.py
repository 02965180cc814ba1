"""
Unit tests for compositor module.

Tests map decoding, ledger precedence, clamping and the scenario rasters.
"""

import numpy as np
import pytest

from UVR_Libs.errors import CompositorInputMissing
from UVR_Libs.RasterLib.raster_models import RasterBuffer
from UVR_Libs.RasterLib.uv_encoding import decode_uv
from UVR_Libs.RemapLib.compositor import composite, resolve_texture_coordinates
from UVR_Libs.RemapLib.edit_ledger import EditLedger

from raster_helpers import make_raster


class TestCompositeScenarios:
    """The worked examples for the 2x2 map and texture."""

    def test_map_encoding_selects_texture_pixel(self, scenario_map, scenario_texture):
        """With an empty ledger, (0, 0) should sample texture (1, 1)."""
        output = composite(scenario_map, EditLedger(), scenario_texture)
        assert output.pixel_at(0, 0) == (9, 9, 9, 255)

    def test_ledger_overrides_map_encoding(self, scenario_map, scenario_texture):
        """An edit pointing at texture (0, 0) should win over the map."""
        ledger = EditLedger()
        ledger.put((0, 0), (0, 0, 0, 255))

        output = composite(scenario_map, ledger, scenario_texture)

        assert output.pixel_at(0, 0) == (1, 1, 1, 255)

    def test_unedited_pixels_follow_map(self, scenario_map, scenario_texture):
        """Every other pixel should still follow the map's own encoding."""
        ledger = EditLedger()
        ledger.put((0, 0), (0, 0, 0, 255))

        output = composite(scenario_map, ledger, scenario_texture)

        assert output.pixel_at(1, 0) == (1, 1, 1, 255)   # (0, 0)
        assert output.pixel_at(0, 1) == (2, 2, 2, 255)   # (1, 0)
        assert output.pixel_at(1, 1) == (3, 3, 3, 255)   # (0, 1)


class TestCompositeProperties:
    """General properties of composite."""

    def test_output_has_map_dimensions(self, gradient_texture):
        """Output size should equal the map size, not the texture size."""
        map_raster = RasterBuffer(width=5, height=7)
        output = composite(map_raster, EditLedger(), gradient_texture)
        assert output.size == (5, 7)

    def test_is_deterministic(self, scenario_map, scenario_texture):
        """Two runs with the same inputs should be byte-identical."""
        ledger = EditLedger()
        ledger.put((1, 1), (1, 0, 0, 255))

        first = composite(scenario_map, ledger, scenario_texture)
        second = composite(scenario_map, ledger, scenario_texture)

        assert first.to_bytes() == second.to_bytes()

    def test_returns_fresh_output(self, scenario_map, scenario_texture):
        """Each call should allocate a new raster independent of the texture."""
        first = composite(scenario_map, None, scenario_texture)
        second = composite(scenario_map, None, scenario_texture)

        first.set_pixel(0, 0, (0, 0, 0, 0))

        assert second.pixel_at(0, 0) == (9, 9, 9, 255)
        assert scenario_texture.pixel_at(1, 1) == (9, 9, 9, 255)

    def test_copies_alpha_channel(self, gradient_texture):
        """All four texture channels should be copied."""
        map_raster = make_raster([[(3, 2, 0, 0)]])
        output = composite(map_raster, EditLedger(), gradient_texture)
        assert output.pixel_at(0, 0) == (30, 20, 7, 203)

    def test_uses_max_of_green_and_blue(self, gradient_texture):
        """v should come from the larger of green and blue."""
        map_raster = make_raster([[(1, 0, 2, 255), (1, 2, 1, 255)]])
        output = composite(map_raster, EditLedger(), gradient_texture)
        assert output.pixel_at(0, 0) == gradient_texture.pixel_at(1, 2)
        assert output.pixel_at(1, 0) == gradient_texture.pixel_at(1, 2)

    def test_clamps_large_coordinates(self, gradient_texture):
        """Coordinates past the texture edge should clamp to the last pixel."""
        map_raster = make_raster([[(255, 255, 255, 255), (2, 200, 0, 255)]])
        output = composite(map_raster, EditLedger(), gradient_texture)
        assert output.pixel_at(0, 0) == gradient_texture.pixel_at(3, 2)
        assert output.pixel_at(1, 0) == gradient_texture.pixel_at(2, 2)

    def test_sample_indices_stay_in_bounds(self):
        """Resolved indices should lie inside the texture for every byte value."""
        values = np.arange(256, dtype=np.uint8)
        pixels = np.zeros((16, 16, 4), dtype=np.uint8)
        pixels[..., 0] = values.reshape(16, 16)
        pixels[..., 2] = values[::-1].reshape(16, 16)
        map_raster = RasterBuffer(width=16, height=16, pixels=pixels)
        texture = RasterBuffer(width=3, height=2)
        ledger = EditLedger()
        ledger.put((0, 0), (255, 255, 255, 255))

        tex_x, tex_y = resolve_texture_coordinates(map_raster, ledger, texture)

        assert tex_x.min() >= 0 and tex_x.max() < texture.width
        assert tex_y.min() >= 0 and tex_y.max() < texture.height

    def test_clamping_leaves_map_untouched(self, scenario_map):
        """Clamping indices in place must not write through to the map pixels."""
        before = scenario_map.copy()
        texture = RasterBuffer(width=1, height=1)

        tex_x, tex_y = resolve_texture_coordinates(scenario_map, EditLedger(), texture)

        assert tex_x.dtype == np.intp and tex_y.dtype == np.intp
        assert not np.shares_memory(tex_x, scenario_map.pixels)
        assert not tex_x.any() and not tex_y.any()
        assert scenario_map.equals(before)

    def test_override_precedence_for_every_edit(self, gradient_texture):
        """Edited pixels should equal the texture sampled at the clamped override UV."""
        map_raster = RasterBuffer.filled(4, 4, (0, 0, 0, 255))
        ledger = EditLedger()
        overrides = {(0, 0): (3, 1, 0, 255), (2, 3): (9, 0, 2, 255), (3, 3): (1, 0, 1, 255)}
        for coord, quad in overrides.items():
            ledger.put(coord, quad)

        output = composite(map_raster, ledger, gradient_texture)

        for (x, y), quad in overrides.items():
            u, v = decode_uv(quad)
            expected = gradient_texture.pixel_at(
                min(u, gradient_texture.width - 1),
                min(v, gradient_texture.height - 1),
            )
            assert output.pixel_at(x, y) == expected

    def test_ignores_edits_outside_map(self, scenario_map, scenario_texture):
        """Ledger entries beyond the map extent should not affect the output."""
        ledger = EditLedger()
        ledger.put((10, 10), (0, 0, 0, 255))

        output = composite(scenario_map, ledger, scenario_texture)

        assert output.equals(composite(scenario_map, EditLedger(), scenario_texture))


class TestCompositeMissingInputs:
    """Tests for absent map or texture."""

    def test_missing_map_raises(self, scenario_texture):
        with pytest.raises(CompositorInputMissing, match="map"):
            composite(None, EditLedger(), scenario_texture)

    def test_missing_texture_raises(self, scenario_map):
        with pytest.raises(CompositorInputMissing, match="texture"):
            composite(scenario_map, EditLedger(), None)
