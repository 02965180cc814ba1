"""
Pytest configuration and shared fixtures for UV Remap tests.

This module provides the small map/texture rasters used across the
remapping tests.
"""

import pytest

from raster_helpers import make_raster


@pytest.fixture
def scenario_map():
    """
    2x2 map; pixel (0, 0) encodes (u=1, v=1) via r=1, g=1, b=0.

    Returns:
        RasterBuffer
    """
    return make_raster([
        [(1, 1, 0, 255), (0, 0, 0, 255)],
        [(1, 0, 0, 255), (0, 1, 0, 255)],
    ])


@pytest.fixture
def scenario_texture():
    """
    2x2 texture with distinct colors; (0, 0) = (1, 1, 1, 255) and
    (1, 1) = (9, 9, 9, 255).

    Returns:
        RasterBuffer
    """
    return make_raster([
        [(1, 1, 1, 255), (2, 2, 2, 255)],
        [(3, 3, 3, 255), (9, 9, 9, 255)],
    ])


@pytest.fixture
def gradient_texture():
    """
    4x3 texture whose pixel (x, y) is (10*x, 10*y, 7, 200 + x).

    Returns:
        RasterBuffer
    """
    return make_raster([
        [(10 * x, 10 * y, 7, 200 + x) for x in range(4)]
        for y in range(3)
    ])
