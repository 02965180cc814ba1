"""
Edit Ledger: sparse per-pixel overrides of a map raster.

Each entry maps a map-image coordinate to an override RGBA quad whose
decoded UV replaces the map pixel's own encoding during compositing.
Entries are only ever added or overwritten; there is no removal.

Classes:
    EditLedger: Coordinate -> override quad store
"""

import logging
from typing import Dict, Iterator, Optional, Tuple

from UVR_Libs.RasterLib.raster_models import ImageCoordinate, RgbaQuad, validate_quad

logger = logging.getLogger(__name__)


def _as_coordinate(coord) -> ImageCoordinate:
    x, y = coord
    if isinstance(x, bool) or isinstance(y, bool):
        raise TypeError(f"Coordinate components must be ints, got {coord!r}")
    if int(x) != x or int(y) != y:
        raise TypeError(f"Coordinate components must be integral, got {coord!r}")
    if x < 0 or y < 0:
        raise ValueError(f"Coordinate must be non-negative, got {coord!r}")
    return ImageCoordinate(int(x), int(y))


class EditLedger:
    """
    Sparse overlay of override quads keyed by map coordinate.

    Example:
        >>> ledger = EditLedger()
        >>> ledger.put((0, 0), (3, 4, 0, 255))
        >>> ledger.get((0, 0))
        (3, 4, 0, 255)
        >>> ledger.get((1, 0)) is None
        True
    """

    def __init__(self):
        """Initialize an empty ledger."""
        self._edits: Dict[ImageCoordinate, RgbaQuad] = {}

    def put(self, coord: Tuple[int, int], quad: RgbaQuad) -> None:
        """
        Insert or overwrite the override for ``coord``.

        Args:
            coord: Map coordinate (x, y), non-negative ints
            quad: Override RGBA quad

        Raises:
            ValueError: If the coordinate is negative or the quad is invalid
            TypeError: If the coordinate is not integral
        """
        key = _as_coordinate(coord)
        self._edits[key] = validate_quad(quad)
        logger.debug(f"Ledger entry {key} -> {self._edits[key]}")

    def get(self, coord: Tuple[int, int]) -> Optional[RgbaQuad]:
        return self._edits.get(ImageCoordinate(*coord))

    def items(self) -> Iterator[Tuple[ImageCoordinate, RgbaQuad]]:
        """Iterate (coordinate, quad) pairs in arbitrary order."""
        return iter(list(self._edits.items()))

    def __iter__(self) -> Iterator[ImageCoordinate]:
        return iter(list(self._edits))

    def __len__(self) -> int:
        return len(self._edits)

    def __contains__(self, coord) -> bool:
        return ImageCoordinate(*coord) in self._edits

    def __repr__(self) -> str:
        return f"EditLedger({len(self._edits)} edits)"
