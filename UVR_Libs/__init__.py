"""
UVR_Libs - UV Remap Library Modules

This package contains core functionality for the UV Remap project,
organized into specialized sub-packages:

- RasterLib: RGBA raster buffers, the UV channel encoding and the PNG codec
- RemapLib: Edit ledger, compositor and exporter
- ViewerLib: Viewport transform, pixel picking and the selection handshake
- SessionLib: Session-owned image slots and the remap session
"""

__version__ = "0.1.0"
