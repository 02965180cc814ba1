"""
RemapLib - Core remapping engine

This module provides the edit ledger, the compositor and the exporter
for the UV Remap project.
"""

from UVR_Libs.RemapLib.edit_ledger import EditLedger
from UVR_Libs.RemapLib.compositor import composite, resolve_texture_coordinates
from UVR_Libs.RemapLib.exporter import bake, export_map, export_map_bytes

__all__ = [
    "EditLedger",
    "composite",
    "resolve_texture_coordinates",
    "bake",
    "export_map",
    "export_map_bytes",
]
