"""
SessionLib - Session state for UV Remap

This module provides the session-owned image slots and the remap session
that ties loading, editing, compositing and export together.
"""

from UVR_Libs.SessionLib.image_slots import ImageSlot
from UVR_Libs.SessionLib.remap_session import RemapSession

__all__ = [
    "ImageSlot",
    "RemapSession",
]
