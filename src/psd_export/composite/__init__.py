"""
Composite module for group previews.

- :py:mod:`psd_export.composite.compositor`: group compositing
- :py:mod:`psd_export.composite.canvas`: Pillow drawing surface
"""

from psd_export.composite.canvas import PILCanvas
from psd_export.composite.compositor import (
    composite,
    leaf_bounds,
    normalize_opacity,
    render_group_preview,
)

__all__ = [
    "PILCanvas",
    "composite",
    "leaf_bounds",
    "normalize_opacity",
    "render_group_preview",
]
