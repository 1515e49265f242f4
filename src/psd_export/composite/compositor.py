"""
Group compositor.

Renders the visible leaves of a group into one raster. Leaves are painted in
document order, later leaves over earlier ones, each at its offset inside the
union bounding box with its opacity as global alpha::

    from psd_export.composite import composite

    data = composite(leaves)  # PNG bytes, or None when nothing to draw

No blend mode other than alpha-over is applied.
"""

import logging
from typing import Any, Iterable, Optional, Sequence

from psd_export.api.document import read_bbox
from psd_export.api.layers import BBox, LayerTreeNode
from psd_export.api.protocols import CanvasFactory
from psd_export.composite.canvas import PILCanvas
from psd_export.encoders.pil_io import load_raster
from psd_export.errors import CompositeLoadError, RasterLoadError

logger = logging.getLogger(__name__)


def normalize_opacity(value: Optional[float]) -> float:
    """
    Opacity as a [0, 1] alpha.

    Values above 1 are on the 0-255 scale; values in [0, 1] are already
    alpha. `None` means fully opaque.
    """
    if value is None:
        return 1.0
    value = float(value)
    if value > 1:
        value = value / 255.0
    return max(0.0, min(1.0, value))


def leaf_bounds(leaves: Iterable[Any]) -> Optional[BBox]:
    """Union box of the leaves with positive area."""
    return BBox.union(box for box in map(read_bbox, leaves) if box is not None)


def composite(
    leaves: Sequence[Any],
    bounds: Optional[BBox] = None,
    canvas_factory: CanvasFactory = PILCanvas,
) -> Optional[bytes]:
    """
    Composite leaves and return PNG bytes.

    :param leaves: visible leaves in document order. Each exposes ``left``,
        ``top``, ``right``, ``bottom``, ``opacity`` and ``raster``.
    :param bounds: output box; defaults to :py:func:`leaf_bounds`.
    :param canvas_factory: callable ``(width, height)`` returning a
        :py:class:`~psd_export.api.protocols.Canvas`.
    :return: encoded image, or `None` when the box is empty.
    """
    if bounds is None:
        bounds = leaf_bounds(leaves)
    if bounds is None or bounds.is_empty:
        return None

    canvas = canvas_factory(bounds.width, bounds.height)
    for leaf in leaves:
        box = read_bbox(leaf)
        if box is None or box.is_empty:
            continue
        if getattr(leaf, "raster", None) is None:
            continue
        try:
            image = _load_leaf(leaf)
        except CompositeLoadError as e:
            logger.warning("Skipping layer %r in composite: %s", _name(leaf), e)
            continue
        offset = (box.left - bounds.left, box.top - bounds.top)
        alpha = normalize_opacity(getattr(leaf, "opacity", None))
        logger.debug("Drawing %r at %s alpha=%.3f", _name(leaf), offset, alpha)
        canvas.draw(image, offset, alpha)
    return canvas.encode("png")


def _load_leaf(leaf: Any) -> Any:
    try:
        return load_raster(leaf.raster)
    except RasterLoadError as e:
        raise CompositeLoadError(str(e)) from e


def _name(leaf: Any) -> str:
    return getattr(leaf, "name", "") or ""


def collect_visible_layers(
    node: LayerTreeNode, hidden: Iterable[int] = frozenset()
) -> list[Any]:
    """
    Leaf payloads below ``node`` that are not in the hidden index set.

    A hidden group hides everything below it.
    """
    hidden = frozenset(hidden)
    result: list[Any] = []

    def _collect(current: LayerTreeNode) -> None:
        if current.index is not None and current.index in hidden:
            return
        if current.is_group:
            for child in current.children:
                _collect(child)
        elif current.layer is not None and current.layer.raster is not None:
            result.append(current.layer)

    _collect(node)
    return result


def render_group_preview(
    node: LayerTreeNode,
    hidden: Iterable[int] = frozenset(),
    canvas_factory: CanvasFactory = PILCanvas,
) -> Optional[bytes]:
    """
    Re-render a group of the layer tree, leaving out hidden indices.

    :return: PNG bytes, or `None` when ``node`` is not a group or nothing
        visible is left.
    """
    if not node.is_group or not node.children:
        return None
    layers = collect_visible_layers(node, hidden)
    if not layers:
        return None
    return composite(layers, canvas_factory=canvas_factory)
