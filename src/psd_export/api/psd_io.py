"""
psd-tools IO module.

Reads a :py:class:`psd_tools.PSDImage` into the plain
:py:class:`~psd_export.api.document.Document` the tree builder consumes::

    from psd_tools import PSDImage
    from psd_export.api.psd_io import read_document

    document = read_document(PSDImage.open("example.psd"))

Layer pixels are extracted with ``topil()``; nothing is composited here.
"""

import logging
import os
from typing import Any, Union

from psd_export.api.document import Document, DocumentNode

logger = logging.getLogger(__name__)


def open_document(path: Union[str, os.PathLike], **kwargs: Any) -> Document:
    """
    Decode a PSD/PSB file.

    :param path: file name.
    :param kwargs: passed to :py:meth:`psd_tools.PSDImage.open`.
    """
    from psd_tools import PSDImage

    return read_document(PSDImage.open(path, **kwargs))


def read_document(psd: Any) -> Document:
    """Convert a decoded ``PSDImage``."""
    return Document(
        width=psd.width,
        height=psd.height,
        children=[convert_layer(layer) for layer in psd],
    )


def convert_layer(layer: Any) -> DocumentNode:
    """Convert a ``psd_tools`` layer and, for groups, its children."""
    group = layer.is_group()
    left, top, right, bottom = layer.bbox
    node = DocumentNode(
        name=layer.name,
        kind="group" if group else layer.kind,
        hidden=not layer.visible,
        visible=layer.visible,
        left=left,
        top=top,
        right=right,
        bottom=bottom,
        opacity=layer.opacity,
        blend_mode=_blend_mode_label(layer.blend_mode),
        text=getattr(layer, "text", None) if layer.kind == "type" else None,
    )
    if group:
        node.children = [convert_layer(child) for child in layer]
    else:
        node.raster = _extract_pixels(layer)
    return node


def _extract_pixels(layer: Any) -> Any:
    try:
        image = layer.topil()
    except (ValueError, OSError) as e:
        logger.warning("Failed to extract pixels of %r: %s", layer.name, e)
        return None
    if image is None:
        logger.debug("No pixels in %r", layer.name)
        return None
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    return image


def _blend_mode_label(blend_mode: Any) -> str:
    name = getattr(blend_mode, "name", None)
    if name is None:
        return str(blend_mode)
    return name.lower().replace("_", "-")
