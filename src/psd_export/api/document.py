"""
Document module.

The decoded document is produced by an external decoder. This module defines
the small read-only surface the tree builder relies on, and plain attrs
classes implementing it for callers that build documents by hand::

    from psd_export.api.document import Document, DocumentNode

    document = Document(
        width=64,
        height=64,
        children=[
            DocumentNode(name="background", right=64, bottom=64, raster=image),
            DocumentNode(name="icons", kind="group", children=[...]),
        ],
    )

Any object exposing the same attributes works, see
:py:class:`DocumentNodeProtocol`. :py:mod:`psd_export.api.psd_io` adapts
``psd_tools`` documents.
"""

import logging
from typing import Any, Optional, Protocol, Sequence, Union

from attrs import define, field

from psd_export.api.layers import BBox

logger = logging.getLogger(__name__)

Raster = Any  # PIL.Image.Image or encoded image bytes.


class DocumentNodeProtocol(Protocol):
    """
    Protocol of a decoded document node.
    """

    name: str
    hidden: bool
    visible: bool
    left: Optional[int]
    top: Optional[int]
    right: Optional[int]
    bottom: Optional[int]
    opacity: Optional[Union[int, float]]
    blend_mode: Optional[str]
    kind: Optional[str]
    raster: Optional[Raster]
    text: Optional[str]
    children: Optional[Sequence["DocumentNodeProtocol"]]


@define(repr=True)
class DocumentNode:
    """
    Decoded layer or group.

    .. py:attribute:: hidden

        Hidden at the source level; the node is not part of the tree at all.

    .. py:attribute:: visible

        Visibility flag. Invisible leaves are kept in the tree but never
        painted into group composites.
    """

    name: str = ""
    kind: Optional[str] = None
    hidden: bool = False
    visible: bool = True
    left: Optional[int] = 0
    top: Optional[int] = 0
    right: Optional[int] = 0
    bottom: Optional[int] = 0
    opacity: Optional[Union[int, float]] = 255
    blend_mode: Optional[str] = "normal"
    raster: Optional[Raster] = field(default=None, repr=False)
    text: Optional[str] = None
    children: Optional[list["DocumentNode"]] = None

    @property
    def bbox(self) -> BBox:
        return BBox(self.left or 0, self.top or 0, self.right or 0, self.bottom or 0)


@define(repr=True)
class Document:
    """
    Decoded document: canvas size and the root forest.
    """

    width: int = 0
    height: int = 0
    children: list[Any] = field(factory=list)


def read_bbox(node: Any) -> Optional[BBox]:
    """
    Read the geometry of a document node, or None when it is malformed.

    ``right`` and ``bottom`` default to ``left`` and ``top`` when absent, so
    a node with only an origin has an empty box.
    """
    left = getattr(node, "left", None)
    top = getattr(node, "top", None)
    if left is None or top is None:
        return None
    right = getattr(node, "right", None)
    bottom = getattr(node, "bottom", None)
    right = left if right is None else right
    bottom = top if bottom is None else bottom
    try:
        return BBox(int(left), int(top), int(right), int(bottom))
    except (TypeError, ValueError):
        logger.debug("Non-numeric geometry on %r", getattr(node, "name", None))
        return None


def node_children(node: Any) -> Sequence[Any]:
    return getattr(node, "children", None) or ()


def is_group(node: Any) -> bool:
    """A node is a group when it has children or carries the group tag."""
    return bool(node_children(node)) or getattr(node, "kind", None) == "group"


def is_hidden(node: Any) -> bool:
    """Hidden at the source level."""
    return getattr(node, "hidden", False) is True


def is_visible(node: Any) -> bool:
    return not is_hidden(node) and getattr(node, "visible", True) is not False
