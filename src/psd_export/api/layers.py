"""
Layer tree data structures.

The tree builder turns a decoded document into :py:class:`LayerTreeNode`
objects. Leaves carry a :py:class:`Layer` payload; groups carry their
children and, when one was rendered, a composite raster. Every emitted node
has an ``index`` shared with the flat list of exportable entries::

    tree = build_tree(document.children)
    for entry in tree.flat:
        print(entry.index, entry.name)

The structures are frozen after construction; exporters only read them.
"""

import logging
from typing import Any, Iterable, Optional

from attrs import field, frozen

logger = logging.getLogger(__name__)


@frozen
class BBox:
    """Bounding box (left, top, right, bottom) in document pixels."""

    left: int = 0
    top: int = 0
    right: int = 0
    bottom: int = 0

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def offset(self) -> tuple[int, int]:
        return self.left, self.top

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @classmethod
    def union(cls, boxes: Iterable["BBox"]) -> Optional["BBox"]:
        """
        Union of the boxes with positive width and height.

        :return: `None` when no box has content.
        """
        result = None
        for box in boxes:
            if box.is_empty:
                continue
            if result is None:
                result = box
            else:
                result = cls(
                    min(result.left, box.left),
                    min(result.top, box.top),
                    max(result.right, box.right),
                    max(result.bottom, box.bottom),
                )
        return result


def _raster_size(raster: Any) -> Optional[tuple[int, int]]:
    size = getattr(raster, "size", None)
    if isinstance(size, tuple) and len(size) == 2:
        return size
    return None


@frozen
class Layer:
    """
    Leaf payload.

    .. py:attribute:: opacity

        Opacity in [0, 255].

    .. py:attribute:: blend_mode

        Blend mode label. Informational only; compositing is alpha-over.
    """

    name: str
    kind: Optional[str] = None
    visible: bool = True
    opacity: float = 255
    blend_mode: Optional[str] = None
    bbox: BBox = field(factory=BBox)
    raster: Any = field(default=None, repr=False, eq=False)
    text: Optional[str] = None

    @property
    def left(self) -> int:
        return self.bbox.left

    @property
    def top(self) -> int:
        return self.bbox.top

    @property
    def right(self) -> int:
        return self.bbox.right

    @property
    def bottom(self) -> int:
        return self.bbox.bottom

    @property
    def width(self) -> int:
        size = _raster_size(self.raster)
        return size[0] if size else self.bbox.width

    @property
    def height(self) -> int:
        size = _raster_size(self.raster)
        return size[1] if size else self.bbox.height


@frozen
class LayerTreeNode:
    """
    Node of the layer tree.

    .. py:attribute:: path

        Slash separated names from the root to this node.

    .. py:attribute:: raster

        Leaf raster, or the group composite. `None` when nothing to export.
    """

    name: str
    path: str
    is_group: bool = False
    index: Optional[int] = None
    raster: Any = field(default=None, repr=False, eq=False)
    width: int = 0
    height: int = 0
    layer: Optional[Layer] = None
    children: tuple["LayerTreeNode", ...] = field(default=(), converter=tuple)

    def has_raster(self) -> bool:
        return self.raster is not None

    def descendants(self) -> Iterable["LayerTreeNode"]:
        """Pre-order iteration over all nodes below this one."""
        for child in self.children:
            yield child
            yield from child.descendants()


@frozen
class FlatEntry:
    """
    Exportable entry of the flat list.

    Group composites are listed after their children with the
    ``"[Group] "`` name prefix.
    """

    index: int
    name: str
    node: LayerTreeNode = field(repr=False)

    @property
    def raster(self) -> Any:
        return self.node.raster

    @property
    def is_group(self) -> bool:
        return self.node.is_group


@frozen(repr=True)
class LayerTree:
    """
    Result of one tree build.

    .. py:attribute:: children

        Root nodes in document order.

    .. py:attribute:: flat

        Exportable entries in index order.

    .. py:attribute:: count

        Next unused index.
    """

    children: tuple[LayerTreeNode, ...] = field(converter=tuple)
    flat: tuple[FlatEntry, ...] = field(converter=tuple, repr=False)
    count: int = 0

    def __iter__(self):
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)
