"""
Layer tree builder.

:py:func:`build_tree` walks the decoded document once and returns both the
hierarchical tree and the flat list of exportable entries. Indices come from
a single counter threaded through the walk in post-order: a group's children
take their indices before the group itself. The flat list is appended in the
same walk, so both views always agree on every index::

    from psd_export.api.tree import build_tree

    tree = build_tree(document.children)
    for node in tree:
        print(node.index, node.path)
    for entry in tree.flat:
        print(entry.index, entry.name)

Groups with visible content get a composite raster unless
:py:func:`should_composite` says the composite would duplicate a leaf.
"""

import logging
from collections import Counter
from typing import Any, Callable, Iterable, Iterator, Optional, Sequence

from psd_export.api.document import (
    is_group,
    is_hidden,
    is_visible,
    node_children,
    read_bbox,
)
from psd_export.api.layers import (
    BBox,
    FlatEntry,
    Layer,
    LayerTree,
    LayerTreeNode,
)
from psd_export.composite.compositor import composite as composite_leaves
from psd_export.constants import GROUP_ENTRY_PREFIX, LayerCategory, LayerKind

logger = logging.getLogger(__name__)

Compositor = Callable[[Sequence[Any], BBox], Optional[Any]]
Policy = Callable[[Sequence[Any]], bool]


def should_composite(leaves: Sequence[Any]) -> bool:
    """
    Dedup policy for group composites.

    A group whose only visible leaf already has its own raster would export
    the same picture twice, so it gets no composite. A lone leaf without a
    raster (a text layer, for instance) still yields a composite.
    """
    if len(leaves) > 1:
        return True
    if len(leaves) == 1:
        return getattr(leaves[0], "raster", None) is None
    return False


def has_content(node: Any, bbox: Optional[BBox]) -> bool:
    """A leaf is worth emitting when it has a raster, any extent, or text."""
    if getattr(node, "raster", None) is not None:
        return True
    if getattr(node, "text", None):
        return True
    return bbox is not None and (bbox.width > 0 or bbox.height > 0)


def collect_visible_leaves(children: Iterable[Any]) -> list[Any]:
    """
    Visible leaves below a group in document order.

    Nodes hidden or invisible at any depth are skipped with their subtree.
    """
    result: list[Any] = []
    for child in children:
        if not is_visible(child):
            continue
        if is_group(child):
            result.extend(collect_visible_leaves(node_children(child)))
            continue
        bbox = read_bbox(child)
        if bbox is not None and has_content(child, bbox):
            result.append(child)
    return result


def build_tree(
    children: Sequence[Any],
    parent_path: str = "",
    start: int = 0,
    compositor: Optional[Compositor] = None,
    policy: Policy = should_composite,
) -> LayerTree:
    """
    Build the layer tree and the flat entry list in one pass.

    :param children: root nodes of the decoded document.
    :param parent_path: path prefix of the roots.
    :param start: first index to assign.
    :param compositor: callable ``(leaves, bounds)`` returning a raster;
        defaults to :py:func:`psd_export.composite.composite`.
    :param policy: dedup policy, see :py:func:`should_composite`.
    :return: :py:class:`~psd_export.api.layers.LayerTree`.
    """
    if compositor is None:
        compositor = composite_leaves
    nodes, flat, count = _build(children, parent_path, start, compositor, policy)
    logger.debug(
        "Built %d root nodes, %d indices, %d entries", len(nodes), count, len(flat)
    )
    return LayerTree(nodes, flat, count)


def _build(
    children: Sequence[Any],
    parent_path: str,
    next_index: int,
    compositor: Compositor,
    policy: Policy,
) -> tuple[list[LayerTreeNode], list[FlatEntry], int]:
    nodes: list[LayerTreeNode] = []
    flat: list[FlatEntry] = []

    for child in children:
        if is_hidden(child):
            logger.debug("Skipping hidden node %r", getattr(child, "name", None))
            continue

        name = getattr(child, "name", None) or ""
        path = "%s/%s" % (parent_path, name) if parent_path else name

        if is_group(child):
            sub_nodes, sub_flat, next_index = _build(
                node_children(child), path, next_index, compositor, policy
            )
            raster, bounds = _group_composite(child, compositor, policy)
            node = LayerTreeNode(
                name=name,
                path=path,
                is_group=True,
                index=next_index,
                raster=raster,
                width=bounds.width if bounds else 0,
                height=bounds.height if bounds else 0,
                children=sub_nodes,
            )
            next_index += 1
            nodes.append(node)
            flat.extend(sub_flat)
            if raster is not None:
                flat.append(FlatEntry(node.index, GROUP_ENTRY_PREFIX + name, node))
            continue

        bbox = read_bbox(child)
        if bbox is None:
            logger.warning("Skipping layer %r with missing geometry", name)
            continue
        if not name or not has_content(child, bbox):
            logger.debug("Dropping empty layer %r", name)
            continue

        layer = _make_layer(child, name, bbox)
        node = LayerTreeNode(
            name=name,
            path=path,
            is_group=False,
            index=next_index,
            raster=layer.raster,
            width=layer.width,
            height=layer.height,
            layer=layer,
        )
        next_index += 1
        nodes.append(node)
        if node.raster is not None:
            flat.append(FlatEntry(node.index, name, node))

    return nodes, flat, next_index


def _group_composite(
    group: Any, compositor: Compositor, policy: Policy
) -> tuple[Optional[Any], Optional[BBox]]:
    leaves = collect_visible_leaves(node_children(group))
    bounds = BBox.union(
        box for box in map(read_bbox, leaves) if box is not None
    )
    if bounds is None:
        return None, None
    if not policy(leaves):
        logger.debug(
            "Group %r shares its only layer's raster", getattr(group, "name", None)
        )
        return None, bounds
    return compositor(leaves, bounds), bounds


def _make_layer(node: Any, name: str, bbox: BBox) -> Layer:
    opacity = getattr(node, "opacity", None)
    return Layer(
        name=name,
        kind=getattr(node, "kind", None),
        visible=getattr(node, "visible", True) is not False,
        opacity=255 if opacity is None else opacity,
        blend_mode=getattr(node, "blend_mode", None),
        bbox=bbox,
        raster=getattr(node, "raster", None),
        text=getattr(node, "text", None),
    )


def iter_nodes(nodes: Iterable[LayerTreeNode]) -> Iterator[LayerTreeNode]:
    """Pre-order iteration over the whole tree."""
    for node in nodes:
        yield node
        yield from iter_nodes(node.children)


def flatten_tree(nodes: Iterable[LayerTreeNode]) -> list[LayerTreeNode]:
    """
    Exportable nodes in index order: children before their group, groups
    only when they carry a composite.
    """
    result: list[LayerTreeNode] = []
    for node in nodes:
        if node.is_group:
            result.extend(flatten_tree(node.children))
            if node.raster is not None:
                result.append(node)
        elif node.layer is not None and node.raster is not None:
            result.append(node)
    return result


def collect_leaves(nodes: Iterable[LayerTreeNode]) -> list[LayerTreeNode]:
    """Leaf nodes with a layer payload, in document order."""
    return [node for node in iter_nodes(nodes) if not node.is_group and node.layer]


def find_node(nodes: Iterable[LayerTreeNode], index: int) -> Optional[LayerTreeNode]:
    for node in iter_nodes(nodes):
        if node.index == index:
            return node
    return None


def tree_statistics(nodes: Sequence[LayerTreeNode]) -> dict[str, int]:
    """
    Count nodes of the tree.

    :return: dict with ``total``, ``groups``, ``layers`` and ``max_depth``.
    """
    stats = {"total": 0, "groups": 0, "layers": 0, "max_depth": 0}

    def _walk(items: Sequence[LayerTreeNode], depth: int) -> None:
        stats["max_depth"] = max(stats["max_depth"], depth)
        for node in items:
            stats["total"] += 1
            if node.is_group:
                stats["groups"] += 1
                if node.children:
                    _walk(node.children, depth + 1)
            else:
                stats["layers"] += 1

    if nodes:
        _walk(nodes, 1)
    return stats


def entry_category(entry: FlatEntry) -> LayerCategory:
    if entry.is_group:
        return LayerCategory.GROUP
    layer = entry.node.layer
    if layer is not None and (
        layer.text or layer.kind in (LayerKind.TEXT, LayerKind.TYPE)
    ):
        return LayerCategory.TEXT
    return LayerCategory.IMAGE


def category_counts(flat: Iterable[FlatEntry]) -> dict[LayerCategory, int]:
    counts = Counter(entry_category(entry) for entry in flat)
    counts[LayerCategory.ALL] = sum(counts.values())
    return {category: counts.get(category, 0) for category in LayerCategory}


def filter_entries(
    flat: Iterable[FlatEntry], category: LayerCategory = LayerCategory.ALL
) -> list[FlatEntry]:
    category = LayerCategory(category)
    if category == LayerCategory.ALL:
        return list(flat)
    return [entry for entry in flat if entry_category(entry) == category]


def expand_hidden(
    nodes: Iterable[LayerTreeNode], hidden: Iterable[int]
) -> frozenset[int]:
    """Hidden indices plus every index below a hidden group."""
    hidden = frozenset(hidden)
    result = set(hidden)
    for node in iter_nodes(nodes):
        if node.is_group and node.index in hidden:
            result.update(
                child.index for child in node.descendants() if child.index is not None
            )
    return frozenset(result)
