"""
High-level API: document input types, the layer tree and its builder.
"""

from psd_export.api.document import Document, DocumentNode
from psd_export.api.layers import BBox, FlatEntry, Layer, LayerTree, LayerTreeNode
from psd_export.api.tree import build_tree, flatten_tree, should_composite

__all__ = [
    "BBox",
    "Document",
    "DocumentNode",
    "FlatEntry",
    "Layer",
    "LayerTree",
    "LayerTreeNode",
    "build_tree",
    "flatten_tree",
    "should_composite",
]
