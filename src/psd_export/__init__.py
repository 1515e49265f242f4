"""
psd-export: export layers and group previews of layered documents.

A decoded document is turned into an indexed layer tree, groups get
composited previews, and the tree is written out as PNG, JPEG, TGA or BLP
files, either flat or mirroring the groups as directories.

Basic usage::

    from psd_export import build_tree, export_document, open_document
    from psd_export.export import ExportOptions, StaticPicker

    document = open_document("example.psd")
    tree = build_tree(document.children)

    for entry in tree.flat:
        print(entry.index, entry.name)

    export_document(
        tree,
        ExportOptions(format="tga", preserve_structure=True),
        StaticPicker("/tmp/export"),
    )

Architecture:

- :py:mod:`psd_export.api`: document input types, layer tree and its builder
- :py:mod:`psd_export.composite`: group preview compositing
- :py:mod:`psd_export.encoders`: PNG, JPEG, TGA and BLP1 encoders
- :py:mod:`psd_export.export`: flat and hierarchical export pipelines
"""

from psd_export.api.document import Document, DocumentNode
from psd_export.api.psd_io import open_document, read_document
from psd_export.api.tree import build_tree
from psd_export.export import ExportOptions, ExportResult, export_document
from psd_export.version import __version__

__all__ = [
    "Document",
    "DocumentNode",
    "ExportOptions",
    "ExportResult",
    "__version__",
    "build_tree",
    "export_document",
    "open_document",
    "read_document",
]
