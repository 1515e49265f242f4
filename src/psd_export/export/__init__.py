"""
Export pipeline.

Two layouts are supported:

- flat: every exported entry is written into one directory
  (:py:func:`export_layers`);
- hierarchical: groups are mirrored as nested directories
  (:py:func:`export_tree`).

:py:func:`export_document` picks one from
:py:attr:`ExportOptions.preserve_structure`::

    from psd_export import build_tree, export_document
    from psd_export.export import ExportOptions, StaticPicker

    tree = build_tree(document.children)
    result = export_document(
        tree, ExportOptions(format="png"), StaticPicker("/tmp/out")
    )
    print(result.success, result.failed)

Failures of single nodes never abort an export; they are logged and counted
in :py:class:`ExportResult`.
"""

import logging
from typing import Collection, Optional

from psd_export.api.layers import LayerTree
from psd_export.api.protocols import DestinationPicker, FileSystem
from psd_export.export.filesystem import LocalFileSystem, StaticPicker
from psd_export.export.flat import (
    ExportItem,
    export_layer_image,
    export_layers,
    select_entries,
)
from psd_export.export.hierarchical import export_tree
from psd_export.export.options import ExportOptions, ExportResult
from psd_export.export.utils import sanitize_filename

logger = logging.getLogger(__name__)


def export_document(
    tree: LayerTree,
    options: ExportOptions,
    picker: DestinationPicker,
    hidden: Collection[int] = frozenset(),
    selected: Optional[Collection[int]] = None,
    fs: Optional[FileSystem] = None,
) -> ExportResult:
    """
    Export a built layer tree.

    :param hidden: indices left out, with everything below hidden groups.
    :param selected: indices to export in flat mode; `None` exports all
        entries. The hierarchical layout always exports the whole tree.
    """
    if options.preserve_structure:
        return export_tree(tree.children, options, picker, hidden=hidden, fs=fs)
    entries = select_entries(tree.flat, selected, hidden, tree=tree.children)
    logger.debug("Selected %d of %d entries", len(entries), len(tree.flat))
    return export_layers(entries, options, picker, fs=fs)


__all__ = [
    "ExportItem",
    "ExportOptions",
    "ExportResult",
    "LocalFileSystem",
    "StaticPicker",
    "export_document",
    "export_layer_image",
    "export_layers",
    "export_tree",
    "sanitize_filename",
    "select_entries",
]
