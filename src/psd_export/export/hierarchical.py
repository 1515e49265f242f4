"""
Hierarchical export.

Groups become directories named after the group, nested as in the document.
A group that has a composite also gets a same-named image file next to its
directory::

    root/
        icons/
            save.png
            open.png
        icons.png        # composite of the "icons" group
        background.png
"""

import logging
import os
from typing import Collection, Iterable, Optional

from psd_export.api.layers import LayerTreeNode
from psd_export.api.protocols import DestinationPicker, FileSystem
from psd_export.errors import ExportError
from psd_export.export.filesystem import LocalFileSystem
from psd_export.export.options import ExportOptions, ExportResult
from psd_export.export.utils import (
    ensure_directory,
    resolve_directory,
    sanitize_filename,
    write_raster,
)

logger = logging.getLogger(__name__)


def export_tree(
    nodes: Iterable[LayerTreeNode],
    options: ExportOptions,
    picker: DestinationPicker,
    hidden: Collection[int] = frozenset(),
    fs: Optional[FileSystem] = None,
) -> ExportResult:
    """
    Export a layer tree mirroring its groups as directories.

    :param nodes: root nodes of the tree.
    :param hidden: indices to leave out with everything below them.
    :return: :py:class:`~psd_export.export.options.ExportResult`; zero counts
        when the picker was cancelled.
    :raise ValidationError: when the picked destination is invalid.
    """
    root = resolve_directory(picker, "Select export root directory")
    if root is None:
        logger.info("Export cancelled")
        return ExportResult()

    exporter = _TreeExporter(options, frozenset(hidden), fs or LocalFileSystem())
    logger.info("Exporting tree to %s as %s", root, options.format.value)
    for node in nodes:
        exporter.export(node, root)
    result = exporter.result
    logger.info("Export done: %d succeeded, %d failed", result.success, result.failed)
    return result


class _TreeExporter:
    def __init__(
        self, options: ExportOptions, hidden: frozenset, fs: FileSystem
    ) -> None:
        self.options = options
        self.hidden = hidden
        self.fs = fs
        self.result = ExportResult()

    def export(self, node: LayerTreeNode, path: str) -> None:
        if node.index is not None and node.index in self.hidden:
            logger.debug("Skipping hidden node %r", node.path)
            return

        if node.is_group:
            self._export_group(node, path)
        elif node.raster is not None:
            self._write(node, path)
        else:
            logger.warning("Skipping %r without image data", node.path)

    def _export_group(self, node: LayerTreeNode, path: str) -> None:
        folder = os.path.join(path, sanitize_filename(node.name))
        try:
            ensure_directory(self.fs, folder)
        except ExportError as e:
            logger.error("Failed to create folder for %r: %s", node.path, e)
            self.result.failed += 1
        else:
            for child in node.children:
                self.export(child, folder)

        if node.raster is not None:
            self._write(node, path)

    def _write(self, node: LayerTreeNode, path: str) -> None:
        try:
            write_raster(self.fs, path, node.name, node.raster, self.options)
        except ExportError as e:
            logger.error("Failed to export %r: %s", node.path, e)
            self.result.failed += 1
        else:
            self.result.success += 1
