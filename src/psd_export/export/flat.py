"""
Flat export: one directory, one file per exported entry.
"""

import logging
from typing import Any, Collection, Iterable, Optional

from attrs import define, field

from psd_export.api.layers import FlatEntry, LayerTreeNode
from psd_export.api.protocols import DestinationPicker, FileSystem
from psd_export.api.tree import expand_hidden
from psd_export.encoders import pil_io
from psd_export.errors import ExportError
from psd_export.export.filesystem import LocalFileSystem
from psd_export.export.options import ExportOptions, ExportResult
from psd_export.export.utils import (
    resolve_directory,
    sanitize_filename,
    validate_destination,
    write_raster,
)

logger = logging.getLogger(__name__)


@define(frozen=True)
class ExportItem:
    """A raster and the name to export it under."""

    name: str
    raster: Any = field(repr=False)


def select_entries(
    flat: Iterable[FlatEntry],
    selected: Optional[Collection[int]] = None,
    hidden: Collection[int] = frozenset(),
    tree: Optional[Iterable[LayerTreeNode]] = None,
) -> list[FlatEntry]:
    """
    Entries to export from the flat list.

    :param selected: indices to keep; `None` keeps everything.
    :param hidden: indices to drop. When ``tree`` is given, entries below a
        hidden group are dropped too.
    """
    if tree is not None:
        hidden = expand_hidden(tree, hidden)
    return [
        entry
        for entry in flat
        if entry.index not in hidden
        and (selected is None or entry.index in selected)
    ]


def export_layers(
    items: Iterable[Any],
    options: ExportOptions,
    picker: DestinationPicker,
    fs: Optional[FileSystem] = None,
) -> ExportResult:
    """
    Export rasters into a single directory.

    Every item is attempted; a failing item is logged and counted.

    :param items: objects with ``name`` and ``raster``, such as
        :py:class:`ExportItem` or :py:class:`~psd_export.api.layers.FlatEntry`.
    :return: :py:class:`~psd_export.export.options.ExportResult`; zero counts
        when the picker was cancelled.
    :raise ValidationError: when the picked destination is invalid.
    """
    directory = resolve_directory(picker, "Select export folder")
    if directory is None:
        logger.info("Export cancelled")
        return ExportResult()

    fs = fs or LocalFileSystem()
    result = ExportResult()
    logger.info("Exporting to %s as %s", directory, options.format.value)
    for item in items:
        try:
            write_raster(fs, directory, item.name, item.raster, options)
        except ExportError as e:
            logger.error("Failed to export %r: %s", item.name, e)
            result.failed += 1
        else:
            result.success += 1
    logger.info("Export done: %d succeeded, %d failed", result.success, result.failed)
    return result


def export_layer_image(
    raster: Any,
    name: str,
    picker: DestinationPicker,
    fs: Optional[FileSystem] = None,
) -> Optional[str]:
    """
    Save one raster as PNG at a picked file path.

    :return: written path, or `None` when the picker was cancelled.
    :raise ExportError: when encoding or writing fails.
    """
    path = picker.pick_file("%s.png" % sanitize_filename(name), ("png",))
    if path is None or path == "":
        return None
    path = validate_destination(path)
    fs = fs or LocalFileSystem()
    try:
        fs.write_file(path, pil_io.encode_png(raster))
    except Exception as e:
        raise ExportError("Failed to export %s: %s" % (path, e), path) from e
    logger.info("Saved %s", path)
    return path
