"""
Helpers shared by the flat and the hierarchical exporters.
"""

import logging
import os
import re
from typing import Any, Optional

from psd_export.api.protocols import DestinationPicker, FileSystem
from psd_export.constants import ILLEGAL_FILENAME_CHARS, UNTITLED
from psd_export.encoders import encode
from psd_export.errors import ExportError, ValidationError

logger = logging.getLogger(__name__)

_ILLEGAL_RE = re.compile("[%s]" % re.escape(ILLEGAL_FILENAME_CHARS))
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_filename(name: Optional[str]) -> str:
    """
    Make a layer name usable as a file or directory name.

    Removes ``<>:"/\\|?*``, trims, and replaces whitespace runs with ``_``.
    Trimming comes before collapsing, so surrounding whitespace never turns
    into a leading or trailing ``_``. An empty result becomes ``"untitled"``.
    """
    name = _ILLEGAL_RE.sub("", name or "").strip()
    name = _WHITESPACE_RE.sub("_", name)
    return name or UNTITLED


def resolve_directory(picker: DestinationPicker, title: str) -> Optional[str]:
    """
    Ask for a destination directory.

    :return: the directory, or `None` when the user cancelled.
    :raise ValidationError: when the answer is not an absolute path.
    """
    path = picker.pick_directory(title)
    if path is None or path == "":
        return None
    return validate_destination(path)


def validate_destination(path: Any) -> str:
    if not isinstance(path, (str, os.PathLike)):
        raise ValidationError("Invalid destination: %r" % (path,))
    path = os.fspath(path)
    if not os.path.isabs(path):
        raise ValidationError("Destination must be an absolute path: %r" % path)
    return path


def write_raster(
    fs: FileSystem, directory: str, name: str, raster: Any, options: Any
) -> str:
    """
    Encode ``raster`` and write it as ``<sanitized name>.<ext>``.

    :return: written path.
    :raise ExportError: when encoding or writing fails.
    """
    filename = "%s.%s" % (sanitize_filename(name), options.extension)
    path = os.path.join(directory, filename)
    try:
        data = encode(raster, options)
        fs.write_file(path, data)
    except Exception as e:
        raise ExportError("Failed to export %s: %s" % (path, e), path) from e
    logger.debug("Wrote %s (%d bytes)", path, len(data))
    return path


def ensure_directory(fs: FileSystem, path: str) -> None:
    """
    Create ``path`` unless it exists.

    :raise ExportError: when the directory cannot be created.
    """
    try:
        if fs.exists(path):
            return
        logger.debug("Creating directory %s", path)
        fs.mkdir(path, recursive=True)
    except Exception as e:
        raise ExportError("Failed to create %s: %s" % (path, e), path) from e
