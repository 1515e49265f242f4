"""
Local implementations of the destination picker and the file system.
"""

import logging
import os
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


class LocalFileSystem:
    """
    Writes through :py:mod:`os` and regular files.
    """

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def mkdir(self, path: str, recursive: bool = False) -> None:
        if recursive:
            os.makedirs(path, exist_ok=True)
        else:
            os.mkdir(path)

    def write_file(self, path: str, data: bytes) -> None:
        with open(path, "wb") as f:
            f.write(data)


class StaticPicker:
    """
    Picker answering with a fixed destination, for scripts and the command
    line. ``StaticPicker(None)`` behaves like a cancelled dialog.

    :param path: directory returned by :py:meth:`pick_directory`.
    :param file_path: file returned by :py:meth:`pick_file`; defaults to
        ``default_name`` inside ``path``.
    """

    def __init__(self, path: Optional[str], file_path: Optional[str] = None) -> None:
        self.path = path
        self.file_path = file_path

    def pick_directory(self, title: str = "") -> Optional[str]:
        logger.debug("%s: %s", title or "Directory", self.path)
        return self.path

    def pick_file(
        self, default_name: str, extensions: Sequence[str] = ()
    ) -> Optional[str]:
        if self.file_path is not None:
            return self.file_path
        if self.path is None:
            return None
        return os.path.join(self.path, default_name)
