import io
import logging
import os
from typing import Any, Optional

from PIL import Image

from psd_export.api.document import DocumentNode

logging.basicConfig(level=logging.DEBUG)

RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)


def solid(size: tuple[int, int], color: tuple[int, ...] = RED) -> Image.Image:
    return Image.new("RGBA", size, color)


def png_bytes(image: Image.Image) -> bytes:
    with io.BytesIO() as f:
        image.save(f, format="PNG")
        return f.getvalue()


def open_bytes(data: bytes) -> Image.Image:
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


def leaf(
    name: str,
    bbox: tuple[int, int, int, int] = (0, 0, 10, 10),
    color: Optional[tuple[int, ...]] = RED,
    **kwargs: Any,
) -> DocumentNode:
    """Leaf with a solid raster filling its box, or no raster for color=None."""
    left, top, right, bottom = bbox
    raster = None
    if color is not None and right > left and bottom > top:
        raster = solid((right - left, bottom - top), color)
    kwargs.setdefault("raster", raster)
    return DocumentNode(
        name=name, left=left, top=top, right=right, bottom=bottom, **kwargs
    )


def group(name: str, *children: DocumentNode, **kwargs: Any) -> DocumentNode:
    return DocumentNode(name=name, kind="group", children=list(children), **kwargs)


class MemoryFileSystem:
    """In-memory file system recording every call."""

    def __init__(
        self, fail_writes: Any = (), fail_mkdirs: Any = (), error: Any = None
    ) -> None:
        self.files: dict[str, bytes] = {}
        self.directories: set[str] = set()
        self.mkdir_calls: list[str] = []
        self.write_calls: list[str] = []
        self.fail_writes = set(fail_writes)
        self.fail_mkdirs = set(fail_mkdirs)
        self.error = error

    def exists(self, path: str) -> bool:
        return path in self.directories or path in self.files

    def mkdir(self, path: str, recursive: bool = False) -> None:
        self.mkdir_calls.append(path)
        if os.path.basename(path) in self.fail_mkdirs:
            raise (self.error or PermissionError)("Permission denied: %s" % path)
        self.directories.add(path)

    def write_file(self, path: str, data: bytes) -> None:
        self.write_calls.append(path)
        if os.path.basename(path) in self.fail_writes:
            raise (self.error or OSError)("Disk full: %s" % path)
        self.files[path] = data

    def relative_files(self, root: str) -> set[str]:
        return {os.path.relpath(path, root) for path in self.files}

    def relative_directories(self, root: str) -> set[str]:
        return {os.path.relpath(path, root) for path in self.directories}
