"""
Protocol definitions of the collaborators around the export core.

The core draws through a :py:class:`Canvas`, asks a
:py:class:`DestinationPicker` where to write, and writes through a
:py:class:`FileSystem`. Default implementations live in
:py:mod:`psd_export.composite.canvas` and :py:mod:`psd_export.export`;
tests substitute their own.
"""

from typing import Optional, Protocol, Sequence

from PIL import Image


class Canvas(Protocol):
    """
    Drawing surface of a fixed size, transparent when created.
    """

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) of the surface."""
        ...

    def draw(
        self, image: Image.Image, offset: tuple[int, int], alpha: float = 1.0
    ) -> None:
        """Paint ``image`` at ``offset`` over the surface with global alpha."""
        ...

    def encode(self, format: str = "png") -> bytes:
        """Encode the surface."""
        ...


class CanvasFactory(Protocol):
    def __call__(self, width: int, height: int) -> Canvas: ...


class DestinationPicker(Protocol):
    """
    Asks the user for a destination. Returns `None` on cancellation.
    """

    def pick_directory(self, title: str = "") -> Optional[str]: ...

    def pick_file(
        self, default_name: str, extensions: Sequence[str] = ()
    ) -> Optional[str]: ...


class FileSystem(Protocol):
    """
    File writer and directory creation.
    """

    def exists(self, path: str) -> bool: ...

    def mkdir(self, path: str, recursive: bool = False) -> None: ...

    def write_file(self, path: str, data: bytes) -> None: ...
