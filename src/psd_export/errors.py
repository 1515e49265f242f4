"""
Exceptions raised by psd_export.

Only :py:class:`ValidationError` escapes an export call. The other errors are
raised and caught per node or per leaf, logged, and turned into counts.
"""


class PSDExportError(Exception):
    """Base class of psd_export errors."""


class ValidationError(PSDExportError, ValueError):
    """Invalid option, destination, or node field."""


class ExportError(PSDExportError):
    """Failed to encode or write a single node.

    :param path: destination path of the failed node.
    """

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class RasterLoadError(PSDExportError):
    """Raster handle could not be decoded into an image."""


class CompositeLoadError(RasterLoadError):
    """Leaf raster could not be loaded while compositing a group."""
