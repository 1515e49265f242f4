"""
Format encoders.

:py:func:`encode` dispatches a raster handle to the encoder registered for
the requested :py:class:`~psd_export.constants.ExportFormat`::

    from psd_export.encoders import encode
    from psd_export.export import ExportOptions

    data = encode(image, ExportOptions(format="tga"))

Every encoder takes ``(raster, options)`` and returns bytes.
"""

import logging
from typing import Any

from psd_export.constants import ExportFormat
from psd_export.encoders import pil_io
from psd_export.encoders.blp import encode_blp
from psd_export.encoders.tga import encode_tga
from psd_export.registry import new_registry

logger = logging.getLogger(__name__)

ENCODERS, register = new_registry(attribute="format")


@register(ExportFormat.PNG)
def _encode_png(raster: Any, options: Any) -> bytes:
    return pil_io.encode_png(raster)


@register(ExportFormat.JPG)
def _encode_jpg(raster: Any, options: Any) -> bytes:
    return pil_io.encode_jpeg(raster, options.quality)


@register(ExportFormat.TGA)
def _encode_tga(raster: Any, options: Any) -> bytes:
    return encode_tga(pil_io.load_raster(raster))


@register(ExportFormat.BLP)
def _encode_blp(raster: Any, options: Any) -> bytes:
    image = pil_io.load_raster(raster)
    jpeg_data = pil_io.encode_jpeg(image, options.quality)
    return encode_blp(jpeg_data, image.width, image.height)


def encode(raster: Any, options: Any) -> bytes:
    """
    Encode a raster handle in ``options.format``.

    :raise RasterLoadError: when the raster cannot be decoded.
    :raise KeyError: when no encoder is registered for the format.
    """
    fmt = ExportFormat(options.format)
    logger.debug("Encoding raster as %s", fmt.value)
    return ENCODERS[fmt](raster, options)


__all__ = ["ENCODERS", "encode", "encode_blp", "encode_tga"]
