"""
PIL IO module.

Raster handles are either decoded :py:class:`PIL.Image.Image` objects or
encoded image bytes. Everything here normalizes them to RGBA images and
writes PNG or JPEG bytes.
"""

import io
import logging
from typing import Any

from PIL import Image, UnidentifiedImageError

from psd_export.errors import RasterLoadError

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255, 255)


def load_raster(raster: Any) -> Image.Image:
    """
    Decode a raster handle.

    :raise RasterLoadError: when the handle is missing or cannot be decoded.
    """
    if raster is None:
        raise RasterLoadError("No raster data")
    if isinstance(raster, Image.Image):
        return raster
    if isinstance(raster, (bytes, bytearray, memoryview)):
        try:
            image = Image.open(io.BytesIO(bytes(raster)))
            image.load()
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise RasterLoadError("Failed to decode raster: %s" % e) from e
        return image
    raise RasterLoadError("Unsupported raster handle: %s" % type(raster).__name__)


def to_rgba(image: Image.Image) -> Image.Image:
    """Convert to RGBA, keeping transparency where the mode has it."""
    if image.mode == "RGBA":
        return image
    if image.mode == "P" and "transparency" in image.info:
        return image.convert("PA").convert("RGBA")
    if image.mode == "CMYK":
        image = image.convert("RGB")
    return image.convert("RGBA")


def apply_opacity(image: Image.Image, alpha: float) -> Image.Image:
    """Scale the alpha channel of an RGBA image by ``alpha``."""
    if alpha >= 1.0:
        return image
    image = image.copy()
    channel = image.getchannel("A").point(lambda a: int(a * alpha + 0.5))
    image.putalpha(channel)
    return image


def flatten_on_white(image: Image.Image) -> Image.Image:
    """Paint ``image`` over an opaque white background; returns RGB."""
    image = to_rgba(image)
    background = Image.new("RGBA", image.size, WHITE)
    background.alpha_composite(image)
    return background.convert("RGB")


def jpeg_quality(quality: float) -> int:
    """Map quality in (0, 1] to the Pillow 1-100 scale."""
    return max(1, min(100, int(round(quality * 100))))


def encode_png(raster: Any) -> bytes:
    image = to_rgba(load_raster(raster))
    with io.BytesIO() as f:
        image.save(f, format="PNG")
        return f.getvalue()


def encode_jpeg(raster: Any, quality: float = 1.0) -> bytes:
    """
    Encode as JPEG. JPEG has no alpha, so the raster is flattened on white
    first.
    """
    image = flatten_on_white(load_raster(raster))
    logger.debug("JPEG quality %d for %dx%d", jpeg_quality(quality), *image.size)
    with io.BytesIO() as f:
        image.save(f, format="JPEG", quality=jpeg_quality(quality))
        return f.getvalue()
