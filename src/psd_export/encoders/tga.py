"""
Uncompressed 32-bit TARGA writer.

Layout::

    offset  size  field
    0       1     ID length (0)
    1       1     color map type (0)
    2       1     image type (2, uncompressed true-color)
    3       5     color map specification (zeroed)
    8       4     x / y origin (0)
    12      2     width
    14      2     height
    16      1     pixel depth (32)
    17      1     descriptor (0x28: 8 alpha bits, top-to-bottom)
    18      ...   BGRA pixels, rows top to bottom
"""

import io
import logging

import numpy as np
from PIL import Image

from psd_export.bin_utils import write_bytes, write_fmt
from psd_export.constants import TGA_DESCRIPTOR, TGA_PIXEL_DEPTH, TGAImageType
from psd_export.encoders.pil_io import to_rgba
from psd_export.errors import ValidationError

logger = logging.getLogger(__name__)

_HEADER_FORMAT = "BBBHHBHHHHBB"
_MAX_SIZE = 0xFFFF


def encode_tga(image: Image.Image) -> bytes:
    """
    Encode an image as uncompressed 32-bit TGA.

    :raise ValidationError: when a dimension does not fit the 16-bit fields.
    """
    image = to_rgba(image)
    width, height = image.size
    if width > _MAX_SIZE or height > _MAX_SIZE:
        raise ValidationError("TGA size too large: %dx%d" % (width, height))

    rgba = np.asarray(image, dtype=np.uint8).reshape((height, width, 4))
    bgra = np.ascontiguousarray(rgba[:, :, [2, 1, 0, 3]])

    with io.BytesIO() as f:
        write_fmt(
            f,
            _HEADER_FORMAT,
            0,  # ID length
            0,  # color map type
            TGAImageType.TRUE_COLOR,
            0,  # color map start
            0,  # color map length
            0,  # color map depth
            0,  # x origin
            0,  # y origin
            width,
            height,
            TGA_PIXEL_DEPTH,
            TGA_DESCRIPTOR,
        )
        write_bytes(f, bgra.tobytes())
        return f.getvalue()
