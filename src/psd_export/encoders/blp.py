"""
Minimal BLP1 writer with JPEG content.

Only one mip level is written and there is no palette mode. The 156-byte
header is followed by the JPEG payload verbatim::

    offset  size   field
    0       4      b"BLP1"
    4       4      content type (0, JPEG)
    8       4      alpha bits (0)
    12      4      width
    16      4      height
    20      4      flags (5)
    24      4      subtype (1)
    28      16*4   mipmap offsets, only slot 0 is set (156)
    92      16*4   mipmap lengths, only slot 0 is set (payload length)
"""

import io
import logging

from psd_export.bin_utils import write_bytes, write_fmt
from psd_export.constants import (
    BLP_FLAGS,
    BLP_HEADER_SIZE,
    BLP_MIPMAP_SLOTS,
    BLP_SIGNATURE,
    BLP_SUBTYPE,
    BLPContent,
)

logger = logging.getLogger(__name__)

_HEADER_FORMAT = "4s6I%dI%dI" % (BLP_MIPMAP_SLOTS, BLP_MIPMAP_SLOTS)


def encode_blp(jpeg_data: bytes, width: int, height: int) -> bytes:
    """
    Wrap JPEG bytes in a BLP1 container.

    :param jpeg_data: encoded JPEG image.
    :param width: image width in pixels.
    :param height: image height in pixels.
    """
    offsets = [0] * BLP_MIPMAP_SLOTS
    lengths = [0] * BLP_MIPMAP_SLOTS
    offsets[0] = BLP_HEADER_SIZE
    lengths[0] = len(jpeg_data)

    with io.BytesIO() as f:
        written = write_fmt(
            f,
            _HEADER_FORMAT,
            BLP_SIGNATURE,
            BLPContent.JPEG,
            0,  # alpha bits
            width,
            height,
            BLP_FLAGS,
            BLP_SUBTYPE,
            *(offsets + lengths),
        )
        assert written == BLP_HEADER_SIZE, written
        write_bytes(f, bytes(jpeg_data))
        return f.getvalue()
