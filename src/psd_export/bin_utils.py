"""
Little-endian binary helpers for the TGA and BLP writers.
"""

import struct
from typing import Any, BinaryIO


def write_fmt(fp: BinaryIO, fmt: str, *args: Any) -> int:
    """
    Write ``args`` packed little-endian according to ``fmt``.

    :return: number of bytes written.
    """
    fmt = "<" + fmt
    fmt_size = struct.calcsize(fmt)
    written = fp.write(struct.pack(fmt, *args))
    assert written == fmt_size, (written, fmt_size)
    return written


def write_bytes(fp: BinaryIO, data: bytes) -> int:
    """
    Write bytes to the file object and returns bytes written.
    """
    assert isinstance(data, bytes), type(data)
    written = fp.write(data)
    assert written == len(data), (written, len(data))
    return written
