import logging
import struct

import numpy as np
import pytest
from PIL import Image

from psd_export.encoders import encode, encode_tga
from psd_export.errors import ValidationError
from psd_export.export import ExportOptions

logger = logging.getLogger(__name__)


@pytest.fixture
def gradient():
    data = np.zeros((3, 5, 4), dtype=np.uint8)
    data[:, :, 0] = np.arange(5) * 50  # R varies by column
    data[:, :, 1] = np.arange(3)[:, None] * 100  # G varies by row
    data[:, :, 2] = 7
    data[:, :, 3] = 200
    return Image.fromarray(data)


def test_tga_header(gradient):
    data = encode_tga(gradient)
    assert data[0] == 0
    assert data[1] == 0
    assert data[2] == 2
    assert data[3:12] == b"\x00" * 9
    assert struct.unpack("<H", data[12:14])[0] == 5
    assert struct.unpack("<H", data[14:16])[0] == 3
    assert data[16] == 32
    assert data[17] == 0x28
    assert len(data) == 18 + 4 * 5 * 3


def test_tga_pixels_are_bgra(gradient):
    data = encode_tga(gradient)
    body = np.frombuffer(data[18:], dtype=np.uint8).reshape((3, 5, 4))
    rgba = np.asarray(gradient)
    np.testing.assert_array_equal(body[:, :, 0], rgba[:, :, 2])
    np.testing.assert_array_equal(body[:, :, 1], rgba[:, :, 1])
    np.testing.assert_array_equal(body[:, :, 2], rgba[:, :, 0])
    np.testing.assert_array_equal(body[:, :, 3], rgba[:, :, 3])
    # First row first: top-to-bottom origin.
    assert tuple(body[0, 1]) == (7, 0, 50, 200)
    assert tuple(body[2, 4]) == (7, 200, 200, 200)


def test_tga_converts_rgb():
    data = encode_tga(Image.new("RGB", (2, 2), (10, 20, 30)))
    assert data[18:22] == bytes([30, 20, 10, 255])


def test_tga_too_large():
    with pytest.raises(ValidationError):
        encode_tga(Image.new("RGBA", (70000, 1)))


def test_tga_dispatch(gradient):
    assert encode(gradient, ExportOptions(format="tga")) == encode_tga(gradient)
