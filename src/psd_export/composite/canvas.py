"""
Pillow canvas.
"""

import io
import logging

from PIL import Image

from psd_export.encoders.pil_io import apply_opacity, to_rgba

logger = logging.getLogger(__name__)


class PILCanvas:
    """
    Transparent RGBA surface painted with straight alpha-over.

    Example::

        canvas = PILCanvas(15, 15)
        canvas.draw(image, (5, 5), alpha=0.5)
        data = canvas.encode()
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("Invalid canvas size: %dx%d" % (width, height))
        self._image = Image.new("RGBA", (width, height), (0, 0, 0, 0))

    @property
    def size(self) -> tuple[int, int]:
        return self._image.size

    @property
    def image(self) -> Image.Image:
        return self._image

    def draw(
        self, image: Image.Image, offset: tuple[int, int], alpha: float = 1.0
    ) -> None:
        left, top = offset
        source = apply_opacity(to_rgba(image), alpha)
        # alpha_composite rejects negative destinations; crop the source instead.
        crop_left, crop_top = max(0, -left), max(0, -top)
        if crop_left or crop_top:
            if crop_left >= source.width or crop_top >= source.height:
                return
            source = source.crop((crop_left, crop_top, source.width, source.height))
            left, top = left + crop_left, top + crop_top
        self._image.alpha_composite(source, dest=(left, top))

    def encode(self, format: str = "png") -> bytes:
        with io.BytesIO() as f:
            self._image.save(f, format=format.upper())
            return f.getvalue()

    def __repr__(self) -> str:
        return "%s(size=%dx%d)" % (self.__class__.__name__, *self.size)
