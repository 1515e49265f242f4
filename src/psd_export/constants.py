"""
Various constants for psd_export.
"""

from enum import Enum, IntEnum


class ExportFormat(str, Enum):
    """
    Output file format.
    """

    PNG = "png"
    JPG = "jpg"
    TGA = "tga"
    BLP = "blp"

    @property
    def extension(self) -> str:
        return self.value


class LayerKind(str, Enum):
    """
    Layer type tag as reported by the decoder.

    Unknown tags are kept as plain strings on the nodes; this enum only names
    the tags the tree builder and the category filter care about.
    """

    GROUP = "group"
    TEXT = "text"
    TYPE = "type"
    PIXEL = "pixel"


class LayerCategory(str, Enum):
    """
    Category used to filter the flat layer list.
    """

    ALL = "all"
    GROUP = "group"
    TEXT = "text"
    IMAGE = "image"


class TGAImageType(IntEnum):
    """
    TARGA image type field. Only uncompressed true-color is written.
    """

    NO_IMAGE = 0
    COLOR_MAPPED = 1
    TRUE_COLOR = 2
    GRAYSCALE = 3


class BLPContent(IntEnum):
    """
    BLP1 content type.
    """

    JPEG = 0
    PALETTED = 1


#: Characters removed from exported file names.
ILLEGAL_FILENAME_CHARS = '<>:"/\\|?*'

#: Fallback file name when sanitizing leaves nothing.
UNTITLED = "untitled"

#: Prefix of flat-list entries holding a group composite.
GROUP_ENTRY_PREFIX = "[Group] "

DEFAULT_FORMAT = ExportFormat.PNG
DEFAULT_QUALITY = 1.0

TGA_HEADER_SIZE = 18
TGA_PIXEL_DEPTH = 32
#: 8 alpha bits, top-to-bottom origin.
TGA_DESCRIPTOR = 0x08 | 0x20

BLP_SIGNATURE = b"BLP1"
BLP_HEADER_SIZE = 156
BLP_MIPMAP_SLOTS = 16
BLP_FLAGS = 5
BLP_SUBTYPE = 1
