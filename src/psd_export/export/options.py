"""
Export options and results.
"""

import logging
from typing import Optional

from attrs import define, field

from psd_export.constants import DEFAULT_FORMAT, DEFAULT_QUALITY, ExportFormat
from psd_export.errors import ValidationError
from psd_export.validators import in_, range_

logger = logging.getLogger(__name__)


def _to_format(value: object) -> object:
    try:
        return ExportFormat(value)
    except ValueError:
        return value  # Rejected by the validator with a readable message.


def _to_quality(value: Optional[float]) -> float:
    return DEFAULT_QUALITY if value is None else value


@define(frozen=True)
class ExportOptions:
    """
    Export options.

    Example::

        options = ExportOptions(format="jpg", quality=0.8)

    .. py:attribute:: format

        :py:class:`~psd_export.constants.ExportFormat`.

    .. py:attribute:: quality

        JPEG quality in (0, 1]. Used by ``jpg`` and by the JPEG payload of
        ``blp``.

    .. py:attribute:: preserve_structure

        Mirror groups as directories instead of writing one flat directory.
    """

    format: ExportFormat = field(
        default=DEFAULT_FORMAT, converter=_to_format, validator=in_(list(ExportFormat))
    )
    quality: float = field(
        default=DEFAULT_QUALITY,
        converter=_to_quality,
        validator=range_(0.0, 1.0, exclude_minimum=True),
    )
    preserve_structure: bool = field(default=False, converter=bool)

    @property
    def extension(self) -> str:
        return self.format.extension


@define
class ExportResult:
    """Counts of exported and failed nodes."""

    success: int = field(default=0)
    failed: int = field(default=0)

    @success.validator
    @failed.validator
    def _validate_count(self, attribute, value: int) -> None:
        if value < 0:
            raise ValidationError("%s must be non-negative" % attribute.name)

    @property
    def total(self) -> int:
        return self.success + self.failed

    def __add__(self, other: "ExportResult") -> "ExportResult":
        return ExportResult(self.success + other.success, self.failed + other.failed)
