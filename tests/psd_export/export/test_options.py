import pytest

from psd_export.constants import ExportFormat
from psd_export.errors import ValidationError
from psd_export.export import ExportOptions, ExportResult


def test_defaults():
    options = ExportOptions()
    assert options.format == ExportFormat.PNG
    assert options.quality == 1.0
    assert options.preserve_structure is False
    assert options.extension == "png"


@pytest.mark.parametrize("fmt", ["png", "jpg", "tga", "blp", ExportFormat.BLP])
def test_formats(fmt):
    assert ExportOptions(format=fmt).format == ExportFormat(fmt)


@pytest.mark.parametrize("fmt", ["gif", "jpeg", "", None])
def test_invalid_format(fmt):
    with pytest.raises(ValidationError):
        ExportOptions(format=fmt)


@pytest.mark.parametrize("quality", [0.01, 0.5, 1.0, 1])
def test_quality(quality):
    assert ExportOptions(format="jpg", quality=quality).quality == quality


def test_quality_none_is_default():
    assert ExportOptions(quality=None).quality == 1.0


@pytest.mark.parametrize("quality", [0, 0.0, -0.5, 1.01, 50, "high"])
def test_invalid_quality(quality):
    with pytest.raises(ValidationError):
        ExportOptions(format="jpg", quality=quality)


def test_result():
    result = ExportResult(2, 1) + ExportResult(success=3)
    assert result == ExportResult(5, 1)
    assert result.total == 6
    with pytest.raises(ValidationError):
        ExportResult(-1, 0)
