import logging
import os

import pytest

from psd_export.errors import ExportError, ValidationError
from psd_export.export import (
    ExportItem,
    ExportOptions,
    StaticPicker,
    export_document,
    export_layer_image,
    export_layers,
    select_entries,
)
from psd_export.export import utils as export_utils

from ..utils import GREEN, MemoryFileSystem, open_bytes, png_bytes, solid

logger = logging.getLogger(__name__)

ROOT = os.path.abspath("/export")


def _items(count):
    return [ExportItem("layer %d" % i, solid((2, 2), GREEN)) for i in range(count)]


@pytest.mark.parametrize("fmt", ["png", "jpg", "tga", "blp"])
def test_export_layers(fmt):
    fs = MemoryFileSystem()
    result = export_layers(_items(3), ExportOptions(format=fmt), StaticPicker(ROOT), fs)
    assert (result.success, result.failed) == (3, 0)
    assert fs.relative_files(ROOT) == {"layer_%d.%s" % (i, fmt) for i in range(3)}
    assert fs.mkdir_calls == []


def test_export_layers_failures_are_counted():
    fs = MemoryFileSystem(fail_writes={"layer_1.png", "layer_3.png"})
    result = export_layers(_items(5), ExportOptions(), StaticPicker(ROOT), fs)
    assert (result.success, result.failed) == (3, 2)
    assert len(fs.write_calls) == 5
    assert fs.relative_files(ROOT) == {"layer_0.png", "layer_2.png", "layer_4.png"}


@pytest.mark.parametrize("error", [RuntimeError, KeyError, LookupError])
def test_export_layers_unexpected_write_error(error):
    fs = MemoryFileSystem(fail_writes={"layer_1.png"}, error=error)
    result = export_layers(_items(3), ExportOptions(), StaticPicker(ROOT), fs)
    assert (result.success, result.failed) == (2, 1)
    assert len(fs.write_calls) == 3
    assert fs.relative_files(ROOT) == {"layer_0.png", "layer_2.png"}


def test_export_layers_unexpected_encoder_error(monkeypatch):
    encode = export_utils.encode

    def flaky_encode(raster, options):
        if raster.size == (1, 1):
            raise RuntimeError("decoder bomb")
        return encode(raster, options)

    monkeypatch.setattr(export_utils, "encode", flaky_encode)
    fs = MemoryFileSystem()
    items = [ExportItem("bad", solid((1, 1))), ExportItem("good", solid((2, 2)))]
    result = export_layers(items, ExportOptions(), StaticPicker(ROOT), fs)
    assert (result.success, result.failed) == (1, 1)
    assert fs.relative_files(ROOT) == {"good.png"}


def test_export_layers_bad_raster_is_counted():
    fs = MemoryFileSystem()
    items = [ExportItem("bad", b"not an image"), ExportItem("good", solid((1, 1)))]
    result = export_layers(items, ExportOptions(), StaticPicker(ROOT), fs)
    assert (result.success, result.failed) == (1, 1)
    assert fs.relative_files(ROOT) == {"good.png"}


def test_export_layers_cancelled():
    fs = MemoryFileSystem()
    result = export_layers(_items(2), ExportOptions(), StaticPicker(None), fs)
    assert (result.success, result.failed) == (0, 0)
    assert fs.write_calls == []


def test_export_layers_relative_destination():
    with pytest.raises(ValidationError):
        export_layers(_items(1), ExportOptions(), StaticPicker("relative/dir"))


def test_export_layers_to_disk(picker, root_dir):
    result = export_layers(_items(2), ExportOptions(format="tga"), picker)
    assert (result.success, result.failed) == (2, 0)
    assert sorted(os.listdir(root_dir)) == ["layer_0.tga", "layer_1.tga"]
    with open(os.path.join(root_dir, "layer_0.tga"), "rb") as f:
        assert len(f.read()) == 18 + 4 * 2 * 2


def test_select_entries(layer_tree):
    flat = layer_tree.flat
    assert [e.index for e in select_entries(flat)] == [0, 1, 2, 3, 4]
    assert [e.index for e in select_entries(flat, selected={0, 3})] == [0, 3]
    assert [e.index for e in select_entries(flat, hidden={1})] == [0, 2, 3, 4]
    assert [
        e.index for e in select_entries(flat, hidden={3}, tree=layer_tree.children)
    ] == [0, 4]


def test_export_document_flat(layer_tree):
    fs = MemoryFileSystem()
    result = export_document(
        layer_tree, ExportOptions(format="png"), StaticPicker(ROOT), fs=fs
    )
    assert (result.success, result.failed) == (5, 0)
    assert fs.relative_files(ROOT) == {
        "background.png",
        "save.png",
        "open.png",
        "[Group]_icons.png",
        "caption.png",
    }
    assert fs.directories == set()


def test_export_document_flat_hidden_and_selected(layer_tree):
    fs = MemoryFileSystem()
    result = export_document(
        layer_tree,
        ExportOptions(format="jpg", quality=0.8),
        StaticPicker(ROOT),
        hidden={3},
        selected={0, 1, 4},
        fs=fs,
    )
    assert (result.success, result.failed) == (2, 0)
    assert fs.relative_files(ROOT) == {"background.jpg", "caption.jpg"}


def test_export_layer_image():
    fs = MemoryFileSystem()
    picker = StaticPicker(ROOT)
    path = export_layer_image(png_bytes(solid((3, 3))), "my layer?", picker, fs)
    assert path == os.path.join(ROOT, "my_layer.png")
    assert open_bytes(fs.files[path]).size == (3, 3)


def test_export_layer_image_cancelled():
    fs = MemoryFileSystem()
    assert export_layer_image(solid((1, 1)), "a", StaticPicker(None), fs) is None
    assert fs.files == {}


def test_export_layer_image_failure():
    fs = MemoryFileSystem(fail_writes={"a.png"})
    with pytest.raises(ExportError) as excinfo:
        export_layer_image(solid((1, 1)), "a", StaticPicker(ROOT), fs)
    assert excinfo.value.path == os.path.join(ROOT, "a.png")


def test_export_layer_image_unexpected_error():
    fs = MemoryFileSystem(fail_writes={"a.png"}, error=RuntimeError)
    with pytest.raises(ExportError):
        export_layer_image(solid((1, 1)), "a", StaticPicker(ROOT), fs)
