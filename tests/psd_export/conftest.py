"""Pytest configuration for psd-export tests."""

import os

import pytest

from psd_export.api.tree import build_tree
from psd_export.export import StaticPicker

from .utils import BLUE, GREEN, RED, group, leaf


@pytest.fixture
def document_children():
    """
    background
    icons/
        save
        open
        extras/ (hidden)
            star
    title/
        caption
    empty (no pixels)
    """
    return [
        leaf("background", (0, 0, 40, 40), RED),
        group(
            "icons",
            leaf("save", (0, 0, 10, 10), GREEN),
            leaf("open", (5, 5, 15, 15), BLUE, opacity=128),
            group("extras", leaf("star", (20, 20, 30, 30)), hidden=True),
        ),
        group("title", leaf("caption", (2, 2, 12, 6), GREEN)),
        leaf("empty", (0, 0, 0, 0), None),
    ]


@pytest.fixture
def layer_tree(document_children):
    return build_tree(document_children)


@pytest.fixture
def root_dir(tmp_path):
    return os.path.abspath(str(tmp_path))


@pytest.fixture
def picker(root_dir):
    return StaticPicker(root_dir)
