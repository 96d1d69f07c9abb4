"""Shared fixtures: deterministic base palettes."""

import pytest

from palforge.core.palette import PALETTE_COLOR_COUNT
from palforge.core.paths import Paths


def make_palette(colors=None, fill=(0, 0, 0, 255)) -> bytes:
    """1024-byte palette filled with `fill`, with optional {index: RGBA} overrides."""
    data = bytearray()
    for i in range(PALETTE_COLOR_COUNT):
        data.extend((colors or {}).get(i, fill))
    return bytes(data)


@pytest.fixture
def gradient_palette() -> bytes:
    """Every slot a different opaque color; slot 0 alpha is 255 on purpose."""
    data = bytearray()
    for i in range(PALETTE_COLOR_COUNT):
        data.extend((i, (i * 7) % 256, 255 - i, 255))
    return bytes(data)


@pytest.fixture
def pal_file(tmp_path, gradient_palette):
    path = tmp_path / 'base.pal'
    path.write_bytes(gradient_palette)
    return path


@pytest.fixture(autouse=True)
def user_data_dir(tmp_path, monkeypatch):
    """Keep settings and history of every test inside tmp_path."""
    data_dir = tmp_path / 'user_data'
    monkeypatch.setenv(Paths.DATA_DIR_ENV, str(data_dir))
    Paths.reset()
    yield data_dir
    Paths.reset()
