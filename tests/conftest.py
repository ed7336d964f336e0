import numpy as np
import pytest
from PIL import Image

from engine.canvas import Canvas


@pytest.fixture
def random_canvas():
    """64x48 random RGB canvas with a fixed seed."""
    rng = np.random.default_rng(42)
    return Canvas(rng.integers(0, 256, (48, 64, 3), dtype=np.uint8))


@pytest.fixture
def png_file(tmp_path):
    """A 40x20 gradient PNG on disk."""
    pixels = np.zeros((20, 40, 3), dtype=np.uint8)
    pixels[:, :, 0] = np.linspace(0, 255, 40).astype(np.uint8)[np.newaxis, :]
    pixels[:, :, 1] = 128
    pixels[:, :, 2] = np.linspace(255, 0, 20).astype(np.uint8)[:, np.newaxis]
    path = tmp_path / "gradient.png"
    Image.fromarray(pixels).save(path, format="PNG")
    return path


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point ~ at a temp dir so log and consent files stay local."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("COLOROGRAM_LOG_DIR", raising=False)
    return home
