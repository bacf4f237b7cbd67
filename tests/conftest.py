import numpy as np
import pytest


def _solid(height, width, color=(0, 0, 0)):
    image = np.empty((height, width, 3), dtype=np.uint8)
    image[:, :] = color
    return image


@pytest.fixture
def solid():
    """Factory for (height, width, 3) uint8 images filled with one color."""
    return _solid


@pytest.fixture
def seam_image():
    """100x200 image: black left page, white right page."""
    image = _solid(100, 200)
    image[:, 100:] = 255
    return image


@pytest.fixture
def quadrant_image():
    """240x300 image with four differently colored quadrants."""
    image = _solid(240, 300)
    image[:130, 170:] = (255, 0, 0)
    image[130:, :170] = (0, 255, 0)
    image[130:, 170:] = (0, 0, 255)
    return image


@pytest.fixture
def noise_image():
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(64, 80, 3), dtype=np.uint8)
