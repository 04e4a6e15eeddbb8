import numpy as np
import pytest

from pyquads.images import Image

STARS = [(30, 20, 200.0), (25, 70, 70.0), (80, 25, 150.0), (75, 80, 210.0)]


@pytest.fixture()
def gaussian_sources_image() -> Image:
    shape = (100, 100)
    y, x = np.mgrid[: shape[0], : shape[1]]

    data = np.full(shape, 5.0)
    for x0, y0, amplitude in STARS:
        data += amplitude * np.exp(-((x - x0) ** 2 + (y - y0) ** 2) / (2 * 1.5**2))

    rng = np.random.default_rng(0)
    data += rng.normal(0.0, 1.0, shape)
    return Image(data)


@pytest.fixture()
def mask_image() -> Image:
    mask = np.zeros((50, 60), dtype=bool)
    mask[10:13, 10:13] = True
    mask[40, 50] = True
    mask[30:32, 20:24] = True
    return Image(mask=mask)
