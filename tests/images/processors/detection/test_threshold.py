import logging

import numpy as np
import pytest

from pyquads.images import Image
from pyquads.images.processors.detection import Threshold

# positions of stars in test image
STARS = [(30, 20), (25, 70), (80, 25), (75, 80)]


def test_invalid_parameters():
    with pytest.raises(ValueError):
        Threshold(sigma=0)
    with pytest.raises(ValueError):
        Threshold(opening=-1)


@pytest.mark.asyncio
async def test_no_data(caplog):
    image = Image()

    with caplog.at_level(logging.WARNING):
        result = await Threshold()(image)

    assert result is image
    assert caplog.messages[0] == "No data found in image."


@pytest.mark.asyncio
async def test_stars_are_foreground(gaussian_sources_image):
    result = await Threshold(threshold=5.0)(gaussian_sources_image)

    assert result is not gaussian_sources_image
    assert gaussian_sources_image.mask is None
    assert result.mask.dtype == bool
    assert result.mask.shape == gaussian_sources_image.data.shape
    for x, y in STARS:
        assert result.mask[y, x]
    assert not result.mask[0, 0]
    assert np.count_nonzero(result.mask) < 0.05 * result.mask.size


@pytest.mark.asyncio
async def test_opening_removes_single_pixels():
    data = np.zeros((40, 40))
    data[20, 20] = 100.0
    data[5:10, 5:10] = 100.0

    result = await Threshold(threshold=3.0, opening=1)(Image(data))

    assert not result.mask[20, 20]
    assert result.mask[7, 7]
