import numpy as np
import pytest
from astropy.io import fits
from astropy.table import Table

from pyquads.images import Image
from pyquads.images.processors.quads import Quads
from pyquads.utils.exceptions import MissingInputError
from pyquads.utils.quads import QuadResult


def corners_and_center_catalog() -> Table:
    return Table(
        {
            "id": [0, 1, 2, 3, 4],
            "area": [1, 1, 1, 1, 1],
            "x": [10.0, 190.0, 100.0, 10.0, 190.0],
            "y": [10.0, 10.0, 100.0, 190.0, 190.0],
        }
    )


def test_invalid_parameters():
    with pytest.raises(ValueError):
        Quads(max_stars=-1)
    with pytest.raises(ValueError):
        Quads(min_distance_percent=-1)
    with pytest.raises(ValueError):
        Quads(k_neighbors=-1)


@pytest.mark.asyncio
async def test_missing_catalog():
    with pytest.raises(MissingInputError):
        await Quads()(Image(np.zeros((10, 10))))


@pytest.mark.asyncio
async def test_missing_column():
    with pytest.raises(MissingInputError):
        await Quads()(Image(np.zeros((10, 10)), catalog=Table({"x": [1.0], "y": [1.0]})))


@pytest.mark.asyncio
async def test_missing_size_for_distance():
    with pytest.raises(MissingInputError):
        await Quads(min_distance_percent=5)(Image(catalog=corners_and_center_catalog()))


@pytest.mark.asyncio
async def test_quads():
    image = Image(np.zeros((200, 200)), catalog=corners_and_center_catalog())

    result = await Quads(max_stars=5, k_neighbors=4)(image)

    assert not image.has_meta(QuadResult)
    quads = result.get_meta(QuadResult)
    assert quads.total_components == 5
    assert quads.quad_count == 2
    assert len(quads.to_table()) == 2


@pytest.mark.asyncio
async def test_size_from_header():
    header = fits.Header()
    header["NAXIS1"] = 200
    header["NAXIS2"] = 200
    image = Image(header=header, catalog=corners_and_center_catalog())

    result = await Quads(max_stars=5, min_distance_percent=60, k_neighbors=4)(image)

    # only stars at least 240 pixels apart remain
    quads = result.get_meta(QuadResult)
    assert quads.component_count == 2
    assert quads.quad_count == 0
