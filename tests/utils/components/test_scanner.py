import numpy as np
import pytest

from pyquads.utils.components import scan_mask
from pyquads.utils.context import ComputeContext
from pyquads.utils.exceptions import InvalidInputError, MissingInputError, ResourceError


def as_set(coordinates: np.ndarray) -> set:
    return {(int(x), int(y)) for x, y in coordinates}


def expected_set(mask: np.ndarray) -> set:
    return {(int(x), int(y)) for y, x in np.argwhere(mask)}


def test_missing_mask():
    with pytest.raises(MissingInputError):
        scan_mask(None)


def test_invalid_mask():
    with pytest.raises(InvalidInputError):
        scan_mask(np.zeros((2, 3, 4)))


def test_empty_mask():
    coordinates = scan_mask(np.zeros((20, 30)))

    assert coordinates.shape == (0, 2)


def test_coordinates_are_x_y():
    mask = np.zeros((5, 8), dtype=np.uint8)
    mask[1, 6] = 1

    coordinates = scan_mask(mask)

    assert coordinates.tolist() == [[6, 1]]


def test_foreground_level():
    mask = np.array([[0.0, 0.49, 0.5, 1.0]])

    coordinates = scan_mask(mask)

    assert as_set(coordinates) == {(2, 0), (3, 0)}


def test_bool_mask():
    mask = np.array([[True, False], [False, True]])

    assert as_set(scan_mask(mask)) == {(0, 0), (1, 1)}


@pytest.mark.parametrize("band_height", [1, 3, 7, 256])
def test_random_mask_with_bands(band_height):
    rng = np.random.default_rng(42)
    mask = rng.random((50, 40)) > 0.7

    with ComputeContext(workers=4, band_height=band_height) as ctx:
        coordinates = scan_mask(mask, ctx)

    assert len(coordinates) == np.count_nonzero(mask)
    assert as_set(coordinates) == expected_set(mask)


def test_list_input():
    coordinates = scan_mask([[0, 1], [1, 0]])

    assert as_set(coordinates) == {(1, 0), (0, 1)}


@pytest.mark.large
def test_large_mask():
    rng = np.random.default_rng(1)
    mask = rng.random((4096, 4096)) > 0.99

    with ComputeContext(band_height=64) as ctx:
        coordinates = scan_mask(mask, ctx)

    assert as_set(coordinates) == expected_set(mask)


def test_allocation_failure(mocker):
    mask = np.ones((4, 4))
    mocker.patch("pyquads.utils.components.scanner.np.empty", side_effect=MemoryError)

    with pytest.raises(ResourceError) as e:
        scan_mask(mask)

    assert e.value.fatal
