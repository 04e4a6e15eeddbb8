import numpy as np
import pytest
import scipy.ndimage as ndi

from pyquads.utils.components import Component, label_components, scan_mask


def test_no_pixels():
    assert label_components(np.empty((0, 2), dtype=np.int64)) == []


def test_two_components():
    components = label_components([(0, 0), (0, 1), (1, 1), (10, 10)])

    assert len(components) == 2
    assert sorted(c.area for c in components) == [1, 3]


def test_diagonal_neighbours_are_connected():
    components = label_components([(0, 0), (1, 1), (2, 2), (3, 1)])

    assert len(components) == 1


def test_order_is_independent_of_input():
    pixels = [(5, 5), (0, 0), (9, 0), (1, 0)]

    first = label_components(pixels)
    second = label_components(list(reversed(pixels)))

    assert first == second
    assert first[0] == Component([(0, 0), (1, 0)])


@pytest.mark.parametrize("seed", [10, 11])
def test_matches_scipy_label(seed):
    rng = np.random.default_rng(seed)
    mask = rng.random((60, 45)) > 0.6

    components = label_components(scan_mask(mask))

    labels, count = ndi.label(mask, structure=np.ones((3, 3)))
    expected = [Component([(x, y) for y, x in np.argwhere(labels == i)]) for i in range(1, count + 1)]

    assert len(components) == count
    assert set(components) == set(expected)
