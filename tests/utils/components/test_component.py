import numpy as np
import pytest

from pyquads.utils.components import Component
from pyquads.utils.geometry import PixelCoordinate


def test_empty_component():
    with pytest.raises(ValueError):
        Component([])


def test_wrong_shape():
    with pytest.raises(ValueError):
        Component(np.zeros((3, 3)))


def test_coordinates_are_read_only():
    component = Component([(1, 2), (2, 2)])

    with pytest.raises(ValueError):
        component.coordinates[0, 0] = 5


def test_iterate_and_contains():
    component = Component([(1, 2), (2, 2)])

    assert list(component) == [PixelCoordinate(1, 2), PixelCoordinate(2, 2)]
    assert (2, 2) in component
    assert (2, 1) not in component
    assert component.area == len(component) == 2


def test_equality_ignores_order():
    assert Component([(1, 2), (2, 2)]) == Component([(2, 2), (1, 2)])
    assert hash(Component([(1, 2), (2, 2)])) == hash(Component([(2, 2), (1, 2)]))
    assert Component([(1, 2)]) != Component([(2, 1)])
