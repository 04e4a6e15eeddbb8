import pytest

from pyquads.images.processors.detection import Threshold
from pyquads.object import Object, create_object, get_class_from_string, get_object, get_safe_object
from pyquads.utils.context import ComputeContext


def test_get_class_from_string():
    assert get_class_from_string("pyquads.utils.context.ComputeContext") is ComputeContext


def test_create_object():
    obj = create_object({"class": "pyquads.images.processors.detection.Threshold", "threshold": 5.0})

    assert isinstance(obj, Threshold)
    assert obj.threshold == 5.0


def test_get_object_variants():
    threshold = Threshold()

    assert get_object(threshold, Threshold) is threshold
    assert isinstance(get_object(Threshold, Threshold, opening=2), Threshold)
    with pytest.raises(TypeError):
        get_object(threshold, ComputeContext)
    with pytest.raises(TypeError):
        get_object(None)


def test_get_safe_object():
    assert get_safe_object({"class": "pyquads.images.processors.detection.Threshold", "sigma": -1}) is None


def test_context_from_dict():
    obj = Object(context={"workers": 2, "band_height": 8})

    assert isinstance(obj.context, ComputeContext)
    assert obj.context.workers == 2
    assert obj.context.band_height == 8


def test_invalid_context():
    with pytest.raises(ValueError):
        Object(context="threads")


def test_child_objects_get_context():
    ctx = ComputeContext(workers=1)
    obj = Object(context=ctx)

    child = obj.add_child_object({"class": "pyquads.images.processors.detection.Threshold"})
    other = obj.add_child_object(Threshold)

    assert child.context is ctx
    assert other.context is ctx
    assert obj._child_objects == [child, other]


@pytest.mark.asyncio
async def test_open_close():
    obj = Object(context={"workers": 1})
    obj.add_child_object(Threshold)
    obj.context.map(lambda x: x, [1])

    await obj.open()
    assert obj.opened
    assert obj._child_objects[0].opened

    await obj.close()
    assert not obj.opened
    assert obj.context._executor is None
