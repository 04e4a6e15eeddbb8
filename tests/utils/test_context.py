import threading

import pytest

from pyquads.utils.context import ComputeContext


def test_invalid_parameters():
    with pytest.raises(ValueError):
        ComputeContext(workers=0)
    with pytest.raises(ValueError):
        ComputeContext(band_height=0)


def test_bands():
    ctx = ComputeContext(band_height=4)

    bands = list(ctx.bands(10))

    assert bands == [slice(0, 4), slice(4, 8), slice(8, 10)]
    assert list(ctx.bands(0)) == []


def test_map_keeps_order():
    with ComputeContext(workers=3) as ctx:
        assert ctx.map(lambda x: x * x, range(10)) == [x * x for x in range(10)]


def test_map_raises():
    def fail(x: int) -> int:
        if x == 3:
            raise RuntimeError("fail")
        return x

    with ComputeContext(workers=2) as ctx:
        with pytest.raises(RuntimeError):
            ctx.map(fail, range(5))


def test_executor_is_lazy_and_closed():
    ctx = ComputeContext(workers=2)
    assert ctx._executor is None

    names = ctx.map(lambda _: threading.current_thread().name, range(4))
    assert all(n.startswith("pyquads") for n in names)

    ctx.close()
    assert ctx._executor is None
