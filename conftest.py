import inspect
from typing import Any
import pytest


def pytest_addoption(parser: Any) -> None:
    parser.addoption("--use-large", action="store_true", help="do tests on large masks")


def pytest_configure(config: Any) -> None:
    config.addinivalue_line("markers", "large: mark test as using large masks")


def pytest_collection_modifyitems(config: Any, items: Any) -> None:
    # add asyncio decorator to all async methods
    for item in items:
        if inspect.iscoroutinefunction(item.function):
            item.add_marker(pytest.mark.asyncio)

    # do tests on large masks?
    if not config.getoption("--use-large"):
        nolarge = pytest.mark.skip(reason="Large mask testing disabled (use --use-large to activate).")
        for item in items:
            if "large" in item.keywords:
                item.add_marker(nolarge)
