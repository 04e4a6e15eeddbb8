"""
:class:`~pyquads.object.Object` is the base for all processors and pipelines in *pyquads*. It adds some convenience
methods and helper methods for creating other Objects.

There are a few convenience functions:

    - :func:`~pyquads.object.create_object` creates objects from dictionaries.
    - :func:`~pyquads.object.get_object` is a wrapper around :func:`pyquads.object.create_object` that can do further
      checks.
    - :func:`~pyquads.object.get_safe_object` is a wrapper around :func:`~pyquads.object.get_object` that never raises
      exceptions.
"""

from __future__ import annotations

import copy
import inspect
import logging
from abc import ABCMeta
from typing import Any, List, Optional, Type, TypeVar, Union, overload

from pyquads.utils.context import ComputeContext

log = logging.getLogger(__name__)


"""Class of an Object."""
ObjectClass = TypeVar("ObjectClass")


@overload
def get_object(
    config_or_object: Union[dict[str, Any], ObjectClass, Type[ObjectClass]],
    object_class: Union[Type[ObjectClass], ABCMeta],
    **kwargs: Any,
) -> ObjectClass: ...


@overload
def get_object(
    config_or_object: Union[dict[str, Any], ObjectClass, Type[ObjectClass]], object_class: None = None, **kwargs: Any
) -> Any: ...


def get_object(
    config_or_object: Union[dict[str, Any], ObjectClass, Type[ObjectClass]],
    object_class: Union[Type[ObjectClass], ABCMeta, None] = None,
    **kwargs: Any,
) -> Any:
    """Creates object from config or returns object directly, both optionally after check of type.

    Args:
        config_or_object: A configuration dict or an object itself to create/check. If a dict with a class key
            is given, a new object is created.
        object_class: Class to check object against.

    Returns:
        (New) object (created from config) that optionally passed class check.

    Raises:
        TypeError: If the object does not match the given class.
    """

    if config_or_object is None:
        raise TypeError("No config or object given.")

    elif isinstance(config_or_object, dict):
        # copy kwargs to config, so that we don't have any duplicates
        config = copy.copy(config_or_object)
        for k, v in kwargs.items():
            config[k] = v

        # a dict is given, so create object
        obj = create_object(config)

    elif inspect.isclass(config_or_object):
        # config_or_object is a type, so create it using its constructor
        obj = config_or_object(**kwargs)

    else:
        # just use given object
        obj = config_or_object

    # do we need a type check and does the given object pass?
    if object_class is not None and not isinstance(obj, object_class):
        raise TypeError("Provided object is not of requested type %s." % object_class.__name__)
    return obj


def get_safe_object(
    config_or_object: Union[dict[str, Any], Any],
    object_class: Union[Type[ObjectClass], ABCMeta, None] = None,
    **kwargs: Any,
) -> Optional[Any]:
    """Calls get_object in a safe way and returns None, if an exceptions thrown.

    Args:
        config_or_object: A configuration dict or an object itself to create/check. If a dict with a class key
            is given, a new object is created.
        object_class: Class to check object against.

    Returns:
        (New) object (created from config) that optionally passed class check or None.
    """
    try:
        return get_object(config_or_object, object_class, **kwargs)
    except Exception:
        log.exception("Could not create object.")
        return None


def get_class_from_string(class_name: str) -> Any:
    """Get class from a given string.

    Args:
        class_name: Name of class as string.

    Returns:
        Actual class.
    """

    parts = class_name.split(".")
    module_name = ".".join(parts[:-1])
    cls = __import__(module_name)
    for comp in parts[1:]:
        cls = getattr(cls, comp)
    return cls


def create_object(config: dict[str, Any], *args: Any, **kwargs: Any) -> Any:
    """Create object from dict config.

    Args:
        config: Config to create object from
        *args: Parameters to be passed to object.
        **kwargs: Parameters to be passed to object.

    Returns:
        Created object.
    """

    # get class name
    class_name = config["class"]

    # create class
    klass = get_class_from_string(class_name)

    # remove class from kwargs
    cfg = copy.copy(config)
    del cfg["class"]

    # create object
    return klass(*args, **cfg, **kwargs)


class Object:
    """Base class for all objects in *pyquads*."""

    def __init__(self, context: Union[ComputeContext, dict[str, Any], None] = None, **kwargs: Any):
        """
        Every object can get a :class:`~pyquads.utils.context.ComputeContext` for running parallel computations,
        which is handed down to all child objects created via :meth:`~pyquads.object.Object.add_child_object`.
        A context given as dict is created from it, without a ``class`` key its values are passed to the
        constructor of :class:`~pyquads.utils.context.ComputeContext`.

        Args:
            context: Compute context to use (either object or config).
        """

        # child objects
        self._child_objects: List[Any] = []

        # context, only closed here if created from a config
        self.context: Optional[ComputeContext]
        self._own_context = isinstance(context, dict)
        if context is None or isinstance(context, ComputeContext):
            self.context = context
        elif isinstance(context, dict):
            self.context = get_object(context, ComputeContext) if "class" in context else ComputeContext(**context)
        else:
            raise ValueError("Invalid compute context.")

        # opened?
        self._opened = False

    async def open(self) -> None:
        """Open object and all its children."""

        for obj in self._child_objects:
            if hasattr(obj, "open"):
                await obj.open()

        # success
        self._opened = True

    @property
    def opened(self) -> bool:
        """Whether object has been opened."""
        return self._opened

    async def close(self) -> None:
        """Close object and all its children."""

        for obj in self._child_objects:
            if hasattr(obj, "close"):
                await obj.close()
        if self._own_context and self.context is not None:
            self.context.close()
        self._opened = False

    def get_object(
        self,
        config_or_object: Union[dict[str, Any], ObjectClass, Type[ObjectClass]],
        object_class: Union[Type[ObjectClass], ABCMeta, None] = None,
        copy_context: bool = True,
        **kwargs: Any,
    ) -> Any:
        """Creates object from config or returns object directly, both optionally after check of type.

        Args:
            config_or_object: A configuration dict or an object itself to create/check. If a dict with a class key
                is given, a new object is created.
            object_class: Class to check object against.
            copy_context: Copy context from this object to the new one, if it doesn't define its own.

        Returns:
            (New) object (created from config) that optionally passed class check.

        Raises:
            TypeError: If the object does not match the given class.
        """

        # set parameters
        params = copy.copy(kwargs)

        # copy context?
        if copy_context and self.context is not None:
            if isinstance(config_or_object, dict) and config_or_object.get("context") is None:
                params["context"] = self.context
            elif inspect.isclass(config_or_object):
                params["context"] = self.context

        # get it
        return get_object(config_or_object, object_class, **params)

    def add_child_object(
        self,
        config_or_object: Union[dict[str, Any], ObjectClass, Type[ObjectClass]],
        object_class: Union[Type[ObjectClass], ABCMeta, None] = None,
        copy_context: bool = True,
        **kwargs: Any,
    ) -> Any:
        """Create a new child object, which will automatically be opened and closed.

        Args:
            config_or_object: Object definition
            object_class: Class for new object
            copy_context: Copy context from this object to the new one.

        Returns:
            The created object.
        """

        # get object
        obj = self.get_object(config_or_object, object_class=object_class, copy_context=copy_context, **kwargs)

        # add to list
        self._child_objects.append(obj)

        # return it
        return obj


__all__ = ["get_object", "get_safe_object", "get_class_from_string", "create_object", "Object"]
