from __future__ import annotations
from typing import Optional


class PyQuadsError(Exception):
    """Base class for all exceptions"""

    # whether the error should stop a whole pipeline
    fatal = False

    def __init__(self, message: Optional[str] = None):
        Exception.__init__(self, message)
        self.message = message

    def __str__(self) -> str:
        msg = f"<{self.__class__.__name__}>"
        if self.message is not None:
            msg += f" {self.message}"
        return msg


#######################################


class MissingInputError(PyQuadsError):
    """A required input, e.g. the mask or a catalog column, is missing."""

    def __init__(self, field: str, message: Optional[str] = None):
        PyQuadsError.__init__(self, message if message is not None else f"Missing required input: {field}")
        self.field = field


class InvalidInputError(PyQuadsError):
    """An input exists, but has the wrong type or shape."""

    def __init__(self, field: str, message: Optional[str] = None):
        PyQuadsError.__init__(self, message if message is not None else f"Invalid input: {field}")
        self.field = field


class ExecutionError(PyQuadsError):
    pass


class ResourceError(ExecutionError):
    """A resource, e.g. an output buffer, could not be created."""

    fatal = True


#######################################


__all__ = ["PyQuadsError", "MissingInputError", "InvalidInputError", "ExecutionError", "ResourceError"]
