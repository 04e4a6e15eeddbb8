"""
Mixins
------
"""

from .pipeline import PipelineMixin

__all__ = ["PipelineMixin"]
