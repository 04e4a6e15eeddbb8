from .componentlist import ComponentList
from .fwhmstatistics import FWHMStatistics

__all__ = ["ComponentList", "FWHMStatistics"]
