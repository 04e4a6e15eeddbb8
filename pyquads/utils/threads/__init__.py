from .atomiccounter import AtomicCounter

__all__ = ["AtomicCounter"]
