from pathlib import Path
from single_source import get_version


__version__ = get_version("pyquads", Path(__file__).parent.parent)


def version() -> str:
    """Returns version of installed package or 0.0.0, if it cannot be determined."""
    return "0.0.0" if __version__ is None else __version__


__all__ = ["version", "__version__"]
