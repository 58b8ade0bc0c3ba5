"""HTML dialog windows with a JS to Python event bridge."""

from skui.version import __version__

__all__ = ["__version__"]
