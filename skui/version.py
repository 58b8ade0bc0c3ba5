"""Package version information."""

__all__ = ["__version__"]

# Semantic version of the toolkit. Kept here instead of being read from package
# metadata so frozen plugin bundles can still report it.
__version__ = "2.5.0"
