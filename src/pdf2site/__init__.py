"""pdf2site: turn rendered PDF pages into interactive static sites."""

__version__ = "0.1.0"

__all__ = ["__version__"]
