"""releaser - publish CI build artifacts to GitHub releases."""

__version__ = "0.1.0"
