"""Sam: a Markdown wiki served straight from a directory tree."""

__version__ = "0.3.0"
