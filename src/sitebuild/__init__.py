"""Assemble a static site output directory from several sub-projects."""

__version__ = "0.1.0"
