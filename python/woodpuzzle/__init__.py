"""Sliding block puzzle solver built on dense position codes."""

__version__ = "1.0.0"
