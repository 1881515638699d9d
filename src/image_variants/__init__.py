"""Responsive WebP variant generation for uploaded images."""

__version__ = "0.1.0"
