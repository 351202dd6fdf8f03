"""Manifest Studio - web app manifest generation workflow."""

__version__ = "0.1.0"
