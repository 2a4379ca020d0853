"""Console renderers."""

from .console import render_collection, render_names

__all__ = ["render_collection", "render_names"]
