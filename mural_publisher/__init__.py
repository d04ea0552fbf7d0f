"""Mural publisher: publishes mural submissions from a local template tree to Contentful."""

__version__ = "0.1.0"
