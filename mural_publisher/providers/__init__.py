"""Concrete adapters for the interfaces in ``mural_publisher.interfaces``."""
