"""Public interface definitions for external service providers.

The remote CMS is accessed exclusively through
:class:`IContentStoreProvider`.  The concrete adapter
(``ContentfulProvider``) is constructed in ``mural_publisher/main.py`` and
injected into the services, so unit tests can pass a fake store instead of
making network calls.
"""

from mural_publisher.interfaces.content_store import IContentStoreProvider

__all__ = ["IContentStoreProvider"]
