"""Contentful content-store provider.

ContentfulProvider talks to the Contentful Management API over an injected
``httpx.AsyncClient``.  Services depend only on IContentStoreProvider, so
another CMS adapter can be dropped in without touching the pipeline.
"""

from mural_publisher.providers.contentful.contentful_provider import ContentfulProvider

__all__ = ["ContentfulProvider"]
