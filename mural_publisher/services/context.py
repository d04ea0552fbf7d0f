"""Run context shared by the submission walker and the publisher.

Everything with run-lifetime state (the store connection and the title
cache) hangs off one explicitly constructed :class:`PublishContext`
instead of module globals.  ``mural_publisher.main.build_publish_context``
assembles it from configuration; tests construct it directly around a fake
store.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mural_publisher.interfaces.content_store import IContentStoreProvider
from mural_publisher.services.directory_scanner import DEFAULT_TEMPLATE_FILENAME
from mural_publisher.services.title_cache import TitleCache
from mural_publisher.utils.retry import RetryPolicy

DEFAULT_ALLOWED_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png"})


@dataclass
class PublishContext:
    """Collaborators and settings for one publishing run."""

    store: IContentStoreProvider
    title_cache: TitleCache
    content_type_id: str = "mural"
    locale: str = "en-US"
    template_filename: str = DEFAULT_TEMPLATE_FILENAME
    allowed_extensions: frozenset[str] = DEFAULT_ALLOWED_EXTENSIONS
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)

    def __post_init__(self) -> None:
        self.allowed_extensions = frozenset(ext.lower() for ext in self.allowed_extensions)
