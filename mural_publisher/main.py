"""Factories wiring configuration to providers and services.

The CLI resolves configuration once (``load_config``) and hands the result
to these builders.  Each builder does one thing, so tests can assemble a
real context around a fake store, or check the Contentful provider's
settings, without running a command.
"""

from __future__ import annotations

from typing import Any

import httpx

from mural_publisher.interfaces.content_store import IContentStoreProvider
from mural_publisher.providers.contentful.contentful_provider import ContentfulProvider
from mural_publisher.services.admin_service import AdminService
from mural_publisher.services.context import PublishContext
from mural_publisher.services.title_cache import TitleCache
from mural_publisher.utils.errors import ConfigurationError
from mural_publisher.utils.retry import RetryPolicy

_USER_AGENT = "mural-publisher/0.1.0"


def build_http_client(timeout: float) -> httpx.AsyncClient:
    """Create the shared HTTP client for the Contentful provider."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        headers={"User-Agent": _USER_AGENT},
    )


def build_content_store(config: dict[str, Any]) -> ContentfulProvider:
    """Build the Contentful provider from the ``contentful`` config section.

    Raises:
        ConfigurationError: If the management token or space id is missing.
    """
    section = config.get("contentful", {})
    token = section.get("management_token") or ""
    space_id = section.get("space_id") or ""
    if not token or not space_id:
        raise ConfigurationError(
            "Contentful management token and space id are required "
            "(CONTENTFUL_MANAGEMENT_TOKEN, CONTENTFUL_SPACE_ID)"
        )

    timeout = float(section.get("timeout", 30.0))
    return ContentfulProvider(
        http_client=build_http_client(timeout),
        management_token=token,
        space_id=space_id,
        environment_id=section.get("environment", "master"),
        locale=section.get("locale", "en-US"),
        api_base_url=section.get("api_base_url", "https://api.contentful.com"),
        upload_base_url=section.get("upload_base_url", "https://upload.contentful.com"),
        page_size=int(section.get("page_size", 100)),
        timeout=timeout,
    )


def build_retry_policy(config: dict[str, Any]) -> RetryPolicy:
    """Build the asset-processing poll policy."""
    try:
        return RetryPolicy.from_config(config.get("asset_processing", {}))
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid asset_processing settings: {exc}") from exc


def build_publish_context(
    config: dict[str, Any], store: IContentStoreProvider
) -> PublishContext:
    """Assemble the run context for the publishing pipeline."""
    publishing = config.get("publishing", {})
    locale = config.get("contentful", {}).get("locale", "en-US")
    content_type_id = publishing.get("content_type", "mural")
    return PublishContext(
        store=store,
        title_cache=TitleCache(content_type_id=content_type_id, locale=locale),
        content_type_id=content_type_id,
        locale=locale,
        template_filename=publishing.get("template_filename", "template.txt"),
        allowed_extensions=frozenset(
            publishing.get("allowed_extensions", [".jpg", ".jpeg", ".png"])
        ),
        retry_policy=build_retry_policy(config),
    )


def build_admin_service(
    config: dict[str, Any], store: IContentStoreProvider
) -> AdminService:
    """Build the admin service for inspection and bulk-delete commands."""
    section = config.get("contentful", {})
    return AdminService(
        store=store,
        environment=section.get("environment", "master"),
        space_id=section.get("space_id", ""),
    )
