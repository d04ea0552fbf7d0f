"""Contentful Content Management API provider.

Implements :class:`IContentStoreProvider` over the CMA REST endpoints with
an injected ``httpx.AsyncClient``.  Every call is scoped to one space and
one environment.  Mutations carry ``X-Contentful-Version`` so a stale
record is rejected instead of overwriting newer remote changes.

Failures are mapped onto the error hierarchy:

    transport error / 5xx  -> ProviderUnavailableError
    429                    -> RateLimitError
    401                    -> ConfigurationError (bad management token)
    other 4xx              -> ContentStoreError (message from the API body)

No request is retried here; the only polling in the tool is the
asset-processing loop in the publisher.
"""

from __future__ import annotations

from typing import Any

import httpx

from mural_publisher.interfaces.content_store import IContentStoreProvider
from mural_publisher.models.remote import ContentTypeSchema, RemoteAsset, RemoteEntry
from mural_publisher.utils.errors import (
    ConfigurationError,
    ContentStoreError,
    ProviderUnavailableError,
    RateLimitError,
)
from mural_publisher.utils.logging import get_logger

_API_BASE_URL = "https://api.contentful.com"
_UPLOAD_BASE_URL = "https://upload.contentful.com"
_CMA_CONTENT_TYPE = "application/vnd.contentful.management.v1+json"
_PAGE_SIZE = 100  # CMA accepts up to 1000; 100 keeps responses small
_TIMEOUT = 30.0
_PROVIDER_NAME = "contentful"


class ContentfulProvider(IContentStoreProvider):
    """Content store backed by the Contentful Management API.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient`` for testability and connection
        pooling.  The provider closes it in :meth:`close`.
    management_token:
        CMA personal access token.
    space_id:
        Target space.
    environment_id:
        Target environment within the space (default ``"master"``).
    locale:
        Locale used for asset titles and files.
    page_size:
        ``limit`` sent on collection requests.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        management_token: str,
        space_id: str,
        environment_id: str = "master",
        locale: str = "en-US",
        api_base_url: str = _API_BASE_URL,
        upload_base_url: str = _UPLOAD_BASE_URL,
        page_size: int = _PAGE_SIZE,
        timeout: float = _TIMEOUT,
    ) -> None:
        self._http = http_client
        self._token = management_token
        self._space_id = space_id
        self._environment_id = environment_id
        self._locale = locale
        self._api_base_url = api_base_url.rstrip("/")
        self._upload_base_url = upload_base_url.rstrip("/")
        self._page_size = max(1, page_size)
        self._timeout = timeout
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @property
    def _space_url(self) -> str:
        return f"{self._api_base_url}/spaces/{self._space_id}"

    @property
    def _env_url(self) -> str:
        return f"{self._space_url}/environments/{self._environment_id}"

    @staticmethod
    def _version_header(version: int) -> dict[str, str]:
        return {"X-Contentful-Version": str(version)}

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        """Pull the API's own error message out of a failed response."""
        try:
            body = response.json()
        except ValueError:
            return response.text[:200]
        if not isinstance(body, dict):
            return str(body)[:200]
        error_id = (body.get("sys") or {}).get("id", "")
        message = body.get("message", "")
        return f"{error_id}: {message}" if error_id else message or response.text[:200]

    async def _request(
        self,
        method: str,
        url: str,
        *,
        json_body: Any | None = None,
        content: bytes | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Send one CMA request and return the decoded JSON body.

        Returns an empty dict for bodiless responses (e.g. 204 on delete).
        """
        request_headers = {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": _CMA_CONTENT_TYPE,
        }
        if headers:
            request_headers.update(headers)

        try:
            response = await self._http.request(
                method,
                url,
                json=json_body,
                content=content,
                params=params,
                headers=request_headers,
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            self._logger.warning("contentful_request_failed", method=method, url=url, error=str(exc))
            raise ProviderUnavailableError(
                message=f"{method} {url} failed: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc

        status = response.status_code
        if status == 429:
            reset = response.headers.get("X-Contentful-RateLimit-Reset", "?")
            self._logger.warning("contentful_rate_limited", method=method, url=url, reset_s=reset)
            raise RateLimitError(
                message=f"Rate limit exceeded on {method} {url} (resets in {reset}s)",
                provider_name=_PROVIDER_NAME,
            )
        if status == 401:
            raise ConfigurationError(
                message=f"Contentful rejected the management token: {self._error_detail(response)}",
                provider_name=_PROVIDER_NAME,
            )
        if status >= 500:
            self._logger.warning("contentful_server_error", method=method, url=url, status=status)
            raise ProviderUnavailableError(
                message=f"{method} {url} returned {status}",
                provider_name=_PROVIDER_NAME,
                status_code=status,
            )
        if status >= 400:
            raise ContentStoreError(
                message=f"{method} {url} returned {status}: {self._error_detail(response)}",
                provider_name=_PROVIDER_NAME,
                status_code=status,
            )

        self._logger.debug("contentful_request", method=method, url=url, status=status)
        if status == 204 or not response.content:
            return {}
        return response.json()

    async def _paginate(
        self, url: str, params: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """Read every page of a CMA collection endpoint."""
        items: list[dict[str, Any]] = []
        skip = 0
        while True:
            page = await self._request(
                "GET",
                url,
                params={**(params or {}), "skip": skip, "limit": self._page_size},
            )
            batch = page.get("items", [])
            items.extend(batch)
            skip += len(batch)
            total = int(page.get("total", skip))
            if not batch or skip >= total:
                break
        return items

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME

    def get_api_base_url(self) -> str:
        return self._api_base_url

    async def get_space_name(self) -> str:
        payload = await self._request("GET", self._space_url)
        return payload.get("name", "")

    # ------------------------------------------------------------------
    # Content types
    # ------------------------------------------------------------------

    async def list_content_types(self) -> list[ContentTypeSchema]:
        items = await self._paginate(f"{self._env_url}/content_types")
        return [ContentTypeSchema.from_api(item) for item in items]

    async def get_content_type(self, content_type_id: str) -> ContentTypeSchema:
        payload = await self._request("GET", f"{self._env_url}/content_types/{content_type_id}")
        return ContentTypeSchema.from_api(payload)

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    async def list_entries(self, content_type_id: str | None = None) -> list[RemoteEntry]:
        params = {"content_type": content_type_id} if content_type_id else None
        items = await self._paginate(f"{self._env_url}/entries", params)
        return [RemoteEntry.from_api(item) for item in items]

    async def create_entry(
        self, content_type_id: str, fields: dict[str, dict[str, Any]]
    ) -> RemoteEntry:
        payload = await self._request(
            "POST",
            f"{self._env_url}/entries",
            json_body={"fields": fields},
            headers={"X-Contentful-Content-Type": content_type_id},
        )
        return RemoteEntry.from_api(payload)

    async def publish_entry(self, entry: RemoteEntry) -> RemoteEntry:
        payload = await self._request(
            "PUT",
            f"{self._env_url}/entries/{entry.id}/published",
            headers=self._version_header(entry.version),
        )
        return RemoteEntry.from_api(payload)

    async def unpublish_entry(self, entry: RemoteEntry) -> RemoteEntry:
        payload = await self._request(
            "DELETE",
            f"{self._env_url}/entries/{entry.id}/published",
            headers=self._version_header(entry.version),
        )
        return RemoteEntry.from_api(payload)

    async def delete_entry(self, entry: RemoteEntry) -> None:
        await self._request(
            "DELETE",
            f"{self._env_url}/entries/{entry.id}",
            headers=self._version_header(entry.version),
        )

    # ------------------------------------------------------------------
    # Uploads and assets
    # ------------------------------------------------------------------

    async def create_upload(self, data: bytes) -> str:
        payload = await self._request(
            "POST",
            f"{self._upload_base_url}/spaces/{self._space_id}"
            f"/environments/{self._environment_id}/uploads",
            content=data,
            headers={"Content-Type": "application/octet-stream"},
        )
        upload_id = (payload.get("sys") or {}).get("id")
        if not upload_id:
            raise ContentStoreError(
                message="Upload response carried no id",
                provider_name=_PROVIDER_NAME,
            )
        return upload_id

    async def create_asset(
        self,
        title: str,
        file_name: str,
        content_type: str,
        upload_id: str,
    ) -> RemoteAsset:
        fields = {
            "title": {self._locale: title},
            "file": {
                self._locale: {
                    "contentType": content_type,
                    "fileName": file_name,
                    "uploadFrom": {
                        "sys": {"type": "Link", "linkType": "Upload", "id": upload_id}
                    },
                }
            },
        }
        payload = await self._request(
            "POST", f"{self._env_url}/assets", json_body={"fields": fields}
        )
        return RemoteAsset.from_api(payload)

    async def process_asset(self, asset: RemoteAsset) -> None:
        await self._request(
            "PUT",
            f"{self._env_url}/assets/{asset.id}/files/{self._locale}/process",
            headers=self._version_header(asset.version),
        )

    async def get_asset(self, asset_id: str) -> RemoteAsset:
        payload = await self._request("GET", f"{self._env_url}/assets/{asset_id}")
        return RemoteAsset.from_api(payload)

    async def publish_asset(self, asset: RemoteAsset) -> RemoteAsset:
        payload = await self._request(
            "PUT",
            f"{self._env_url}/assets/{asset.id}/published",
            headers=self._version_header(asset.version),
        )
        return RemoteAsset.from_api(payload)

    async def list_assets(self) -> list[RemoteAsset]:
        items = await self._paginate(f"{self._env_url}/assets")
        return [RemoteAsset.from_api(item) for item in items]

    async def unpublish_asset(self, asset: RemoteAsset) -> RemoteAsset:
        payload = await self._request(
            "DELETE",
            f"{self._env_url}/assets/{asset.id}/published",
            headers=self._version_header(asset.version),
        )
        return RemoteAsset.from_api(payload)

    async def delete_asset(self, asset: RemoteAsset) -> None:
        await self._request(
            "DELETE",
            f"{self._env_url}/assets/{asset.id}",
            headers=self._version_header(asset.version),
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def close(self) -> None:
        await self._http.aclose()
