"""Models for records owned by the remote content store.

These are thin, frozen views over Contentful Management API payloads.
``from_api`` constructors accept the raw JSON so the adapter stays a
transport layer and the services never touch ``sys`` dictionaries.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def _sys(payload: dict[str, Any]) -> dict[str, Any]:
    return payload.get("sys") or {}


class ContentTypeField(BaseModel):
    """One field of a content-type schema."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: str


class ContentTypeSchema(BaseModel):
    """A content type and its fields."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    fields: list[ContentTypeField] = Field(default_factory=list)

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> ContentTypeSchema:
        return cls(
            id=_sys(payload).get("id", ""),
            name=payload.get("name", ""),
            fields=[
                ContentTypeField(
                    id=item.get("id", ""),
                    name=item.get("name", ""),
                    type=item.get("type", ""),
                )
                for item in payload.get("fields", [])
            ],
        )


class RemoteEntry(BaseModel):
    """An entry as returned by the content store."""

    model_config = ConfigDict(frozen=True)

    id: str
    version: int
    content_type_id: str = ""
    # Present only while the entry is published.
    published_version: int | None = None
    fields: dict[str, dict[str, Any]] = Field(default_factory=dict)

    @property
    def is_published(self) -> bool:
        return self.published_version is not None

    def field_value(self, field_id: str, locale: str) -> Any | None:
        """Return the value of *field_id* in *locale*, or ``None``."""
        return self.fields.get(field_id, {}).get(locale)

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> RemoteEntry:
        sys_info = _sys(payload)
        content_type = (sys_info.get("contentType") or {}).get("sys") or {}
        return cls(
            id=sys_info.get("id", ""),
            version=int(sys_info.get("version", 0)),
            content_type_id=content_type.get("id", ""),
            published_version=sys_info.get("publishedVersion"),
            fields=payload.get("fields") or {},
        )


class RemoteAsset(BaseModel):
    """An asset as returned by the content store."""

    model_config = ConfigDict(frozen=True)

    id: str
    version: int
    published_version: int | None = None
    fields: dict[str, dict[str, Any]] = Field(default_factory=dict)

    @property
    def is_published(self) -> bool:
        return self.published_version is not None

    def file_info(self, locale: str) -> dict[str, Any]:
        return (self.fields.get("file") or {}).get(locale) or {}

    def is_processed(self, locale: str) -> bool:
        """True once processing has produced a delivery URL for *locale*."""
        return bool(self.file_info(locale).get("url"))

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> RemoteAsset:
        sys_info = _sys(payload)
        return cls(
            id=sys_info.get("id", ""),
            version=int(sys_info.get("version", 0)),
            published_version=sys_info.get("publishedVersion"),
            fields=payload.get("fields") or {},
        )


class ContentTypeSnapshot(BaseModel):
    """A content type with the raw field values of every entry of that type."""

    model_config = ConfigDict(frozen=True)

    content_type: ContentTypeSchema
    entries: list[dict[str, Any]] = Field(default_factory=list)


class ApiCheckResult(BaseModel):
    """Outcome of the connectivity smoke test."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    space_id: str
    space_name: str
    environment: str
    content_type_count: int = Field(ge=0)
