"""Mural entry models.

:class:`MuralEntry` is the record submitted to Contentful for one
submission directory; :class:`AssetLink` is the typed reference from the
entry to one uploaded photo.  Both are frozen: the publisher builds an
entry once, and the published copy is produced with ``model_copy``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Content-model field ids of the mural content type.
TITLE_FIELD = "title"
LOCATION_FIELD = "location"
DESCRIPTION_FIELD = "description"
CATEGORY_FIELD = "category"
SLUG_FIELD = "url"
PHOTOS_FIELD = "photos"


class AssetLink(BaseModel):
    """A typed link from an entry to a published asset."""

    model_config = ConfigDict(frozen=True)

    asset_id: str = Field(min_length=1)
    link_type: str = "Asset"

    def to_link(self) -> dict[str, Any]:
        """Render the link in Contentful's ``{"sys": {...}}`` shape."""
        return {
            "sys": {
                "type": "Link",
                "linkType": self.link_type,
                "id": self.asset_id,
            }
        }


class MuralEntry(BaseModel):
    """One mural as stored in the remote content store.

    ``entry_id`` and ``version`` stay ``None`` until the entry has been
    created remotely.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1)
    location: str = ""
    description: str = ""
    category: str = ""
    slug: str = Field(min_length=1, description="URL slug derived from the title.")
    photos: list[AssetLink] = Field(default_factory=list)
    entry_id: str | None = None
    version: int | None = None

    def to_fields(self, locale: str) -> dict[str, dict[str, Any]]:
        """Render locale-keyed entry fields for the content store.

        Optional text fields that are empty are left out so the content
        model's own defaults and validations apply.
        """
        fields: dict[str, dict[str, Any]] = {
            TITLE_FIELD: {locale: self.title},
            SLUG_FIELD: {locale: self.slug},
            PHOTOS_FIELD: {locale: [photo.to_link() for photo in self.photos]},
        }
        for field_id, value in (
            (LOCATION_FIELD, self.location),
            (DESCRIPTION_FIELD, self.description),
            (CATEGORY_FIELD, self.category),
        ):
            if value:
                fields[field_id] = {locale: value}
        return fields
