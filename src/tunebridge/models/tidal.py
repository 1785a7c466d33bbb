"""Models for parsing Tidal OpenAPI v2 (JSON:API) responses.

Resources carry their fields under ``attributes`` and link to related
resources through ``relationships``; requested relations are returned
side by side in the top-level ``included`` list.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "TidalAlbumAttributes",
    "TidalArtistAttributes",
    "TidalArtworkAttributes",
    "TidalCollection",
    "TidalDocument",
    "TidalResource",
    "TidalTrackAttributes",
]


class TidalModel(BaseModel):
    """Base model for Tidal responses."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class TidalResourceRef(TidalModel):
    """Resource identifier object."""

    id: str
    type: str


class TidalRelationship(TidalModel):
    """Relationship object; ``data`` is omitted unless the relation is included."""

    data: list[TidalResourceRef] | TidalResourceRef | None = None

    @property
    def refs(self) -> list[TidalResourceRef]:
        if self.data is None:
            return []
        if isinstance(self.data, TidalResourceRef):
            return [self.data]
        return self.data


class TidalResource(TidalModel):
    """Generic resource object."""

    id: str
    type: str
    attributes: dict[str, Any] = Field(default_factory=dict)
    relationships: dict[str, TidalRelationship] = Field(default_factory=dict)

    def related_ids(self, relation: str) -> list[str]:
        """IDs of related resources, in relationship order."""
        relationship = self.relationships.get(relation)
        return [ref.id for ref in relationship.refs] if relationship else []


class TidalDocument(TidalModel):
    """Single-resource document with optional included resources."""

    data: TidalResource
    included: list[TidalResource] = Field(default_factory=list)

    def included_of_type(self, resource_type: str) -> list[TidalResource]:
        return [r for r in self.included if r.type == resource_type]


class TidalCollection(TidalModel):
    """Multi-resource document, as returned by filter queries."""

    data: list[TidalResource] = Field(default_factory=list)


class TidalTrackAttributes(TidalModel):
    """Attributes of a ``tracks`` resource."""

    title: str
    isrc: str = ""
    duration: str


class TidalAlbumAttributes(TidalModel):
    """Attributes of an ``albums`` resource."""

    title: str
    barcode_id: str = Field(default="", alias="barcodeId")


class TidalArtistAttributes(TidalModel):
    """Attributes of an ``artists`` resource."""

    name: str


class TidalFileMeta(TidalModel):
    width: int = 0
    height: int = 0


class TidalArtworkFile(TidalModel):
    href: str
    meta: TidalFileMeta = Field(default_factory=TidalFileMeta)


class TidalArtworkAttributes(TidalModel):
    """Attributes of an ``artworks`` resource (album cover art)."""

    files: list[TidalArtworkFile] = Field(default_factory=list)
