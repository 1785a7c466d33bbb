"""Conversion result models."""

from pydantic import BaseModel, ConfigDict, Field

from tunebridge.models.enums import ObjectType, Platform


class Link(BaseModel):
    """One provider's link for the converted entity.

    Serialized with ``displayName`` in camel case.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    provider: str
    type: str
    display_name: str = Field(alias="displayName")
    url: str
    artwork: str = ""

    @classmethod
    def build(
        cls,
        platform: Platform,
        object_type: ObjectType,
        display_name: str,
        url: str,
        artwork: str = "",
    ) -> "Link":
        """Create a link using the platform and object type display labels."""
        return cls(
            provider=platform.label,
            type=object_type.label,
            display_name=display_name,
            url=url,
            artwork=artwork,
        )


class ConversionResults(BaseModel):
    """All links found for one share link, in provider order.

    Providers without a match are absent; there are no placeholder entries.
    """

    model_config = ConfigDict(frozen=True)

    results: list[Link] = Field(default_factory=list)

    def to_json(self) -> str:
        """Serialize to the public JSON shape."""
        return self.model_dump_json(by_alias=True)

    @property
    def providers(self) -> list[str]:
        """Provider labels present in the results."""
        return [link.provider for link in self.results]
