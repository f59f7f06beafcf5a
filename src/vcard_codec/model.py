from __future__ import annotations

from dataclasses import dataclass, field

from .params import ParameterSet
from .registry import IMAGE_TYPES, MediaTypeParameter, ParameterRegistry

LOGO  = "LOGO"
PHOTO = "PHOTO"

# property name -> registry used to resolve its TYPE / MEDIATYPE values
BINARY_PROPERTIES: dict[str, ParameterRegistry] = {
    LOGO: IMAGE_TYPES,
    PHOTO: IMAGE_TYPES,
}


@dataclass
class Property:
    name: str
    parameters: ParameterSet = field(default_factory=ParameterSet)

    @property
    def language(self) -> str | None:
        return self.parameters.language

    @language.setter
    def language(self, value: str | None) -> None:
        self.parameters.language = value


@dataclass
class RawProperty(Property):
    """A property with no dedicated handler, kept verbatim so it round-trips."""
    value: str = ""
    group: str | None = None


# ── Binary payloads ────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RemoteReference:
    url: str


@dataclass(frozen=True)
class InlineData:
    data: bytes


@dataclass
class BinaryProperty(Property):
    """A property whose value is either a URL or an inline binary payload.

    ``content_type`` describes the payload format whichever storage is in use.
    Setting one storage mode always clears the other.
    """
    payload: RemoteReference | InlineData | None = None
    content_type: MediaTypeParameter | None = None
    registry: ParameterRegistry = field(default=IMAGE_TYPES, repr=False, compare=False)

    @classmethod
    def from_url(cls, name: str, url: str, content_type: MediaTypeParameter | None = None) -> BinaryProperty:
        prop = cls(name, registry=BINARY_PROPERTIES.get(name.upper(), IMAGE_TYPES))
        prop.set_url(url, content_type)
        return prop

    @classmethod
    def from_data(cls, name: str, data: bytes, content_type: MediaTypeParameter | None = None) -> BinaryProperty:
        prop = cls(name, registry=BINARY_PROPERTIES.get(name.upper(), IMAGE_TYPES))
        prop.set_data(data, content_type)
        return prop

    @property
    def url(self) -> str | None:
        return self.payload.url if isinstance(self.payload, RemoteReference) else None

    @property
    def data(self) -> bytes | None:
        return self.payload.data if isinstance(self.payload, InlineData) else None

    @property
    def is_remote(self) -> bool:
        return isinstance(self.payload, RemoteReference)

    @property
    def is_inline(self) -> bool:
        return isinstance(self.payload, InlineData)

    def set_url(self, url: str, content_type: MediaTypeParameter | None = None) -> None:
        self.payload = RemoteReference(url)
        self.content_type = content_type

    def set_data(self, data: bytes, content_type: MediaTypeParameter | None = None) -> None:
        self.payload = InlineData(bytes(data))
        self.content_type = content_type

    def build_type_obj(self, label: str) -> MediaTypeParameter:
        return self.registry.resolve_label(label)

    def build_media_type_obj(self, media_type: str) -> MediaTypeParameter:
        return self.registry.resolve_media_type(media_type)

    @property
    def type(self) -> MediaTypeParameter | None:
        """The single-valued TYPE parameter.

        Same value as ``content_type``: the codecs write TYPE (or MEDIATYPE)
        from it and fill it from TYPE when reading.
        """
        return self.content_type

    @type.setter
    def type(self, value: MediaTypeParameter | None) -> None:
        self.content_type = value


def _binary(name: str, url: str | None, data: bytes | None,
            content_type: MediaTypeParameter | None) -> BinaryProperty:
    if url is not None and data is not None:
        raise ValueError(f"{name} takes a URL or inline data, not both")
    if url is not None:
        return BinaryProperty.from_url(name, url, content_type)
    if data is not None:
        return BinaryProperty.from_data(name, data, content_type)
    return BinaryProperty(name, registry=BINARY_PROPERTIES[name], content_type=content_type)


def logo(url: str | None = None, data: bytes | None = None,
         content_type: MediaTypeParameter | None = None) -> BinaryProperty:
    """A company logo (vCard 2.1, 3.0 and 4.0)."""
    return _binary(LOGO, url, data, content_type)


def photo(url: str | None = None, data: bytes | None = None,
          content_type: MediaTypeParameter | None = None) -> BinaryProperty:
    return _binary(PHOTO, url, data, content_type)


def new_property(name: str) -> Property:
    """Empty property of the right kind for ``name``."""
    key = name.upper()
    if key in BINARY_PROPERTIES:
        return BinaryProperty(key, registry=BINARY_PROPERTIES[key])
    return RawProperty(key)
