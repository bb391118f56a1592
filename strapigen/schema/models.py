"""Normalized schema model consumed by the generators.

``Attribute`` is a closed union: every mapping table dispatches on it with a
``match`` statement ending in ``assert_never``, so a new attribute kind is
flagged by the type checker in every table that misses it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal, Union

StringKind = Literal["string", "text", "richtext", "email", "password", "uid"]
NumberKind = Literal["integer", "biginteger", "float", "decimal"]
DateKind = Literal["date", "time", "datetime", "timestamp"]
RelationKind = Literal["oneToOne", "oneToMany", "manyToOne", "manyToMany"]

MANY_RELATIONS = frozenset({"oneToMany", "manyToMany"})


@dataclass(frozen=True, kw_only=True)
class AttributeBase:
    required: bool = False
    unique: bool = False
    private: bool = False
    default: Any = None


@dataclass(frozen=True, kw_only=True)
class StringAttribute(AttributeBase):
    type: StringKind = "string"
    min_length: int | None = None
    max_length: int | None = None
    regex: str | None = None


@dataclass(frozen=True, kw_only=True)
class BlocksAttribute(AttributeBase):
    type: Literal["blocks"] = "blocks"


@dataclass(frozen=True, kw_only=True)
class NumberAttribute(AttributeBase):
    type: NumberKind = "integer"
    min: int | float | None = None
    max: int | float | None = None


@dataclass(frozen=True, kw_only=True)
class BooleanAttribute(AttributeBase):
    type: Literal["boolean"] = "boolean"


@dataclass(frozen=True, kw_only=True)
class DateAttribute(AttributeBase):
    type: DateKind = "datetime"


@dataclass(frozen=True, kw_only=True)
class JsonAttribute(AttributeBase):
    type: Literal["json"] = "json"


@dataclass(frozen=True, kw_only=True)
class EnumerationAttribute(AttributeBase):
    type: Literal["enumeration"] = "enumeration"
    values: tuple[str, ...] = ()


@dataclass(frozen=True, kw_only=True)
class MediaAttribute(AttributeBase):
    type: Literal["media"] = "media"
    multiple: bool = False
    allowed_types: tuple[str, ...] = ()


@dataclass(frozen=True, kw_only=True)
class RelationAttribute(AttributeBase):
    type: Literal["relation"] = "relation"
    relation: RelationKind = "oneToOne"
    target: str = ""

    @property
    def is_many(self) -> bool:
        return self.relation in MANY_RELATIONS


@dataclass(frozen=True, kw_only=True)
class ComponentAttribute(AttributeBase):
    type: Literal["component"] = "component"
    component: str = ""
    repeatable: bool = False


@dataclass(frozen=True, kw_only=True)
class DynamicZoneAttribute(AttributeBase):
    type: Literal["dynamiczone"] = "dynamiczone"
    components: tuple[str, ...] = ()


@dataclass(frozen=True, kw_only=True)
class UnknownAttribute(AttributeBase):
    """An attribute whose type tag strapigen does not understand."""

    type: str = "unknown"


Attribute = Union[
    StringAttribute,
    BlocksAttribute,
    NumberAttribute,
    BooleanAttribute,
    DateAttribute,
    JsonAttribute,
    EnumerationAttribute,
    MediaAttribute,
    RelationAttribute,
    ComponentAttribute,
    DynamicZoneAttribute,
    UnknownAttribute,
]


@dataclass(frozen=True)
class CollectionType:
    uid: str
    api_id: str
    singular_name: str
    plural_name: str
    display_name: str
    description: str = ""
    draft_and_publish: bool = False
    localized: bool = False
    # insertion order is declaration order; it drives generated field order
    attributes: dict[str, Attribute] = field(default_factory=dict)

    kind: ClassVar[str] = "collection"

    @property
    def endpoint(self) -> str:
        return self.plural_name or f"{self.singular_name}s"


@dataclass(frozen=True)
class SingleType:
    uid: str
    api_id: str
    singular_name: str
    plural_name: str
    display_name: str
    description: str = ""
    draft_and_publish: bool = False
    localized: bool = False
    attributes: dict[str, Attribute] = field(default_factory=dict)

    kind: ClassVar[str] = "single"

    @property
    def endpoint(self) -> str:
        return self.singular_name


@dataclass(frozen=True)
class ComponentType:
    uid: str
    category: str
    name: str
    display_name: str
    description: str = ""
    attributes: dict[str, Attribute] = field(default_factory=dict)

    kind: ClassVar[str] = "component"


ContentType = Union[CollectionType, SingleType]
Entity = Union[CollectionType, SingleType, ComponentType]


@dataclass(frozen=True)
class Locale:
    code: str
    name: str
    is_default: bool = False


def default_locale(locales: tuple[Locale, ...]) -> str:
    """Code of the default locale; the first one, or "en" without i18n."""
    for locale in locales:
        if locale.is_default:
            return locale.code
    return locales[0].code if locales else "en"


@dataclass(frozen=True)
class ParsedSchema:
    collections: tuple[CollectionType, ...] = ()
    singles: tuple[SingleType, ...] = ()
    components: tuple[ComponentType, ...] = ()
    locales: tuple[Locale, ...] = ()

    @property
    def content_types(self) -> tuple[ContentType, ...]:
        return self.collections + self.singles

    def get_content_type(self, uid: str) -> ContentType | None:
        for entity in self.content_types:
            if entity.uid == uid:
                return entity
        return None

    @property
    def default_locale(self) -> str:
        return default_locale(self.locales)
