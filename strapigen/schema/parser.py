"""Turn the raw Strapi wire schema into the normalized ``ParsedSchema``.

``normalize`` never raises on malformed input: missing names are derived
from the uid, unknown attribute types become ``UnknownAttribute`` and
unknown content-type kinds are skipped.
"""
from __future__ import annotations

import logging
from typing import Any

from strapigen.schema.models import (
    Attribute,
    BlocksAttribute,
    BooleanAttribute,
    CollectionType,
    ComponentAttribute,
    ComponentType,
    DateAttribute,
    DynamicZoneAttribute,
    EnumerationAttribute,
    JsonAttribute,
    Locale,
    MediaAttribute,
    NumberAttribute,
    ParsedSchema,
    RelationAttribute,
    SingleType,
    StringAttribute,
    UnknownAttribute,
)
from strapigen.schema.raw import RawComponent, RawContentType, RawLocale, RawSchema

log = logging.getLogger(__name__)

# Injected by the generators as the base entity shape
SYSTEM_ATTRIBUTES = frozenset({
    "id",
    "documentId",
    "createdAt",
    "updatedAt",
    "publishedAt",
    "createdBy",
    "updatedBy",
    "localizations",
    "locale",
})

STRING_TYPES = {"string", "text", "richtext", "email", "password", "uid"}
NUMBER_TYPES = {"integer", "biginteger", "float", "decimal"}
DATE_TYPES = {"date", "time", "datetime", "timestamp"}

RELATIONS = {
    "oneToOne": "oneToOne",
    "oneToMany": "oneToMany",
    "manyToOne": "manyToOne",
    "manyToMany": "manyToMany",
    # v4 unidirectional and polymorphic spellings
    "oneWay": "oneToOne",
    "manyWay": "oneToMany",
    "morphOne": "oneToOne",
    "morphToOne": "oneToOne",
    "morphMany": "oneToMany",
    "morphToMany": "manyToMany",
}

COLLECTION_KINDS = {"collectionType", "collection"}
SINGLE_KINDS = {"singleType", "single"}


def _int_or_none(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _number_or_none(value: Any) -> int | float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return int(number) if number.is_integer() else number
    return None


def _str_tuple(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(str(item) for item in value if item is not None)


def parse_attribute(raw: Any) -> Attribute:
    """Build one ``Attribute`` from its raw dict. Unknown shapes degrade."""
    if not isinstance(raw, dict):
        return UnknownAttribute()

    common = {
        "required": bool(raw.get("required")),
        "unique": bool(raw.get("unique")),
        "private": bool(raw.get("private")),
        "default": raw.get("default"),
    }
    kind = raw.get("type")

    if kind in STRING_TYPES:
        regex = raw.get("regex")
        return StringAttribute(
            type=kind,
            min_length=_int_or_none(raw.get("minLength")),
            max_length=_int_or_none(raw.get("maxLength")),
            regex=regex if isinstance(regex, str) and regex else None,
            **common,
        )
    if kind == "blocks":
        return BlocksAttribute(**common)
    if kind in NUMBER_TYPES:
        return NumberAttribute(
            type=kind,
            min=_number_or_none(raw.get("min")),
            max=_number_or_none(raw.get("max")),
            **common,
        )
    if kind == "boolean":
        return BooleanAttribute(**common)
    if kind in DATE_TYPES:
        return DateAttribute(type=kind, **common)
    if kind == "json":
        return JsonAttribute(**common)
    if kind == "enumeration":
        return EnumerationAttribute(values=_str_tuple(raw.get("enum")), **common)
    if kind == "media":
        return MediaAttribute(
            multiple=bool(raw.get("multiple")),
            allowed_types=_str_tuple(raw.get("allowedTypes")),
            **common,
        )
    if kind == "relation":
        relation = RELATIONS.get(str(raw.get("relation")), "oneToOne")
        target = raw.get("target")
        return RelationAttribute(
            relation=relation,
            target=target if isinstance(target, str) else "",
            **common,
        )
    if kind == "component":
        component = raw.get("component")
        return ComponentAttribute(
            component=component if isinstance(component, str) else "",
            repeatable=bool(raw.get("repeatable")),
            **common,
        )
    if kind == "dynamiczone":
        return DynamicZoneAttribute(components=_str_tuple(raw.get("components")), **common)

    log.debug("Unknown attribute type %r, mapping to unknown", kind)
    return UnknownAttribute(type=str(kind) if kind else "unknown", **common)


def parse_attributes(raw: Any) -> dict[str, Attribute]:
    """Parse an attribute map, dropping system fields and private attributes."""
    if not isinstance(raw, dict):
        return {}
    attributes: dict[str, Attribute] = {}
    for name, definition in raw.items():
        if name in SYSTEM_ATTRIBUTES:
            continue
        attribute = parse_attribute(definition)
        if attribute.private:
            continue
        attributes[str(name)] = attribute
    return attributes


def _definition(item: RawContentType | RawComponent) -> dict[str, Any]:
    # v5 nests everything under "schema"; older payloads keep it at the top level
    merged = item.extras()
    merged.update(item.definition)
    info = merged.get("info")
    if isinstance(info, dict):
        for key, value in info.items():
            merged.setdefault(key, value)
    return merged


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _is_localized(definition: dict[str, Any]) -> bool:
    plugin_options = definition.get("pluginOptions")
    if not isinstance(plugin_options, dict):
        return False
    i18n = plugin_options.get("i18n")
    return isinstance(i18n, dict) and bool(i18n.get("localized"))


def _is_draft_and_publish(definition: dict[str, Any]) -> bool:
    if "draftAndPublish" in definition:
        return bool(definition.get("draftAndPublish"))
    options = definition.get("options")
    return isinstance(options, dict) and bool(options.get("draftAndPublish"))


def _uid_name(uid: str) -> str:
    return uid.rsplit(".", 1)[-1].split("::")[-1] if uid else ""


def parse_content_type(item: RawContentType) -> CollectionType | SingleType | None:
    definition = _definition(item)
    kind = definition.get("kind")
    if kind in COLLECTION_KINDS:
        cls = CollectionType
    elif kind in SINGLE_KINDS:
        cls = SingleType
    else:
        log.debug("Skipping content type %s with unknown kind %r", item.uid, kind)
        return None

    singular = _text(definition.get("singularName")) or _text(item.api_id) or _uid_name(item.uid)
    if not singular:
        log.debug("Skipping content type without a usable name")
        return None
    plural = _text(definition.get("pluralName")) or f"{singular}s"

    return cls(
        uid=item.uid or f"api::{singular}.{singular}",
        api_id=_text(item.api_id) or singular,
        singular_name=singular,
        plural_name=plural,
        display_name=_text(definition.get("displayName")) or singular,
        description=_text(definition.get("description")),
        draft_and_publish=_is_draft_and_publish(definition),
        localized=_is_localized(definition),
        attributes=parse_attributes(definition.get("attributes")),
    )


def parse_component(item: RawComponent) -> ComponentType | None:
    definition = _definition(item)
    uid = item.uid
    name = _text(item.api_id) or _uid_name(uid)
    if not name:
        log.debug("Skipping component without a usable name")
        return None
    category = _text(item.category) or _text(definition.get("category"))
    if not category and "." in uid:
        category = uid.split(".", 1)[0]
    return ComponentType(
        uid=uid or f"{category or 'default'}.{name}",
        category=category,
        name=name,
        display_name=_text(definition.get("displayName")) or name,
        description=_text(definition.get("description")),
        attributes=parse_attributes(definition.get("attributes")),
    )


def parse_locale(item: RawLocale) -> Locale | None:
    code = _text(item.code)
    if not code:
        return None
    return Locale(code=code, name=_text(item.name) or code, is_default=item.is_default)


def normalize(raw: RawSchema) -> ParsedSchema:
    """
    Build the normalized schema.

    Collections and singles are sorted by singular name, components by name
    (uid breaks ties), so repeated runs over the same input iterate entities
    in the same order.
    """
    collections: list[CollectionType] = []
    singles: list[SingleType] = []
    for item in raw.content_types:
        entity = parse_content_type(item)
        if isinstance(entity, CollectionType):
            collections.append(entity)
        elif isinstance(entity, SingleType):
            singles.append(entity)

    components = [c for c in (parse_component(item) for item in raw.components) if c is not None]
    locales = [l for l in (parse_locale(item) for item in raw.locales) if l is not None]

    return ParsedSchema(
        collections=tuple(sorted(collections, key=lambda e: (e.singular_name, e.uid))),
        singles=tuple(sorted(singles, key=lambda e: (e.singular_name, e.uid))),
        components=tuple(sorted(components, key=lambda c: (c.name, c.uid))),
        locales=tuple(locales),
    )
