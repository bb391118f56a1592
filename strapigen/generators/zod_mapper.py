"""Attribute -> zod schema expression.

Runs in one of two modes. ``create`` keeps the schema's required flags and
applies defaults; ``update`` makes every field optional and never applies
defaults. The mode is fixed per ``ZodContext`` and applied in one place,
``map_attribute``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal, assert_never

from strapigen.generators.symbols import EntitySymbol, SymbolTable
from strapigen.generators.utils import ts_string
from strapigen.schema.models import (
    Attribute,
    BlocksAttribute,
    BooleanAttribute,
    ComponentAttribute,
    DateAttribute,
    DynamicZoneAttribute,
    EnumerationAttribute,
    JsonAttribute,
    MediaAttribute,
    NumberAttribute,
    RelationAttribute,
    StringAttribute,
    UnknownAttribute,
)

log = logging.getLogger(__name__)

BLOCKS_SCHEMA = "z.array(z.object({ type: z.string(), children: z.array(z.unknown()).optional() }).passthrough())"
MEDIA_ID = "z.number().int().positive()"


@dataclass(frozen=True)
class ZodContext:
    symbols: SymbolTable
    strapi_version: Literal["v4", "v5"] = "v5"
    advanced_relations: bool = False
    mode: Literal["create", "update"] = "create"
    self_uid: str = ""

    @property
    def update(self) -> bool:
        return self.mode == "update"

    @property
    def id_schema(self) -> str:
        return "z.string()" if self.strapi_version == "v5" else "z.number().int().positive()"

    @property
    def use_advanced_relations(self) -> bool:
        return self.advanced_relations and self.strapi_version == "v5"


@dataclass(frozen=True)
class ZodMapped:
    schema: str = ""
    refs: tuple[str, ...] = ()  # component uids whose schema variables are used
    skip_reason: str | None = None

    @property
    def skipped(self) -> bool:
        return self.skip_reason is not None


def _length_bounds(attr: StringAttribute) -> str:
    out = ""
    if attr.min_length is not None:
        out += f".min({attr.min_length})"
    if attr.max_length is not None:
        out += f".max({attr.max_length})"
    return out


def _number_bounds(attr: NumberAttribute) -> str:
    out = ""
    if attr.min is not None:
        out += f".min({attr.min})"
    if attr.max is not None:
        out += f".max({attr.max})"
    return out


def _string_schema(attr: StringAttribute) -> str:
    if attr.type == "email":
        return f"z.string().email(){_length_bounds(attr)}"
    if attr.type == "password":
        # fall back to a six character minimum
        max_length = f".max({attr.max_length})" if attr.max_length is not None else ""
        return f"z.string().min({attr.min_length if attr.min_length is not None else 6}){max_length}"
    schema = f"z.string(){_length_bounds(attr)}"
    if attr.regex:
        schema += f".regex(new RegExp({ts_string(attr.regex)}))"
    return schema


def _date_schema(attr: DateAttribute) -> str:
    if attr.type == "date":
        return "z.string().date()"
    if attr.type == "time":
        return "z.string().time()"
    return "z.string().datetime({ offset: true })"


def _advanced_relation_schema(id_schema: str) -> str:
    position = (
        "z.object({ before: z.string().optional(), after: z.string().optional(), "
        "start: z.boolean().optional(), end: z.boolean().optional() }).optional()"
    )
    item = (
        f"z.object({{ documentId: {id_schema}, locale: z.string().optional(), "
        f"status: z.enum(['draft', 'published']).optional(), position: {position} }})"
    )
    disconnect = (
        f"z.object({{ documentId: {id_schema}, locale: z.string().optional(), "
        f"status: z.enum(['draft', 'published']).optional() }})"
    )
    item_or_id = f"z.union([{id_schema}, {item}])"
    return (
        f"z.union([z.array({id_schema}), z.object({{ "
        f"connect: z.array({item_or_id}).optional(), "
        f"disconnect: z.array(z.union([{id_schema}, {disconnect}])).optional(), "
        f"set: z.array({item_or_id}).optional() }})])"
    )


def _relation_schema(attr: RelationAttribute, ctx: ZodContext) -> str:
    if ctx.use_advanced_relations:
        return _advanced_relation_schema(ctx.id_schema)
    if attr.is_many:
        return f"z.array({ctx.id_schema})"
    return f"{ctx.id_schema}.nullable()"


def _component_ref(symbol: EntitySymbol, ctx: ZodContext) -> str:
    if ctx.symbols.on_same_cycle(ctx.self_uid, symbol.uid):
        return f"z.lazy(() => {symbol.schema_name})"
    return symbol.schema_name


def _resolve_component(uid: str, ctx: ZodContext) -> EntitySymbol | None:
    symbol = ctx.symbols.get(uid)
    return symbol if symbol is not None and symbol.is_component else None


def _base_schema(attr: Attribute, ctx: ZodContext) -> ZodMapped:
    match attr:
        case StringAttribute():
            return ZodMapped(_string_schema(attr))
        case BlocksAttribute():
            return ZodMapped(BLOCKS_SCHEMA)
        case NumberAttribute():
            base = "z.number().int()" if attr.type in ("integer", "biginteger") else "z.number()"
            return ZodMapped(base + _number_bounds(attr))
        case BooleanAttribute():
            return ZodMapped("z.boolean()")
        case DateAttribute():
            return ZodMapped(_date_schema(attr))
        case JsonAttribute():
            return ZodMapped("z.record(z.unknown())")
        case EnumerationAttribute():
            if not attr.values:
                return ZodMapped("z.string()")
            return ZodMapped(f"z.enum([{', '.join(ts_string(v) for v in attr.values)}])")
        case MediaAttribute():
            if attr.multiple:
                return ZodMapped(f"z.array({MEDIA_ID})")
            return ZodMapped(f"{MEDIA_ID}.nullable()")
        case RelationAttribute():
            return ZodMapped(_relation_schema(attr, ctx))
        case ComponentAttribute():
            symbol = _resolve_component(attr.component, ctx)
            if symbol is None:
                return ZodMapped(skip_reason=f"unknown component '{attr.component}'")
            ref = _component_ref(symbol, ctx)
            schema = f"z.array({ref})" if attr.repeatable else f"{ref}.nullable()"
            return ZodMapped(schema, refs=(symbol.uid,))
        case DynamicZoneAttribute():
            members = [s for s in (_resolve_component(uid, ctx) for uid in attr.components) if s]
            if not members:
                return ZodMapped(skip_reason="dynamic zone without known components")
            variants = [
                f"z.object({{ __component: z.literal({ts_string(s.uid)}) }}).and({_component_ref(s, ctx)})"
                for s in members
            ]
            item = variants[0] if len(variants) == 1 else f"z.union([{', '.join(variants)}])"
            return ZodMapped(f"z.array({item})", refs=tuple(s.uid for s in members))
        case UnknownAttribute():
            return ZodMapped(skip_reason=f"unsupported attribute type '{attr.type}'")
        case _:
            assert_never(attr)


def _default_literal(attr: Attribute, ctx: ZodContext) -> str | None:
    value: Any = attr.default
    if value is None:
        # list-valued links start empty on create
        if isinstance(attr, MediaAttribute) and attr.multiple:
            return "[]"
        if isinstance(attr, RelationAttribute) and attr.is_many and not ctx.use_advanced_relations:
            return "[]"
        return None
    if isinstance(attr, (StringAttribute, EnumerationAttribute)) and isinstance(value, str):
        if isinstance(attr, StringAttribute) and attr.type == "password":
            return None
        return ts_string(value)
    if isinstance(attr, NumberAttribute) and isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if isinstance(attr, BooleanAttribute) and isinstance(value, bool):
        return "true" if value else "false"
    return None


def map_attribute(attr: Attribute, ctx: ZodContext) -> ZodMapped:
    mapped = _base_schema(attr, ctx)
    if mapped.skipped:
        return mapped
    schema = mapped.schema
    if ctx.update or not attr.required:
        schema += ".optional()"
    if not ctx.update:
        default = _default_literal(attr, ctx)
        if default is not None:
            schema += f".default({default})"
    return ZodMapped(schema, refs=mapped.refs)


@dataclass(frozen=True)
class ZodObject:
    fields: tuple[tuple[str, str], ...]
    skipped: tuple[tuple[str, str], ...]
    refs: tuple[str, ...]


def map_attributes(attributes: dict[str, Attribute], ctx: ZodContext) -> ZodObject:
    """Map an attribute map in declaration order, collecting skips and refs."""
    fields: list[tuple[str, str]] = []
    skipped: list[tuple[str, str]] = []
    refs: list[str] = []
    for name, attr in attributes.items():
        mapped = map_attribute(attr, ctx)
        if mapped.skipped:
            log.debug("Skipping field %s: %s", name, mapped.skip_reason)
            skipped.append((name, mapped.skip_reason or ""))
            continue
        fields.append((name, mapped.schema))
        refs.extend(uid for uid in mapped.refs if uid not in refs)
    return ZodObject(tuple(fields), tuple(skipped), tuple(refs))
