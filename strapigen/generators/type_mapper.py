"""Attribute -> TypeScript type expression."""
from __future__ import annotations

from dataclasses import dataclass
from typing import assert_never

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


@dataclass(frozen=True)
class MappedType:
    type: str
    utils: tuple[str, ...] = ()  # names from the shared utils module
    refs: tuple[str, ...] = ()  # uids of other entities whose types are used


@dataclass(frozen=True)
class TypeContext:
    symbols: SymbolTable
    self_uid: str = ""

    def resolve(self, uid: str, component: bool) -> EntitySymbol | None:
        symbol = self.symbols.get(uid)
        if symbol is None or symbol.is_component != component:
            return None
        return symbol

    def refs(self, *symbols: EntitySymbol) -> tuple[str, ...]:
        return tuple(s.uid for s in symbols if s.uid != self.self_uid)


def map_attribute(attr: Attribute, ctx: TypeContext) -> MappedType:
    match attr:
        case StringAttribute():
            return MappedType("string")
        case BlocksAttribute():
            return MappedType("BlocksContent", utils=("BlocksContent",))
        case NumberAttribute():
            return MappedType("number")
        case BooleanAttribute():
            return MappedType("boolean")
        case DateAttribute():
            return MappedType("string")
        case JsonAttribute():
            return MappedType("unknown")
        case EnumerationAttribute():
            if not attr.values:
                return MappedType("string")
            return MappedType(" | ".join(ts_string(v) for v in attr.values))
        case MediaAttribute():
            media = "StrapiMedia[]" if attr.multiple else "StrapiMedia | null"
            return MappedType(media, utils=("StrapiMedia",))
        case RelationAttribute():
            target = ctx.resolve(attr.target, component=False)
            if target is None:
                return MappedType("unknown")
            ref = f"{target.type_name}[]" if attr.is_many else f"{target.type_name} | null"
            return MappedType(ref, refs=ctx.refs(target))
        case ComponentAttribute():
            target = ctx.resolve(attr.component, component=True)
            if target is None:
                return MappedType("unknown")
            ref = f"{target.type_name}[]" if attr.repeatable else f"{target.type_name} | null"
            return MappedType(ref, refs=ctx.refs(target))
        case DynamicZoneAttribute():
            members = [s for s in (ctx.resolve(uid, component=True) for uid in attr.components) if s]
            if not members:
                return MappedType("unknown[]")
            union = " | ".join(s.type_name for s in members)
            return MappedType(f"({union})[]" if len(members) > 1 else f"{union}[]", refs=ctx.refs(*members))
        case UnknownAttribute():
            return MappedType("unknown")
        case _:
            assert_never(attr)


def attribute_doc(attr: Attribute) -> str:
    """Short constraint summary shown above a generated field."""
    parts: list[str] = []
    if attr.required:
        parts.append("Required")
    if isinstance(attr, StringAttribute):
        if attr.min_length is not None:
            parts.append(f"Min length: {attr.min_length}")
        if attr.max_length is not None:
            parts.append(f"Max length: {attr.max_length}")
    elif isinstance(attr, NumberAttribute):
        if attr.min is not None:
            parts.append(f"Min: {attr.min}")
        if attr.max is not None:
            parts.append(f"Max: {attr.max}")
    return ", ".join(parts)
