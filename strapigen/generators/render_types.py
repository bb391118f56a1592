"""Entity and component type modules."""
from __future__ import annotations

from strapigen.generators.ir import Field, InterfaceDecl, ModuleIR
from strapigen.generators.paths import UTILS, LogicalModule, ModuleResolver
from strapigen.generators.symbols import SymbolTable
from strapigen.generators.type_mapper import TypeContext, attribute_doc, map_attribute
from strapigen.generators.types import GenerationOptions
from strapigen.generators.utils import comment_text
from strapigen.schema.models import Attribute, CollectionType, ComponentType, ContentType

_ID_OPS = "{ $eq?: %(t)s; $ne?: %(t)s; $in?: %(t)s[]; $notIn?: %(t)s[] }"
_DATE_OPS = "{ $eq?: string; $gt?: string; $gte?: string; $lt?: string; $lte?: string }"
_PUBLISHED_OPS = "{ $eq?: string; $ne?: string; $null?: boolean; $notNull?: boolean }"


def _map_fields(
    attributes: dict[str, Attribute],
    ctx: TypeContext,
    utils: set[str],
    refs: list[str],
) -> list[Field]:
    fields: list[Field] = []
    for name, attr in attributes.items():
        mapped = map_attribute(attr, ctx)
        utils.update(mapped.utils)
        refs.extend(uid for uid in mapped.refs if uid not in refs)
        fields.append(Field(name, mapped.type, optional=not attr.required, doc=attribute_doc(attr)))
    return fields


def _add_imports(
    module: ModuleIR,
    source: LogicalModule,
    utils: set[str],
    refs: list[str],
    symbols: SymbolTable,
    resolver: ModuleResolver,
) -> None:
    if utils:
        module.add_import(resolver.specifier(source, UTILS), *sorted(utils), type_only=True)
    for uid in refs:
        target = symbols[uid]
        module.add_import(resolver.specifier(source, target.types_module), target.type_name, type_only=True)


def _header(*lines: str) -> tuple[str, ...]:
    return tuple(comment_text(line) for line in lines if line) + ("Generated by strapigen",)


def filters_interface(type_name: str, entity: CollectionType, options: GenerationOptions) -> InterfaceDecl:
    fields = [Field("id", f"number | {_ID_OPS % {'t': 'number'}}", optional=True)]
    if not options.v4:
        fields.append(Field("documentId", f"string | {_ID_OPS % {'t': 'string'}}", optional=True))
    fields += [
        Field("createdAt", f"string | {_DATE_OPS}", optional=True),
        Field("updatedAt", f"string | {_DATE_OPS}", optional=True),
        Field("publishedAt", f"string | null | {_PUBLISHED_OPS}", optional=True),
        Field("$and", f"{type_name}Filters[]", optional=True),
        Field("$or", f"{type_name}Filters[]", optional=True),
        Field("$not", f"{type_name}Filters", optional=True),
    ]
    return InterfaceDecl(f"{type_name}Filters", tuple(fields), doc=(f"Query filters for {entity.display_name}",))


def render_content_type_types(
    entity: ContentType,
    symbols: SymbolTable,
    options: GenerationOptions,
    resolver: ModuleResolver,
) -> ModuleIR:
    symbol = symbols[entity.uid]
    utils = {"StrapiBaseEntity"}
    refs: list[str] = []
    fields = _map_fields(entity.attributes, TypeContext(symbols, entity.uid), utils, refs)
    if entity.localized:
        fields.append(Field("locale", "string"))
        fields.append(Field("localizations", f"{symbol.type_name}[]", optional=True))

    module = ModuleIR(header=_header(entity.display_name, entity.description))
    _add_imports(module, symbol.types_module, utils, refs, symbols, resolver)
    module.add(InterfaceDecl(symbol.type_name, tuple(fields), extends=("StrapiBaseEntity",)))
    if isinstance(entity, CollectionType):
        module.add(filters_interface(symbol.type_name, entity, options))
    return module


def render_component_types(
    component: ComponentType,
    symbols: SymbolTable,
    options: GenerationOptions,
    resolver: ModuleResolver,
) -> ModuleIR:
    symbol = symbols[component.uid]
    utils: set[str] = set()
    refs: list[str] = []
    fields = _map_fields(component.attributes, TypeContext(symbols, component.uid), utils, refs)

    module = ModuleIR(header=_header(
        f"{component.display_name} component",
        f"Category: {component.category}" if component.category else "",
        component.description,
    ))
    _add_imports(module, symbol.types_module, utils, refs, symbols, resolver)
    module.add(InterfaceDecl(symbol.type_name, (Field("id", "number"), *fields)))
    return module
