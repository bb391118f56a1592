"""Zod validation schema modules.

Each component gets one schema module; entities import component schemas by
variable name instead of inlining them, so a component shared by several
entities is defined once.
"""
from __future__ import annotations

from strapigen.generators.ir import CodeDecl, ModuleIR, TypeAliasDecl
from strapigen.generators.paths import LogicalModule, ModuleResolver
from strapigen.generators.symbols import SymbolTable
from strapigen.generators.types import GenerationOptions
from strapigen.generators.utils import property_key
from strapigen.generators.zod_mapper import ZodContext, ZodObject, map_attributes
from strapigen.schema.models import ComponentType, ContentType


def _object_literal(obj: ZodObject) -> str:
    if not obj.fields and not obj.skipped:
        return "z.object({})"
    lines = [f"  {property_key(name)}: {schema}," for name, schema in obj.fields]
    lines += [f"  // {name} skipped: {reason}" for name, reason in obj.skipped]
    return "z.object({\n" + "\n".join(lines) + "\n})"


def _context(symbols: SymbolTable, options: GenerationOptions, uid: str, mode: str) -> ZodContext:
    return ZodContext(
        symbols=symbols,
        strapi_version=options.strapi_version,
        advanced_relations=options.advanced_relations,
        mode=mode,
        self_uid=uid,
    )


def _import_component_schemas(
    module: ModuleIR,
    source: LogicalModule,
    refs: list[str],
    self_uid: str,
    symbols: SymbolTable,
    resolver: ModuleResolver,
) -> None:
    for uid in refs:
        if uid == self_uid:
            continue
        target = symbols[uid]
        module.add_import(resolver.specifier(source, target.schemas_module), target.schema_name)


def _infer(schema_name: str, options: GenerationOptions) -> str:
    if options.typescript:
        return f"z.infer<typeof {schema_name}>"
    return f"import('zod').infer<typeof {schema_name}>"


def _schema_decl(name: str, obj: ZodObject, options: GenerationOptions, lazy: bool = False, doc: str = "") -> CodeDecl:
    annotation = ": z.ZodTypeAny" if lazy and options.typescript else ""
    jsdoc: tuple[str, ...] = (doc,) if doc else ()
    if lazy and not options.typescript:
        jsdoc += ("@type {import('zod').ZodTypeAny}",)
    return CodeDecl(f"const {name}{annotation} = {_object_literal(obj)};", exports=(name,), doc=jsdoc)


def render_component_schema(
    component: ComponentType,
    symbols: SymbolTable,
    options: GenerationOptions,
    resolver: ModuleResolver,
) -> ModuleIR:
    symbol = symbols[component.uid]
    obj = map_attributes(component.attributes, _context(symbols, options, component.uid, "create"))
    lazy = symbols.is_cyclic(component.uid)

    module = ModuleIR(header=(f"{component.display_name} component schema", "Generated by strapigen"))
    module.add_import("zod", "z")
    _import_component_schemas(module, symbol.schemas_module, list(obj.refs), component.uid, symbols, resolver)
    module.add(_schema_decl(symbol.schema_name, obj, options, lazy=lazy))
    if not lazy:
        module.add(TypeAliasDecl(f"{symbol.type_name}Input", _infer(symbol.schema_name, options)))
    return module


def render_content_type_schemas(
    entity: ContentType,
    symbols: SymbolTable,
    options: GenerationOptions,
    resolver: ModuleResolver,
) -> ModuleIR:
    symbol = symbols[entity.uid]
    create = map_attributes(entity.attributes, _context(symbols, options, entity.uid, "create"))
    update = map_attributes(entity.attributes, _context(symbols, options, entity.uid, "update"))
    refs = list(dict.fromkeys(create.refs + update.refs))

    module = ModuleIR(header=(
        f"{entity.display_name} validation schemas",
        "Generated by strapigen",
        f"Strapi version: {options.strapi_version}",
    ))
    module.add_import("zod", "z")
    _import_component_schemas(module, symbol.schemas_module, refs, entity.uid, symbols, resolver)
    module.add(_schema_decl(symbol.create_schema_name, create, options, doc=f"Create {entity.display_name}"))
    module.add(_schema_decl(
        symbol.update_schema_name, update, options, doc=f"Update {entity.display_name} (all fields optional)"
    ))
    module.add(TypeAliasDecl(f"{symbol.type_name}CreateInput", _infer(symbol.create_schema_name, options)))
    module.add(TypeAliasDecl(f"{symbol.type_name}UpdateInput", _infer(symbol.update_schema_name, options)))
    return module
