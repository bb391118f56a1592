"""Astro action modules wrapping the generated services."""
from __future__ import annotations

from strapigen.generators.ir import CodeDecl, ModuleIR
from strapigen.generators.paths import LOCALES, ModuleKind, ModuleResolver
from strapigen.generators.symbols import EntitySymbol, SymbolTable
from strapigen.generators.types import GenerationOptions
from strapigen.generators.utils import comment_text
from strapigen.schema.models import CollectionType, ContentType

PERMISSIVE_DATA = "z.record(z.unknown())"
STATUS_SCHEMA = "z.enum(['draft', 'published']).optional()"


class _ActionBuilder:
    """Collects the per-format details shared by every action of one entity."""

    def __init__(self, entity: ContentType, symbol: EntitySymbol, options: GenerationOptions):
        self.entity = entity
        self.symbol = symbol
        self.ts = options.typescript
        self.service = symbol.service_name
        self.schemas = options.features.schemas

    def gated_inputs(self, locale: bool = True, status: bool = True) -> list[str]:
        fields = []
        if self.entity.localized and locale:
            fields.append("locale: z.string().optional(),")
        if self.entity.draft_and_publish and status:
            fields.append(f"status: {STATUS_SCHEMA},")
        return fields

    def gated_args(self, source: str = "input", locale: bool = True, status: bool = True) -> list[str]:
        args = []
        if self.entity.localized and locale:
            value = f"{source}.locale"
            args.append(f"locale: {value} as Locale," if self.ts else f"locale: {value},")
        if self.entity.draft_and_publish and status:
            args.append(f"status: {source}.status,")
        return args

    def options_arg(self, locale: bool = True, status: bool = True) -> str:
        args = self.gated_args(locale=locale, status=status)
        if not args:
            return ""
        return ", { " + " ".join(args).rstrip(",") + " }"

    def data_schema(self, mode: str) -> str:
        if not self.schemas:
            return PERMISSIVE_DATA
        return self.symbol.create_schema_name if mode == "create" else self.symbol.update_schema_name

    def data_arg(self, method: str) -> str:
        if self.ts:
            return f"input.data as Parameters<typeof {self.service}.{method}>[{0 if method == 'create' or self.single else 1}]"
        return "input.data"

    @property
    def single(self) -> bool:
        return not isinstance(self.entity, CollectionType)


def _action(input_schema: str, body: str) -> str:
    return (
        "defineAction({\n"
        f"    input: {input_schema},\n"
        "    handler: async (input) => {\n"
        + "\n".join(f"      {line}" if line else "" for line in body.split("\n"))
        + "\n    },\n  })"
    )


def _object(fields: list[str]) -> str:
    if not fields:
        return "z.object({})"
    return "z.object({\n" + "\n".join(f"      {f}" for f in fields) + "\n    })"


def _collection_actions(b: _ActionBuilder, options: GenerationOptions) -> list[tuple[str, str]]:
    id_name, id_schema = ("id", "z.number().int().positive()") if options.v4 else ("documentId", "z.string()")
    many_args = [
        "pagination: input ? { page: input.page, pageSize: input.pageSize } : undefined,",
        "sort: input?.sort,",
        *[a.replace("input.", "input?.") for a in b.gated_args()],
    ]
    get_many = _action(
        _object([
            "page: z.number().int().positive().optional(),",
            "pageSize: z.number().int().positive().optional(),",
            "sort: z.string().optional(),",
            *b.gated_inputs(),
        ]) + ".optional()",
        f"const {{ data, pagination }} = await {b.service}.findMany({{\n"
        + "\n".join(f"  {a}" for a in many_args)
        + "\n});\nreturn { data, pagination };",
    )
    get_one = _action(
        _object([f"{id_name}: {id_schema},", *b.gated_inputs()]),
        f"const data = await {b.service}.findOne(input.{id_name}{b.options_arg()});\nreturn {{ data }};",
    )
    create = _action(
        _object([f"data: {b.data_schema('create')},", *b.gated_inputs()]),
        f"const data = await {b.service}.create({b.data_arg('create')}{b.options_arg()});\nreturn {{ data }};",
    )
    update = _action(
        _object([f"{id_name}: {id_schema},", f"data: {b.data_schema('update')},", *b.gated_inputs()]),
        f"const data = await {b.service}.update(input.{id_name}, {b.data_arg('update')}{b.options_arg()});\n"
        "return { data };",
    )
    delete = _action(
        _object([f"{id_name}: {id_schema},", *b.gated_inputs(status=False)]),
        f"await {b.service}.delete(input.{id_name}{b.options_arg(status=False)});\nreturn {{ success: true }};",
    )
    return [("getMany", get_many), ("getOne", get_one), ("create", create), ("update", update), ("delete", delete)]


def _single_actions(b: _ActionBuilder) -> list[tuple[str, str]]:
    get = _action(
        _object(b.gated_inputs()) + ".optional()",
        f"const data = await {b.service}.find("
        + ("{ " + " ".join(a.replace("input.", "input?.") for a in b.gated_args()).rstrip(",") + " }"
           if b.gated_args() else "")
        + ");\nreturn { data };",
    )
    update = _action(
        _object([f"data: {b.data_schema('update')},", *b.gated_inputs()]),
        f"const data = await {b.service}.update({b.data_arg('update')}{b.options_arg()});\nreturn {{ data }};",
    )
    delete_args = b.options_arg(status=False).removeprefix(", ")
    delete = _action(
        _object(b.gated_inputs(status=False)) + (".optional()" if not b.gated_inputs(status=False) else ""),
        f"await {b.service}.delete({delete_args});\nreturn {{ success: true }};",
    )
    return [("get", get), ("update", update), ("delete", delete)]


def render_actions(
    entity: ContentType,
    symbols: SymbolTable,
    options: GenerationOptions,
    resolver: ModuleResolver,
) -> ModuleIR:
    symbol = symbols[entity.uid]
    source = symbol.module(ModuleKind.ACTIONS)
    b = _ActionBuilder(entity, symbol, options)

    module = ModuleIR(header=tuple(filter(None, (
        f"{comment_text(entity.display_name)} Astro actions",
        comment_text(entity.description),
        "Generated by strapigen",
        f"Strapi version: {options.strapi_version}",
    ))))
    module.add_import("astro:actions", "defineAction")
    module.add_import("astro:schema", "z")
    module.add_import(resolver.specifier(source, symbol.module(ModuleKind.SERVICE)), b.service)
    if options.features.schemas:
        module.add_import(
            resolver.specifier(source, symbol.schemas_module),
            *((symbol.update_schema_name,) if b.single else (symbol.create_schema_name, symbol.update_schema_name)),
        )
    if entity.localized and options.typescript:
        module.add_import(resolver.specifier(source, LOCALES), "Locale", type_only=True)

    actions = _single_actions(b) if b.single else _collection_actions(b, options)
    body = ",\n\n".join(f"  {name}: {code}" for name, code in actions)
    name = f"{symbol.var_name}Actions"
    module.add(CodeDecl(f"const {name} = {{\n{body},\n}};", exports=(name,)))
    return module
