"""Data-access service modules over the generated client.

``locale`` and ``status`` only appear in a service when the entity is
localized or has draft & publish enabled; an entity with neither gets a
service without either word in it.
"""
from __future__ import annotations

import textwrap
from dataclasses import dataclass

from strapigen.generators.ir import CodeDecl, Field, InterfaceDecl, ModuleIR
from strapigen.generators.paths import CLIENT, LOCALES, UTILS, ModuleKind, ModuleResolver
from strapigen.generators.symbols import EntitySymbol, SymbolTable
from strapigen.generators.types import GenerationOptions
from strapigen.generators.utils import comment_text, ts_string
from strapigen.schema.models import CollectionType, ContentType, SingleType

FIND_ALL_PAGE_SIZE = 100
STATUS_TYPE = "'draft' | 'published'"
POPULATE_TYPE = "string | string[] | Record<string, unknown>"


@dataclass(frozen=True)
class Param:
    name: str
    type: str
    default: str | None = None
    optional: bool = False


@dataclass(frozen=True)
class Method:
    name: str
    params: tuple[Param, ...]
    returns: str
    body: str
    doc: str = ""


def _render_method(method: Method, ts: bool) -> str:
    body = textwrap.indent(textwrap.dedent(method.body).strip("\n"), "    ")
    if ts:
        params = ", ".join(
            f"{p.name}{'?' if p.optional else ''}: {p.type}{f' = {p.default}' if p.default else ''}"
            for p in method.params
        )
        doc = [f"  /** {method.doc} */"] if method.doc else []
        return "\n".join([*doc, f"  async {method.name}({params}): Promise<{method.returns}> {{", body, "  },"])

    doc = ["  /**"]
    if method.doc:
        doc.append(f"   * {method.doc}")
    for p in method.params:
        name = f"[{p.name}]" if p.optional or p.default else p.name
        doc.append(f"   * @param {{{p.type}}} {name}")
    doc += [f"   * @returns {{Promise<{method.returns}>}}", "   */"]
    params = ", ".join(f"{p.name}{f' = {p.default}' if p.default else ''}" for p in method.params)
    return "\n".join([*doc, f"  async {method.name}({params}) {{", body, "  },"])


def _service_object(name: str, methods: list[Method], ts: bool) -> CodeDecl:
    rendered = "\n\n".join(_render_method(m, ts) for m in methods)
    return CodeDecl(f"const {name} = {{\n{rendered}\n}};", exports=(name,))


def _cast(expr: str, type_name: str, ts: bool) -> str:
    return f"{expr} as {type_name}" if ts else f"/** @type {{{type_name}}} */ ({expr})"


def _gated_params(entity: ContentType, source: str = "options") -> list[str]:
    params = []
    if entity.localized:
        params.append(f"locale: {source}.locale,")
    if entity.draft_and_publish:
        params.append(f"status: {source}.status,")
    return params


def _gated_fields(entity: ContentType, locale: bool = True, status: bool = True) -> list[Field]:
    fields = []
    if entity.localized and locale:
        fields.append(Field("locale", "Locale", optional=True))
    if entity.draft_and_publish and status:
        fields.append(Field("status", STATUS_TYPE, optional=True))
    return fields


def _omit_fields(entity: ContentType, options: GenerationOptions) -> str:
    names = ["id"] + ([] if options.v4 else ["documentId"]) + ["createdAt", "updatedAt", "publishedAt"]
    if entity.localized:
        names += ["locale", "localizations"]
    return " | ".join(ts_string(n) for n in names)


def _write_params(entity: ContentType) -> str:
    """Second client argument for create/update/delete, or empty."""
    return ", options" if entity.localized or entity.draft_and_publish else ""


def _base_module(entity: ContentType, symbol: EntitySymbol, options: GenerationOptions, resolver: ModuleResolver):
    source = symbol.module(ModuleKind.SERVICE)
    kind = "Collection" if isinstance(entity, CollectionType) else "Single type"
    module = ModuleIR(header=tuple(filter(None, (
        f"{comment_text(entity.display_name)} service ({kind})",
        comment_text(entity.description),
        "Generated by strapigen",
        f"Strapi version: {options.strapi_version}",
    ))))
    helper = "collection" if isinstance(entity, CollectionType) else "single"
    module.add_import(resolver.specifier(source, CLIENT), helper)
    names = [symbol.type_name]
    if isinstance(entity, CollectionType):
        names.append(f"{symbol.type_name}Filters")
    module.add_import(resolver.specifier(source, symbol.types_module), *names, type_only=True)
    if entity.localized:
        module.add_import(resolver.specifier(source, LOCALES), "Locale", type_only=True)
    return module, source


def _write_options_decl(entity: ContentType, name: str = "WriteOptions") -> InterfaceDecl | None:
    fields = _gated_fields(entity)
    if not fields:
        return None
    return InterfaceDecl(name, tuple(fields), doc=("Options forwarded to Strapi on writes",))


def render_collection_service(
    entity: CollectionType,
    symbols: SymbolTable,
    options: GenerationOptions,
    resolver: ModuleResolver,
) -> ModuleIR:
    ts = options.typescript
    symbol = symbols[entity.uid]
    type_name = symbol.type_name
    filters = f"{type_name}Filters"
    helper = f"{symbol.var_name}Collection"
    id_name, id_type = ("id", "number") if options.v4 else ("documentId", "string")
    gated = _gated_params(entity)
    write_args = _write_params(entity)

    module, source = _base_module(entity, symbol, options, resolver)
    module.add_import(resolver.specifier(source, UTILS), "StrapiPagination", type_only=True)

    pagination = (
        "{ page?: number; pageSize?: number; start?: number; limit?: number }" if ts
        else "{ page?: number, pageSize?: number, start?: number, limit?: number }"
    )
    module.add(InterfaceDecl("FindManyOptions", (
        Field("filters", filters, optional=True),
        Field("pagination", pagination, optional=True, doc="page/pageSize or start/limit"),
        Field("sort", "string | string[]", optional=True),
        Field("populate", POPULATE_TYPE, optional=True),
        *_gated_fields(entity),
    )))
    module.add(InterfaceDecl("FindOneOptions", (
        Field("populate", POPULATE_TYPE, optional=True),
        *_gated_fields(entity),
    )))
    write_decl = _write_options_decl(entity)
    if write_decl:
        module.add(write_decl)
    if entity.localized:
        module.add(InterfaceDecl("DeleteOptions", tuple(_gated_fields(entity, status=False))))
    count_fields = _gated_fields(entity)
    if count_fields:
        module.add(InterfaceDecl("CountOptions", tuple(count_fields)))

    init = f"collection<{type_name}>({ts_string(entity.endpoint)})" if ts else f"collection({ts_string(entity.endpoint)})"
    module.add(CodeDecl(f"const {helper} = {init};"))

    find_params = "\n".join(["filters: options.filters,", "pagination: options.pagination,",
                             "sort: options.sort,", "populate: options.populate,", *gated])
    find_one_params = "\n".join(["populate: options.populate,", *gated])
    list_type = f"{{ data: {type_name}[]; pagination: StrapiPagination }}"
    all_items = f"const allItems: {type_name}[] = [];" if ts else f"/** @type {{{type_name}[]}} */\nconst allItems = [];"
    data_type = f"Partial<Omit<{type_name}, {_omit_fields(entity, options)}>>"
    id_param = Param(id_name, id_type)
    write_param = (Param("options", "WriteOptions", default="{}"),) if write_decl else ()

    methods = [
        Method(
            "findMany",
            (Param("options", "FindManyOptions", default="{}"),),
            list_type,
            _find_many_body(helper, find_params),
        ),
        Method(
            "findAll",
            (Param("options", "Omit<FindManyOptions, 'pagination'>", default="{}"),),
            f"{type_name}[]",
            _find_all_body(all_items),
            doc=f"Fetch every entry, {FIND_ALL_PAGE_SIZE} per request",
        ),
        Method(
            "findOne",
            (id_param, Param("options", "FindOneOptions", default="{}")),
            f"{type_name} | null",
            _find_one_body(f"{helper}.findOne({id_name}, {{\n{textwrap.indent(find_one_params, '    ')}\n  }})"),
        ),
    ]

    if "slug" in entity.attributes:
        slug_params = "\n".join([
            f"filters: {_cast('{ slug: { $eq: slug } }', filters, ts)},",
            "pagination: { pageSize: 1 },",
            "populate: options.populate,",
            *gated,
        ])
        methods.append(Method(
            "findBySlug",
            (Param("slug", "string"), Param("options", "FindOneOptions", default="{}")),
            f"{type_name} | null",
            f"const {{ data }} = await this.findMany({{\n{textwrap.indent(slug_params, '  ')}\n}});\n\nreturn data[0] || null;",
        ))

    methods += [
        Method(
            "create",
            (Param("data", data_type), *write_param),
            type_name,
            f"const response = await {helper}.create({{ data }}{write_args});\nreturn response.data;",
        ),
        Method(
            "update",
            (id_param, Param("data", data_type), *write_param),
            type_name,
            f"const response = await {helper}.update({id_name}, {{ data }}{write_args});\nreturn response.data;",
        ),
        Method(
            "delete",
            (id_param, *((Param("options", "DeleteOptions", default="{}"),) if entity.localized else ())),
            "void",
            f"await {helper}.delete({id_name}{', options' if entity.localized else ''});",
        ),
    ]

    count_params = "\n".join(["filters,", "pagination: { pageSize: 1 },", *gated])
    methods.append(Method(
        "count",
        (Param("filters", filters, optional=True),
         *((Param("options", "CountOptions", default="{}"),) if count_fields else ())),
        "number",
        f"const {{ pagination }} = await this.findMany({{\n{textwrap.indent(count_params, '  ')}\n}});\n\nreturn pagination.total;",
    ))

    module.add(_service_object(symbol.service_name, methods, ts))
    return module


def _find_many_body(helper: str, params: str) -> str:
    return (
        f"const response = await {helper}.find({{\n{textwrap.indent(params, '  ')}\n}});\n\n"
        "return {\n  data: response.data,\n  pagination: response.meta.pagination,\n};"
    )


def _find_all_body(all_items: str) -> str:
    return (
        f"{all_items}\n"
        "let page = 1;\n"
        "let hasMore = true;\n\n"
        "while (hasMore) {\n"
        "  const { data, pagination } = await this.findMany({\n"
        "    ...options,\n"
        f"    pagination: {{ page, pageSize: {FIND_ALL_PAGE_SIZE} }},\n"
        "  });\n"
        "  allItems.push(...data);\n"
        "  hasMore = page < pagination.pageCount;\n"
        "  page++;\n"
        "}\n\n"
        "return allItems;"
    )


def _find_one_body(call: str) -> str:
    return (
        "try {\n"
        f"  const response = await {call};\n"
        "  return response.data;\n"
        "} catch (error) {\n"
        "  if (error instanceof Error && error.message.includes('404')) {\n"
        "    return null;\n"
        "  }\n"
        "  throw error;\n"
        "}"
    )


def render_single_service(
    entity: SingleType,
    symbols: SymbolTable,
    options: GenerationOptions,
    resolver: ModuleResolver,
) -> ModuleIR:
    ts = options.typescript
    symbol = symbols[entity.uid]
    type_name = symbol.type_name
    helper = f"{symbol.var_name}Single"
    gated = _gated_params(entity)
    write_args = _write_params(entity)

    module, _ = _base_module(entity, symbol, options, resolver)
    module.add(InterfaceDecl("FindOptions", (
        Field("populate", POPULATE_TYPE, optional=True),
        *_gated_fields(entity),
    )))
    write_decl = _write_options_decl(entity)
    if write_decl:
        module.add(write_decl)
    if entity.localized:
        module.add(InterfaceDecl("DeleteOptions", tuple(_gated_fields(entity, status=False))))

    init = f"single<{type_name}>({ts_string(entity.endpoint)})" if ts else f"single({ts_string(entity.endpoint)})"
    module.add(CodeDecl(f"const {helper} = {init};"))

    find_params = "\n".join(["populate: options.populate,", *gated])
    data_type = f"Partial<Omit<{type_name}, {_omit_fields(entity, options)}>>"
    write_param = (Param("options", "WriteOptions", default="{}"),) if write_decl else ()

    methods = [
        Method(
            "find",
            (Param("options", "FindOptions", default="{}"),),
            f"{type_name} | null",
            _find_one_body(f"{helper}.find({{\n{textwrap.indent(find_params, '    ')}\n  }})"),
        ),
        Method(
            "update",
            (Param("data", data_type), *write_param),
            type_name,
            f"const response = await {helper}.update({{ data }}{write_args});\nreturn response.data;",
        ),
        Method(
            "delete",
            (Param("options", "DeleteOptions", default="{}"),) if entity.localized else (),
            "void",
            f"await {helper}.delete({'options' if entity.localized else ''});",
        ),
    ]
    module.add(_service_object(symbol.service_name, methods, ts))
    return module


def render_service(entity: ContentType, symbols: SymbolTable, options: GenerationOptions, resolver: ModuleResolver) -> ModuleIR:
    if isinstance(entity, CollectionType):
        return render_collection_service(entity, symbols, options, resolver)
    return render_single_service(entity, symbols, options, resolver)
