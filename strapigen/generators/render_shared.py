"""Shared modules: utility types, the strapi-sdk-js client and the locale registry."""
from __future__ import annotations

from strapigen.generators.ir import CodeDecl, Field, InterfaceDecl, ModuleIR, TypeAliasDecl
from strapigen.generators.paths import CLIENT, UTILS, ModuleResolver
from strapigen.generators.types import GenerationOptions
from strapigen.generators.utils import property_key, ts_string
from strapigen.schema.models import Locale, default_locale

BLOCKS_RENDERER = "@strapi/blocks-react-renderer"


def _header(title: str, options: GenerationOptions) -> tuple[str, ...]:
    return (title, "Generated by strapigen", f"Strapi version: {options.strapi_version}")


# utils


def _media_fields(options: GenerationOptions) -> tuple[Field, ...]:
    fields = [Field("id", "number")]
    if not options.v4:
        fields.append(Field("documentId", "string"))
    formats = (
        "{ thumbnail?: StrapiMediaFormat; small?: StrapiMediaFormat; "
        "medium?: StrapiMediaFormat; large?: StrapiMediaFormat } | null"
    )
    fields += [
        Field("name", "string"),
        Field("alternativeText", "string | null"),
        Field("caption", "string | null"),
        Field("width", "number"),
        Field("height", "number"),
        Field("formats", formats),
        Field("hash", "string"),
        Field("ext", "string"),
        Field("mime", "string"),
        Field("size", "number"),
        Field("url", "string"),
        Field("previewUrl", "string | null"),
        Field("provider", "string"),
        Field("createdAt", "string"),
        Field("updatedAt", "string"),
    ]
    return tuple(fields)


def base_entity_fields(options: GenerationOptions) -> tuple[Field, ...]:
    fields = [Field("id", "number")]
    if not options.v4:
        fields.append(Field("documentId", "string"))
    fields += [
        Field("createdAt", "string"),
        Field("updatedAt", "string"),
        Field("publishedAt", "string | null"),
    ]
    return tuple(fields)


_FLATTEN_TS = """
function flattenV4Response<T>(item: StrapiV4RawItem<T>): T {
  return { id: item.id, ...item.attributes } as T;
}
"""

_FLATTEN_JS = """
function flattenV4Response(item) {
  return /** @type {T} */ ({ id: item.id, ...item.attributes });
}
"""

_FLATTEN_LIST_TS = """
function flattenV4ListResponse<T>(items: StrapiV4RawItem<T>[]): T[] {
  return items.map((item) => flattenV4Response<T>(item));
}
"""

_FLATTEN_LIST_JS = """
function flattenV4ListResponse(items) {
  return items.map((item) => flattenV4Response(item));
}
"""


def render_utils(options: GenerationOptions) -> ModuleIR:
    module = ModuleIR(header=_header("Strapi utility types", options))
    ts = options.typescript

    module.add(InterfaceDecl("StrapiMediaFormat", (
        Field("name", "string"),
        Field("hash", "string"),
        Field("ext", "string"),
        Field("mime", "string"),
        Field("width", "number"),
        Field("height", "number"),
        Field("size", "number"),
        Field("url", "string"),
    )))
    module.add(InterfaceDecl("StrapiMedia", _media_fields(options), doc=("Uploaded file",)))
    module.add(InterfaceDecl("StrapiPagination", (
        Field("page", "number"),
        Field("pageSize", "number"),
        Field("pageCount", "number"),
        Field("total", "number"),
    )))
    module.add(InterfaceDecl(
        "StrapiResponse",
        (Field("data", "T"), Field("meta", "{ pagination?: StrapiPagination }")),
        type_params="<T>",
    ))
    module.add(InterfaceDecl(
        "StrapiListResponse",
        (Field("data", "T[]"), Field("meta", "{ pagination: StrapiPagination }")),
        type_params="<T>",
    ))
    module.add(InterfaceDecl(
        "StrapiBaseEntity",
        base_entity_fields(options),
        doc=(f"Base entity fields (Strapi {options.strapi_version})",),
    ))

    if options.v4:
        module.add(InterfaceDecl(
            "StrapiV4RawItem",
            (Field("id", "number"), Field("attributes", "Omit<T, 'id'>")),
            doc=("Strapi v4 raw API item (fields nested under attributes)",),
            type_params="<T>",
        ))
        module.add(InterfaceDecl(
            "StrapiV4RawResponse",
            (Field("data", "StrapiV4RawItem<T>"), Field("meta", "Record<string, unknown>")),
            type_params="<T>",
        ))
        module.add(InterfaceDecl(
            "StrapiV4RawListResponse",
            (Field("data", "StrapiV4RawItem<T>[]"), Field("meta", "{ pagination: StrapiPagination }")),
            type_params="<T>",
        ))
        module.add(CodeDecl(
            _FLATTEN_TS if ts else _FLATTEN_JS,
            exports=("flattenV4Response",),
            doc=("Flatten a Strapi v4 response item",) if ts else (
                "Flatten a Strapi v4 response item",
                "@template T",
                "@param {StrapiV4RawItem<T>} item",
                "@returns {T}",
            ),
        ))
        module.add(CodeDecl(
            _FLATTEN_LIST_TS if ts else _FLATTEN_LIST_JS,
            exports=("flattenV4ListResponse",),
            doc=("Flatten a Strapi v4 list response",) if ts else (
                "Flatten a Strapi v4 list response",
                "@template T",
                "@param {StrapiV4RawItem<T>[]} items",
                "@returns {T[]}",
            ),
        ))
        module.add(TypeAliasDecl("RichTextContent", "string", doc=("Rich text content (Strapi v4 markdown)",)))

    if options.blocks_renderer_installed and not options.v4:
        if ts:
            module.add(CodeDecl(
                f"export type {{ BlocksContent }} from '{BLOCKS_RENDERER}';",
                doc=(f"Blocks content, re-exported from {BLOCKS_RENDERER}",),
            ))
        else:
            module.add_import(BLOCKS_RENDERER, "BlocksContent", type_only=True)
    else:
        module.add(TypeAliasDecl("BlocksContent", "unknown[]", doc=(
            "Blocks content (Strapi v5 rich text)",
            "",
            f"Install {BLOCKS_RENDERER} and set options.blocksRendererInstalled",
            "for full typing.",
        )))
    return module


# client

_ENV_ESM = "import.meta.env.{name} || process.env.{name}"
_ENV_CJS = "process.env.{name}"

_CLIENT_SETUP = """
const strapiUrl = {url} || 'http://localhost:1337';
const strapiToken = {token};
"""

_STRAPI_INSTANCE = """
const strapi = new Strapi({
  url: strapiUrl,
  prefix: %s,
  axiosOptions: {
    headers: strapiToken ? { Authorization: `Bearer ${strapiToken}` } : {},
  },
});
"""

_DEFAULT_PAGINATION_TS = """
const defaultPagination: StrapiPagination = { page: 1, pageSize: 25, pageCount: 1, total: 0 };
"""

_DEFAULT_PAGINATION_JS = """
const defaultPagination = { page: 1, pageSize: 25, pageCount: 1, total: 0 };
"""

_V5_CLIENT_TS = """
type Params = Record<string, unknown>;

interface ListResponse<T> {
  data: T[];
  meta: { pagination?: StrapiPagination };
}

interface SingleResponse<T> {
  data: T;
  meta?: Record<string, unknown>;
}

export function collection<T>(pluralName: string) {
  return {
    async find(params?: Params): Promise<{ data: T[]; meta: { pagination: StrapiPagination } }> {
      const response = (await strapi.find(pluralName, params)) as unknown as ListResponse<T>;
      return {
        data: Array.isArray(response.data) ? response.data : [],
        meta: { pagination: response.meta?.pagination || defaultPagination },
      };
    },
    async findOne(documentId: string, params?: Params): Promise<{ data: T }> {
      const response = (await strapi.findOne(pluralName, documentId, params)) as unknown as SingleResponse<T>;
      return { data: response.data };
    },
    async create(data: { data: Partial<T> }, params?: Params): Promise<{ data: T }> {
      const response = (await strapi.create(pluralName, data.data as Params, params)) as unknown as SingleResponse<T>;
      return { data: response.data };
    },
    async update(documentId: string, data: { data: Partial<T> }, params?: Params): Promise<{ data: T }> {
      const response = (await strapi.update(pluralName, documentId, data.data as Params, params)) as unknown as SingleResponse<T>;
      return { data: response.data };
    },
    async delete(documentId: string, params?: Params): Promise<void> {
      await strapi.delete(pluralName, documentId, params);
    },
  };
}

export function single<T>(singularName: string) {
  return {
    async find(params?: Params): Promise<{ data: T }> {
      const response = (await strapi.find(singularName, params)) as unknown as SingleResponse<T>;
      return { data: response.data };
    },
    async update(data: { data: Partial<T> }, params?: Params): Promise<{ data: T }> {
      const response = (await strapi.update(singularName, '', data.data as Params, params)) as unknown as SingleResponse<T>;
      return { data: response.data };
    },
    async delete(params?: Params): Promise<void> {
      await strapi.delete(singularName, '', params);
    },
  };
}
"""

_V5_CLIENT_JS = """
/**
 * @template T
 * @param {string} pluralName
 */
function collection(pluralName) {
  return {
    /**
     * @param {Record<string, unknown>} [params]
     * @returns {Promise<{ data: T[], meta: { pagination: StrapiPagination } }>}
     */
    async find(params) {
      const response = /** @type {any} */ (await strapi.find(pluralName, params));
      return {
        data: Array.isArray(response.data) ? response.data : [],
        meta: { pagination: (response.meta && response.meta.pagination) || defaultPagination },
      };
    },
    /**
     * @param {string} documentId
     * @param {Record<string, unknown>} [params]
     * @returns {Promise<{ data: T }>}
     */
    async findOne(documentId, params) {
      const response = /** @type {any} */ (await strapi.findOne(pluralName, documentId, params));
      return { data: response.data };
    },
    /**
     * @param {{ data: Partial<T> }} data
     * @param {Record<string, unknown>} [params]
     * @returns {Promise<{ data: T }>}
     */
    async create(data, params) {
      const response = /** @type {any} */ (await strapi.create(pluralName, data.data, params));
      return { data: response.data };
    },
    /**
     * @param {string} documentId
     * @param {{ data: Partial<T> }} data
     * @param {Record<string, unknown>} [params]
     * @returns {Promise<{ data: T }>}
     */
    async update(documentId, data, params) {
      const response = /** @type {any} */ (await strapi.update(pluralName, documentId, data.data, params));
      return { data: response.data };
    },
    /**
     * @param {string} documentId
     * @param {Record<string, unknown>} [params]
     * @returns {Promise<void>}
     */
    async delete(documentId, params) {
      await strapi.delete(pluralName, documentId, params);
    },
  };
}
"""

_V5_SINGLE_JS = """
/**
 * @template T
 * @param {string} singularName
 */
function single(singularName) {
  return {
    /**
     * @param {Record<string, unknown>} [params]
     * @returns {Promise<{ data: T }>}
     */
    async find(params) {
      const response = /** @type {any} */ (await strapi.find(singularName, params));
      return { data: response.data };
    },
    /**
     * @param {{ data: Partial<T> }} data
     * @param {Record<string, unknown>} [params]
     * @returns {Promise<{ data: T }>}
     */
    async update(data, params) {
      const response = /** @type {any} */ (await strapi.update(singularName, '', data.data, params));
      return { data: response.data };
    },
    /**
     * @param {Record<string, unknown>} [params]
     * @returns {Promise<void>}
     */
    async delete(params) {
      await strapi.delete(singularName, '', params);
    },
  };
}
"""

_V4_HELPERS_TS = """
type Params = Record<string, unknown>;

interface RawItem<T> {
  id: number;
  attributes: Omit<T, 'id'>;
}

interface RawListResponse<T> {
  data: RawItem<T>[];
  meta: { pagination?: StrapiPagination };
}

interface RawSingleResponse<T> {
  data: RawItem<T>;
  meta?: Record<string, unknown>;
}

function isRawItem(value: unknown): value is RawItem<unknown> {
  return typeof value === 'object' && value !== null && 'id' in value && 'attributes' in value;
}

function flattenItem<T>(item: RawItem<T>): T {
  return { id: item.id, ...item.attributes } as T;
}

/**
 * Recursively unwrap nested `{ data: { id, attributes } }` relation payloads
 */
function flattenRelations<T>(data: T): T {
  if (data === null || data === undefined) return data;
  if (Array.isArray(data)) {
    return data.map((item) => flattenRelations(item)) as unknown as T;
  }
  if (typeof data !== 'object') return data;
  const result: Record<string, unknown> = {};
  for (const [key, value] of Object.entries(data as Record<string, unknown>)) {
    if (value && typeof value === 'object' && 'data' in value) {
      const inner = (value as { data: unknown }).data;
      if (inner === null) {
        result[key] = null;
      } else if (Array.isArray(inner)) {
        result[key] = inner.map((item) => (isRawItem(item) ? flattenRelations(flattenItem(item)) : flattenRelations(item)));
      } else if (isRawItem(inner)) {
        result[key] = flattenRelations(flattenItem(inner));
      } else {
        result[key] = flattenRelations(value);
      }
    } else {
      result[key] = flattenRelations(value);
    }
  }
  return result as T;
}

function unwrap<T>(item: RawItem<T>): T {
  return flattenRelations(flattenItem<T>(item));
}

/**
 * Translate `status` into v4's `publicationState` query parameter
 */
function toV4Params(params?: Params): Params | undefined {
  if (!params || !('status' in params)) return params;
  const { status, ...rest } = params;
  if (status === undefined) return rest;
  return { ...rest, publicationState: status === 'draft' ? 'preview' : 'live' };
}

/**
 * Translate a `status` write option into v4's `publishedAt` field
 */
function toV4Body(data: Params, params?: Params): { body: Params; params?: Params } {
  if (!params || !('status' in params)) return { body: data, params };
  const { status, ...rest } = params;
  const body = { ...data };
  if (status === 'draft') body.publishedAt = null;
  if (status === 'published') body.publishedAt = new Date().toISOString();
  return { body, params: rest };
}
"""

_V4_CLIENT_TS = """
export function collection<T>(pluralName: string) {
  return {
    async find(params?: Params): Promise<{ data: T[]; meta: { pagination: StrapiPagination } }> {
      const response = (await strapi.find(pluralName, toV4Params(params))) as unknown as RawListResponse<T>;
      return {
        data: Array.isArray(response.data) ? response.data.map((item) => unwrap<T>(item)) : [],
        meta: { pagination: response.meta?.pagination || defaultPagination },
      };
    },
    async findOne(id: number | string, params?: Params): Promise<{ data: T }> {
      const response = (await strapi.findOne(pluralName, String(id), toV4Params(params))) as unknown as RawSingleResponse<T>;
      return { data: unwrap<T>(response.data) };
    },
    async create(data: { data: Partial<T> }, params?: Params): Promise<{ data: T }> {
      const request = toV4Body(data.data as Params, params);
      const response = (await strapi.create(pluralName, request.body, request.params)) as unknown as RawSingleResponse<T>;
      return { data: unwrap<T>(response.data) };
    },
    async update(id: number | string, data: { data: Partial<T> }, params?: Params): Promise<{ data: T }> {
      const request = toV4Body(data.data as Params, params);
      const response = (await strapi.update(pluralName, String(id), request.body, request.params)) as unknown as RawSingleResponse<T>;
      return { data: unwrap<T>(response.data) };
    },
    async delete(id: number | string, params?: Params): Promise<void> {
      await strapi.delete(pluralName, String(id), toV4Params(params));
    },
  };
}

export function single<T>(singularName: string) {
  return {
    async find(params?: Params): Promise<{ data: T }> {
      const response = (await strapi.find(singularName, toV4Params(params))) as unknown as RawSingleResponse<T>;
      return { data: unwrap<T>(response.data) };
    },
    async update(data: { data: Partial<T> }, params?: Params): Promise<{ data: T }> {
      const request = toV4Body(data.data as Params, params);
      const response = (await strapi.update(singularName, '', request.body, request.params)) as unknown as RawSingleResponse<T>;
      return { data: unwrap<T>(response.data) };
    },
    async delete(params?: Params): Promise<void> {
      await strapi.delete(singularName, '', toV4Params(params));
    },
  };
}
"""

_V4_HELPERS_JS = """
/**
 * @param {unknown} value
 * @returns {value is { id: number, attributes: Record<string, unknown> }}
 */
function isRawItem(value) {
  return typeof value === 'object' && value !== null && 'id' in value && 'attributes' in value;
}

/**
 * @param {{ id: number, attributes: Record<string, unknown> }} item
 */
function flattenItem(item) {
  return { id: item.id, ...item.attributes };
}

/**
 * Recursively unwrap nested `{ data: { id, attributes } }` relation payloads
 * @param {any} data
 * @returns {any}
 */
function flattenRelations(data) {
  if (data === null || data === undefined) return data;
  if (Array.isArray(data)) return data.map((item) => flattenRelations(item));
  if (typeof data !== 'object') return data;
  /** @type {Record<string, unknown>} */
  const result = {};
  for (const [key, value] of Object.entries(data)) {
    if (value && typeof value === 'object' && 'data' in value) {
      const inner = value.data;
      if (inner === null) {
        result[key] = null;
      } else if (Array.isArray(inner)) {
        result[key] = inner.map((item) => (isRawItem(item) ? flattenRelations(flattenItem(item)) : flattenRelations(item)));
      } else if (isRawItem(inner)) {
        result[key] = flattenRelations(flattenItem(inner));
      } else {
        result[key] = flattenRelations(value);
      }
    } else {
      result[key] = flattenRelations(value);
    }
  }
  return result;
}

/**
 * Translate `status` into v4's `publicationState` query parameter
 * @param {Record<string, unknown>} [params]
 */
function toV4Params(params) {
  if (!params || !('status' in params)) return params;
  const { status, ...rest } = params;
  if (status === undefined) return rest;
  return { ...rest, publicationState: status === 'draft' ? 'preview' : 'live' };
}

/**
 * Translate a `status` write option into v4's `publishedAt` field
 * @param {Record<string, unknown>} data
 * @param {Record<string, unknown>} [params]
 */
function toV4Body(data, params) {
  if (!params || !('status' in params)) return { body: data, params };
  const { status, ...rest } = params;
  const body = { ...data };
  if (status === 'draft') body.publishedAt = null;
  if (status === 'published') body.publishedAt = new Date().toISOString();
  return { body, params: rest };
}
"""

_V4_CLIENT_JS = """
/**
 * @template T
 * @param {string} pluralName
 */
function collection(pluralName) {
  return {
    /**
     * @param {Record<string, unknown>} [params]
     * @returns {Promise<{ data: T[], meta: { pagination: StrapiPagination } }>}
     */
    async find(params) {
      const response = /** @type {any} */ (await strapi.find(pluralName, toV4Params(params)));
      return {
        data: Array.isArray(response.data) ? response.data.map((item) => flattenRelations(flattenItem(item))) : [],
        meta: { pagination: (response.meta && response.meta.pagination) || defaultPagination },
      };
    },
    /**
     * @param {number | string} id
     * @param {Record<string, unknown>} [params]
     * @returns {Promise<{ data: T }>}
     */
    async findOne(id, params) {
      const response = /** @type {any} */ (await strapi.findOne(pluralName, String(id), toV4Params(params)));
      return { data: flattenRelations(flattenItem(response.data)) };
    },
    /**
     * @param {{ data: Partial<T> }} data
     * @param {Record<string, unknown>} [params]
     * @returns {Promise<{ data: T }>}
     */
    async create(data, params) {
      const request = toV4Body(data.data, params);
      const response = /** @type {any} */ (await strapi.create(pluralName, request.body, request.params));
      return { data: flattenRelations(flattenItem(response.data)) };
    },
    /**
     * @param {number | string} id
     * @param {{ data: Partial<T> }} data
     * @param {Record<string, unknown>} [params]
     * @returns {Promise<{ data: T }>}
     */
    async update(id, data, params) {
      const request = toV4Body(data.data, params);
      const response = /** @type {any} */ (await strapi.update(pluralName, String(id), request.body, request.params));
      return { data: flattenRelations(flattenItem(response.data)) };
    },
    /**
     * @param {number | string} id
     * @param {Record<string, unknown>} [params]
     * @returns {Promise<void>}
     */
    async delete(id, params) {
      await strapi.delete(pluralName, String(id), toV4Params(params));
    },
  };
}
"""

_V4_SINGLE_JS = """
/**
 * @template T
 * @param {string} singularName
 */
function single(singularName) {
  return {
    /**
     * @param {Record<string, unknown>} [params]
     * @returns {Promise<{ data: T }>}
     */
    async find(params) {
      const response = /** @type {any} */ (await strapi.find(singularName, toV4Params(params)));
      return { data: flattenRelations(flattenItem(response.data)) };
    },
    /**
     * @param {{ data: Partial<T> }} data
     * @param {Record<string, unknown>} [params]
     * @returns {Promise<{ data: T }>}
     */
    async update(data, params) {
      const request = toV4Body(data.data, params);
      const response = /** @type {any} */ (await strapi.update(singularName, '', request.body, request.params));
      return { data: flattenRelations(flattenItem(response.data)) };
    },
    /**
     * @param {Record<string, unknown>} [params]
     * @returns {Promise<void>}
     */
    async delete(params) {
      await strapi.delete(singularName, '', toV4Params(params));
    },
  };
}
"""


def render_client(options: GenerationOptions, resolver: ModuleResolver) -> ModuleIR:
    module = ModuleIR(header=_header(f"Strapi client ({options.strapi_version})", options))
    module.add_import("strapi-sdk-js", default="Strapi")
    module.add_import(resolver.specifier(CLIENT, UTILS), "StrapiPagination", type_only=True)

    env = _ENV_CJS if options.commonjs else _ENV_ESM
    module.add(CodeDecl(_CLIENT_SETUP.format(
        url=env.format(name="STRAPI_URL"),
        token=env.format(name="STRAPI_TOKEN"),
    )))
    module.add(CodeDecl(_STRAPI_INSTANCE % ts_string(options.api_prefix or "/"), exports=("strapi",)))

    if options.typescript:
        module.add(CodeDecl(_DEFAULT_PAGINATION_TS))
        if options.v4:
            module.add(CodeDecl(_V4_HELPERS_TS))
            module.add(CodeDecl(_V4_CLIENT_TS))
        else:
            module.add(CodeDecl(_V5_CLIENT_TS))
        return module

    module.add(CodeDecl(_DEFAULT_PAGINATION_JS, doc=("@type {StrapiPagination}",)))
    if options.v4:
        module.add(CodeDecl(_V4_HELPERS_JS))
        module.add(CodeDecl(_V4_CLIENT_JS, exports=("collection",)))
        module.add(CodeDecl(_V4_SINGLE_JS, exports=("single",)))
    else:
        module.add(CodeDecl(_V5_CLIENT_JS, exports=("collection",)))
        module.add(CodeDecl(_V5_SINGLE_JS, exports=("single",)))
    return module


# locales


def render_locales(locales: tuple[Locale, ...], options: GenerationOptions) -> ModuleIR:
    ts = options.typescript
    if not locales:
        module = ModuleIR(header=(
            "Strapi locales",
            "Generated by strapigen",
            "i18n is not enabled in Strapi: every code is accepted",
        ))
        module.add(CodeDecl("const locales = [] as const;" if ts else "const locales = [];", exports=("locales",)))
        module.add(TypeAliasDecl("Locale", "string"))
        module.add(CodeDecl(
            "const defaultLocale: Locale = 'en';" if ts else "const defaultLocale = 'en';",
            exports=("defaultLocale",),
            doc=() if ts else ("@type {Locale}",),
        ))
        module.add(CodeDecl(
            "const localeNames: Record<string, string> = {};" if ts else "const localeNames = {};",
            exports=("localeNames",),
            doc=() if ts else ("@type {Record<string, string>}",),
        ))
        module.add(CodeDecl(
            "function isValidLocale(_code: string): _code is Locale {\n  return true;\n}" if ts
            else "function isValidLocale(_code) {\n  return true;\n}",
            exports=("isValidLocale",),
            doc=() if ts else ("@param {string} _code", "@returns {_code is Locale}"),
        ))
        module.add(CodeDecl(
            "function getLocaleName(code: string): string {\n  return code;\n}" if ts
            else "function getLocaleName(code) {\n  return code;\n}",
            exports=("getLocaleName",),
            doc=() if ts else ("@param {string} code", "@returns {string}"),
        ))
        return module

    module = ModuleIR(header=("Strapi locales", "Generated by strapigen"))
    default = default_locale(locales)
    codes = ", ".join(ts_string(l.code) for l in locales)
    names = "\n".join(f"  {property_key(l.code)}: {ts_string(l.name)}," for l in locales)

    module.add(CodeDecl(
        f"const locales = [{codes}] as const;" if ts else f"const locales = /** @type {{const}} */ ([{codes}]);",
        exports=("locales",),
    ))
    module.add(TypeAliasDecl("Locale", "typeof locales[number]"))
    module.add(CodeDecl(
        f"const defaultLocale: Locale = {ts_string(default)};" if ts else f"const defaultLocale = {ts_string(default)};",
        exports=("defaultLocale",),
        doc=() if ts else ("@type {Locale}",),
    ))
    module.add(CodeDecl(
        f"const localeNames: Record<Locale, string> = {{\n{names}\n}};" if ts
        else f"const localeNames = {{\n{names}\n}};",
        exports=("localeNames",),
        doc=() if ts else ("@type {Record<Locale, string>}",),
    ))
    module.add(CodeDecl(
        "function isValidLocale(code: string): code is Locale {\n"
        "  return (locales as readonly string[]).includes(code);\n}" if ts
        else "function isValidLocale(code) {\n  return /** @type {readonly string[]} */ (locales).includes(code);\n}",
        exports=("isValidLocale",),
        doc=() if ts else ("@param {string} code", "@returns {code is Locale}"),
    ))
    module.add(CodeDecl(
        "function getLocaleName(code: Locale): string {\n  return localeNames[code] || code;\n}" if ts
        else "function getLocaleName(code) {\n  return localeNames[code] || code;\n}",
        exports=("getLocaleName",),
        doc=() if ts else ("@param {Locale} code", "@returns {string}"),
    ))
    return module
