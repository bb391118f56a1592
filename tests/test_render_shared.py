"""Tests for the shared utils, client and locales modules."""
from strapigen.generators.render_shared import render_locales
from strapigen.generators.ir import print_module
from strapigen.generators.types import GenerationOptions
from strapigen.schema.models import Locale


def test_v5_utils(generate):
    out = generate()["shared/utils.ts"]

    assert "export interface StrapiMedia {" in out
    assert "export interface StrapiPagination {" in out
    assert "export interface StrapiResponse<T> {" in out
    assert "export interface StrapiListResponse<T> {" in out
    base = out[out.index("export interface StrapiBaseEntity {"):]
    assert "  documentId: string;" in base
    assert "export type BlocksContent = unknown[];" in out
    assert "flattenV4Response" not in out


def test_v4_utils(generate):
    out = generate(strapi_version="v4")["shared/utils.ts"]

    assert "documentId" not in out
    assert "export interface StrapiV4RawItem<T> {" in out
    assert "export function flattenV4Response<T>(item: StrapiV4RawItem<T>): T {" in out
    assert "export function flattenV4ListResponse<T>" in out
    assert "export type RichTextContent = string;" in out


def test_blocks_renderer_reexport(generate):
    out = generate(blocks_renderer_installed=True)["shared/utils.ts"]
    assert "export type { BlocksContent } from '@strapi/blocks-react-renderer';" in out
    assert "BlocksContent = unknown[]" not in out


def test_v5_client(generate):
    out = generate()["shared/client.ts"]

    assert "import Strapi from 'strapi-sdk-js';" in out
    assert "import type { StrapiPagination } from './utils';" in out
    assert "import.meta.env.STRAPI_URL || process.env.STRAPI_URL" in out
    assert "export const strapi = new Strapi({" in out
    assert "  prefix: '/api'," in out
    assert "export function collection<T>(pluralName: string) {" in out
    assert "export function single<T>(singularName: string) {" in out
    assert "flattenRelations" not in out


def test_v4_client_flattens_and_translates_status(generate):
    out = generate(strapi_version="v4")["shared/client.ts"]

    assert "function flattenRelations<T>(data: T): T {" in out
    assert "publicationState: status === 'draft' ? 'preview' : 'live'" in out
    assert "export function collection<T>(pluralName: string) {" in out


def test_commonjs_client_uses_process_env(generate):
    out = generate(output_format="jsdoc", module_type="commonjs")["shared/client.js"]

    assert "const Strapi = require('strapi-sdk-js');" in out
    assert "import.meta" not in out
    assert "process.env.STRAPI_URL" in out
    assert "module.exports = { strapi, collection, single };" in out


def test_jsdoc_esm_client_exports_helpers(generate):
    out = generate(output_format="jsdoc")["shared/client.js"]

    assert "export function collection(pluralName) {" in out
    assert "export function single(singularName) {" in out
    assert "export /**" not in out


def test_locales_module(generate):
    out = generate()["shared/locales.ts"]

    assert "export const locales = ['en', 'fr'] as const;" in out
    assert "export type Locale = typeof locales[number];" in out
    assert "export const defaultLocale: Locale = 'en';" in out
    assert "  en: 'English (en)'," in out
    assert "export function isValidLocale(code: string): code is Locale {" in out
    assert "export function getLocaleName(code: Locale): string {" in out


def test_locales_without_i18n_are_permissive():
    out = print_module(render_locales((), GenerationOptions()), GenerationOptions())

    assert "export const locales = [] as const;" in out
    assert "export type Locale = string;" in out
    assert "export const defaultLocale: Locale = 'en';" in out
    assert "return true;" in out


def test_default_locale_falls_back_to_first():
    locales = (Locale("de", "German"), Locale("pt-BR", "Portuguese"))
    out = print_module(render_locales(locales, GenerationOptions()), GenerationOptions())

    assert "export const defaultLocale: Locale = 'de';" in out
    assert "  'pt-BR': 'Portuguese'," in out
