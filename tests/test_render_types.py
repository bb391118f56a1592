"""Tests for generated entity and component type modules."""


def test_article_types_by_feature(generate):
    out = generate()["collections/article/types.ts"]

    assert " * Article\n * Blog posts\n * Generated by strapigen" in out
    assert "import type { BlocksContent, StrapiBaseEntity, StrapiMedia } from '../../shared/utils';" in out
    assert "import type { Author } from '../../collections/author/types';" in out
    assert "import type { Seo } from '../../components/seo';" in out
    assert "import type { Quote } from '../../components/quote';" in out
    assert "export interface Article extends StrapiBaseEntity {" in out
    assert "  /** Required, Max length: 120 */\n  title: string;" in out
    assert "  slug?: string;" in out
    assert "  body?: BlocksContent;" in out
    assert "  /** Min: 1, Max: 5 */\n  rating?: number;" in out
    assert "  category?: 'news' | 'guide';" in out
    assert "  cover?: StrapiMedia | null;" in out
    assert "  gallery?: StrapiMedia[];" in out
    assert "  author?: Author | null;" in out
    assert "  seo?: Seo | null;" in out
    assert "  sections?: (Quote | Seo)[];" in out
    assert "  color?: unknown;" in out
    assert "  locale: string;" in out
    assert "  localizations?: Article[];" in out
    assert "internalNotes" not in out


def test_article_filters_interface(generate):
    v5 = generate()["collections/article/types.ts"]
    v4 = generate(strapi_version="v4")["collections/article/types.ts"]

    assert "export interface ArticleFilters {" in v5
    assert "  documentId?: string | {" in v5
    assert "  $or?: ArticleFilters[];" in v5
    assert "  $not?: ArticleFilters;" in v5
    assert "documentId" not in v4


def test_relation_import_path_depends_only_on_layout(generate):
    """Same symbol, different path."""
    by_feature = generate(layout="by-feature")["collections/article/types.ts"]
    by_layer = generate(layout="by-layer")["types/collections/article.ts"]

    assert "import type { Author } from '../../collections/author/types';" in by_feature
    assert "import type { Author } from './author';" in by_layer
    assert "import type { Seo } from '../components/seo';" in by_layer
    assert "from '../utils';" in by_layer
    assert "  author?: Author | null;" in by_feature
    assert "  author?: Author | null;" in by_layer


def test_unlocalized_entity_has_no_locale_fields(generate):
    out = generate()["collections/author/types.ts"]

    assert "import type { Article } from '../../collections/article/types';" in out
    assert "  articles?: Article[];" in out
    assert "  name: string;" in out
    assert "locale" not in out


def test_single_type_has_no_filters(generate):
    out = generate()["singles/homepage/types.ts"]

    assert "export interface Homepage extends StrapiBaseEntity {" in out
    assert "  hero?: Seo | null;" in out
    assert "Filters" not in out


def test_component_types(generate):
    files = generate()
    seo = files["components/seo.ts"]
    menu = files["components/menu-item.ts"]

    assert " * SEO component\n * Category: shared" in seo
    assert "export interface Seo {\n  id: number;" in seo
    assert "  metaTitle: string;" in seo
    assert "  /** Max length: 160 */\n  metaDescription?: string;" in seo
    assert "import" not in seo
    # recursive component references itself without an import
    assert "  children?: MenuItem[];" in menu
    assert "import" not in menu


def test_jsdoc_types(generate):
    out = generate(output_format="jsdoc")["collections/article/types.js"]

    assert "/** @typedef {import('../../collections/author/types.js').Author} Author */" in out
    assert " * @typedef {Object} ArticleAttributes" in out
    assert " * @property {Author | null} [author]" in out
    assert "/** @typedef {StrapiBaseEntity & ArticleAttributes} Article */" in out
    assert out.rstrip().endswith("export {};")
