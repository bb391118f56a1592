"""Tests for generated zod schema modules."""
from strapigen.generators.types import Features


def test_article_schemas(generate):
    out = generate()["collections/article/schemas.ts"]

    assert "import { z } from 'zod';" in out
    assert "import { seoSchema } from '../../components/seo.schema';" in out
    assert "import { quoteSchema } from '../../components/quote.schema';" in out
    assert "/** Create Article */\nexport const articleCreateSchema = z.object({" in out
    assert "export const articleUpdateSchema = z.object({" in out
    assert "  title: z.string().max(120)," in out
    assert "  category: z.enum(['news', 'guide']).optional().default('news')," in out
    assert "  author: z.string().nullable().optional()," in out
    assert "  // color skipped: unsupported attribute type 'customField'" in out
    assert "export type ArticleCreateInput = z.infer<typeof articleCreateSchema>;" in out
    assert "export type ArticleUpdateInput = z.infer<typeof articleUpdateSchema>;" in out


def test_update_schema_is_all_optional(generate):
    out = generate()["collections/article/schemas.ts"]
    update = out[out.index("articleUpdateSchema = "):out.index("export type")]

    assert "  title: z.string().max(120).optional()," in update
    assert "  category: z.enum(['news', 'guide']).optional()," in update
    assert ".default(" not in update


def test_v4_schemas_use_numeric_ids(generate):
    out = generate(strapi_version="v4")["collections/article/schemas.ts"]
    assert "  author: z.number().int().positive().nullable().optional()," in out
    assert "Strapi version: v4" in out


def test_component_schema(generate):
    out = generate()["components/seo.schema.ts"]

    assert "export const seoSchema = z.object({" in out
    assert "  metaTitle: z.string()," in out
    assert "  metaDescription: z.string().max(160).optional()," in out
    assert "export type SeoInput = z.infer<typeof seoSchema>;" in out


def test_recursive_component_schema_is_lazy(generate):
    out = generate()["components/menu-item.schema.ts"]

    assert "export const menuItemSchema: z.ZodTypeAny = z.object({" in out
    assert "  children: z.array(z.lazy(() => menuItemSchema)).optional()," in out
    # no self import, no inferred input type for a ZodTypeAny
    assert "from './menu-item.schema'" not in out
    assert "MenuItemInput" not in out


def test_jsdoc_schemas(generate):
    files = generate(output_format="jsdoc", features=Features(schemas=True))
    out = files["components/menu-item.schema.js"]

    assert "import { z } from 'zod';" in out
    assert "@type {import('zod').ZodTypeAny}" in out
    assert "export const menuItemSchema = z.object({" in out
    assert ": z.ZodTypeAny" not in out

    article = files["collections/article/schemas.js"]
    assert "import { seoSchema } from '../../components/seo.schema.js';" in article
    assert " * @typedef {import('zod').infer<typeof articleCreateSchema>} ArticleCreateInput" in article
