"""Tests for generated Astro actions and upload helpers."""
from strapigen.generators.types import Features

ARTICLE = "collections/article/actions.ts"
AUTHOR = "collections/author/actions.ts"
HOMEPAGE = "singles/homepage/actions.ts"


def test_collection_actions(generate):
    out = generate()[ARTICLE]

    assert "import { defineAction } from 'astro:actions';" in out
    assert "import { z } from 'astro:schema';" in out
    assert "import { articleService } from './service';" in out
    assert "import { articleCreateSchema, articleUpdateSchema } from './schemas';" in out
    assert "import type { Locale } from '../../shared/locales';" in out
    assert "export const articleActions = {" in out
    for name in ("getMany", "getOne", "create", "update", "delete"):
        assert f"  {name}: defineAction({{" in out
    assert "data: articleCreateSchema," in out
    assert "data: articleUpdateSchema," in out
    assert "documentId: z.string()," in out
    assert "locale: input.locale as Locale" in out


def test_v4_actions_use_numeric_id(generate):
    out = generate(strapi_version="v4")[AUTHOR]

    assert "id: z.number().int().positive()," in out
    assert "await authorService.findOne(input.id);" in out
    assert "documentId" not in out


def test_plain_entity_actions_have_no_locale_or_status(generate):
    out = generate()[AUTHOR]

    assert "locale" not in out.lower()
    assert "status" not in out
    assert "const data = await authorService.create(input.data as Parameters<typeof authorService.create>[0]);" in out
    assert "await authorService.delete(input.documentId);" in out


def test_actions_without_schemas_accept_any_record(generate):
    out = generate(features=Features(schemas=False))[ARTICLE]

    assert "data: z.record(z.unknown())," in out
    assert "./schemas" not in out


def test_single_type_actions(generate):
    out = generate()[HOMEPAGE]

    assert "export const homepageActions = {" in out
    for name in ("get", "update", "delete"):
        assert f"  {name}: defineAction({{" in out
    assert "getMany" not in out
    assert "import { homepageUpdateSchema } from './schemas';" in out
    assert "await homepageService.delete();" in out


def test_jsdoc_actions_skip_casts(generate):
    out = generate(output_format="jsdoc")["collections/article/actions.js"]

    assert " as " not in out
    assert "import { articleService } from './service.js';" in out


def test_upload_helpers(generate):
    files = generate(features=Features(upload=True))

    client = files["shared/upload-client.ts"]
    assert "import.meta.env.PUBLIC_STRAPI_URL" in client
    assert "STRAPI_TOKEN" not in client.replace("PUBLIC_STRAPI_UPLOAD_TOKEN", "")
    assert "`${strapiUrl}/api/upload`" in client
    assert "export async function uploadFiles(" in client
    assert "export async function uploadFile(" in client
    assert "import type { StrapiMedia } from './utils';" in client

    action = files["shared/upload-action.ts"]
    assert "accept: 'form'," in action
    assert "import.meta.env.STRAPI_TOKEN" in action
    assert "export const uploadAction = defineAction({" in action


def test_upload_disabled_by_default(generate):
    assert not any("upload" in path for path in generate())
