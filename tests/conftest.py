"""Shared fixtures: a small Strapi v5 schema as the content-type-builder returns it."""
import copy
import json
from typing import Callable

import httpx
import pytest

from strapigen.schema.parser import normalize
from strapigen.schema.raw import RawSchema

BASE_URL = "http://cms.test"

CONTENT_TYPES = [
    {
        "uid": "api::article.article",
        "apiID": "article",
        "schema": {
            "kind": "collectionType",
            "singularName": "article",
            "pluralName": "articles",
            "displayName": "Article",
            "description": "Blog posts",
            "draftAndPublish": True,
            "pluginOptions": {"i18n": {"localized": True}},
            "attributes": {
                "title": {"type": "string", "required": True, "maxLength": 120},
                "slug": {"type": "uid", "targetField": "title"},
                "body": {"type": "blocks"},
                "rating": {"type": "integer", "min": 1, "max": 5},
                "category": {"type": "enumeration", "enum": ["news", "guide"], "default": "news"},
                "cover": {"type": "media", "multiple": False, "allowedTypes": ["images"]},
                "gallery": {"type": "media", "multiple": True},
                "author": {"type": "relation", "relation": "manyToOne", "target": "api::author.author"},
                "seo": {"type": "component", "component": "shared.seo"},
                "sections": {"type": "dynamiczone", "components": ["shared.quote", "shared.seo"]},
                "color": {"type": "customField", "customField": "plugin::color-picker.color"},
                "internalNotes": {"type": "text", "private": True},
                "createdAt": {"type": "datetime"},
            },
        },
    },
    {
        "uid": "api::author.author",
        "apiID": "author",
        "schema": {
            "kind": "collectionType",
            "singularName": "author",
            "pluralName": "authors",
            "displayName": "Author",
            "draftAndPublish": False,
            "attributes": {
                "name": {"type": "string", "required": True},
                "email": {"type": "email"},
                "articles": {"type": "relation", "relation": "oneToMany", "target": "api::article.article"},
            },
        },
    },
    {
        "uid": "api::homepage.homepage",
        "apiID": "homepage",
        "schema": {
            "kind": "singleType",
            "singularName": "homepage",
            "pluralName": "homepages",
            "displayName": "Homepage",
            "draftAndPublish": False,
            "attributes": {
                "heading": {"type": "string"},
                "hero": {"type": "component", "component": "shared.seo"},
            },
        },
    },
]

ADMIN_CONTENT_TYPE = {
    "uid": "admin::user",
    "plugin": "admin",
    "schema": {"kind": "collectionType", "singularName": "user", "pluralName": "users", "attributes": {}},
}

COMPONENTS = [
    {
        "uid": "shared.seo",
        "category": "shared",
        "apiId": "seo",
        "schema": {
            "displayName": "SEO",
            "attributes": {
                "metaTitle": {"type": "string", "required": True},
                "metaDescription": {"type": "text", "maxLength": 160},
            },
        },
    },
    {
        "uid": "shared.quote",
        "category": "shared",
        "apiId": "quote",
        "schema": {
            "displayName": "Quote",
            "attributes": {
                "text": {"type": "text", "required": True},
                "by": {"type": "string"},
            },
        },
    },
    {
        "uid": "menu.menu-item",
        "category": "menu",
        "apiId": "menu-item",
        "schema": {
            "displayName": "Menu item",
            "attributes": {
                "label": {"type": "string", "required": True},
                "children": {"type": "component", "component": "menu.menu-item", "repeatable": True},
            },
        },
    },
]

LOCALES = [
    {"id": 1, "code": "en", "name": "English (en)", "isDefault": True},
    {"id": 2, "code": "fr", "name": "French (fr)", "isDefault": False},
]


@pytest.fixture
def content_types_payload():
    return copy.deepcopy(CONTENT_TYPES)


@pytest.fixture
def components_payload():
    return copy.deepcopy(COMPONENTS)


@pytest.fixture
def locales_payload():
    return copy.deepcopy(LOCALES)


@pytest.fixture
def raw_schema(content_types_payload, components_payload, locales_payload):
    return RawSchema.model_validate({
        "contentTypes": content_types_payload,
        "components": components_payload,
        "locales": locales_payload,
    })


@pytest.fixture
def schema(raw_schema):
    return normalize(raw_schema)


@pytest.fixture
def strapi_handler(content_types_payload, components_payload, locales_payload) -> Callable:
    """
    Request handler faking a Strapi v5 server.

    Extra routes can be set through ``handler.routes[path] = (status, body)``.
    """
    routes = {
        "/api/content-type-builder/content-types": (
            200, {"data": content_types_payload + [copy.deepcopy(ADMIN_CONTENT_TYPE)]}
        ),
        "/api/content-type-builder/components": (200, {"data": components_payload}),
        "/api/i18n/locales": (200, locales_payload),
        "/api/articles": (200, {"data": [{"id": 1, "documentId": "abc123", "title": "Hello"}], "meta": {}}),
    }
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path not in routes:
            return httpx.Response(404, json={"error": {"status": 404, "message": "Not Found"}})
        status, body = routes[request.url.path]
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, content=json.dumps(body).encode(), headers={"content-type": "application/json"})

    handler.routes = routes
    handler.requests = requests
    return handler


@pytest.fixture
def transport(strapi_handler):
    return httpx.MockTransport(strapi_handler)


@pytest.fixture
def generate(schema):
    """Render the sample schema; returns ``{path: content}``."""
    from strapigen.generators.generator import generate_project
    from strapigen.generators.types import GenerationOptions

    def _generate(target=None, **options):
        files = generate_project(target or schema, GenerationOptions(**options))
        return {f.path: f.content for f in files}

    return _generate
