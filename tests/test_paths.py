"""Tests for layout-aware module paths and relative import specifiers."""
import pytest

from strapigen.generators.paths import (
    CLIENT,
    UPLOAD_CLIENT,
    UTILS,
    LogicalModule,
    ModuleKind,
    ModuleResolver,
    module_file,
    module_path,
    relative_specifier,
)
from strapigen.generators.types import GenerationOptions, OutputPaths

ARTICLE_TYPES = LogicalModule(ModuleKind.TYPES, "article", "collection")
AUTHOR_TYPES = LogicalModule(ModuleKind.TYPES, "author", "collection")
ARTICLE_SCHEMAS = LogicalModule(ModuleKind.SCHEMAS, "article", "collection")
ARTICLE_SERVICE = LogicalModule(ModuleKind.SERVICE, "article", "collection")
ARTICLE_ACTIONS = LogicalModule(ModuleKind.ACTIONS, "article", "collection")
HOMEPAGE_SERVICE = LogicalModule(ModuleKind.SERVICE, "homepage", "single")
SEO_TYPES = LogicalModule(ModuleKind.COMPONENT_TYPES, "seo", "component")
SEO_SCHEMA = LogicalModule(ModuleKind.COMPONENT_SCHEMAS, "seo", "component")
QUOTE_TYPES = LogicalModule(ModuleKind.COMPONENT_TYPES, "quote", "component")

BY_FEATURE = GenerationOptions(layout="by-feature")
BY_LAYER = GenerationOptions(layout="by-layer")


@pytest.mark.parametrize("module,expected", [
    (UTILS, "shared/utils"),
    (CLIENT, "shared/client"),
    (UPLOAD_CLIENT, "shared/upload-client"),
    (ARTICLE_TYPES, "collections/article/types"),
    (ARTICLE_SCHEMAS, "collections/article/schemas"),
    (ARTICLE_SERVICE, "collections/article/service"),
    (ARTICLE_ACTIONS, "collections/article/actions"),
    (HOMEPAGE_SERVICE, "singles/homepage/service"),
    (SEO_TYPES, "components/seo"),
    (SEO_SCHEMA, "components/seo.schema"),
])
def test_by_feature_paths(module, expected):
    assert module_path(module, BY_FEATURE) == expected


@pytest.mark.parametrize("module,expected", [
    (UTILS, "types/utils"),
    (CLIENT, "client"),
    (UPLOAD_CLIENT, "upload/upload-client"),
    (ARTICLE_TYPES, "types/collections/article"),
    (ARTICLE_SCHEMAS, "schemas/article"),
    (ARTICLE_SERVICE, "services/article.service"),
    (ARTICLE_ACTIONS, "actions/strapi/article"),
    (HOMEPAGE_SERVICE, "services/homepage.service"),
    (SEO_TYPES, "types/components/seo"),
    (SEO_SCHEMA, "schemas/components/seo"),
])
def test_by_layer_paths(module, expected):
    assert module_path(module, BY_LAYER) == expected


def test_by_layer_honours_configured_directories():
    options = GenerationOptions(layout="by-layer", paths=OutputPaths(types="lib/types/", services="api"))
    assert module_path(ARTICLE_TYPES, options) == "lib/types/collections/article"
    assert module_path(ARTICLE_SERVICE, options) == "api/article.service"


def test_module_file_extension():
    assert module_file(ARTICLE_TYPES, BY_FEATURE) == "collections/article/types.ts"
    jsdoc = GenerationOptions(layout="by-feature", output_format="jsdoc")
    assert module_file(ARTICLE_TYPES, jsdoc) == "collections/article/types.js"


def test_entity_module_requires_stem():
    with pytest.raises(ValueError):
        LogicalModule(ModuleKind.TYPES)


@pytest.mark.parametrize("options,source,target,expected", [
    # relation target in another feature: up to the root, then down
    (BY_FEATURE, ARTICLE_TYPES, AUTHOR_TYPES, "../../collections/author/types"),
    (BY_FEATURE, ARTICLE_TYPES, UTILS, "../../shared/utils"),
    (BY_FEATURE, ARTICLE_SERVICE, ARTICLE_TYPES, "./types"),
    (BY_FEATURE, ARTICLE_SCHEMAS, SEO_SCHEMA, "../../components/seo.schema"),
    (BY_FEATURE, SEO_TYPES, QUOTE_TYPES, "./quote"),
    (BY_FEATURE, SEO_TYPES, UTILS, "../shared/utils"),
    (BY_FEATURE, CLIENT, UTILS, "./utils"),
    # same logical references, flat layout
    (BY_LAYER, ARTICLE_TYPES, AUTHOR_TYPES, "./author"),
    (BY_LAYER, ARTICLE_TYPES, UTILS, "../utils"),
    (BY_LAYER, ARTICLE_SERVICE, ARTICLE_TYPES, "../types/collections/article"),
    (BY_LAYER, ARTICLE_SCHEMAS, SEO_SCHEMA, "./components/seo"),
    (BY_LAYER, SEO_TYPES, QUOTE_TYPES, "./quote"),
    (BY_LAYER, CLIENT, UTILS, "./types/utils"),
    (BY_LAYER, ARTICLE_ACTIONS, ARTICLE_SERVICE, "../../services/article.service"),
])
def test_specifiers(options, source, target, expected):
    assert ModuleResolver(options).specifier(source, target) == expected


def test_specifier_always_relative():
    for options in (BY_FEATURE, BY_LAYER):
        resolver = ModuleResolver(options)
        for source in (CLIENT, ARTICLE_TYPES, SEO_SCHEMA, ARTICLE_ACTIONS):
            for target in (UTILS, AUTHOR_TYPES, QUOTE_TYPES):
                assert resolver.specifier(source, target).startswith(("./", "../"))


def test_jsdoc_esm_appends_extension():
    esm = GenerationOptions(layout="by-layer", output_format="jsdoc", module_type="esm")
    cjs = GenerationOptions(layout="by-layer", output_format="jsdoc", module_type="commonjs")
    assert ModuleResolver(esm).specifier(ARTICLE_TYPES, AUTHOR_TYPES) == "./author.js"
    assert ModuleResolver(cjs).specifier(ARTICLE_TYPES, AUTHOR_TYPES) == "./author"


def test_relative_specifier_plain():
    assert relative_specifier("types/collections/article", "types/collections/author") == "./author"
    assert relative_specifier("client", "types/utils") == "./types/utils"
    assert relative_specifier("a/b/c", "a/d") == "../d"
