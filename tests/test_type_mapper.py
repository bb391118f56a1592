"""Tests for attribute -> TypeScript type mapping."""
import pytest

from strapigen.generators.symbols import SymbolTable
from strapigen.generators.type_mapper import TypeContext, attribute_doc, map_attribute
from strapigen.schema.models import (
    BlocksAttribute,
    BooleanAttribute,
    ComponentAttribute,
    DateAttribute,
    DynamicZoneAttribute,
    EnumerationAttribute,
    JsonAttribute,
    MediaAttribute,
    NumberAttribute,
    RelationAttribute,
    StringAttribute,
    UnknownAttribute,
)


@pytest.fixture
def ctx(schema):
    return TypeContext(SymbolTable(schema), self_uid="api::article.article")


@pytest.mark.parametrize("attr,expected", [
    (StringAttribute(type="richtext"), "string"),
    (StringAttribute(type="email"), "string"),
    (NumberAttribute(type="decimal"), "number"),
    (BooleanAttribute(), "boolean"),
    (DateAttribute(type="date"), "string"),
    (JsonAttribute(), "unknown"),
    (EnumerationAttribute(values=("draft", "it's live")), "'draft' | 'it\\'s live'"),
    (EnumerationAttribute(), "string"),
    (MediaAttribute(), "StrapiMedia | null"),
    (MediaAttribute(multiple=True), "StrapiMedia[]"),
    (BlocksAttribute(), "BlocksContent"),
    (UnknownAttribute(type="customField"), "unknown"),
])
def test_scalar_mapping(ctx, attr, expected):
    assert map_attribute(attr, ctx).type == expected


def test_media_and_blocks_use_utils(ctx):
    assert map_attribute(MediaAttribute(), ctx).utils == ("StrapiMedia",)
    assert map_attribute(BlocksAttribute(), ctx).utils == ("BlocksContent",)


@pytest.mark.parametrize("relation,expected", [
    ("oneToOne", "Author | null"),
    ("manyToOne", "Author | null"),
    ("oneToMany", "Author[]"),
    ("manyToMany", "Author[]"),
])
def test_relation_cardinality(ctx, relation, expected):
    mapped = map_attribute(RelationAttribute(relation=relation, target="api::author.author"), ctx)
    assert mapped.type == expected
    assert mapped.refs == ("api::author.author",)


def test_self_relation_has_no_import(ctx):
    mapped = map_attribute(RelationAttribute(relation="oneToMany", target="api::article.article"), ctx)
    assert mapped.type == "Article[]"
    assert mapped.refs == ()


def test_unresolved_targets_degrade_to_unknown(ctx):
    assert map_attribute(RelationAttribute(target="plugin::users-permissions.user"), ctx).type == "unknown"
    assert map_attribute(ComponentAttribute(component="shared.missing"), ctx).type == "unknown"
    assert map_attribute(DynamicZoneAttribute(components=("shared.missing",)), ctx).type == "unknown[]"


def test_components(ctx):
    assert map_attribute(ComponentAttribute(component="shared.seo"), ctx).type == "Seo | null"
    assert map_attribute(ComponentAttribute(component="shared.seo", repeatable=True), ctx).type == "Seo[]"


def test_dynamic_zone_union(ctx):
    one = map_attribute(DynamicZoneAttribute(components=("shared.quote",)), ctx)
    many = map_attribute(DynamicZoneAttribute(components=("shared.quote", "shared.seo")), ctx)
    assert one.type == "Quote[]"
    assert many.type == "(Quote | Seo)[]"
    assert many.refs == ("shared.quote", "shared.seo")


def test_attribute_doc():
    assert attribute_doc(StringAttribute(required=True, min_length=2, max_length=80)) == (
        "Required, Min length: 2, Max length: 80"
    )
    assert attribute_doc(NumberAttribute(min=0, max=10)) == "Min: 0, Max: 10"
    assert attribute_doc(BooleanAttribute()) == ""
