"""Wire models for the Strapi content-type-builder and i18n APIs.

Every field is optional and unknown keys are kept: the payload is untrusted
and its shape differs between Strapi versions. ``strapigen.schema.parser``
does the actual interpretation.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RawModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def extras(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class RawContentType(RawModel):
    """One entry of ``GET /content-type-builder/content-types``."""

    uid: str = ""
    api_id: str | None = Field(None, alias="apiID")
    plugin: str | None = None
    definition: dict[str, Any] = Field(default_factory=dict, alias="schema")


class RawComponent(RawModel):
    """One entry of ``GET /content-type-builder/components``."""

    uid: str = ""
    category: str | None = None
    api_id: str | None = Field(None, alias="apiId")
    definition: dict[str, Any] = Field(default_factory=dict, alias="schema")


class RawLocale(RawModel):
    """One entry of ``GET /i18n/locales``."""

    id: int | None = None
    code: str | None = None
    name: str | None = None
    is_default: bool = Field(False, alias="isDefault")


class RawSchema(RawModel):
    content_types: list[RawContentType] = Field(default_factory=list, alias="contentTypes")
    components: list[RawComponent] = Field(default_factory=list)
    locales: list[RawLocale] = Field(default_factory=list)
