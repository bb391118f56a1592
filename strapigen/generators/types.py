"""Dataclasses shared by the generators."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from strapigen.core.config import Configuration

Layout = Literal["by-layer", "by-feature"]
StrapiVersion = Literal["v4", "v5"]


@dataclass(frozen=True)
class GeneratedFile:
    """Represents a generated file."""
    path: str  # relative to the output root, posix separators
    content: str


@dataclass(frozen=True)
class Features:
    types: bool = True
    services: bool = True
    actions: bool = True
    schemas: bool = True
    upload: bool = False


@dataclass(frozen=True)
class OutputPaths:
    """Per-artifact directories (by-layer), relative to the output root."""
    types: str = "types"
    services: str = "services"
    actions: str = "actions/strapi"
    schemas: str = "schemas"
    upload: str = "upload"


@dataclass(frozen=True)
class GenerationOptions:
    strapi_version: StrapiVersion = "v5"
    output_format: Literal["typescript", "jsdoc"] = "typescript"
    module_type: Literal["esm", "commonjs"] = "esm"
    layout: Layout = "by-feature"
    paths: OutputPaths = OutputPaths()
    features: Features = Features()
    api_prefix: str = "/api"
    advanced_relations: bool = False
    blocks_renderer_installed: bool = False

    @classmethod
    def from_config(cls, config: "Configuration", strapi_version: StrapiVersion | None = None) -> "GenerationOptions":
        out = config.output
        return cls(
            strapi_version=strapi_version or config.strapi_version,
            output_format=config.output_format,
            module_type=config.module_type,
            layout=out.structure,
            paths=OutputPaths(
                types=out.types,
                services=out.services,
                actions=out.actions,
                schemas=out.schemas,
                upload=out.upload,
            ),
            features=Features(
                types=config.features.types,
                services=config.features.services,
                actions=config.features.actions,
                schemas=config.schemas_enabled,
                upload=config.features.upload,
            ),
            api_prefix=config.api_prefix,
            advanced_relations=config.schema_options.advanced_relations,
            blocks_renderer_installed=config.options.blocks_renderer_installed,
        )

    @property
    def typescript(self) -> bool:
        return self.output_format == "typescript"

    @property
    def commonjs(self) -> bool:
        return self.output_format == "jsdoc" and self.module_type == "commonjs"

    @property
    def v4(self) -> bool:
        return self.strapi_version == "v4"

    @property
    def extension(self) -> str:
        return "ts" if self.typescript else "js"
