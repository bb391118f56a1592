"""Decides which files a run produces and where they go."""
from __future__ import annotations

import posixpath
from pathlib import Path
from typing import Callable, Iterator, Optional

from strapigen.generators.ir import ModuleIR, print_module
from strapigen.generators.paths import (
    CLIENT,
    LOCALES,
    UPLOAD_ACTION,
    UPLOAD_CLIENT,
    UTILS,
    LogicalModule,
    ModuleKind,
    ModuleResolver,
)
from strapigen.generators.render_actions import render_actions
from strapigen.generators.render_schemas import render_component_schema, render_content_type_schemas
from strapigen.generators.render_services import render_service
from strapigen.generators.render_shared import render_client, render_locales, render_utils
from strapigen.generators.render_types import render_component_types, render_content_type_types
from strapigen.generators.render_upload import render_upload_action, render_upload_client
from strapigen.generators.symbols import SymbolTable
from strapigen.generators.types import GeneratedFile, GenerationOptions
from strapigen.schema.models import ParsedSchema

BY_FEATURE_ROOTS = ("collections", "singles", "components", "shared")
BY_LAYER_ROOT_FILES = ("client", "locales")

# features whose selection (``--<feature>-only``) rewrites a module
KIND_FEATURES: dict[ModuleKind, frozenset[str]] = {
    ModuleKind.UTILS: frozenset({"types", "services", "upload"}),
    ModuleKind.CLIENT: frozenset({"services"}),
    ModuleKind.LOCALES: frozenset({"services"}),
    ModuleKind.TYPES: frozenset({"types"}),
    ModuleKind.COMPONENT_TYPES: frozenset({"types"}),
    ModuleKind.SCHEMAS: frozenset({"schemas"}),
    ModuleKind.COMPONENT_SCHEMAS: frozenset({"schemas"}),
    ModuleKind.SERVICE: frozenset({"services"}),
    ModuleKind.ACTIONS: frozenset({"actions"}),
    ModuleKind.UPLOAD_CLIENT: frozenset({"upload"}),
    ModuleKind.UPLOAD_ACTION: frozenset({"upload"}),
}

_Build = Callable[[], ModuleIR]


class OutputPlanner:
    """
    Plans the files of one run.

    ``options.features`` decides which modules exist and therefore what
    generated code may import. ``only`` narrows the files actually rendered
    without changing their content.
    """

    def __init__(self, schema: ParsedSchema, options: GenerationOptions, only: Optional[set[str]] = None):
        self.schema = schema
        self.options = options
        self.only = only
        self.symbols = SymbolTable(schema)
        self.resolver = ModuleResolver(options)

    def selected(self, module: LogicalModule) -> bool:
        return self.only is None or bool(KIND_FEATURES[module.kind] & self.only)

    def _render(self, modules: Iterator[tuple[LogicalModule, _Build]]) -> list[GeneratedFile]:
        return [
            GeneratedFile(self.resolver.file(module), print_module(build(), self.options))
            for module, build in modules
            if self.selected(module)
        ]

    def _shared_modules(self) -> Iterator[tuple[LogicalModule, _Build]]:
        features = self.options.features
        if features.types or features.services or features.upload:
            yield UTILS, lambda: render_utils(self.options)
        if features.services:
            yield CLIENT, lambda: render_client(self.options, self.resolver)
            yield LOCALES, lambda: render_locales(self.schema.locales, self.options)
        if features.upload:
            yield UPLOAD_CLIENT, lambda: render_upload_client(self.options, self.resolver)
            yield UPLOAD_ACTION, lambda: render_upload_action(self.options, self.resolver)

    def _entity_modules(self) -> Iterator[tuple[LogicalModule, _Build]]:
        features = self.options.features
        args = (self.symbols, self.options, self.resolver)
        for entity in self.schema.content_types:
            symbol = self.symbols[entity.uid]
            if features.types:
                yield symbol.types_module, lambda e=entity: render_content_type_types(e, *args)
            if features.schemas:
                yield symbol.schemas_module, lambda e=entity: render_content_type_schemas(e, *args)
            if features.services:
                yield symbol.module(ModuleKind.SERVICE), lambda e=entity: render_service(e, *args)
            if features.actions:
                yield symbol.module(ModuleKind.ACTIONS), lambda e=entity: render_actions(e, *args)
        for component in self.schema.components:
            symbol = self.symbols[component.uid]
            if features.types:
                yield symbol.types_module, lambda c=component: render_component_types(c, *args)
            if features.schemas:
                yield symbol.schemas_module, lambda c=component: render_component_schema(c, *args)

    def shared_files(self) -> list[GeneratedFile]:
        return self._render(self._shared_modules())

    def entity_files(self) -> list[GeneratedFile]:
        return self._render(self._entity_modules())

    def plan(self) -> list[GeneratedFile]:
        """Shared files first, then per-entity files in schema order."""
        return self.shared_files() + self.entity_files()

    def planned_paths(self) -> list[str]:
        """Paths of every module the configuration enables, selected or not."""
        modules = [*self._shared_modules(), *self._entity_modules()]
        return [self.resolver.file(module) for module, _ in modules]

    def _other_layout_candidates(self) -> list[str]:
        if self.options.layout == "by-layer":
            return list(BY_FEATURE_ROOTS)
        paths = self.options.paths
        candidates = [paths.types, paths.services, paths.actions, paths.schemas, paths.upload]
        candidates += [f"{name}.{ext}" for name in BY_LAYER_ROOT_FILES for ext in ("ts", "js")]
        return [posixpath.normpath(c.replace("\\", "/")).strip("/") for c in candidates if c]

    def find_orphans(self, out_dir: Path, planned: list[GeneratedFile] | None = None) -> list[Path]:
        """
        Existing files and directories left behind by the other layout mode.

        Anything that still holds a planned file is kept.
        """
        planned_paths = [f.path for f in planned] if planned is not None else self.planned_paths()
        orphans = []
        for candidate in dict.fromkeys(self._other_layout_candidates()):
            if candidate in ("", "."):
                continue
            if any(p == candidate or p.startswith(f"{candidate}/") for p in planned_paths):
                continue
            path = out_dir / candidate
            if path.exists():
                orphans.append(path)
        return orphans
