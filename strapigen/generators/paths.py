"""Logical modules, their file paths per layout, and relative imports between them.

Every generator names the files it imports from as ``LogicalModule`` values
and asks ``ModuleResolver`` for the specifier, so the by-layer / by-feature
difference lives in ``module_path`` only.
"""
from __future__ import annotations

import posixpath
from dataclasses import dataclass
from enum import Enum

from strapigen.generators.types import GenerationOptions


class ModuleKind(str, Enum):
    UTILS = "utils"
    CLIENT = "client"
    LOCALES = "locales"
    TYPES = "types"
    SCHEMAS = "schemas"
    SERVICE = "service"
    ACTIONS = "actions"
    COMPONENT_TYPES = "component_types"
    COMPONENT_SCHEMAS = "component_schemas"
    UPLOAD_CLIENT = "upload_client"
    UPLOAD_ACTION = "upload_action"


SHARED_KINDS = frozenset({
    ModuleKind.UTILS,
    ModuleKind.CLIENT,
    ModuleKind.LOCALES,
    ModuleKind.UPLOAD_CLIENT,
    ModuleKind.UPLOAD_ACTION,
})


@dataclass(frozen=True)
class LogicalModule:
    kind: ModuleKind
    stem: str = ""  # kebab-case entity file stem
    group: str = ""  # "collection", "single" or "component"

    def __post_init__(self) -> None:
        if self.kind not in SHARED_KINDS and not self.stem:
            raise ValueError(f"{self.kind.value} module needs an entity stem")


UTILS = LogicalModule(ModuleKind.UTILS)
CLIENT = LogicalModule(ModuleKind.CLIENT)
LOCALES = LogicalModule(ModuleKind.LOCALES)
UPLOAD_CLIENT = LogicalModule(ModuleKind.UPLOAD_CLIENT)
UPLOAD_ACTION = LogicalModule(ModuleKind.UPLOAD_ACTION)


def _dir(value: str) -> str:
    value = posixpath.normpath(value.replace("\\", "/")).strip("/")
    return "" if value == "." else value


def _join(*parts: str) -> str:
    return posixpath.join(*[p for p in parts if p])


def _by_feature_path(module: LogicalModule) -> str:
    feature = "singles" if module.group == "single" else "collections"
    match module.kind:
        case ModuleKind.UTILS:
            return "shared/utils"
        case ModuleKind.CLIENT:
            return "shared/client"
        case ModuleKind.LOCALES:
            return "shared/locales"
        case ModuleKind.UPLOAD_CLIENT:
            return "shared/upload-client"
        case ModuleKind.UPLOAD_ACTION:
            return "shared/upload-action"
        case ModuleKind.TYPES | ModuleKind.SCHEMAS | ModuleKind.SERVICE | ModuleKind.ACTIONS:
            return f"{feature}/{module.stem}/{module.kind.value}"
        case ModuleKind.COMPONENT_TYPES:
            return f"components/{module.stem}"
        case ModuleKind.COMPONENT_SCHEMAS:
            return f"components/{module.stem}.schema"
    raise ValueError(f"Unhandled module kind: {module.kind}")


def _by_layer_path(module: LogicalModule, options: GenerationOptions) -> str:
    paths = options.paths
    match module.kind:
        case ModuleKind.UTILS:
            return _join(_dir(paths.types), "utils")
        case ModuleKind.CLIENT:
            return "client"
        case ModuleKind.LOCALES:
            return "locales"
        case ModuleKind.UPLOAD_CLIENT:
            return _join(_dir(paths.upload), "upload-client")
        case ModuleKind.UPLOAD_ACTION:
            return _join(_dir(paths.upload), "upload-action")
        case ModuleKind.TYPES:
            # singles share the collections directory
            return _join(_dir(paths.types), "collections", module.stem)
        case ModuleKind.SCHEMAS:
            return _join(_dir(paths.schemas), module.stem)
        case ModuleKind.SERVICE:
            return _join(_dir(paths.services), f"{module.stem}.service")
        case ModuleKind.ACTIONS:
            return _join(_dir(paths.actions), module.stem)
        case ModuleKind.COMPONENT_TYPES:
            return _join(_dir(paths.types), "components", module.stem)
        case ModuleKind.COMPONENT_SCHEMAS:
            return _join(_dir(paths.schemas), "components", module.stem)
    raise ValueError(f"Unhandled module kind: {module.kind}")


def module_path(module: LogicalModule, options: GenerationOptions) -> str:
    """Path of a module relative to the output root, without extension."""
    if options.layout == "by-feature":
        return _by_feature_path(module)
    return _by_layer_path(module, options)


def module_file(module: LogicalModule, options: GenerationOptions) -> str:
    return f"{module_path(module, options)}.{options.extension}"


def relative_specifier(source_path: str, target_path: str, via_root: bool = False) -> str:
    """
    Relative import specifier from one extensionless module path to another.

    With ``via_root`` a target outside the source directory is reached by
    climbing to the output root first, so feature folders import each other
    as ``../../collections/author/types``.

    >>> relative_specifier("types/collections/article", "types/collections/author")
    './author'
    >>> relative_specifier("collections/article/types", "collections/author/types", via_root=True)
    '../../collections/author/types'
    """
    base = posixpath.dirname(source_path) or "."
    if via_root and base != "." and posixpath.dirname(target_path) != base:
        rel = "../" * len(base.split("/")) + target_path
    else:
        rel = posixpath.relpath(target_path, base)
    if not rel.startswith("."):
        rel = f"./{rel}"
    return rel


@dataclass(frozen=True)
class ModuleResolver:
    options: GenerationOptions

    def path(self, module: LogicalModule) -> str:
        return module_path(module, self.options)

    def file(self, module: LogicalModule) -> str:
        return module_file(module, self.options)

    def specifier(self, source: LogicalModule, target: LogicalModule) -> str:
        spec = relative_specifier(
            self.path(source), self.path(target), via_root=self.options.layout == "by-feature"
        )
        # native ESM needs the extension, bundlers resolve TypeScript without it
        if self.options.output_format == "jsdoc" and self.options.module_type == "esm":
            spec = f"{spec}.js"
        return spec
