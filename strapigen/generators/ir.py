"""
In-memory module representation and the one printer that renders it.

Renderers build a ``ModuleIR`` (header, imports, declarations) and never
format import lines themselves: merging, de-duplication and ordering of
imports, export syntax (ESM / CommonJS) and the TypeScript / JSDoc split all
happen in ``print_module``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from strapigen.generators.types import GenerationOptions
from strapigen.generators.utils import property_key


@dataclass(frozen=True)
class Import:
    module: str
    names: tuple[str, ...] = ()
    type_only: bool = False
    default: str | None = None


@dataclass(frozen=True)
class Field:
    name: str
    type: str
    optional: bool = False
    doc: str = ""


@dataclass(frozen=True)
class InterfaceDecl:
    name: str
    fields: tuple[Field, ...] = ()
    extends: tuple[str, ...] = ()
    doc: tuple[str, ...] = ()
    type_params: str = ""


@dataclass(frozen=True)
class TypeAliasDecl:
    name: str
    type: str
    doc: tuple[str, ...] = ()


@dataclass(frozen=True)
class CodeDecl:
    """Verbatim code; ``exports`` names what it declares for the module surface."""
    code: str
    exports: tuple[str, ...] = ()
    doc: tuple[str, ...] = ()


Declaration = Union[InterfaceDecl, TypeAliasDecl, CodeDecl]


@dataclass
class ModuleIR:
    header: tuple[str, ...] = ()
    imports: list[Import] = field(default_factory=list)
    declarations: list[Declaration] = field(default_factory=list)

    def add_import(self, module: str, *names: str, type_only: bool = False, default: str | None = None) -> None:
        self.imports.append(Import(module, tuple(names), type_only, default))

    def add(self, declaration: Declaration) -> None:
        self.declarations.append(declaration)


def _is_package(module: str) -> bool:
    return not module.startswith(".")


def merge_imports(imports: list[Import]) -> list[Import]:
    """
    Merge imports per module, drop type-only names already imported as
    values, and sort: packages before relative paths, then by module.
    """
    values: dict[str, set[str]] = {}
    types: dict[str, set[str]] = {}
    defaults: dict[str, str] = {}
    for imp in imports:
        if imp.default:
            defaults[imp.module] = imp.default
        target = types if imp.type_only else values
        target.setdefault(imp.module, set()).update(imp.names)

    merged: list[Import] = []
    for module in set(values) | set(types) | set(defaults):
        value_names = values.get(module, set())
        type_names = types.get(module, set()) - value_names
        if value_names or module in defaults:
            merged.append(Import(module, tuple(sorted(value_names)), False, defaults.get(module)))
        if type_names:
            merged.append(Import(module, tuple(sorted(type_names)), True))
    return sorted(merged, key=lambda i: (not _is_package(i.module), i.module, i.type_only))


def _doc_block(lines: tuple[str, ...] | list[str], indent: str = "") -> list[str]:
    if not lines:
        return []
    if len(lines) == 1:
        return [f"{indent}/** {lines[0]} */"]
    return [f"{indent}/**", *[f"{indent} * {line}".rstrip() for line in lines], f"{indent} */"]


class Printer:
    def __init__(self, options: GenerationOptions):
        self.options = options
        self.ts = options.typescript
        self.cjs = options.commonjs

    # imports

    def _import_lines(self, imports: list[Import]) -> list[str]:
        lines: list[str] = []
        for imp in merge_imports(imports):
            if imp.type_only:
                if self.ts:
                    lines.append(f"import type {{ {', '.join(imp.names)} }} from '{imp.module}';")
                else:
                    lines.extend(
                        f"/** @typedef {{import('{imp.module}').{name}}} {name} */" for name in imp.names
                    )
                continue
            if self.cjs:
                if imp.default:
                    lines.append(f"const {imp.default} = require('{imp.module}');")
                if imp.names:
                    lines.append(f"const {{ {', '.join(imp.names)} }} = require('{imp.module}');")
                continue
            parts = []
            if imp.default:
                parts.append(imp.default)
            if imp.names:
                parts.append(f"{{ {', '.join(imp.names)} }}")
            lines.append(f"import {', '.join(parts)} from '{imp.module}';")
        return lines

    # declarations

    def _interface(self, decl: InterfaceDecl) -> list[str]:
        if self.ts:
            extends = f" extends {', '.join(decl.extends)}" if decl.extends else ""
            lines = [*_doc_block(decl.doc), f"export interface {decl.name}{decl.type_params}{extends} {{"]
            for f in decl.fields:
                lines.extend(_doc_block((f.doc,), "  ") if f.doc else [])
                lines.append(f"  {property_key(f.name)}{'?' if f.optional else ''}: {f.type};")
            lines.append("}")
            return lines

        own = f"{decl.name}Attributes" if decl.extends else decl.name
        lines = ["/**", *[f" * {line}" for line in decl.doc]]
        for param in filter(None, (p.strip() for p in decl.type_params.strip("<>").split(","))):
            lines.append(f" * @template {param}")
        lines.append(f" * @typedef {{Object}} {own}")
        for f in decl.fields:
            name = f"[{f.name}]" if f.optional else f.name
            suffix = f" - {f.doc}" if f.doc else ""
            lines.append(f" * @property {{{f.type}}} {name}{suffix}")
        lines.append(" */")
        if decl.extends:
            lines.append(f"/** @typedef {{{' & '.join((*decl.extends, own))}}} {decl.name} */")
        return lines

    def _alias(self, decl: TypeAliasDecl) -> list[str]:
        if self.ts:
            return [*_doc_block(decl.doc), f"export type {decl.name} = {decl.type};"]
        return ["/**", *[f" * {line}" for line in decl.doc], f" * @typedef {{{decl.type}}} {decl.name}", " */"]

    def _code(self, decl: CodeDecl) -> list[str]:
        code = decl.code.strip("\n")
        if decl.exports and not self.cjs:
            # keep a leading doc comment attached to the declaration
            comment, end = "", 0
            if code.startswith("/**") and "*/" in code:
                end = code.index("*/") + 2
                comment = code[:end] + "\n"
            code = f"{comment}export {code[end:].lstrip()}"
        return [*_doc_block(decl.doc), *code.split("\n")]

    def print(self, module: ModuleIR) -> str:
        blocks: list[list[str]] = []
        if module.header:
            blocks.append(["/**", *[f" * {line}".rstrip() for line in module.header], " */"])

        import_lines = self._import_lines(module.imports)
        if import_lines:
            blocks.append(import_lines)

        exported: list[str] = []
        for decl in module.declarations:
            if isinstance(decl, InterfaceDecl):
                blocks.append(self._interface(decl))
            elif isinstance(decl, TypeAliasDecl):
                blocks.append(self._alias(decl))
            else:
                blocks.append(self._code(decl))
                exported.extend(decl.exports)

        if self.cjs:
            blocks.append([f"module.exports = {{ {', '.join(exported)} }};" if exported else "module.exports = {};"])
        elif not self.ts and not exported:
            # keeps a typedef-only file an ES module
            blocks.append(["export {};"])

        return "\n\n".join("\n".join(block) for block in blocks) + "\n"


def print_module(module: ModuleIR, options: GenerationOptions) -> str:
    return Printer(options).print(module)
