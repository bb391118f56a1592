"""One uid -> symbol table per run, plus the component reference graph."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable

from strapigen.generators.paths import LogicalModule, ModuleKind
from strapigen.generators.utils import to_camel_case, to_kebab_case, to_pascal_case
from strapigen.schema.models import (
    Attribute,
    ComponentAttribute,
    DynamicZoneAttribute,
    ParsedSchema,
)


@dataclass(frozen=True)
class EntitySymbol:
    uid: str
    group: str  # "collection", "single" or "component"
    type_name: str
    stem: str
    var_name: str  # camelCase base for service/schema/action identifiers

    @property
    def is_component(self) -> bool:
        return self.group == "component"

    @property
    def schema_name(self) -> str:
        return f"{self.var_name}Schema"

    @property
    def create_schema_name(self) -> str:
        return f"{self.var_name}CreateSchema"

    @property
    def update_schema_name(self) -> str:
        return f"{self.var_name}UpdateSchema"

    @property
    def service_name(self) -> str:
        return f"{self.var_name}Service"

    def module(self, kind: ModuleKind) -> LogicalModule:
        if self.is_component:
            if kind == ModuleKind.SCHEMAS:
                kind = ModuleKind.COMPONENT_SCHEMAS
            elif kind == ModuleKind.TYPES:
                kind = ModuleKind.COMPONENT_TYPES
        return LogicalModule(kind, self.stem, self.group)

    @property
    def types_module(self) -> LogicalModule:
        return self.module(ModuleKind.TYPES)

    @property
    def schemas_module(self) -> LogicalModule:
        return self.module(ModuleKind.SCHEMAS)


def component_refs(attributes: Iterable[Attribute]) -> list[str]:
    """Component uids referenced by an attribute list, in first-seen order."""
    refs: list[str] = []
    for attr in attributes:
        if isinstance(attr, ComponentAttribute) and attr.component:
            uids: tuple[str, ...] = (attr.component,)
        elif isinstance(attr, DynamicZoneAttribute):
            uids = attr.components
        else:
            continue
        for uid in uids:
            if uid not in refs:
                refs.append(uid)
    return refs


class SymbolTable:
    """
    Names every entity exactly once.

    Content types take PascalCase of their singular name. Components take
    PascalCase of their name, prefixed with their category when that name is
    shared with another component or with a content type.
    """

    def __init__(self, schema: ParsedSchema):
        self.schema = schema
        self._symbols: dict[str, EntitySymbol] = {}

        taken: set[str] = set()
        for entity in schema.content_types:
            symbol = EntitySymbol(
                uid=entity.uid,
                group=entity.kind,
                type_name=to_pascal_case(entity.singular_name),
                stem=to_kebab_case(entity.singular_name),
                var_name=to_camel_case(entity.singular_name),
            )
            self._symbols[entity.uid] = symbol
            taken.add(symbol.type_name)

        name_counts = Counter(to_pascal_case(c.name) for c in schema.components)
        for component in schema.components:
            base = to_pascal_case(component.name)
            if name_counts[base] > 1 or base in taken:
                raw_name = f"{component.category}-{component.name}" if component.category else component.name
            else:
                raw_name = component.name
            type_name = to_pascal_case(raw_name)
            suffix = 2
            while type_name in taken:
                raw_name = f"{raw_name}-{suffix}"
                type_name = to_pascal_case(raw_name)
                suffix += 1
            taken.add(type_name)
            self._symbols[component.uid] = EntitySymbol(
                uid=component.uid,
                group="component",
                type_name=type_name,
                stem=to_kebab_case(raw_name),
                var_name=to_camel_case(raw_name),
            )

        self._graph = {c.uid: component_refs(c.attributes.values()) for c in schema.components}
        self._cyclic = self._find_cyclic()

    def get(self, uid: str) -> EntitySymbol | None:
        return self._symbols.get(uid)

    def __getitem__(self, uid: str) -> EntitySymbol:
        return self._symbols[uid]

    def __contains__(self, uid: str) -> bool:
        return uid in self._symbols

    def references(self, uid: str) -> list[str]:
        """Known component uids directly referenced by a component."""
        return [ref for ref in self._graph.get(uid, []) if ref in self._graph]

    def _find_cyclic(self) -> frozenset[str]:
        # Tarjan's SCC, iterative; a component is cyclic if its SCC has more
        # than one member or it references itself
        index: dict[str, int] = {}
        low: dict[str, int] = {}
        on_stack: set[str] = set()
        stack: list[str] = []
        cyclic: set[str] = set()
        counter = 0

        for root in self._graph:
            if root in index:
                continue
            work = [(root, iter(self.references(root)))]
            index[root] = low[root] = counter
            counter += 1
            stack.append(root)
            on_stack.add(root)
            while work:
                node, children = work[-1]
                child = next(children, None)
                if child is not None:
                    if child not in index:
                        index[child] = low[child] = counter
                        counter += 1
                        stack.append(child)
                        on_stack.add(child)
                        work.append((child, iter(self.references(child))))
                    elif child in on_stack:
                        low[node] = min(low[node], index[child])
                    continue
                work.pop()
                if work:
                    parent = work[-1][0]
                    low[parent] = min(low[parent], low[node])
                if low[node] == index[node]:
                    members = []
                    while True:
                        member = stack.pop()
                        on_stack.discard(member)
                        members.append(member)
                        if member == node:
                            break
                    if len(members) > 1 or node in self.references(node):
                        cyclic.update(members)
        return frozenset(cyclic)

    def is_cyclic(self, uid: str) -> bool:
        """True when a component can reach itself through its references."""
        return uid in self._cyclic

    def on_same_cycle(self, source: str, target: str) -> bool:
        return source in self._cyclic and target in self._cyclic and self._reaches(target, source)

    def _reaches(self, start: str, goal: str) -> bool:
        seen: set[str] = set()
        pending = [start]
        while pending:
            node = pending.pop()
            if node == goal:
                return True
            if node in seen:
                continue
            seen.add(node)
            pending.extend(self.references(node))
        return False
