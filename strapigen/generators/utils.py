"""Naming and literal helpers for generated TypeScript / JavaScript."""
import re

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def _words(name: str) -> list[str]:
    s1 = re.sub('(.)([A-Z][a-z]+)', r'\1 \2', name)
    s2 = re.sub('([a-z0-9])([A-Z])', r'\1 \2', s1)
    return [w for w in re.split(r"[^A-Za-z0-9]+", s2) if w]


def to_pascal_case(name: str) -> str:
    """Convert kebab-case, snake_case or camelCase to PascalCase."""
    result = "".join(w[:1].upper() + w[1:] for w in _words(name))
    if not result or result[0].isdigit():
        result = f"_{result}"
    return result


def to_camel_case(name: str) -> str:
    """Convert kebab-case, snake_case or PascalCase to camelCase."""
    pascal = to_pascal_case(name)
    if pascal.startswith("_"):
        return pascal
    return pascal[:1].lower() + pascal[1:]


def to_kebab_case(name: str) -> str:
    """Convert PascalCase or camelCase to kebab-case."""
    return "-".join(w.lower() for w in _words(name))


def ts_string(value: str) -> str:
    """Single-quoted string literal."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f"'{escaped}'"


def property_key(name: str) -> str:
    return name if _IDENTIFIER.match(name) else ts_string(name)


def comment_text(text: str) -> str:
    """Make free text safe inside a block comment."""
    return " ".join(text.replace("*/", "*\\/").split())
