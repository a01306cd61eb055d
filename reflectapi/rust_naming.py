"""Naming, grouping and doc-comment helpers for the generated Rust client."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from reflectapi.rust_templates import RustModule

_RUST_KEYWORDS = frozenset(
    {
        # strict keywords
        "as", "break", "const", "continue", "crate", "else", "enum", "extern",
        "false", "fn", "for", "if", "impl", "in", "let", "loop", "match", "mod",
        "move", "mut", "pub", "ref", "return", "self", "Self", "static",
        "struct", "super", "trait", "true", "type", "unsafe", "use", "where",
        "while", "async", "await", "dyn",
        # reserved keywords
        "abstract", "become", "box", "do", "final", "macro", "override",
        "priv", "typeof", "unsized", "virtual", "yield", "try",
    }
)

_TUPLE_ARITY = 12


@dataclass
class FunctionGroup:
    """Functions sharing a dotted name prefix, with nested subgroups."""

    parent: list[str] = field(default_factory=list)
    functions: list[str] = field(default_factory=list)
    subgroups: dict[str, FunctionGroup] = field(default_factory=dict)


def function_groups(function_names: Iterable[str]) -> FunctionGroup:
    """Group dotted function names by every prefix before the last segment."""
    root = FunctionGroup()
    for function_name in function_names:
        group = root
        parent: list[str] = []
        for part in function_name.split(".")[:-1]:
            group = group.subgroups.setdefault(
                part, FunctionGroup(parent=list(parent))
            )
            parent.append(part)
        group.functions.append(function_name)
    return root


def modules_from_rendered_types(
    type_names: Iterable[str], rendered_types: Mapping[str, str]
) -> RustModule:
    """Place rendered types into nested modules following their ``::`` paths."""
    remaining = dict(rendered_types)
    root = RustModule(name="types")
    for type_name in type_names:
        module = root
        for part in type_name.split("::")[:-1]:
            module = module.submodules.setdefault(part, RustModule(name=part))
        rendered = remaining.pop(type_name, None)
        if rendered is not None:
            module.types.append(rendered)
    return root


def doc_to_comments(doc: str, offset: int) -> str:
    """Turn documentation text into ``///`` lines indented by ``offset`` spaces."""
    if not doc:
        return ""
    indent = " " * offset
    lines = doc.split("\n")
    sep = "" if all(line.startswith(" ") for line in lines) else " "
    body = f"\n{indent}".join(f"///{sep}{line.rstrip()}" for line in lines)
    return f"{body}\n{indent}"


def build_implemented_types() -> dict[str, str]:
    """Types rendered directly as Rust syntax rather than generated."""
    implemented = {
        "std::option::Option": "std::option::Option<T>",
        "reflectapi::Option": "reflectapi::Option<T>",
        "std::array::Array": "[T; N]",
        "std::tuple::Tuple0": "()",
    }
    for arity in range(1, _TUPLE_ARITY + 1):
        params = ", ".join(f"T{i}" for i in range(1, arity + 1))
        implemented[f"std::tuple::Tuple{arity}"] = f"({params})"
    implemented["std::time::Duration"] = "std::time::Duration"
    return implemented


def _ascii_upper(ch: str) -> str:
    return ch.upper() if "a" <= ch <= "z" else ch


def function_name_for_type_name(name: str) -> str:
    """Pascal-case a function name; dots become underscores."""
    result: list[str] = []
    capitalize = True
    for ch in name:
        if ch in "-_":
            capitalize = True
        elif ch == ".":
            result.append("_")
            capitalize = True
        elif capitalize:
            result.append(_ascii_upper(ch))
            capitalize = False
        else:
            result.append(ch)
    return "".join(result)


def function_name_for_field_name(name: str) -> str:
    """Make a function group name usable as a field name."""
    return name.replace("-", "_")


def name_to_pascal_case(name: str) -> str:
    """Pascal-case a name, dropping ``-``, ``_`` and ``.`` separators."""
    result: list[str] = []
    capitalize = True
    for ch in name:
        if ch in "-_.":
            capitalize = True
        elif capitalize:
            result.append(_ascii_upper(ch))
            capitalize = False
        else:
            result.append(ch)
    return "".join(result)


def field_name_to_snake_case(name: str) -> str:
    """Snake-case a field name, suffixing ``_`` when it is a Rust keyword."""
    result: list[str] = []
    for ch in name:
        if "A" <= ch <= "Z":
            if result:
                result.append("_")
            result.append(ch.lower())
        else:
            result.append(ch)
    snake = "".join(result)
    return f"{snake}_" if snake in _RUST_KEYWORDS else snake