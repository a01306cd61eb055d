"""Text templates for the items of a generated Rust client."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

_REPRESENTATION_KINDS = ("external", "internal", "adjacent", "none")


def base_derives(additional_derives: Iterable[str]) -> list[str]:
    """Return ``Debug`` plus the extra derives, sorted and deduplicated."""
    return sorted({"Debug", *additional_derives})


def _derive_attribute(
    additional_derives: Iterable[str], is_input_type: bool, is_output_type: bool
) -> str:
    attrs = base_derives(additional_derives)
    # For a client the direction is inverted: inputs are sent, outputs received.
    if is_input_type:
        attrs.append("serde::Serialize")
    if is_output_type:
        attrs.append("serde::Deserialize")
    if not attrs:
        return ""
    return f"#[derive({', '.join(attrs)})]"


def _serde_attribute(attrs: list[str]) -> str:
    if not attrs:
        return ""
    return f"#[serde({', '.join(attrs)})]\n    "


@dataclass(frozen=True)
class Representation:
    """How an enum is tagged when serialized."""

    kind: str = "external"
    tag: str = ""
    content: str = ""

    def __post_init__(self) -> None:
        if self.kind not in _REPRESENTATION_KINDS:
            raise ValueError(f"unknown enum representation: {self.kind!r}")

    @classmethod
    def external(cls) -> Representation:
        return cls("external")

    @classmethod
    def internal(cls, tag: str) -> Representation:
        return cls("internal", tag=tag)

    @classmethod
    def adjacent(cls, tag: str, content: str) -> Representation:
        return cls("adjacent", tag=tag, content=content)

    @classmethod
    def untagged(cls) -> Representation:
        return cls("none")

    def serde_attributes(self) -> list[str]:
        if self.kind == "internal":
            return [f'tag = "{self.tag}"']
        if self.kind == "adjacent":
            return [f'tag = "{self.tag}"', f'content = "{self.content}"']
        if self.kind == "none":
            return ["untagged"]
        return []


class _Renderable:
    def render(self) -> str:  # pragma: no cover - overridden
        raise NotImplementedError

    def __str__(self) -> str:
        return self.render()


@dataclass
class FileHeader(_Renderable):
    """Header comment and prelude of a generated client file."""

    name: str
    description: str = ""

    def render(self) -> str:
        return (
            "// DO NOT MODIFY THIS FILE MANUALLY\n"
            "// This file was generated by reflectapi-cli\n"
            "//\n"
            f"// Schema name: {self.name}\n"
            f"// {self.description}\n"
            "\n"
            "#![allow(non_camel_case_types)]\n"
            "#![allow(dead_code)]\n"
            "\n"
            "pub use reflectapi::rt::*;\n"
            "pub use interface::Interface;"
        )


@dataclass
class RustModule(_Renderable):
    """A module holding rendered items and nested modules."""

    name: str
    types: list[str] = field(default_factory=list)
    submodules: dict[str, RustModule] = field(default_factory=dict)

    def is_empty(self) -> bool:
        """True when neither this module nor any submodule holds items."""
        return not self.types and all(m.is_empty() for m in self.submodules.values())

    def _opens(self) -> bool:
        return bool(self.name) and not self.is_empty()

    def render(self) -> str:
        start = f"pub mod {self.name} {{" if self._opens() else ""
        end = "}" if self._opens() else ""
        items = "".join(f"\n{item}" for item in self.types)
        nested = "".join(
            module.render()
            for module in sorted(self.submodules.values(), key=lambda m: m.name)
        )
        return f"\n{start}{items}{nested}\n\n{end}"


@dataclass
class RustField(_Renderable):
    """A struct or variant field."""

    name: str
    type_: str
    serde_name: str | None = None
    description: str = ""
    deprecation_note: str | None = None
    optional: bool = False
    flatten: bool = False
    public: bool = True

    def __post_init__(self) -> None:
        if self.serde_name is None:
            self.serde_name = self.name

    def is_unnamed(self) -> bool:
        """True for positional fields, whose names are integers."""
        digits = self.name[1:] if self.name.startswith("+") else self.name
        return (
            bool(digits)
            and digits.isascii()
            and digits.isdigit()
            and int(digits) < 2**64
        )

    def _attributes(self) -> str:
        serde_attrs: list[str] = []
        if self.serde_name != self.name:
            serde_attrs.append(f'rename = "{self.serde_name}"')

        if self.optional:
            serde_attrs.append("default")
            ty = self.type_
            # Keeps undefined apart from null when serializing.
            if ty.startswith("reflectapi::Option<"):
                serde_attrs.append(
                    'skip_serializing_if = "reflectapi::Option::is_undefined"'
                )
            if ty.startswith("std::option::Option<"):
                serde_attrs.append('skip_serializing_if = "std::option::Option::is_none"')
            if ty == "std::tuple::Tuple0":
                serde_attrs.append("skip_serializing")
            if ty.startswith("std::string::String"):
                serde_attrs.append('skip_serializing_if = "std::string::String::is_empty"')
            if ty.startswith("std::vec::Vec<"):
                serde_attrs.append('skip_serializing_if = "std::vec::Vec::is_empty"')
            if ty.startswith("std::collections::"):
                bare = ty.split("<", 1)[0]
                serde_attrs.append(f'skip_serializing_if = "{bare}::is_empty"')

        if self.flatten:
            serde_attrs.append("flatten")

        out = _serde_attribute(serde_attrs)
        if self.deprecation_note is not None:
            if self.deprecation_note:
                out += f'#[deprecated(note = "{self.deprecation_note}")]\n    '
            else:
                out += "#[deprecated]\n    "
        return out

    def render(self) -> str:
        if self.is_unnamed():
            body = self.type_
        else:
            visibility = "pub " if self.public else ""
            body = f"{visibility}{self.name}: {self.type_}"
        return f"{self.description}{self._attributes()}{body}"


@dataclass
class RustStruct(_Renderable):
    """A struct definition, with named or positional fields."""

    name: str
    fields: list[RustField] = field(default_factory=list)
    description: str = ""
    is_tuple: bool = False
    is_input_type: bool = False
    is_output_type: bool = False
    additional_derives: frozenset[str] = frozenset()

    def render(self) -> str:
        derive = _derive_attribute(
            self.additional_derives, self.is_input_type, self.is_output_type
        )
        opening, closing = ("(", ");") if self.is_tuple else ("{", "}")
        body = "".join(f"\n    {f.render()}," for f in self.fields)
        return (
            f"\n{self.description}{derive}\n"
            f"pub struct {self.name} {opening}{body}\n{closing}"
        )


@dataclass
class RustVariant(_Renderable):
    """One variant of an enum definition."""

    name: str
    fields: list[RustField] = field(default_factory=list)
    serde_name: str | None = None
    description: str = ""
    discriminant: int | None = None
    untagged: bool = False

    def __post_init__(self) -> None:
        if self.serde_name is None:
            self.serde_name = self.name

    def is_tuple(self) -> bool:
        return all(f.is_unnamed() for f in self.fields)

    def _brackets(self) -> tuple[str, str]:
        if not self.fields:
            return "", ""
        if self.is_tuple():
            return "(", ")"
        return " {", "}"

    def _attributes(self) -> str:
        attrs: list[str] = []
        if self.serde_name != self.name:
            attrs.append(f'rename = "{self.serde_name}"')
        if self.untagged:
            attrs.append("untagged")
        return _serde_attribute(attrs)

    def _fields(self) -> str:
        rendered = [f.render() for f in self.fields]
        if not rendered:
            return ""
        return "\n        " + ",\n    ".join(rendered) + ",\n    "

    def render(self) -> str:
        opening, closing = self._brackets()
        discriminant = "" if self.discriminant is None else f" = {self.discriminant}"
        body = f"{self.name}{opening}{self._fields()}{closing}{discriminant}"
        return f"{self.description}{self._attributes()}{body},"


@dataclass
class RustEnum(_Renderable):
    """An enum definition."""

    name: str
    variants: list[RustVariant] = field(default_factory=list)
    description: str = ""
    representation: Representation = field(default_factory=Representation)
    is_input_type: bool = False
    is_output_type: bool = False
    additional_derives: frozenset[str] = frozenset()

    def render(self) -> str:
        derive = _derive_attribute(
            self.additional_derives, self.is_input_type, self.is_output_type
        )
        attrs = _serde_attribute(self.representation.serde_attributes())
        body = "".join(f"\n    {v.render()}" for v in self.variants)
        return (
            f"\n{self.description}{derive}\n"
            f"{attrs}pub enum {self.name} {{{body}\n}}"
        )


@dataclass
class RustAlias(_Renderable):
    """A type alias."""

    name: str
    type_: str
    description: str = ""

    def render(self) -> str:
        return f"\n{self.description}pub type {self.name} = {self.type_};"


@dataclass
class RustUnit(_Renderable):
    """A unit struct."""

    name: str
    description: str = ""
    is_input_type: bool = False
    is_output_type: bool = False
    additional_derives: frozenset[str] = frozenset()

    def render(self) -> str:
        derive = _derive_attribute(
            self.additional_derives, self.is_input_type, self.is_output_type
        )
        return f"\n{self.description}{derive}\npub struct {self.name};"


@dataclass
class FunctionTemplate(_Renderable):
    """An async client method that calls one endpoint."""

    name: str
    path: str
    input_type: str
    input_headers: str
    output_type: str
    error_type: str
    description: str = ""
    deprecation_note: str | None = None
    attributes: str = ""

    def render(self) -> str:
        if self.deprecation_note is None:
            deprecated = ""
        elif self.deprecation_note:
            deprecated = f'#[deprecated(note = "{self.deprecation_note}")]'
        else:
            deprecated = "#[deprecated]"
        return (
            f"{deprecated}{self.description}{self.attributes}"
            f"pub async fn {self.name}(&self, input: {self.input_type}, "
            f"headers: {self.input_headers})\n"
            f"    -> Result<{self.output_type}, "
            f"reflectapi::rt::Error<{self.error_type}, C::Error>> {{\n"
            "        reflectapi::rt::__request_impl(&self.client, "
            f'self.base_url.join("{self.path}")'
            '.expect("checked base_url already and path is valid"), input, headers).await\n'
            "    }"
        )


@dataclass
class InterfaceTemplate(_Renderable):
    """The ``impl`` block of a client interface struct."""

    name: str
    fields: list[RustField] = field(default_factory=list)
    functions: list[FunctionTemplate] = field(default_factory=list)

    def render(self) -> str:
        field_lines = "".join(
            f"\n            {f.name}: {f.type_}::try_new(client.clone(), base_url.clone())?,"
            for f in self.fields
        )
        functions = "".join(f"\n    {func.render()}" for func in self.functions)
        return (
            f"\nimpl<C: reflectapi::rt::Client + Clone> {self.name} {{\n"
            "    pub fn try_new(client: C, base_url: reflectapi::rt::Url) -> "
            "std::result::Result<Self, reflectapi::rt::UrlParseError> {\n"
            "        if base_url.cannot_be_a_base() {\n"
            "            return Err(reflectapi::rt::UrlParseError::RelativeUrlWithCannotBeABaseBase);\n"
            "        }\n"
            "\n"
            f"        Ok(Self {{{field_lines}\n"
            "            client,\n"
            "            base_url,\n"
            "        })\n"
            f"    }}{functions}\n"
            "}"
        )