import pytest

from reflectapi.rust_templates import (
    FileHeader,
    FunctionTemplate,
    InterfaceTemplate,
    Representation,
    RustAlias,
    RustEnum,
    RustField,
    RustModule,
    RustStruct,
    RustUnit,
    RustVariant,
    base_derives,
)


def test_base_derives_always_has_debug():
    assert base_derives(set()) == ["Debug"]


def test_base_derives_sorted_and_deduplicated():
    assert base_derives({"PartialEq", "Debug", "Clone"}) == ["Clone", "Debug", "PartialEq"]


def test_file_header_contents():
    out = FileHeader(name="demo", description="A demo").render()
    assert out.startswith("// DO NOT MODIFY THIS FILE MANUALLY")
    assert "// Schema name: demo\n" in out
    assert "// A demo\n" in out
    assert out.endswith("pub use interface::Interface;")


def test_module_renders_items():
    module = RustModule(name="types", types=["struct A;"])
    assert module.render() == "\npub mod types {\nstruct A;\n\n}"


def test_empty_module_renders_no_wrapper():
    module = RustModule(name="types", submodules={"a": RustModule(name="a")})
    assert module.is_empty() is True
    assert "pub mod" not in module.render()
    assert module.render().strip() == ""


def test_module_submodules_sorted_by_name():
    root = RustModule(
        name="types",
        submodules={
            "b": RustModule(name="b", types=["struct B;"]),
            "a": RustModule(name="a", types=["struct A;"]),
        },
    )
    out = root.render()
    assert root.is_empty() is False
    assert out.index("pub mod a {") < out.index("pub mod b {")


def test_unnamed_field_renders_type_only():
    f = RustField(name="0", type_="u8")
    assert f.is_unnamed() is True
    assert f.render() == "u8"


def test_named_field_is_not_unnamed():
    assert RustField(name="x", type_="u8").is_unnamed() is False


def test_private_named_field_has_no_visibility():
    f = RustField(name="x", type_="i32", public=False)
    assert f.render() == "x: i32"


def test_field_rename_and_optional_option():
    f = RustField(
        name="user_id",
        serde_name="userId",
        type_="std::option::Option<u32>",
        optional=True,
    )
    out = f.render()
    assert 'rename = "userId"' in out
    assert 'skip_serializing_if = "std::option::Option::is_none"' in out
    assert out.endswith("pub user_id: std::option::Option<u32>")


def test_field_undefined_option_skipped():
    f = RustField(name="v", type_="reflectapi::Option<u32>", optional=True)
    assert 'skip_serializing_if = "reflectapi::Option::is_undefined"' in f.render()


def test_field_optional_collection_uses_bare_type():
    f = RustField(name="m", type_="std::collections::HashMap<K, V>", optional=True)
    out = f.render()
    assert "std::collections::HashMap::is_empty" in out
    assert "HashMap<K, V>::is_empty" not in out


def test_field_unit_tuple_skip_serializing():
    f = RustField(name="u", type_="std::tuple::Tuple0", optional=True)
    assert "skip_serializing" in f.render()


def test_field_flatten_and_deprecated():
    f = RustField(name="inner", type_="Inner", flatten=True, deprecation_note="")
    out = f.render()
    assert "flatten" in out
    assert "#[deprecated]\n    " in out


def test_field_deprecated_with_note():
    f = RustField(name="old", type_="u8", deprecation_note="use new")
    assert '#[deprecated(note = "use new")]' in f.render()


def test_struct_render_input_type():
    s = RustStruct(
        name="Point",
        fields=[RustField(name="id", type_="u32")],
        is_input_type=True,
    )
    assert s.render() == "\n#[derive(Debug, serde::Serialize)]\npub struct Point {\n    pub id: u32,\n}"


def test_struct_tuple_brackets_and_output_derive():
    s = RustStruct(
        name="Pair",
        fields=[RustField(name="0", type_="u8"), RustField(name="1", type_="u8")],
        is_tuple=True,
        is_output_type=True,
    )
    out = s.render()
    assert "serde::Deserialize" in out
    assert "pub struct Pair (" in out
    assert out.endswith(");")


def test_struct_additional_derives():
    s = RustStruct(name="S", additional_derives=frozenset({"Clone"}))
    assert "#[derive(Clone, Debug)]" in s.render()


def test_enum_internal_representation():
    e = RustEnum(
        name="Shape",
        variants=[RustVariant(name="Circle")],
        representation=Representation.internal("type"),
    )
    out = e.render()
    assert 'tag = "type"' in out
    assert "pub enum Shape {" in out
    assert out.endswith("\n    Circle,\n}")


def test_enum_untagged_representation():
    e = RustEnum(name="E", representation=Representation.untagged())
    assert "#[serde(untagged)]" in e.render()


def test_enum_adjacent_representation():
    rep = Representation.adjacent("t", "c")
    assert rep.serde_attributes() == ['tag = "t"', 'content = "c"']


def test_external_representation_has_no_attributes():
    assert Representation.external().serde_attributes() == []
    assert "#[serde(" not in RustEnum(name="E").render()


def test_invalid_representation_kind():
    with pytest.raises(ValueError):
        Representation("sideways")


def test_variant_discriminant():
    v = RustVariant(name="Three", discriminant=3)
    assert v.render() == "Three = 3,"


def test_variant_rename_and_untagged():
    v = RustVariant(name="A", serde_name="a", untagged=True)
    out = v.render()
    assert 'rename = "a"' in out
    assert "untagged" in out


def test_variant_named_fields():
    v = RustVariant(name="Move", fields=[RustField(name="x", type_="i32", public=False)])
    out = v.render()
    assert out.startswith("Move {")
    assert "x: i32" in out
    assert out.endswith("},")


def test_variant_tuple_fields():
    v = RustVariant(name="Wrap", fields=[RustField(name="0", type_="u8")])
    assert v.is_tuple() is True
    assert v.render().startswith("Wrap(")


def test_alias_render():
    assert RustAlias(name="Id", type_="u64").render() == "\npub type Id = u64;"


def test_unit_render():
    out = RustUnit(name="Marker", is_output_type=True).render()
    assert "serde::Deserialize" in out
    assert out.endswith("\npub struct Marker;")


def _function(**kwargs):
    values = dict(
        name="get",
        path="/api/users.get",
        input_type="reflectapi::Empty",
        input_headers="reflectapi::Empty",
        output_type="super::types::User",
        error_type="reflectapi::Empty",
    )
    values.update(kwargs)
    return FunctionTemplate(**values)


def test_function_render():
    out = _function().render()
    assert out.startswith("pub async fn get(&self, input: reflectapi::Empty")
    assert 'self.base_url.join("/api/users.get")' in out
    assert "reflectapi::rt::Error<reflectapi::Empty, C::Error>" in out


def test_function_deprecation_note():
    assert _function(deprecation_note="old").render().startswith('#[deprecated(note = "old")]')
    assert _function(deprecation_note="").render().startswith("#[deprecated]")


def test_interface_render():
    interface = InterfaceTemplate(
        name="Interface<C>",
        fields=[RustField(name="users", type_="UsersInterface")],
        functions=[_function()],
    )
    out = interface.render()
    assert "impl<C: reflectapi::rt::Client + Clone> Interface<C> {" in out
    assert "users: UsersInterface::try_new(client.clone(), base_url.clone())?," in out
    assert "pub async fn get(" in out
    assert out.endswith("\n}")
    assert str(interface) == out