# reflectapi

Building blocks for generating code from a reflected API description: a
model of an OpenAPI 3.1 document that serializes to JSON, text templates for
the items of a typed Rust client, the naming rules those templates use, and
helpers for post-processing generated source.

The package has no runtime dependencies.

## Installation

```
pip install reflectapi
```

For running the test suite:

```
pip install "reflectapi[test]"
pytest
```

## Modules

### `reflectapi.openapi_spec`

Dataclasses for the parts of an OpenAPI 3.1 document, each with a `to_json()`
method returning plain JSON values:

- document: `Spec`, `Info`, `Tag`, `Components`, `PathItem`, `Operation`,
  `Parameter` (header parameters), `RequestBody`, `Response`, `MediaType`;
- types: `BooleanType`, `IntegerType`, `NumberType`, `StringType` (with an
  optional `StringFormat`: `DATE`, `DATE_TIME`, `UUID`), `ArrayType`,
  `TupleType`, `ObjectType`, `MapType`, `NullType`;
- schemas: `FlatSchema`, `AllOf`, `OneOf`, `Const`, `Ref`, and `Property`
  (whose own description replaces that of an inline schema).

`empty_object()` and `empty_tuple()` build the empty schemas, the module-level
`to_json(node)` converts a node or a container of nodes, and
`generate_json(spec)` renders a `Spec` as indented JSON text. Maps are written
with sorted keys; fields left at their empty value are omitted.

```python
from reflectapi.openapi_spec import (
    Components, FlatSchema, Info, ObjectType, Property, Ref, Spec,
    StringFormat, StringType, generate_json,
)

pet = FlatSchema(
    ObjectType(
        title="Pet",
        required=["id"],
        properties={"id": Property(FlatSchema(StringType(StringFormat.UUID)))},
    ),
    description="A pet",
)
spec = Spec(
    info=Info(title="Pets", description="Pet store"),
    components=Components(schemas={"Pet": pet}),
)
print(generate_json(spec))
print(Ref.to_component("Pet").to_json())  # {'$ref': '#/components/schemas/Pet'}
```

### `reflectapi.rust_templates`

Renderers for Rust client items; each has `render()` (and `str()` gives the
same text): `FileHeader`, `RustModule`, `RustStruct`, `RustEnum` (tagged by a
`Representation`: `external()`, `internal(tag)`, `adjacent(tag, content)`,
`untagged()`), `RustVariant`, `RustField`, `RustAlias`, `RustUnit`,
`FunctionTemplate` (an async client method) and `InterfaceTemplate` (the
`impl` block with `try_new`). `base_derives(extra)` returns `Debug` plus the
extra derives, sorted and deduplicated.

### `reflectapi.rust_naming`

Naming and layout rules for the generated client:

- `name_to_pascal_case("get-pet_by.id")` gives `"GetPetById"`;
- `field_name_to_snake_case("userId")` gives `"user_id"`, and Rust keywords
  get a trailing underscore (`"type"` gives `"type_"`);
- `function_name_for_type_name`, `function_name_for_field_name`;
- `function_groups(names)` groups dotted function names into nested
  `FunctionGroup`s;
- `modules_from_rendered_types(type_names, rendered)` places rendered types
  into nested `RustModule`s by their `::` paths;
- `doc_to_comments(doc, offset)` turns text into `///` comment lines;
- `build_implemented_types()` maps built-in type names to their Rust syntax.

### `reflectapi.formatting`

- `format_with(commands, src)` pipes `src` through the first command (a
  sequence of arguments) whose executable exists and returns its output. It
  raises `FormatError` when the command exits with a failure and
  `FileNotFoundError` when none of the commands can be started.
- `strip_boilerplate(src)` removes the lines between `/* <----- */` and
  `/* -----> */` marker lines, raising `ValueError` on unbalanced markers.
- `tmp_path(src)` returns a temporary directory path derived from a hash of
  `src`.

## What this package does not do

- It does not declare routes or wrap request handlers; there is no server
  side here.
- It does not convert an API schema into a `Spec` by itself: the OpenAPI
  classes are built and filled in by the caller.
- It does not assemble a whole Rust client from a schema: it provides the
  templates and naming rules, and the caller combines them. Nothing type-checks
  the generated Rust code.
- There is no command-line program.