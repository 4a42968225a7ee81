"""Tests for the Mermaid class diagram renderer."""

import pytest
from tsdiagram.core.ast_parser.models import DeclarationKind
from tsdiagram.core.diagrams import escape_type, render_class_diagram
from tsdiagram.core.graph import (
    PropertyDescriptor,
    Relationship,
    RelationshipKind,
    TypeDescriptor,
    TypeRegistry,
    UnionInfo,
    UnionShape,
)
from tsdiagram.core.settings import ConverterSettings


def _registry(*descriptors):
    registry = TypeRegistry()
    for descriptor in descriptors:
        registry.register(descriptor)
    return registry


def _interface(name, *props):
    return TypeDescriptor(name=name, kind=DeclarationKind.INTERFACE, properties=list(props))


def _union(name, shape, members, **kwargs):
    return TypeDescriptor(
        name=name,
        kind=DeclarationKind.TYPE_ALIAS,
        union_info=UnionInfo(shape=shape, members=members, **kwargs),
    )


# =========================================================================
# Tests: Escaping
# =========================================================================

class TestEscapeType:
    @pytest.mark.parametrize("raw,escaped", [
        ("User", "User"),
        ("Array<User>", "Array~User~"),
        ("string[]", "stringArray~~"),
        ("string | null", "string or null"),
        ("A & B", "A and B"),
        ("Map<string, User[]>", "Map~string, UserArray~~~"),
    ])
    def test_escape(self, raw, escaped):
        assert escape_type(raw) == escaped


# =========================================================================
# Tests: Layout
# =========================================================================

class TestLayout:
    def test_full_output(self):
        registry = _registry(
            _interface("Product", PropertyDescriptor("owner", "User")),
            _interface("User", PropertyDescriptor("id", "string")),
        )
        relationships = [Relationship("Product", "User", RelationshipKind.COMPOSITION, "owner")]
        expected = "\n".join([
            "classDiagram",
            "  %% Legend",
            "  %% --|> : Inheritance (extends)",
            "  %% ..|> : Implementation (implements)",
            "  %% --* : Composition (has/contains)",
            "",
            "  class Product {",
            "    <<interface>>",
            "    +owner: User",
            "  }",
            "",
            "  class User {",
            "    <<interface>>",
            "    +id: string",
            "  }",
            "",
            "  Product --* User : owner",
        ])
        assert render_class_diagram(registry, relationships) == expected

    def test_empty_registry(self):
        output = render_class_diagram(TypeRegistry(), [])
        assert output.splitlines()[0] == "classDiagram"
        assert "class " not in output

    def test_edges_to_unknown_targets_dropped(self):
        registry = _registry(_interface("Order", PropertyDescriptor("customer", "Customer")))
        relationships = [
            Relationship("Order", "Customer", RelationshipKind.COMPOSITION, "customer"),
            Relationship("Order", "Entity", RelationshipKind.EXTENDS),
        ]
        lines = render_class_diagram(registry, relationships).splitlines()
        assert lines[-1] == "  }"

    def test_heritage_arrows_unlabelled(self):
        registry = _registry(_interface("Admin"), _interface("User"), _interface("Auditable"))
        relationships = [
            Relationship("Admin", "User", RelationshipKind.EXTENDS),
            Relationship("Admin", "Auditable", RelationshipKind.IMPLEMENTS),
        ]
        lines = render_class_diagram(registry, relationships).splitlines()
        assert lines[-2:] == ["  Admin --|> User", "  Admin ..|> Auditable"]

    def test_stereotypes_by_kind(self):
        registry = _registry(
            TypeDescriptor(name="Repo", kind=DeclarationKind.CLASS),
            TypeDescriptor(name="Color", kind=DeclarationKind.ENUM),
            TypeDescriptor(name="Point", kind=DeclarationKind.TYPE_ALIAS),
        )
        lines = render_class_diagram(registry, []).splitlines()
        assert lines[lines.index("  class Repo {") + 1] == "    <<class>>"
        assert lines[lines.index("  class Color {") + 1] == "    <<enumeration>>"
        assert lines[lines.index("  class Point {") + 1] == "  }"

    def test_type_parameters_hidden_by_default(self):
        box = TypeDescriptor(name="Box", kind=DeclarationKind.CLASS, type_parameters=["T"])
        assert "  class Box {" in render_class_diagram(_registry(box), [])

    def test_type_parameters_shown(self):
        box = TypeDescriptor(name="Box", kind=DeclarationKind.CLASS, type_parameters=["K", "V"])
        settings = ConverterSettings(show_type_parameters=True)
        assert "  class Box~K, V~ {" in render_class_diagram(_registry(box), [], settings=settings)


# =========================================================================
# Tests: Members
# =========================================================================

class TestMembers:
    def test_visibility_markers(self):
        user = _interface(
            "User",
            PropertyDescriptor("id", "string"),
            PropertyDescriptor("nickname", "string", optional=True),
            PropertyDescriptor("createdAt", "Date", optional=True, readonly=True),
            PropertyDescriptor("roles", "Array<Role>"),
        )
        output = render_class_diagram(_registry(user), [])
        assert "    +id: string" in output
        assert "    -nickname?: string" in output
        assert "    +createdAt?: Date" in output
        assert "    +roles: Array~Role~" in output

    def test_complex_property_note(self):
        config = _interface(
            "Config",
            PropertyDescriptor("mode", "ComplexUnion", raw_type='"auto" | number | Custom'),
        )
        lines = render_class_diagram(_registry(config), []).splitlines()
        assert "    +mode: ComplexUnion" in lines
        assert lines[-1] == '  note for Config "mode: "auto" | number | Custom"'


# =========================================================================
# Tests: Unions
# =========================================================================

class TestUnions:
    def test_simple_union_inline(self):
        status = _union("Status", UnionShape.SIMPLE, ['"on"', '"off"'])
        lines = render_class_diagram(_registry(status), []).splitlines()
        start = lines.index("  class Status {")
        assert lines[start + 1:start + 4] == ["    <<enumeration>>", "    on | off", "  }"]

    def test_primitive_union_inline(self):
        nullable = _union("Nullable", UnionShape.PRIMITIVE, ["string", "null"])
        assert "    string | null" in render_class_diagram(_registry(nullable), [])

    def test_large_union_one_per_line(self):
        members = [f'"v{i}"' for i in range(6)]
        large = _union("Level", UnionShape.LARGE, members)
        lines = render_class_diagram(_registry(large), []).splitlines()
        start = lines.index("  class Level {")
        assert lines[start + 2:start + 8] == [f"    v{i}" for i in range(6)]

    def test_reusable_union_type_stereotype(self):
        status = _union(
            "Status", UnionShape.SIMPLE, ['"active"', '"inactive"'], is_reusable=True
        )
        lines = render_class_diagram(_registry(status), []).splitlines()
        start = lines.index("  class Status {")
        assert lines[start + 1:start + 3] == ["    <<type>>", "    active | inactive"]

    def test_reusable_large_union_single_line(self):
        members = [f'"v{i}"' for i in range(6)]
        large = _union("Level", UnionShape.LARGE, members, is_reusable=True)
        assert "    " + " | ".join(f"v{i}" for i in range(6)) in render_class_diagram(_registry(large), [])

    def test_complex_union_value_and_note(self):
        auto = _union(
            "AutoMode", UnionShape.COMPLEX, ['"auto"', "number", "CustomType"],
            raw_text='"auto" | number | CustomType',
        )
        lines = render_class_diagram(_registry(auto), []).splitlines()
        assert "    +value: AutoMode" in lines
        assert lines[-1] == '  note for AutoMode "AutoMode = "auto" | number | CustomType"'

    def test_notes_follow_edges(self):
        auto = _union("AutoMode", UnionShape.COMPLEX, ["A", "B"], raw_text="A | B")
        holder = _interface("Holder", PropertyDescriptor("mode", "AutoMode"))
        relationships = [Relationship("Holder", "AutoMode", RelationshipKind.COMPOSITION, "mode")]
        lines = render_class_diagram(_registry(auto, holder), relationships).splitlines()
        assert lines[-2:] == [
            "  Holder --* AutoMode : mode",
            '  note for AutoMode "AutoMode = A | B"',
        ]


# =========================================================================
# Tests: Diagnostics and recovery
# =========================================================================

class TestDiagnostics:
    def test_errors_truncated(self):
        diagnostics = [f"problem {i}" for i in range(7)]
        lines = render_class_diagram(TypeRegistry(), [], diagnostics).splitlines()
        start = lines.index("  %% Errors encountered during conversion:")
        assert lines[start + 1:start + 7] == [
            "  %% - problem 0",
            "  %% - problem 1",
            "  %% - problem 2",
            "  %% - problem 3",
            "  %% - problem 4",
            "  %% ... and 2 more errors",
        ]

    def test_error_limit_from_settings(self):
        settings = ConverterSettings(max_reported_errors=1)
        output = render_class_diagram(TypeRegistry(), [], ["a", "b"], settings)
        assert "  %% - a" in output
        assert "  %% - b" not in output
        assert "  %% ... and 1 more errors" in output

    def test_no_errors_no_block(self):
        assert "%% Errors" not in render_class_diagram(TypeRegistry(), [])

    def test_multiline_messages_flattened(self):
        output = render_class_diagram(TypeRegistry(), [], ["line one\nline two"])
        assert "  %% - line one line two" in output

    def test_recovered_types(self):
        broken = _interface("Broken", PropertyDescriptor("name", "string"))
        broken.was_auto_recovered = True
        lines = render_class_diagram(_registry(broken, _interface("Fine")), []).splitlines()

        assert (
            "  %% WARNING: The following types had syntax errors "
            "and were auto-recovered by the parser:"
        ) in lines
        assert (
            "  %% - Broken: Missing closing brace or other syntax error was automatically fixed"
        ) in lines
        assert "  %% These auto-fixes may not reflect the intended structure!" in lines

        start = lines.index("  class Broken {")
        assert lines[start + 1:start + 4] == ["    <<interface>>", "    ⚠️ AUTO-FIXED ⚠️", "    +name: string"]
        assert "  class Fine {" in lines
