"""TypeScript declaration parser using tree-sitter.

Walks the whole syntax tree (exports, ``declare`` blocks and namespaces
included) and turns every interface, type alias, enum and class into a
DeclarationNode. Type annotations are converted into the TypeNode variant
so the graph layer never touches tree-sitter objects.
"""

import logging
from typing import List, Optional, Tuple

import tree_sitter
import tree_sitter_typescript

from .base import BaseLanguageParser
from .models import (
    DeclarationKind,
    DeclarationNode,
    MemberNode,
    ParseError,
    TypeNode,
    TypeNodeKind,
)

logger = logging.getLogger(__name__)

_TS_LANGUAGE = tree_sitter.Language(tree_sitter_typescript.language_typescript())
_TSX_LANGUAGE = tree_sitter.Language(tree_sitter_typescript.language_tsx())

_DECLARATION_TYPES = {
    "interface_declaration": DeclarationKind.INTERFACE,
    "type_alias_declaration": DeclarationKind.TYPE_ALIAS,
    "enum_declaration": DeclarationKind.ENUM,
    "class_declaration": DeclarationKind.CLASS,
    "abstract_class_declaration": DeclarationKind.CLASS,
}

_REFERENCE_TYPES = frozenset({
    "type_identifier", "predefined_type", "nested_type_identifier", "identifier",
})


class TypeScriptParser(BaseLanguageParser):
    """tree-sitter based TypeScript declaration parser.

    - interface_declaration -> DeclarationKind.INTERFACE (extends, property signatures)
    - type_alias_declaration -> DeclarationKind.TYPE_ALIAS (aliased TypeNode)
    - enum_declaration -> DeclarationKind.ENUM (members + initializer text)
    - (abstract_)class_declaration -> DeclarationKind.CLASS (extends, implements, fields)
    """

    def get_language(self) -> str:
        return "typescript"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _TS_LANGUAGE

    def extract_declarations(
        self,
        tree: tree_sitter.Tree,
        source: bytes,
        file_path: str,
        errors: List[ParseError],
    ) -> List[DeclarationNode]:
        """Extract declarations from the TypeScript AST, in source order."""
        declarations: List[DeclarationNode] = []
        stack = [tree.root_node]
        while stack:
            node = stack.pop()
            kind = _DECLARATION_TYPES.get(node.type)
            if kind is not None:
                try:
                    declaration = self._extract_declaration(node, kind, source)
                except Exception as e:
                    line = node.start_point.row + 1
                    logger.warning(f"Skipping {node.type} at {file_path}:{line}: {e}")
                    errors.append(ParseError(
                        file_path=file_path, line=line,
                        message=f"Could not read {kind.value} at line {line}: {e}",
                    ))
                else:
                    if declaration:
                        declarations.append(declaration)
            # Nested declarations (namespaces, class bodies) are visited too
            stack.extend(reversed(node.named_children))
        return declarations

    def _extract_declaration(
        self,
        node: tree_sitter.Node,
        kind: DeclarationKind,
        source: bytes,
    ) -> Optional[DeclarationNode]:
        """Build one DeclarationNode; anonymous declarations are skipped."""
        name = self._get_child_text(node, "name", source)
        if not name:
            return None

        declaration = DeclarationNode(
            kind=kind,
            name=name,
            type_parameters=self._extract_type_parameters(node, source),
            has_recovery=self._spans_error(node, source),
            start_line=node.start_point.row + 1,
            end_line=node.end_point.row + 1,
        )

        body = node.child_by_field_name("body")
        if kind is DeclarationKind.INTERFACE:
            clause = self._get_child_by_type(node, "extends_type_clause") or self._get_child_by_type(node, "extends_clause")
            if clause:
                declaration.extends = self._heritage_names(clause, source)
            if body:
                declaration.members = self._extract_property_signatures(body, source)

        elif kind is DeclarationKind.CLASS:
            declaration.extends, declaration.implements = self._extract_class_heritage(node, source)
            if body:
                declaration.members = self._extract_class_fields(body, source)

        elif kind is DeclarationKind.ENUM:
            if body:
                declaration.members = self._extract_enum_members(body, source)

        else:
            value = node.child_by_field_name("value")
            if value:
                declaration.aliased_type = self.to_type_node(value, source)

        return declaration

    # =========================================================================
    # Heritage
    # =========================================================================

    def _extract_class_heritage(
        self, node: tree_sitter.Node, source: bytes
    ) -> Tuple[List[str], List[str]]:
        extends: List[str] = []
        implements: List[str] = []
        heritage = self._get_child_by_type(node, "class_heritage")
        if not heritage:
            return extends, implements
        for clause in _named(heritage):
            if clause.type == "extends_clause":
                extends.extend(self._heritage_names(clause, source))
            elif clause.type == "implements_clause":
                implements.extend(self._heritage_names(clause, source))
        return extends, implements

    @staticmethod
    def _heritage_names(clause: tree_sitter.Node, source: bytes) -> List[str]:
        """Heritage targets without their type arguments (``Base<T>`` -> ``Base``)."""
        names = []
        for child in _named(clause):
            if child.type == "type_arguments":
                continue
            if child.type == "generic_type":
                child = child.child_by_field_name("name") or child
            names.append(_text(child, source))
        return names

    # =========================================================================
    # Members
    # =========================================================================

    def _extract_property_signatures(self, body: tree_sitter.Node, source: bytes) -> List[MemberNode]:
        """Property signatures of an interface body or object type."""
        members = []
        for child in _named(body):
            if child.type == "property_signature":
                members.append(self._extract_property(child, source))
        return members

    def _extract_class_fields(self, body: tree_sitter.Node, source: bytes) -> List[MemberNode]:
        members = []
        for child in _named(body):
            if child.type == "public_field_definition":
                members.append(self._extract_property(child, source))
        return members

    def _extract_property(self, node: tree_sitter.Node, source: bytes) -> MemberNode:
        type_node = node.child_by_field_name("type")
        return MemberNode(
            name=self._get_child_text(node, "name", source) or "",
            type=self.to_type_node(type_node, source) if type_node else None,
            optional=any(c.type == "?" for c in node.children),
            readonly=any(c.type == "readonly" for c in node.children),
        )

    def _extract_enum_members(self, body: tree_sitter.Node, source: bytes) -> List[MemberNode]:
        members = []
        for child in _named(body):
            if child.type == "enum_assignment":
                value = child.child_by_field_name("value")
                members.append(MemberNode(
                    name=self._get_child_text(child, "name", source) or "",
                    initializer=_text(value, source) if value else None,
                    readonly=True,
                ))
            else:
                members.append(MemberNode(name=_text(child, source), readonly=True))
        return members

    def _extract_type_parameters(self, node: tree_sitter.Node, source: bytes) -> List[str]:
        params = node.child_by_field_name("type_parameters")
        if not params:
            return []
        names = []
        for child in _named(params):
            name = self._get_child_text(child, "name", source)
            if name:
                names.append(name)
        return names

    # =========================================================================
    # Type expressions
    # =========================================================================

    def to_type_node(self, node: tree_sitter.Node, source: bytes) -> TypeNode:
        """Convert a tree-sitter type expression into a TypeNode."""
        if node.type == "type_annotation":
            inner = _named(node)
            if inner:
                return self.to_type_node(inner[0], source)

        text = _text(node, source)
        node_type = node.type

        if node_type in _REFERENCE_TYPES:
            return TypeNode(kind=TypeNodeKind.REFERENCE, text=text, name=text)

        if node_type == "generic_type":
            arguments_node = node.child_by_field_name("type_arguments")
            arguments = [self.to_type_node(a, source) for a in _named(arguments_node)] if arguments_node else []
            return TypeNode(
                kind=TypeNodeKind.REFERENCE,
                text=text,
                name=self._get_child_text(node, "name", source) or text,
                arguments=arguments,
            )

        if node_type == "array_type":
            inner = _named(node)
            element = self.to_type_node(inner[0], source) if inner else None
            return TypeNode(kind=TypeNodeKind.ARRAY, text=text, element=element)

        if node_type == "union_type":
            return TypeNode(kind=TypeNodeKind.UNION, text=text, members=self._flatten(node, source))

        if node_type == "intersection_type":
            return TypeNode(kind=TypeNodeKind.INTERSECTION, text=text, members=self._flatten(node, source))

        if node_type == "literal_type":
            return TypeNode(kind=TypeNodeKind.LITERAL, text=text)

        if node_type in ("function_type", "constructor_type"):
            return TypeNode(kind=TypeNodeKind.FUNCTION, text=text)

        if node_type == "object_type":
            return TypeNode(
                kind=TypeNodeKind.OBJECT,
                text=text,
                properties=self._extract_property_signatures(node, source),
            )

        if node_type == "template_literal_type":
            return TypeNode(kind=TypeNodeKind.TEMPLATE, text=text)

        if node_type == "parenthesized_type":
            inner = _named(node)
            element = self.to_type_node(inner[0], source) if inner else None
            return TypeNode(kind=TypeNodeKind.PARENTHESIZED, text=text, element=element)

        return TypeNode(kind=TypeNodeKind.OTHER, text=text)

    def _flatten(self, node: tree_sitter.Node, source: bytes) -> List[TypeNode]:
        """Members of a left-nested union/intersection, in source order."""
        members: List[TypeNode] = []
        for child in _named(node):
            if child.type == node.type:
                members.extend(self._flatten(child, source))
            else:
                members.append(self.to_type_node(child, source))
        return members

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _spans_error(node: tree_sitter.Node, source: bytes) -> bool:
        """True when the node holds a syntax error or unbalanced braces."""
        if node.has_error:
            return True
        text = _text(node, source)
        return text.count("{") != text.count("}")

    @staticmethod
    def _get_child_text(node: tree_sitter.Node, field_name: str, source: bytes) -> Optional[str]:
        child = node.child_by_field_name(field_name)
        if child:
            return _text(child, source)
        return None

    @staticmethod
    def _get_child_by_type(node: tree_sitter.Node, type_name: str) -> Optional[tree_sitter.Node]:
        for child in node.children:
            if child.type == type_name:
                return child
        return None


class TsxParser(TypeScriptParser):
    """Same extraction over the TSX grammar (JSX-aware)."""

    def get_language(self) -> str:
        return "tsx"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _TSX_LANGUAGE


def _text(node: tree_sitter.Node, source: bytes) -> str:
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def _named(node: tree_sitter.Node) -> List[tree_sitter.Node]:
    """Named children without comment nodes."""
    return [c for c in node.named_children if c.type != "comment"]
