"""Canonical text for type expressions.

``type_to_string`` is a pure function of a TypeNode. Parameter and return
types of function types and the members of inline object types are
deliberately collapsed into opaque tokens.
"""

from ..ast_parser.models import TypeNode, TypeNodeKind
from ..constants import COMPLEX_UNION_TOKEN, FUNCTION_TOKEN, OBJECT_TOKEN


def type_to_string(node: TypeNode) -> str:
    """Return the canonical string for a type node.

    Examples:
        Array<User>, User[][], "a" | "b", A & B, Function, Object
    """
    kind = node.kind

    if kind is TypeNodeKind.REFERENCE:
        if node.arguments:
            args = ", ".join(type_to_string(a) for a in node.arguments)
            return f"{node.name}<{args}>"
        return node.name or node.text

    if kind is TypeNodeKind.ARRAY:
        if node.element is None:
            return node.text
        return f"{type_to_string(node.element)}[]"

    if kind is TypeNodeKind.UNION:
        return " | ".join(type_to_string(m) for m in node.members)

    if kind is TypeNodeKind.INTERSECTION:
        return " & ".join(type_to_string(m) for m in node.members)

    if kind is TypeNodeKind.FUNCTION:
        return FUNCTION_TOKEN

    if kind is TypeNodeKind.OBJECT:
        return OBJECT_TOKEN

    # LITERAL, TEMPLATE, PARENTHESIZED, OTHER
    return node.text


def property_type_to_string(node: TypeNode, simple_union_max_members: int = 5) -> str:
    """Like ``type_to_string``, but classifies union-typed properties first.

    Simple and primitive unions keep their inline ``A | B`` form, complex
    unions collapse to the ``ComplexUnion`` placeholder, and large or
    discriminated unions fall back to the generic union text.
    """
    if node.kind is not TypeNodeKind.UNION:
        return type_to_string(node)

    from .union_classifier import classify_union
    from .models import UnionShape

    shape = classify_union(node, simple_union_max_members).shape
    if shape in (UnionShape.SIMPLE, UnionShape.PRIMITIVE):
        return " | ".join(type_to_string(m) for m in node.members)
    if shape is UnionShape.COMPLEX:
        return COMPLEX_UNION_TOKEN
    return type_to_string(node)
