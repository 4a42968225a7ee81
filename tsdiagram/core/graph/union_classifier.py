"""UnionClassifier — decides how a union type is drawn.

Rules are evaluated top to bottom, first match wins:

1. complex        a member is a template literal or an intersection
2. complex        literal and non-literal members mixed, and some member is
                  neither a bare primitive nor a literal
3. discriminated  ≥2 object-literal members sharing a literal-typed
                  property whose values are pairwise distinct
4. simple         all members literal-like, at most ``simple_union_max_members``
5. large          all members literal-like, more than that
6. primitive      every member is a primitive keyword
7. complex        anything else
"""

from typing import List, Optional

from ..ast_parser.models import TypeNode, TypeNodeKind
from ..constants import BARE_PRIMITIVES, LITERAL_KEYWORDS, PRIMITIVE_TYPES
from .models import UnionClassification, UnionShape
from .stringifier import type_to_string


def classify_union(node: TypeNode, simple_union_max_members: int = 5) -> UnionClassification:
    """Classify a union type node.

    Args:
        node: TypeNode of kind UNION
        simple_union_max_members: Largest literal union still considered simple

    Returns:
        UnionClassification with the shape and, for discriminated unions,
        the discriminator property name
    """
    members = node.members

    if any(_is_structurally_complex(m) for m in members):
        return UnionClassification(UnionShape.COMPLEX)

    literal_flags = [is_literal_like(m) for m in members]
    if any(literal_flags) and not all(literal_flags):
        if not all(
            flag or type_to_string(m) in BARE_PRIMITIVES
            for m, flag in zip(members, literal_flags)
        ):
            return UnionClassification(UnionShape.COMPLEX)

    discriminator = find_discriminator(members)
    if discriminator is not None:
        return UnionClassification(UnionShape.DISCRIMINATED, discriminator)

    if all(literal_flags):
        if len(members) <= simple_union_max_members:
            return UnionClassification(UnionShape.SIMPLE)
        return UnionClassification(UnionShape.LARGE)

    if all(type_to_string(m) in PRIMITIVE_TYPES for m in members):
        return UnionClassification(UnionShape.PRIMITIVE)

    return UnionClassification(UnionShape.COMPLEX)


def is_literal_like(node: TypeNode) -> bool:
    """Literal types plus the bare ``true``/``false``/``null``/``undefined`` keywords."""
    if node.kind is TypeNodeKind.LITERAL:
        return True
    return (
        node.kind is TypeNodeKind.REFERENCE
        and not node.arguments
        and node.name in LITERAL_KEYWORDS
    )


def find_discriminator(members: List[TypeNode]) -> Optional[str]:
    """Name of the property that tells object members apart, if any.

    Candidates are scanned in the first member's declaration order.
    """
    if len(members) < 2 or any(m.kind is not TypeNodeKind.OBJECT for m in members):
        return None

    for candidate in members[0].properties:
        values = []
        for member in members:
            value = literal_property_value(member, candidate.name)
            if value is None:
                break
            values.append(value)
        else:
            if len(set(values)) == len(members):
                return candidate.name
    return None


def literal_property_value(member: TypeNode, property_name: str) -> Optional[str]:
    """Literal text of ``property_name`` in an object-literal member, if literal-typed."""
    for prop in member.properties:
        if prop.name == property_name:
            if prop.type is not None and is_literal_like(prop.type):
                return prop.type.text
            return None
    return None


def _is_structurally_complex(node: TypeNode) -> bool:
    while node.kind is TypeNodeKind.PARENTHESIZED and node.element is not None:
        node = node.element
    return node.kind in (TypeNodeKind.TEMPLATE, TypeNodeKind.INTERSECTION)
