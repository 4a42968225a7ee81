"""Data contracts for the type-relationship graph.

Descriptors are what the renderer consumes; relationships are edges
discovered while building the graph. Kept as dataclasses for transport
between stages.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..ast_parser.models import DeclarationKind


class UnionShape(Enum):
    """Classification of a union type."""
    SIMPLE = "simple"                # few literals, rendered inline
    LARGE = "large"                  # many literals, one line each
    DISCRIMINATED = "discriminated"  # object members tagged by a literal field
    PRIMITIVE = "primitive"          # string | number | null ...
    COMPLEX = "complex"              # anything else, explained in a note


class RelationshipKind(Enum):
    EXTENDS = "extends"
    IMPLEMENTS = "implements"
    COMPOSITION = "composition"


@dataclass(frozen=True)
class PropertyDescriptor:
    """One property of a descriptor. Immutable once built."""
    name: str
    type: str
    optional: bool = False
    readonly: bool = False
    raw_type: Optional[str] = None  # Source text when ``type`` is an opaque placeholder


@dataclass
class UnionVariant:
    """Object-literal member of a discriminated union."""
    discriminator_value: Optional[str]  # Literal text, quotes included
    properties: List[PropertyDescriptor] = field(default_factory=list)


@dataclass(frozen=True)
class UnionClassification:
    shape: UnionShape
    discriminator: Optional[str] = None


@dataclass
class UnionInfo:
    """Union metadata for type aliases whose value is a union."""
    shape: UnionShape
    members: List[str]
    discriminator: Optional[str] = None
    raw_text: Optional[str] = None  # Complex unions only
    is_reusable: bool = False
    variants: List[UnionVariant] = field(default_factory=list)  # Discriminated only

    @property
    def signature(self) -> str:
        """Order-insensitive identity of the member set."""
        return "|".join(sorted(self.members))


@dataclass
class TypeDescriptor:
    """One declared or synthesized type in the registry."""
    name: str
    kind: DeclarationKind
    properties: List[PropertyDescriptor] = field(default_factory=list)
    type_parameters: List[str] = field(default_factory=list)
    extends: List[str] = field(default_factory=list)
    implements: List[str] = field(default_factory=list)
    union_info: Optional[UnionInfo] = None
    was_auto_recovered: bool = False

    @property
    def is_union(self) -> bool:
        return self.union_info is not None


@dataclass(frozen=True)
class Relationship:
    """A directed edge between two type names."""
    source: str
    target: str
    kind: RelationshipKind
    label: Optional[str] = None
