"""AST Parser data models.

Defines the declaration and type-node structures handed to the graph
builder. These are pure data containers — no parsing logic.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class DeclarationKind(Enum):
    """The four declaration shapes that become diagram nodes."""
    INTERFACE = "interface"
    TYPE_ALIAS = "type"
    ENUM = "enum"
    CLASS = "class"


class TypeNodeKind(Enum):
    """Tagged variant for type expressions."""
    REFERENCE = "reference"          # User, Array<User>, ns.Thing
    ARRAY = "array"                  # T[]
    UNION = "union"                  # A | B
    INTERSECTION = "intersection"    # A & B
    LITERAL = "literal"              # "a", 42, true, null
    FUNCTION = "function"            # (x: T) => U, new () => T
    OBJECT = "object"                # { a: string }
    TEMPLATE = "template"            # `prefix_${string}`
    PARENTHESIZED = "parenthesized"  # (A & B)
    OTHER = "other"                  # keyof T, [A, B], T extends U ? X : Y, ...


@dataclass
class TypeNode:
    """One type expression.

    Only the fields relevant to ``kind`` are populated:
    - REFERENCE: ``name`` and ``arguments``
    - ARRAY / PARENTHESIZED: ``element``
    - UNION / INTERSECTION: ``members`` (flattened, source order)
    - OBJECT: ``properties``
    """

    kind: TypeNodeKind
    text: str  # Raw source text
    name: Optional[str] = None
    arguments: List["TypeNode"] = field(default_factory=list)
    element: Optional["TypeNode"] = None
    members: List["TypeNode"] = field(default_factory=list)
    properties: List["MemberNode"] = field(default_factory=list)


@dataclass
class MemberNode:
    """A property signature, class field or enum member."""

    name: str
    type: Optional[TypeNode] = None  # None -> "any" (or enum member)
    optional: bool = False
    readonly: bool = False
    initializer: Optional[str] = None  # Enum members only


@dataclass
class DeclarationNode:
    """A top-level (or namespaced) type declaration."""

    kind: DeclarationKind
    name: str
    type_parameters: List[str] = field(default_factory=list)
    extends: List[str] = field(default_factory=list)
    implements: List[str] = field(default_factory=list)
    members: List[MemberNode] = field(default_factory=list)
    aliased_type: Optional[TypeNode] = None  # Type aliases only
    has_recovery: bool = False  # Source range contains a syntax error
    start_line: int = 0
    end_line: int = 0


@dataclass
class ParseError:
    """An error encountered during parsing."""

    file_path: str
    line: int
    message: str
    severity: str = "warning"  # "warning" | "error"


@dataclass
class ParseResult:
    """Complete parse output for a single file."""

    file_path: str
    language: str
    declarations: List[DeclarationNode]
    line_count: int = 0
    errors: List[ParseError] = field(default_factory=list)


class SourceUnavailableError(OSError):
    """The source file could not be read, so no declaration list exists."""
