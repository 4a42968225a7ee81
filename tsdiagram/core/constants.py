"""Shared constants for tsdiagram.

Type-name sets and diagram tokens used across the graph builder and the
renderer.
"""

import re

# =============================================================================
# Type names
# =============================================================================

# Names that never produce a composition edge
BUILTIN_TYPES = frozenset({
    "string", "number", "boolean", "any", "unknown", "void", "never",
    "object", "Object", "Function", "null", "undefined", "symbol",
    "bigint", "Date", "RegExp", "Error", "Array", "Map", "Set",
    "Promise", "WeakMap", "WeakSet",
})

# Members that keep a mixed literal/non-literal union out of the complex bucket
BARE_PRIMITIVES = frozenset({"string", "number", "boolean", "null", "undefined"})

# Members of a primitive union
PRIMITIVE_TYPES = BARE_PRIMITIVES | {"symbol", "bigint"}

# Bare references that behave like literals in a union
LITERAL_KEYWORDS = frozenset({"true", "false", "null", "undefined"})

# Single-argument wrappers unwrapped when looking for a composed type
DEFAULT_GENERIC_WRAPPERS = (
    "Array", "Promise", "Observable", "Subject", "BehaviorSubject", "ReplaySubject",
)

QUOTED_LITERAL_RE = re.compile(r"""^['"].*['"]$""")

# =============================================================================
# Opaque tokens
# =============================================================================

FUNCTION_TOKEN = "Function"
OBJECT_TOKEN = "Object"
COMPLEX_UNION_TOKEN = "ComplexUnion"

# =============================================================================
# Mermaid output
# =============================================================================

DIAGRAM_HEADER = "classDiagram"

LEGEND = (
    "%% Legend",
    "%% --|> : Inheritance (extends)",
    "%% ..|> : Implementation (implements)",
    "%% --* : Composition (has/contains)",
)

RECOVERY_BODY_LINE = "⚠️ AUTO-FIXED ⚠️"
