"""Relationship detectors — extends, implements, composition.

Heritage edges come straight from declaration clauses. Composition edges
are inferred afterwards by matching each property's type string against
custom type names.
"""

import logging
import re
from functools import lru_cache
from typing import List, Sequence, Set, Tuple

from ..constants import BUILTIN_TYPES, DEFAULT_GENERIC_WRAPPERS, QUOTED_LITERAL_RE
from .models import Relationship, RelationshipKind, TypeDescriptor
from .registry import TypeRegistry

logger = logging.getLogger(__name__)

_TRAILING_ARRAY_RE = re.compile(r"\[\]$")


# ── Heritage ─────────────────────────────────────────────────────────


def heritage_relationships(descriptor: TypeDescriptor) -> List[Relationship]:
    """Edges for every extends target, then every implements target, in clause order."""
    edges = [
        Relationship(descriptor.name, target, RelationshipKind.EXTENDS)
        for target in descriptor.extends
    ]
    edges.extend(
        Relationship(descriptor.name, target, RelationshipKind.IMPLEMENTS)
        for target in descriptor.implements
    )
    return edges


# ── Composition ──────────────────────────────────────────────────────


def detect_compositions(
    registry: TypeRegistry,
    relationships: List[Relationship],
    generic_wrappers: Sequence[str] = DEFAULT_GENERIC_WRAPPERS,
) -> List[Relationship]:
    """Append composition edges for properties that reference custom types.

    Skips self references and pairs already linked by extends/implements.

    Returns:
        The newly added edges (also appended to ``relationships``)
    """
    heritage_pairs: Set[Tuple[str, str]] = {
        (r.source, r.target)
        for r in relationships
        if r.kind in (RelationshipKind.EXTENDS, RelationshipKind.IMPLEMENTS)
    }

    added: List[Relationship] = []
    for descriptor in registry:
        for prop in descriptor.properties:
            target = extract_base_type(prop.type, generic_wrappers)
            if not is_custom_type(target) or target == descriptor.name:
                continue
            if (descriptor.name, target) in heritage_pairs:
                continue
            added.append(Relationship(descriptor.name, target, RelationshipKind.COMPOSITION, prop.name))

    relationships.extend(added)
    logger.debug("Detected %d composition edges", len(added))
    return added


def extract_base_type(type_str: str, generic_wrappers: Sequence[str] = DEFAULT_GENERIC_WRAPPERS) -> str:
    """Reduce a property type string to the type name it most likely composes.

    Precedence: strip one trailing ``[]``; unwrap a single-argument wrapper
    generic; otherwise take the first custom member of a union; otherwise
    the string itself.
    """
    type_str = _TRAILING_ARRAY_RE.sub("", type_str)

    match = _wrapper_pattern(tuple(generic_wrappers)).match(type_str)
    if match:
        return match.group(1)

    if " | " in type_str:
        for member in (t.strip() for t in type_str.split(" | ")):
            if is_custom_type(member):
                return member

    return type_str


def is_custom_type(type_name: str) -> bool:
    """True unless the name is a built-in type or a quoted string literal."""
    return type_name not in BUILTIN_TYPES and not QUOTED_LITERAL_RE.match(type_name)


@lru_cache(maxsize=16)
def _wrapper_pattern(wrappers: Tuple[str, ...]) -> "re.Pattern[str]":
    names = "|".join(re.escape(w) for w in wrappers)
    return re.compile(rf"^(?:{names})<(.+)>$")
