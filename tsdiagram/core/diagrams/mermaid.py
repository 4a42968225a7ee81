"""Deterministic Mermaid generator for type-graph class diagrams.

Takes the registry and relationship list of one conversion run and
produces ``classDiagram`` text. Nodes follow registry insertion order,
edges follow discovery order, notes follow the order they were deferred.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from ..ast_parser.models import DeclarationKind
from ..constants import DIAGRAM_HEADER, LEGEND, QUOTED_LITERAL_RE, RECOVERY_BODY_LINE
from ..graph.models import Relationship, RelationshipKind, TypeDescriptor, UnionShape
from ..graph.registry import TypeRegistry
from ..settings import ConverterSettings

logger = logging.getLogger(__name__)

_ARROWS = {
    RelationshipKind.EXTENDS: "--|>",
    RelationshipKind.IMPLEMENTS: "..|>",
    RelationshipKind.COMPOSITION: "--*",
}

_STEREOTYPES = {
    DeclarationKind.INTERFACE: "<<interface>>",
    DeclarationKind.ENUM: "<<enumeration>>",
    DeclarationKind.CLASS: "<<class>>",
}

_INDENT = "  "
_BODY_INDENT = "    "


def escape_type(type_str: str) -> str:
    """Make a type string safe for a Mermaid member line.

    Replacements run in a fixed order and are not reversible:
    ``<`` ``>`` → ``~``, ``|`` → ``or``, ``&`` → ``and``, ``[`` → ``Array~``, ``]`` → ``~``.
    """
    return (
        type_str
        .replace("<", "~")
        .replace(">", "~")
        .replace("|", "or")
        .replace("&", "and")
        .replace("[", "Array~")
        .replace("]", "~")
    )


def render_class_diagram(
    registry: TypeRegistry,
    relationships: Sequence[Relationship],
    diagnostics: Sequence[str] = (),
    settings: Optional[ConverterSettings] = None,
) -> str:
    """Generate Mermaid class diagram text.

    Args:
        registry: Descriptors to draw, in insertion order
        relationships: Edges in discovery order; edges whose target is not
            registered are dropped
        diagnostics: Messages collected while parsing and building
        settings: Rendering knobs (defaults when omitted)

    Returns:
        Newline-joined diagram text starting with ``classDiagram``
    """
    settings = settings or ConverterSettings()
    lines = [DIAGRAM_HEADER]
    lines.extend(f"{_INDENT}{line}" for line in LEGEND)
    lines.append("")

    lines.extend(_error_summary(diagnostics, settings.max_reported_errors))
    lines.extend(_recovery_summary(registry))

    notes: List[Tuple[str, str]] = []
    for descriptor in registry:
        lines.extend(_render_class(descriptor, notes, settings))

    drawn = 0
    for rel in relationships:
        if rel.target not in registry:
            continue
        label = f" : {rel.label}" if rel.kind is RelationshipKind.COMPOSITION and rel.label else ""
        lines.append(f"{_INDENT}{rel.source} {_ARROWS[rel.kind]} {rel.target}{label}")
        drawn += 1

    for owner, text in notes:
        lines.append(f'{_INDENT}note for {owner} "{text}"')

    logger.debug(
        "Rendered %d classes, %d of %d edges, %d notes",
        len(registry), drawn, len(relationships), len(notes),
    )
    return "\n".join(lines)


def _error_summary(diagnostics: Sequence[str], limit: int) -> List[str]:
    if not diagnostics:
        return []
    lines = [f"{_INDENT}%% Errors encountered during conversion:"]
    for message in diagnostics[:limit]:
        flattened = message.replace("\n", " ")
        lines.append(f"{_INDENT}%% - {flattened}")
    if len(diagnostics) > limit:
        lines.append(f"{_INDENT}%% ... and {len(diagnostics) - limit} more errors")
    lines.append("")
    return lines


def _recovery_summary(registry: TypeRegistry) -> List[str]:
    recovered = [d.name for d in registry if d.was_auto_recovered]
    if not recovered:
        return []
    lines = [
        f"{_INDENT}%% WARNING: The following types had syntax errors "
        "and were auto-recovered by the parser:"
    ]
    lines.extend(
        f"{_INDENT}%% - {name}: Missing closing brace or other syntax error was automatically fixed"
        for name in recovered
    )
    lines.append(f"{_INDENT}%% These auto-fixes may not reflect the intended structure!")
    lines.append("")
    return lines


def _render_class(
    descriptor: TypeDescriptor,
    notes: List[Tuple[str, str]],
    settings: ConverterSettings,
) -> List[str]:
    name = descriptor.name
    generics = ""
    if settings.show_type_parameters and descriptor.type_parameters:
        generics = f"~{', '.join(descriptor.type_parameters)}~"

    lines = [f"{_INDENT}class {name}{generics} {{"]

    stereotype = _stereotype(descriptor)
    if stereotype:
        lines.append(f"{_BODY_INDENT}{stereotype}")
    if descriptor.was_auto_recovered:
        lines.append(f"{_BODY_INDENT}{RECOVERY_BODY_LINE}")

    info = descriptor.union_info
    if info is not None and info.is_reusable:
        lines.append(_BODY_INDENT + " | ".join(_display_member(m) for m in info.members))
    elif info is not None and info.shape in (UnionShape.SIMPLE, UnionShape.PRIMITIVE):
        lines.append(_BODY_INDENT + " | ".join(_display_member(m) for m in info.members))
    elif info is not None and info.shape in (UnionShape.LARGE, UnionShape.DISCRIMINATED):
        lines.extend(_BODY_INDENT + _display_member(m) for m in info.members)
    elif info is not None:
        lines.append(f"{_BODY_INDENT}+value: {name}")
        notes.append((name, f"{name} = {info.raw_text}"))
    else:
        for prop in descriptor.properties:
            modifier = "+" if prop.readonly or not prop.optional else "-"
            optional = "?" if prop.optional else ""
            lines.append(f"{_BODY_INDENT}{modifier}{prop.name}{optional}: {escape_type(prop.type)}")
            if prop.raw_type:
                notes.append((name, f"{prop.name}: {prop.raw_type}"))

    lines.append(f"{_INDENT}}}")
    lines.append("")
    return lines


def _stereotype(descriptor: TypeDescriptor) -> Optional[str]:
    if descriptor.union_info is not None:
        return "<<type>>" if descriptor.union_info.is_reusable else "<<enumeration>>"
    return _STEREOTYPES.get(descriptor.kind)


def _display_member(member: str) -> str:
    """Union members as diagram text: string literals lose their quotes."""
    if QUOTED_LITERAL_RE.match(member) and len(member) >= 2:
        return member[1:-1]
    return member
