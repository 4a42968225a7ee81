"""TypeScriptToMermaid — one conversion run, from declarations to diagram text.

Pipeline:
    declarations → TypeGraphBuilder (registry + heritage edges)
                 → expand_discriminated_unions
                 → detect_compositions
                 → detect_reusable_unions
                 → render_class_diagram

All intermediate state belongs to the converter instance; an instance
converts exactly one input.
"""

import logging
from typing import List, Optional

from .ast_parser import ParseResult, SourceUnavailableError, parse_file, parse_source
from .diagrams import render_class_diagram
from .graph import (
    Relationship,
    TypeGraphBuilder,
    TypeRegistry,
    detect_compositions,
    detect_reusable_unions,
    expand_discriminated_unions,
)
from .settings import ConverterSettings, get_settings

logger = logging.getLogger(__name__)


class ConversionError(RuntimeError):
    """No declaration list could be produced, so no diagram either."""


class TypeScriptToMermaid:
    """Converts one parsed TypeScript file into a Mermaid class diagram.

    Attributes:
        registry: Descriptors by name, insertion ordered.
        relationships: Edges in discovery order.
        diagnostics: Human-readable problems found along the way.
    """

    def __init__(self, parse_result: ParseResult, settings: Optional[ConverterSettings] = None):
        self._parse_result = parse_result
        self._settings = settings or get_settings()
        self._converted = False

        self.registry = TypeRegistry()
        self.relationships: List[Relationship] = []
        self.diagnostics: List[str] = [e.message for e in parse_result.errors]

    def analyze(self) -> None:
        """Build the type graph. Safe to call only once per instance."""
        if self._converted:
            raise RuntimeError("TypeScriptToMermaid instances convert a single input; create a new one")
        self._converted = True

        builder = TypeGraphBuilder(self.registry, self.relationships, self.diagnostics, self._settings)
        registered = builder.add_declarations(self._parse_result.declarations)
        expanded = expand_discriminated_unions(self.registry, self.relationships)
        detect_compositions(self.registry, self.relationships, self._settings.generic_wrappers)
        detect_reusable_unions(self.registry)

        logger.debug(
            "%s: %d declarations, %d registered, %d discriminated unions expanded, %d edges",
            self._parse_result.file_path,
            len(self._parse_result.declarations),
            registered,
            expanded,
            len(self.relationships),
        )

    def generate_mermaid(self) -> str:
        return render_class_diagram(self.registry, self.relationships, self.diagnostics, self._settings)

    def convert(self) -> str:
        """Analyze and render in one step."""
        self.analyze()
        return self.generate_mermaid()


def convert_source(
    source_text: str,
    file_path: str = "input.ts",
    settings: Optional[ConverterSettings] = None,
) -> str:
    """Convert TypeScript source text to Mermaid class diagram text."""
    return TypeScriptToMermaid(parse_source(source_text, file_path), settings).convert()


def convert_file(file_path: str, settings: Optional[ConverterSettings] = None) -> str:
    """Convert a TypeScript file to Mermaid class diagram text.

    Raises:
        ConversionError: If the file cannot be read or is not TypeScript
    """
    try:
        parse_result = parse_file(file_path)
    except (SourceUnavailableError, ValueError) as e:
        logger.error(f"Failed to convert {file_path}: {e}")
        raise ConversionError(f"Failed to convert TypeScript to Mermaid: {e}") from e
    return TypeScriptToMermaid(parse_result, settings).convert()
