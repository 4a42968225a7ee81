"""tsdiagram AST Parser — tree-sitter based declaration parsing.

Public API:
    parse_file(path) → ParseResult
    parse_source(source, file_path, language) → ParseResult
    detect_language(file_path) → str | None
"""

from typing import Optional

from .models import (
    DeclarationKind,
    DeclarationNode,
    MemberNode,
    ParseError,
    ParseResult,
    SourceUnavailableError,
    TypeNode,
    TypeNodeKind,
)
from .utils import detect_language, get_parser, is_supported_file

__all__ = [
    "parse_file",
    "parse_source",
    "detect_language",
    "is_supported_file",
    "DeclarationKind",
    "DeclarationNode",
    "MemberNode",
    "ParseError",
    "ParseResult",
    "SourceUnavailableError",
    "TypeNode",
    "TypeNodeKind",
]


def parse_file(file_path: str) -> ParseResult:
    """Parse a TypeScript file into declaration nodes.

    Args:
        file_path: Path to the source file

    Returns:
        ParseResult containing extracted declarations

    Raises:
        ValueError: If the extension is not a TypeScript one
        SourceUnavailableError: If the file cannot be read
    """
    language = detect_language(file_path)
    if language is None:
        raise ValueError(f"Not a TypeScript file: {file_path}")
    return get_parser(language).parse_file(file_path)


def parse_source(source_text: str, file_path: str = "input.ts", language: Optional[str] = None) -> ParseResult:
    """Parse TypeScript source text into declaration nodes.

    Args:
        source_text: Source code as string
        file_path: File path (for diagnostics)
        language: "typescript" or "tsx". If None, detected from file_path,
            defaulting to "typescript".

    Returns:
        ParseResult containing extracted declarations
    """
    if language is None:
        language = detect_language(file_path) or "typescript"
    return get_parser(language).parse_source(source_text, file_path)
