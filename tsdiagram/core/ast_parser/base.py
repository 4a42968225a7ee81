"""Base interface for tree-sitter declaration parsers.

Defines the Strategy pattern base class that the TypeScript grammars
implement. Shared parsing logic lives here; declaration extraction is
delegated.
"""

import logging
from abc import ABC, abstractmethod
from typing import List

import tree_sitter

from .models import DeclarationNode, ParseError, ParseResult, SourceUnavailableError

logger = logging.getLogger(__name__)

# Longest ERROR-node excerpt quoted in a syntax diagnostic
_MAX_ERROR_EXCERPT = 40


class BaseLanguageParser(ABC):
    """Abstract base for tree-sitter declaration parsers.

    Subclasses implement:
    - get_language(): returns language name string
    - get_tree_sitter_language(): returns tree-sitter Language object
    - extract_declarations(): walks AST tree and extracts DeclarationNode objects
    """

    @abstractmethod
    def get_language(self) -> str:
        """Return the language identifier (e.g., 'typescript', 'tsx')."""
        ...

    @abstractmethod
    def get_tree_sitter_language(self) -> tree_sitter.Language:
        """Return the tree-sitter Language object for this language."""
        ...

    @abstractmethod
    def extract_declarations(
        self,
        tree: tree_sitter.Tree,
        source: bytes,
        file_path: str,
        errors: List[ParseError],
    ) -> List[DeclarationNode]:
        """Extract type declarations from a parsed tree-sitter AST.

        Args:
            tree: Parsed tree-sitter tree
            source: Raw source bytes
            file_path: File path (for diagnostics)
            errors: Sink for declarations that could not be extracted

        Returns:
            DeclarationNode objects in source order
        """
        ...

    def parse_file(self, file_path: str) -> ParseResult:
        """Parse a source file into a ParseResult.

        Args:
            file_path: Path to the source file

        Returns:
            ParseResult with extracted declarations and diagnostics

        Raises:
            SourceUnavailableError: If the file cannot be read
        """
        try:
            with open(file_path, "r", encoding="utf-8", errors="replace") as f:
                source_text = f.read()
        except OSError as e:
            raise SourceUnavailableError(f"Could not read {file_path}: {e}") from e

        return self.parse_source(source_text, file_path)

    def parse_source(self, source_text: str, file_path: str) -> ParseResult:
        """Parse source code string into a ParseResult.

        Args:
            source_text: Source code as string
            file_path: File path (for diagnostics)

        Returns:
            ParseResult with extracted declarations and diagnostics
        """
        source_bytes = source_text.encode("utf-8")
        line_count = source_text.count("\n") + (1 if source_text and not source_text.endswith("\n") else 0)

        parser = tree_sitter.Parser(self.get_tree_sitter_language())
        tree = parser.parse(source_bytes)

        errors: List[ParseError] = []
        if tree.root_node.has_error:
            errors.extend(self._collect_syntax_errors(tree.root_node, source_bytes, file_path))
            logger.debug("%s: %d syntax diagnostics", file_path, len(errors))

        try:
            declarations = self.extract_declarations(tree, source_bytes, file_path, errors)
        except Exception as e:
            logger.error(f"Failed to extract declarations from {file_path}: {e}")
            declarations = []
            errors.append(ParseError(
                file_path=file_path, line=0,
                message=f"Declaration extraction failed: {e}", severity="error",
            ))

        return ParseResult(
            file_path=file_path,
            language=self.get_language(),
            declarations=declarations,
            line_count=line_count,
            errors=errors,
        )

    @staticmethod
    def _collect_syntax_errors(
        root: tree_sitter.Node, source: bytes, file_path: str
    ) -> List[ParseError]:
        """Turn ERROR and MISSING nodes into diagnostics, in source order."""
        errors: List[ParseError] = []
        stack = [root]
        while stack:
            node = stack.pop()
            line = node.start_point.row + 1
            if node.is_missing:
                errors.append(ParseError(
                    file_path=file_path, line=line,
                    message=f"Syntax error at line {line}: missing '{node.type}'",
                ))
            elif node.is_error:
                excerpt = source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")
                excerpt = " ".join(excerpt.split())
                if len(excerpt) > _MAX_ERROR_EXCERPT:
                    excerpt = excerpt[:_MAX_ERROR_EXCERPT - 3] + "..."
                errors.append(ParseError(
                    file_path=file_path, line=line,
                    message=f"Syntax error at line {line}: unexpected '{excerpt}'",
                ))
            # Only subtrees flagged with errors can hold further diagnostics
            stack.extend(
                child for child in reversed(node.children)
                if child.has_error or child.is_missing
            )
        return errors
