"""Class diagram generation for TypeScript type graphs.

Public API:
  render_class_diagram — registry + relationships → Mermaid classDiagram text
  escape_type — member-line escaping for type strings
"""

from .mermaid import escape_type, render_class_diagram

__all__ = ["escape_type", "render_class_diagram"]
