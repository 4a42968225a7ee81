"""tsdiagram — TypeScript type declarations to Mermaid class diagrams.

    >>> from tsdiagram import convert_source
    >>> print(convert_source("interface Product { owner: User }\\ninterface User { id: string }"))
"""

from .core.converter import ConversionError, TypeScriptToMermaid, convert_file, convert_source
from .core.settings import ConverterSettings, get_settings

__all__ = [
    "ConversionError",
    "ConverterSettings",
    "TypeScriptToMermaid",
    "convert_file",
    "convert_source",
    "get_settings",
]

__version__ = "0.1.0"
