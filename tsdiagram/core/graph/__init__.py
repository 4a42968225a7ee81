# tsdiagram type graph — registry, union classification, relationship inference
# Edge types: extends, implements, composition

from .builder import TypeGraphBuilder
from .discriminated import expand_discriminated_unions
from .models import (
    PropertyDescriptor,
    Relationship,
    RelationshipKind,
    TypeDescriptor,
    UnionClassification,
    UnionInfo,
    UnionShape,
    UnionVariant,
)
from .registry import TypeRegistry
from .relationships import detect_compositions, extract_base_type, is_custom_type
from .reusable import detect_reusable_unions
from .stringifier import property_type_to_string, type_to_string
from .union_classifier import classify_union

__all__ = [
    "TypeGraphBuilder",
    "TypeRegistry",
    "PropertyDescriptor",
    "Relationship",
    "RelationshipKind",
    "TypeDescriptor",
    "UnionClassification",
    "UnionInfo",
    "UnionShape",
    "UnionVariant",
    "classify_union",
    "detect_compositions",
    "detect_reusable_unions",
    "expand_discriminated_unions",
    "extract_base_type",
    "is_custom_type",
    "property_type_to_string",
    "type_to_string",
]
