"""DiscriminatedUnionExpander — turns a tagged union into a small hierarchy.

``type Shape = {kind: "circle"; radius: number} | {kind: "rectangle"; ...}``
becomes an interface ``Shape { kind: string }`` plus ``CircleShape`` and
``RectangleShape`` realizing it, each carrying its own fields and the
literal value of ``kind``.
"""

import logging
from typing import List

from ..ast_parser.models import DeclarationKind
from .models import (
    PropertyDescriptor,
    Relationship,
    RelationshipKind,
    TypeDescriptor,
    UnionShape,
)
from .registry import TypeRegistry

logger = logging.getLogger(__name__)


def expand_discriminated_unions(
    registry: TypeRegistry, relationships: List[Relationship]
) -> int:
    """Expand every discriminated union in the registry.

    Returns:
        Number of unions expanded
    """
    expanded = 0
    for descriptor in registry:
        info = descriptor.union_info
        if info is None or info.shape is not UnionShape.DISCRIMINATED:
            continue
        base, variants = build_variant_descriptors(descriptor)
        registry.splice(descriptor.name, [base, *variants])
        relationships.extend(
            Relationship(variant.name, base.name, RelationshipKind.IMPLEMENTS)
            for variant in variants
        )
        expanded += 1
        logger.debug(
            "Expanded %s into %d variants on '%s'",
            descriptor.name, len(variants), info.discriminator,
        )
    return expanded


def build_variant_descriptors(descriptor: TypeDescriptor):
    """Base interface plus one variant interface per union member.

    Returns:
        (base, variants) where variants keep member order; duplicates by
        name are not collapsed here.
    """
    info = descriptor.union_info
    field_name = info.discriminator
    base = TypeDescriptor(
        name=descriptor.name,
        kind=DeclarationKind.INTERFACE,
        properties=[PropertyDescriptor(name=field_name, type="string")],
        type_parameters=list(descriptor.type_parameters),
        was_auto_recovered=descriptor.was_auto_recovered,
    )

    variants = []
    for index, variant in enumerate(info.variants, start=1):
        if variant.discriminator_value is not None:
            name = variant_name(variant.discriminator_value, descriptor.name)
        else:
            name = f"{descriptor.name}Variant{index}"

        properties = [
            PropertyDescriptor(
                name=prop.name,
                type=variant.discriminator_value,
                optional=prop.optional,
                readonly=prop.readonly,
            )
            if prop.name == field_name and variant.discriminator_value is not None
            else prop
            for prop in variant.properties
        ]
        variants.append(TypeDescriptor(
            name=name,
            kind=DeclarationKind.INTERFACE,
            properties=properties,
            implements=[descriptor.name],
        ))
    return base, variants


def variant_name(literal: str, base_name: str) -> str:
    """``"circle"`` + ``Shape`` -> ``CircleShape``."""
    value = literal.strip("'\"`")
    return f"{value[:1].upper()}{value[1:]}{base_name}"
