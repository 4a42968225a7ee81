"""TypeGraphBuilder — declaration nodes in, registry and relationships out.

Runs the per-declaration stage of a conversion: stringifies every
property type once, classifies union aliases, registers one descriptor
per declaration and records heritage edges as it goes. A declaration
that fails is reported and skipped; the rest still make it into the
diagram.
"""

import logging
from typing import List, Optional

from ..ast_parser.models import (
    DeclarationKind,
    DeclarationNode,
    MemberNode,
    TypeNode,
    TypeNodeKind,
)
from ..constants import COMPLEX_UNION_TOKEN
from ..settings import ConverterSettings
from .models import (
    PropertyDescriptor,
    Relationship,
    TypeDescriptor,
    UnionInfo,
    UnionShape,
    UnionVariant,
)
from .registry import TypeRegistry
from .relationships import heritage_relationships
from .stringifier import property_type_to_string, type_to_string
from .union_classifier import classify_union, literal_property_value

logger = logging.getLogger(__name__)


class TypeGraphBuilder:
    """Populate a registry and relationship list from declarations.

    The registry, relationship list and diagnostics list are owned by the
    caller (one conversion run) and mutated in place.
    """

    def __init__(
        self,
        registry: TypeRegistry,
        relationships: List[Relationship],
        diagnostics: List[str],
        settings: ConverterSettings,
    ):
        self._registry = registry
        self._relationships = relationships
        self._diagnostics = diagnostics
        self._settings = settings

    def add_declarations(self, declarations: List[DeclarationNode]) -> int:
        """Process declarations in order.

        Returns:
            Number of declarations registered
        """
        registered = 0
        for declaration in declarations:
            try:
                descriptor = self.describe(declaration)
            except Exception as e:
                message = f"Failed to process {declaration.kind.value} '{declaration.name}': {e}"
                logger.warning(message)
                self._diagnostics.append(message)
                continue

            if descriptor.was_auto_recovered:
                logger.warning(
                    f"{declaration.kind.value} '{declaration.name}' (line {declaration.start_line}) "
                    "spans a syntax error; kept as recovered"
                )
            self._registry.register(descriptor)
            self._relationships.extend(heritage_relationships(descriptor))
            registered += 1
        return registered

    def describe(self, declaration: DeclarationNode) -> TypeDescriptor:
        """Build the descriptor for one declaration."""
        descriptor = TypeDescriptor(
            name=declaration.name,
            kind=declaration.kind,
            type_parameters=list(declaration.type_parameters),
            was_auto_recovered=declaration.has_recovery,
        )

        if declaration.kind is DeclarationKind.INTERFACE:
            descriptor.extends = list(declaration.extends)
            descriptor.properties = [self._property(m) for m in declaration.members]

        elif declaration.kind is DeclarationKind.CLASS:
            descriptor.extends = list(declaration.extends)
            descriptor.implements = list(declaration.implements)
            descriptor.properties = [self._property(m) for m in declaration.members]

        elif declaration.kind is DeclarationKind.ENUM:
            descriptor.properties = [
                PropertyDescriptor(name=m.name, type=m.initializer or "number", readonly=True)
                for m in declaration.members
            ]

        else:
            self._describe_alias(descriptor, declaration.aliased_type)

        return descriptor

    def _describe_alias(self, descriptor: TypeDescriptor, aliased: Optional[TypeNode]) -> None:
        if aliased is None:
            return

        if aliased.kind is TypeNodeKind.UNION:
            descriptor.union_info = self._union_info(aliased)
        elif aliased.kind is TypeNodeKind.OBJECT:
            descriptor.properties = [self._property(m) for m in aliased.properties]
        elif aliased.kind is TypeNodeKind.REFERENCE:
            descriptor.properties = [PropertyDescriptor(name="value", type=type_to_string(aliased))]
        elif aliased.kind is TypeNodeKind.TEMPLATE:
            text = _single_line(aliased.text)
            descriptor.union_info = UnionInfo(shape=UnionShape.COMPLEX, members=[text], raw_text=text)

    def _union_info(self, node: TypeNode) -> UnionInfo:
        classification = classify_union(node, self._settings.simple_union_max_members)
        info = UnionInfo(
            shape=classification.shape,
            members=[type_to_string(m) for m in node.members],
            discriminator=classification.discriminator,
        )
        if classification.shape is UnionShape.COMPLEX:
            info.raw_text = _single_line(node.text)
        elif classification.shape is UnionShape.DISCRIMINATED:
            info.variants = [
                UnionVariant(
                    discriminator_value=literal_property_value(member, classification.discriminator),
                    properties=[self._property(p) for p in member.properties],
                )
                for member in node.members
            ]
        return info

    def _property(self, member: MemberNode) -> PropertyDescriptor:
        if member.type is None:
            return PropertyDescriptor(
                name=member.name, type="any",
                optional=member.optional, readonly=member.readonly,
            )
        type_str = property_type_to_string(member.type, self._settings.simple_union_max_members)
        return PropertyDescriptor(
            name=member.name,
            type=type_str,
            optional=member.optional,
            readonly=member.readonly,
            raw_type=_single_line(member.type.text) if type_str == COMPLEX_UNION_TOKEN else None,
        )


def _single_line(text: str) -> str:
    """Collapse whitespace and drop a leading union bar."""
    collapsed = " ".join(text.split())
    if collapsed.startswith("|"):
        collapsed = collapsed[1:].lstrip()
    return collapsed
