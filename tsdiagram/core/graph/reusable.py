"""ReusableUnionDetector — promotes unions referenced from several places.

Usage is counted per member signature (sorted member list), so two
aliases with the same members pool their references.
"""

import logging
import re
from collections import Counter
from typing import List

from .registry import TypeRegistry

logger = logging.getLogger(__name__)

_TRAILING_ARRAYS_RE = re.compile(r"(\[\])+$")

# References needed before a union is drawn as a named type
REUSE_THRESHOLD = 2


def detect_reusable_unions(registry: TypeRegistry) -> List[str]:
    """Mark union descriptors whose signature is referenced at least twice.

    A property references a union when its type string, with any trailing
    ``[]`` removed, is the name of a union-typed registry entry other than
    the property's owner.

    Returns:
        Names of the descriptors marked reusable, in registry order
    """
    usage: Counter = Counter()
    for owner in registry:
        for prop in owner.properties:
            referenced = registry.get(_TRAILING_ARRAYS_RE.sub("", prop.type))
            if referenced is None or referenced is owner or not referenced.is_union:
                continue
            usage[referenced.union_info.signature] += 1

    reusable = []
    for descriptor in registry.unions():
        if usage[descriptor.union_info.signature] >= REUSE_THRESHOLD:
            descriptor.union_info.is_reusable = True
            reusable.append(descriptor.name)

    if reusable:
        logger.debug("Reusable unions: %s", ", ".join(reusable))
    return reusable
