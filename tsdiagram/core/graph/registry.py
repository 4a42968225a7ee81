"""TypeRegistry — ordered name → descriptor store owned by one conversion run."""

from typing import Dict, Iterator, List, Optional

from .models import TypeDescriptor


class TypeRegistry:
    """Insertion-ordered mapping from type name to its descriptor.

    Registering an existing name overwrites the descriptor but keeps its
    original position.
    """

    def __init__(self):
        self._types: Dict[str, TypeDescriptor] = {}

    def register(self, descriptor: TypeDescriptor) -> None:
        self._types[descriptor.name] = descriptor

    def get(self, name: str) -> Optional[TypeDescriptor]:
        return self._types.get(name)

    def splice(self, name: str, descriptors: List[TypeDescriptor]) -> None:
        """Replace ``name`` in place by ``descriptors``, in order.

        A spliced descriptor whose name is already registered elsewhere
        overwrites that entry; the later of two equal names wins.
        """
        entries = list(self._types.items())
        self._types = {}
        for key, value in entries:
            if key == name:
                for descriptor in descriptors:
                    self._types[descriptor.name] = descriptor
            elif key not in self._types:
                self._types[key] = value

    def names(self) -> List[str]:
        return list(self._types)

    def descriptors(self) -> List[TypeDescriptor]:
        return list(self._types.values())

    def unions(self) -> List[TypeDescriptor]:
        return [d for d in self._types.values() if d.is_union]

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[TypeDescriptor]:
        return iter(list(self._types.values()))

    def __len__(self) -> int:
        return len(self._types)
