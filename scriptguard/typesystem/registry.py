"""In-memory type registry.

Holds a hand-assembled type graph, which is how embedders describe a host
whose types are not Python classes (and how the tests describe one).
"""

from __future__ import annotations

from typing import Any

from ..errors import UnknownTypeError
from ..models.types import TypeInfo
from ..naming import ARRAY_SUFFIX

PRIMITIVE_TYPES = ("boolean", "byte", "char", "short", "int", "long", "float", "double", "void")


class TypeRegistry:
    """Resolves TypeInfo objects by canonical name.

    Array types extend the type named by ``root`` once it is registered.
    """

    def __init__(self, *, primitives: bool = True, root: str | None = "java.lang.Object") -> None:
        self.root = root
        self._types: dict[str, TypeInfo] = {}
        self._arrays: dict[str, TypeInfo] = {}
        self._bindings: dict[type, TypeInfo] = {}
        if primitives:
            for name in PRIMITIVE_TYPES:
                self.register(TypeInfo(name))

    def register(self, type_info: TypeInfo) -> TypeInfo:
        """Add a declared type. Array types are derived, not registered."""
        if type_info.is_array:
            raise ValueError(f"Array types cannot be registered: {type_info.canonical_name}")
        if type_info.name in self._types:
            raise ValueError(f"Type already registered: {type_info.name}")
        self._types[type_info.name] = type_info
        return type_info

    def define(
        self,
        name: str,
        superclass: TypeInfo | str | None = None,
        interfaces: tuple[TypeInfo | str, ...] = (),
    ) -> TypeInfo:
        """Create and register a type, resolving supertypes given by name."""
        if isinstance(superclass, str):
            superclass = self.resolve(superclass)
        resolved = tuple(self.resolve(i) if isinstance(i, str) else i for i in interfaces)
        return self.register(TypeInfo(name, superclass=superclass, interfaces=resolved))

    def array_of(self, component: TypeInfo) -> TypeInfo:
        key = component.canonical_name
        array = self._arrays.get(key)
        if array is None:
            array = TypeInfo(key + ARRAY_SUFFIX, component_type=component)
            self._arrays[key] = array
        if array.superclass is None and self.root is not None:
            # The root may be registered after the array was first built.
            array.superclass = self._types.get(self.root)
        return array

    def resolve(self, name: str) -> TypeInfo:
        if name.endswith(ARRAY_SUFFIX):
            return self.array_of(self.resolve(name[: -len(ARRAY_SUFFIX)]))
        try:
            return self._types[name]
        except KeyError:
            raise UnknownTypeError(name) from None

    def __contains__(self, name: str) -> bool:
        try:
            self.resolve(name)
        except UnknownTypeError:
            return False
        return True

    def bind(self, py_type: type, name: str) -> None:
        """Report values of ``py_type`` (and its subclasses) as the named type."""
        self._bindings[py_type] = self.resolve(name)

    def type_of(self, value: Any) -> TypeInfo:
        for klass in type(value).__mro__:
            bound = self._bindings.get(klass)
            if bound is not None:
                return bound
        raise UnknownTypeError(type(value).__qualname__, "no binding for runtime type")
