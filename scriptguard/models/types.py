"""Reflective descriptors for types and their members.

These are the descriptors an interceptor hands to the whitelist, and the
type-graph capability signatures walk when checking that they exist: supertype
lookup, interface list and directly declared member lookup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Protocol, Sequence

from ..naming import canonical_name, canonical_names


@dataclass(eq=False)
class TypeInfo:
    """A type in the host type system.

    Equality is identity: a resolver hands out one TypeInfo per type.
    """

    name: str
    superclass: TypeInfo | None = None
    interfaces: tuple[TypeInfo, ...] = ()
    component_type: TypeInfo | None = None
    methods: list[MethodInfo] = field(default_factory=list, repr=False)
    constructors: list[ConstructorInfo] = field(default_factory=list, repr=False)
    fields: list[FieldInfo] = field(default_factory=list, repr=False)

    @property
    def is_array(self) -> bool:
        return self.component_type is not None

    @property
    def canonical_name(self) -> str:
        return canonical_name(self)

    def declared_method(self, name: str, parameter_types: Sequence[str]) -> MethodInfo | None:
        """Find a method declared directly on this type by name and exact parameters."""
        wanted = tuple(parameter_types)
        for method in self.methods:
            if method.name == name and method.parameter_names == wanted:
                return method
        return None

    def declared_constructor(self, parameter_types: Sequence[str]) -> ConstructorInfo | None:
        wanted = tuple(parameter_types)
        for constructor in self.constructors:
            if constructor.parameter_names == wanted:
                return constructor
        return None

    def declared_field(self, name: str) -> FieldInfo | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def public_field(self, name: str) -> FieldInfo | None:
        """Find an accessible field, searching interfaces and then superclasses."""
        own = self.declared_field(name)
        if own is not None and own.public:
            return own
        for iface in self.interfaces:
            found = iface.public_field(name)
            if found is not None:
                return found
        if self.superclass is not None:
            return self.superclass.public_field(name)
        return None

    # Builders used while assembling a type graph.

    def declare_method(self, name: str, *parameter_types: TypeInfo, static: bool = False) -> MethodInfo:
        method = MethodInfo(self, name, tuple(parameter_types), static=static)
        self.methods.append(method)
        return method

    def declare_constructor(self, *parameter_types: TypeInfo) -> ConstructorInfo:
        constructor = ConstructorInfo(self, tuple(parameter_types))
        self.constructors.append(constructor)
        return constructor

    def declare_field(self, name: str, *, static: bool = False, public: bool = True) -> FieldInfo:
        f = FieldInfo(self, name, static=static, public=public)
        self.fields.append(f)
        return f


@dataclass(frozen=True, eq=False)
class MethodInfo:
    """A method as declared on a type."""

    declaring_type: TypeInfo = field(repr=False)
    name: str
    parameter_types: tuple[TypeInfo, ...] = ()
    static: bool = False

    @cached_property
    def parameter_names(self) -> tuple[str, ...]:
        return canonical_names(self.parameter_types)


@dataclass(frozen=True, eq=False)
class ConstructorInfo:
    """A constructor of a type."""

    declaring_type: TypeInfo = field(repr=False)
    parameter_types: tuple[TypeInfo, ...] = ()

    @cached_property
    def parameter_names(self) -> tuple[str, ...]:
        return canonical_names(self.parameter_types)


@dataclass(frozen=True, eq=False)
class FieldInfo:
    """A field as declared on a type."""

    declaring_type: TypeInfo = field(repr=False)
    name: str
    static: bool = False
    public: bool = True


class TypeResolver(Protocol):
    """Loads types by canonical name and names the runtime type of values."""

    def resolve(self, name: str) -> TypeInfo:
        """Return the type for ``name`` or raise UnknownTypeError."""
        ...

    def type_of(self, value: Any) -> TypeInfo:
        """Return the runtime type of a live value."""
        ...
