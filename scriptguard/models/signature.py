"""Whitelisted member signatures.

A signature is one catalog entry. Its canonical text doubles as the catalog
line and as the equality key:

    method <declaringType> <name> <argType1> <argType2> ...
    staticMethod <declaringType> <name> <argType1> ...
    new <type> <argType1> ...
    field <declaringType> <name>
    staticField <declaringType> <name>
"""

from __future__ import annotations

import functools
from enum import Enum
from typing import Annotated, Any, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, StringConstraints, model_validator

from ..naming import canonical_name, is_wildcard, name_matches
from .types import ConstructorInfo, FieldInfo, MethodInfo, TypeInfo, TypeResolver

TypeName = Annotated[str, StringConstraints(pattern=r"^[^\s*]+$")]
MemberName = Annotated[str, StringConstraints(pattern=r"^(\*|[^\s*]+)$")]

Member = Union[MethodInfo, ConstructorInfo, FieldInfo]


class SignatureKind(str, Enum):
    """The five kinds of reflective access a catalog can whitelist."""

    METHOD = "method"
    STATIC_METHOD = "staticMethod"
    NEW = "new"
    FIELD = "field"
    STATIC_FIELD = "staticField"

    @property
    def has_name(self) -> bool:
        return self is not SignatureKind.NEW

    @property
    def has_arguments(self) -> bool:
        return self not in (SignatureKind.FIELD, SignatureKind.STATIC_FIELD)


def _type_name(t: str | TypeInfo) -> str:
    return canonical_name(t) if isinstance(t, TypeInfo) else t


def _type_names(types: tuple[str | TypeInfo, ...]) -> tuple[str, ...]:
    return tuple(_type_name(t) for t in types)


@functools.total_ordering
class Signature(BaseModel):
    """One whitelisted member descriptor.

    Identity is (kind, canonical text). Signatures sort by their signature
    part first and their full text second, which keeps a large catalog
    grouped by declaring type regardless of kind.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: SignatureKind
    declaring_type: TypeName
    name: MemberName | None = None
    argument_types: tuple[TypeName, ...] = Field(default_factory=tuple)

    _part: str = PrivateAttr(default="")
    _text: str = PrivateAttr(default="")

    @model_validator(mode="after")
    def check_shape(self) -> Signature:
        if self.kind.has_name and self.name is None:
            raise ValueError(f"{self.kind.value} signature requires a member name")
        if not self.kind.has_name and self.name is not None:
            raise ValueError("constructor signatures take no member name")
        if not self.kind.has_arguments and self.argument_types:
            raise ValueError(f"{self.kind.value} signature takes no argument types")
        return self

    def model_post_init(self, __context: object) -> None:
        # Computed at construction and again by model_copy; fields never change in between.
        tokens = [self.declaring_type]
        if self.name is not None:
            tokens.append(self.name)
        tokens.extend(self.argument_types)
        self._part = " ".join(tokens)
        self._text = f"{self.kind.value} {self._part}"

    def model_copy(self, *, update: dict[str, Any] | None = None, deep: bool = False) -> Signature:
        # Private attributes are copied unchanged.
        copied = super().model_copy(update=update, deep=deep)
        copied.model_post_init(None)
        return copied

    # Factories

    @classmethod
    def method(cls, receiver_type: str | TypeInfo, name: str, *argument_types: str | TypeInfo) -> Signature:
        return cls(
            kind=SignatureKind.METHOD,
            declaring_type=_type_name(receiver_type),
            name=name,
            argument_types=_type_names(argument_types),
        )

    @classmethod
    def static_method(cls, receiver_type: str | TypeInfo, name: str, *argument_types: str | TypeInfo) -> Signature:
        return cls(
            kind=SignatureKind.STATIC_METHOD,
            declaring_type=_type_name(receiver_type),
            name=name,
            argument_types=_type_names(argument_types),
        )

    @classmethod
    def new(cls, type_: str | TypeInfo, *argument_types: str | TypeInfo) -> Signature:
        return cls(
            kind=SignatureKind.NEW,
            declaring_type=_type_name(type_),
            argument_types=_type_names(argument_types),
        )

    @classmethod
    def field(cls, type_: str | TypeInfo, name: str) -> Signature:
        return cls(kind=SignatureKind.FIELD, declaring_type=_type_name(type_), name=name)

    @classmethod
    def static_field(cls, type_: str | TypeInfo, name: str) -> Signature:
        return cls(kind=SignatureKind.STATIC_FIELD, declaring_type=_type_name(type_), name=name)

    @classmethod
    def from_member(cls, member: Member) -> Signature:
        """Build the exact signature that would permit ``member``."""
        if isinstance(member, MethodInfo):
            factory = cls.static_method if member.static else cls.method
            return factory(member.declaring_type, member.name, *member.parameter_names)
        if isinstance(member, ConstructorInfo):
            return cls.new(member.declaring_type, *member.parameter_names)
        if isinstance(member, FieldInfo):
            factory = cls.static_field if member.static else cls.field
            return factory(member.declaring_type, member.name)
        raise TypeError(f"Not a reflective member: {member!r}")

    # Canonical form

    def signature_part(self) -> str:
        return self._part

    @property
    def text(self) -> str:
        return self._text

    @property
    def is_wildcard(self) -> bool:
        return self.name is not None and is_wildcard(self.name)

    @property
    def sort_key(self) -> tuple[str, str]:
        return (self._part, self._text)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"Signature({self._text!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Signature):
            return NotImplemented
        return self.kind is other.kind and self._text == other._text

    def __hash__(self) -> int:
        return hash(self._text)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Signature):
            return NotImplemented
        return self.sort_key < other.sort_key

    def compare_to(self, other: Signature) -> int:
        """Three-way comparison: negative, zero or positive."""
        a, b = self.sort_key, other.sort_key
        return (a > b) - (a < b)

    # Matching

    def matches(self, member: Member) -> bool:
        """Check a reflective member against this signature.

        Declaring type and argument types must be equal exactly; only the
        member name accepts the ``*`` wildcard. Fields match only when
        declared directly on the named type.
        """
        kind = self.kind
        if kind is SignatureKind.NEW:
            if not isinstance(member, ConstructorInfo):
                return False
        elif kind.has_arguments:
            if not isinstance(member, MethodInfo):
                return False
        elif not isinstance(member, FieldInfo):
            return False

        if self.name is not None and not name_matches(self.name, member.name):
            return False
        if canonical_name(member.declaring_type) != self.declaring_type:
            return False
        if kind.has_arguments:
            return member.parameter_names == self.argument_types
        return True

    # Existence

    def exists(self, resolver: TypeResolver) -> bool:
        """Check this signature against the live type system.

        A member that is not there yields False. A type name that cannot be
        resolved raises UnknownTypeError, since that means the entry itself
        is broken.
        """
        owner = resolver.resolve(self.declaring_type)
        arguments = tuple(canonical_name(resolver.resolve(t)) for t in self.argument_types)
        kind = self.kind

        if kind is SignatureKind.METHOD:
            return self._instance_method_exists(owner, arguments)
        if kind is SignatureKind.STATIC_METHOD:
            method = owner.declared_method(self.name, arguments)
            return method is not None and method.static
        if kind is SignatureKind.NEW:
            return owner.declared_constructor(arguments) is not None
        return owner.public_field(self.name) is not None

    def _instance_method_exists(self, owner: TypeInfo, arguments: tuple[str, ...]) -> bool:
        # Depth first: superclass chain, then interfaces, then the type itself.
        seen: set[int] = set()
        for ancestor in _supertypes(owner):
            if self._declared_non_static(ancestor, arguments, seen):
                return True
        method = owner.declared_method(self.name, arguments)
        return method is not None and not method.static

    def _declared_non_static(self, type_info: TypeInfo, arguments: tuple[str, ...], seen: set[int]) -> bool:
        if id(type_info) in seen:
            return False
        seen.add(id(type_info))
        for ancestor in _supertypes(type_info):
            if self._declared_non_static(ancestor, arguments, seen):
                return True
        method = type_info.declared_method(self.name, arguments)
        return method is not None and not method.static


def _supertypes(type_info: TypeInfo) -> list[TypeInfo]:
    supertypes = [] if type_info.superclass is None else [type_info.superclass]
    supertypes.extend(type_info.interfaces)
    return supertypes


__all__ = ["Member", "Signature", "SignatureKind"]
