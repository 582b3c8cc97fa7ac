"""Permission checks for reflective operations attempted by sandboxed scripts.

An interceptor calls the matching ``permits_*`` operation before every
reflective access and treats False as a denial.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable, Iterator, Sequence

from ..models.signature import Member, Signature, SignatureKind
from ..models.types import ConstructorInfo, FieldInfo, MethodInfo

logger = logging.getLogger(__name__)


class Whitelist(ABC):
    """Decides whether a given reflective operation is permitted.

    Receivers, arguments and values are passed for strategies that inspect
    them; every operation returns a plain boolean.
    """

    @abstractmethod
    def permits_method(self, method: MethodInfo, receiver: Any, args: Sequence[Any]) -> bool: ...

    @abstractmethod
    def permits_constructor(self, constructor: ConstructorInfo, args: Sequence[Any]) -> bool: ...

    @abstractmethod
    def permits_static_method(self, method: MethodInfo, args: Sequence[Any]) -> bool: ...

    @abstractmethod
    def permits_field_get(self, field: FieldInfo, receiver: Any) -> bool: ...

    @abstractmethod
    def permits_field_set(self, field: FieldInfo, receiver: Any, value: Any) -> bool: ...

    @abstractmethod
    def permits_static_field_get(self, field: FieldInfo) -> bool: ...

    @abstractmethod
    def permits_static_field_set(self, field: FieldInfo, value: Any) -> bool: ...


class EnumeratingWhitelist(Whitelist):
    """A whitelist that lists signatures and searches them.

    The five signature lists are fixed at construction, so permission checks
    are safe to call from any number of threads without locking. A check
    scans its list in order and allows on the first match; an exhausted list
    denies.
    """

    def __init__(
        self,
        methods: Iterable[Signature] = (),
        new: Iterable[Signature] = (),
        static_methods: Iterable[Signature] = (),
        fields: Iterable[Signature] = (),
        static_fields: Iterable[Signature] = (),
    ) -> None:
        self._methods = _checked(methods, SignatureKind.METHOD)
        self._new = _checked(new, SignatureKind.NEW)
        self._static_methods = _checked(static_methods, SignatureKind.STATIC_METHOD)
        self._fields = _checked(fields, SignatureKind.FIELD)
        self._static_fields = _checked(static_fields, SignatureKind.STATIC_FIELD)

    @classmethod
    def from_signatures(cls, signatures: Iterable[Signature]) -> EnumeratingWhitelist:
        """Route a mixed catalog into per-kind lists, keeping catalog order."""
        buckets: dict[SignatureKind, list[Signature]] = {kind: [] for kind in SignatureKind}
        for signature in signatures:
            buckets[signature.kind].append(signature)
        return cls(
            methods=buckets[SignatureKind.METHOD],
            new=buckets[SignatureKind.NEW],
            static_methods=buckets[SignatureKind.STATIC_METHOD],
            fields=buckets[SignatureKind.FIELD],
            static_fields=buckets[SignatureKind.STATIC_FIELD],
        )

    @property
    def method_signatures(self) -> tuple[Signature, ...]:
        return self._methods

    @property
    def new_signatures(self) -> tuple[Signature, ...]:
        return self._new

    @property
    def static_method_signatures(self) -> tuple[Signature, ...]:
        return self._static_methods

    @property
    def field_signatures(self) -> tuple[Signature, ...]:
        return self._fields

    @property
    def static_field_signatures(self) -> tuple[Signature, ...]:
        return self._static_fields

    def signatures(self) -> Iterator[Signature]:
        yield from self._methods
        yield from self._new
        yield from self._static_methods
        yield from self._fields
        yield from self._static_fields

    def sorted_catalog(self) -> list[str]:
        """Deduplicated catalog lines in signature order, for human review."""
        return [str(s) for s in sorted(set(self.signatures()))]

    def __len__(self) -> int:
        return sum(
            len(group)
            for group in (self._methods, self._new, self._static_methods, self._fields, self._static_fields)
        )

    def permits_method(self, method: MethodInfo, receiver: Any, args: Sequence[Any]) -> bool:
        return _scan(self._methods, method)

    def permits_constructor(self, constructor: ConstructorInfo, args: Sequence[Any]) -> bool:
        return _scan(self._new, constructor)

    def permits_static_method(self, method: MethodInfo, args: Sequence[Any]) -> bool:
        return _scan(self._static_methods, method)

    def permits_field_get(self, field: FieldInfo, receiver: Any) -> bool:
        return _scan(self._fields, field)

    def permits_field_set(self, field: FieldInfo, receiver: Any, value: Any) -> bool:
        return _scan(self._fields, field)

    def permits_static_field_get(self, field: FieldInfo) -> bool:
        return _scan(self._static_fields, field)

    def permits_static_field_set(self, field: FieldInfo, value: Any) -> bool:
        return _scan(self._static_fields, field)


def _checked(signatures: Iterable[Signature], kind: SignatureKind) -> tuple[Signature, ...]:
    result = tuple(signatures)
    for signature in result:
        if signature.kind is not kind:
            raise ValueError(f"Expected {kind.value} signature, got: {signature}")
    return result


def _scan(signatures: tuple[Signature, ...], member: Member) -> bool:
    try:
        for signature in signatures:
            if signature.matches(member):
                return True
    except Exception:
        # Fail closed: a descriptor that breaks matching is denied.
        logger.warning("Denying %r: signature matching failed", member, exc_info=True)
    return False
