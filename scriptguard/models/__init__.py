"""Data models: reflective descriptors and whitelist signatures."""

from .signature import Member, Signature, SignatureKind
from .types import ConstructorInfo, FieldInfo, MethodInfo, TypeInfo, TypeResolver

__all__ = [
    "ConstructorInfo",
    "FieldInfo",
    "Member",
    "MethodInfo",
    "Signature",
    "SignatureKind",
    "TypeInfo",
    "TypeResolver",
]
