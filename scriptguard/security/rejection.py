"""Build RejectedAccessError for operations a whitelist denied.

The error names the denied member in catalog form, so a script author can
ask for exactly that line to be whitelisted. When live arguments are at hand
their runtime types are added as details.
"""

from __future__ import annotations

from typing import Any, Sequence

from ..errors import RejectedAccessError
from ..models.signature import Signature
from ..models.types import ConstructorInfo, FieldInfo, MethodInfo, TypeResolver
from ..naming import canonical_value_name


def _argument_details(args: Sequence[Any] | None, resolver: TypeResolver | None) -> str | None:
    if args is None or resolver is None:
        return None
    return "called with " + ", ".join(canonical_value_name(a, resolver) for a in args)


def reject_method(
    method: MethodInfo,
    args: Sequence[Any] | None = None,
    resolver: TypeResolver | None = None,
) -> RejectedAccessError:
    signature = Signature.method(method.declaring_type, method.name, *method.parameter_names)
    return RejectedAccessError(str(signature), _argument_details(args, resolver))


def reject_static_method(
    method: MethodInfo,
    args: Sequence[Any] | None = None,
    resolver: TypeResolver | None = None,
) -> RejectedAccessError:
    signature = Signature.static_method(method.declaring_type, method.name, *method.parameter_names)
    return RejectedAccessError(str(signature), _argument_details(args, resolver))


def reject_new(
    constructor: ConstructorInfo,
    args: Sequence[Any] | None = None,
    resolver: TypeResolver | None = None,
) -> RejectedAccessError:
    signature = Signature.new(constructor.declaring_type, *constructor.parameter_names)
    return RejectedAccessError(str(signature), _argument_details(args, resolver))


def reject_field(field: FieldInfo) -> RejectedAccessError:
    return RejectedAccessError(str(Signature.field(field.declaring_type, field.name)))


def reject_static_field(field: FieldInfo) -> RejectedAccessError:
    return RejectedAccessError(str(Signature.static_field(field.declaring_type, field.name)))
