"""scriptguard: signature whitelists for sandboxed script reflection."""

from .errors import RejectedAccessError, ScriptGuardError, UnknownTypeError
from .models import ConstructorInfo, FieldInfo, MethodInfo, Signature, SignatureKind, TypeInfo
from .naming import canonical_name, canonical_value_name, name_matches
from .security import EnumeratingWhitelist, Whitelist

__version__ = "0.1.0"

__all__ = [
    "ConstructorInfo",
    "EnumeratingWhitelist",
    "FieldInfo",
    "MethodInfo",
    "RejectedAccessError",
    "ScriptGuardError",
    "Signature",
    "SignatureKind",
    "TypeInfo",
    "UnknownTypeError",
    "Whitelist",
    "canonical_name",
    "canonical_value_name",
    "name_matches",
]
