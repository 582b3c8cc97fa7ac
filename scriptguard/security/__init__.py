"""Security module for scriptguard.

Permission checks for reflective operations and the errors raised when a
check denies one.
"""

from .rejection import (
    reject_field,
    reject_method,
    reject_new,
    reject_static_field,
    reject_static_method,
)
from .whitelist import EnumeratingWhitelist, Whitelist

__all__ = [
    "EnumeratingWhitelist",
    "Whitelist",
    "reject_field",
    "reject_method",
    "reject_new",
    "reject_static_field",
    "reject_static_method",
]
