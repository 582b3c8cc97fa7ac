"""Type resolvers: an in-memory registry and a Python class adapter."""

from .python import PythonTypeSystem, python_type_name
from .registry import PRIMITIVE_TYPES, TypeRegistry

__all__ = ["PRIMITIVE_TYPES", "PythonTypeSystem", "TypeRegistry", "python_type_name"]
