"""Describe live Python classes as TypeInfo graphs.

Lets an interpreter embedded in a Python host guard attribute access on host
objects with the same signature catalog machinery:

- plain functions in a class body are instance methods, ``staticmethod`` and
  ``classmethod`` entries are static methods;
- parameter types come from annotations, unannotated parameters are ``object``;
- every class has one constructor shaped like its effective ``__init__``;
- annotated attributes and properties are instance fields, ``ClassVar``
  annotations and plain class attributes are static fields.
"""

from __future__ import annotations

import builtins
import importlib
import inspect
import typing
from typing import Any, Callable

from ..errors import UnknownTypeError
from ..models.types import TypeInfo
from ..naming import ARRAY_SUFFIX

_CONSTRUCTOR_NAMES = frozenset({"__init__", "__new__"})


def python_type_name(cls: type) -> str:
    """Builtins go by their bare name, everything else by module and qualname."""
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def _is_classvar(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar


class PythonTypeSystem:
    """TypeResolver backed by Python classes. Descriptions are memoized."""

    def __init__(self) -> None:
        self._described: dict[type, TypeInfo] = {}
        self._arrays: dict[str, TypeInfo] = {}

    def describe(self, cls: type) -> TypeInfo:
        info = self._described.get(cls)
        if info is not None:
            return info

        info = TypeInfo(python_type_name(cls))
        # Registered before walking members so self-referencing annotations terminate.
        self._described[cls] = info
        if cls is not object:
            bases = [b for b in cls.__bases__ if b is not object]
            info.superclass = self.describe(bases[0] if bases else object)
            info.interfaces = tuple(self.describe(b) for b in bases[1:])

        self._describe_methods(cls, info)
        self._describe_constructor(cls, info)
        self._describe_fields(cls, info)
        return info

    def resolve(self, name: str) -> TypeInfo:
        if name.endswith(ARRAY_SUFFIX):
            component = self.resolve(name[: -len(ARRAY_SUFFIX)])
            key = component.canonical_name
            if key not in self._arrays:
                self._arrays[key] = TypeInfo(
                    key + ARRAY_SUFFIX, superclass=self.describe(object), component_type=component
                )
            return self._arrays[key]
        return self.describe(self._load_class(name))

    def type_of(self, value: Any) -> TypeInfo:
        return self.describe(type(value))

    def _load_class(self, name: str) -> type:
        if "." not in name:
            candidate = getattr(builtins, name, None)
            if isinstance(candidate, type):
                return candidate
            raise UnknownTypeError(name, "not a builtin type")

        parts = name.split(".")
        for split in range(len(parts) - 1, 0, -1):
            module_name = ".".join(parts[:split])
            try:
                obj: Any = importlib.import_module(module_name)
            except ImportError:
                continue
            except Exception as e:
                # Malformed names and modules that fail while importing.
                raise UnknownTypeError(name, f"cannot import {module_name}: {e}") from e
            for attr in parts[split:]:
                obj = getattr(obj, attr, None)
                if obj is None:
                    break
            if isinstance(obj, type):
                return obj
            raise UnknownTypeError(name, f"no class {'.'.join(parts[split:])} in {'.'.join(parts[:split])}")
        raise UnknownTypeError(name, "module not importable")

    def _parameter_types(self, func: Callable[..., Any], bound: bool) -> tuple[TypeInfo, ...]:
        try:
            hints = typing.get_type_hints(func)
        except (NameError, TypeError):
            hints = {}
        params = list(inspect.signature(func).parameters.values())
        if bound:
            params = params[1:]
        types = []
        for param in params:
            if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                continue
            types.append(self._type_for_hint(hints.get(param.name)))
        return tuple(types)

    def _type_for_hint(self, hint: Any) -> TypeInfo:
        if isinstance(hint, type):
            return self.describe(hint)
        origin = typing.get_origin(hint)
        if isinstance(origin, type):
            return self.describe(origin)
        return self.describe(object)

    def _describe_methods(self, cls: type, info: TypeInfo) -> None:
        for name, attr in vars(cls).items():
            if name in _CONSTRUCTOR_NAMES:
                continue
            if isinstance(attr, (staticmethod, classmethod)):
                if inspect.isfunction(attr.__func__):
                    bound = isinstance(attr, classmethod)
                    info.declare_method(name, *self._parameter_types(attr.__func__, bound), static=True)
            elif inspect.isfunction(attr):
                info.declare_method(name, *self._parameter_types(attr, True))

    def _describe_constructor(self, cls: type, info: TypeInfo) -> None:
        init = cls.__init__
        if inspect.isfunction(init):
            info.declare_constructor(*self._parameter_types(init, True))
        else:
            # Slot wrappers (object.__init__ and C types) take nothing we can describe.
            info.declare_constructor()

    def _describe_fields(self, cls: type, info: TypeInfo) -> None:
        annotations = inspect.get_annotations(cls)
        for name, annotation in annotations.items():
            info.declare_field(name, static=_is_classvar(annotation), public=not name.startswith("_"))

        for name, attr in vars(cls).items():
            if name in annotations or (name.startswith("__") and name.endswith("__")):
                continue
            if inspect.isdatadescriptor(attr):
                info.declare_field(name, public=not name.startswith("_"))
            elif isinstance(attr, (staticmethod, classmethod, type)) or callable(attr):
                continue
            else:
                info.declare_field(name, static=True, public=not name.startswith("_"))
