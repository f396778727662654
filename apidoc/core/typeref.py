from __future__ import annotations

import importlib
import inspect
from typing import Dict, Optional

from apidoc.core.errors import UnresolvedType

NAMESPACE_SEPARATORS = (".", "\\")


def normalize_type_ref(name: str) -> str:
    """Drop one leading namespace separator; annotations are written both ways."""
    name = (name or "").strip()
    if name[:1] in NAMESPACE_SEPARATORS:
        name = name[1:]
    return name


def qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


class TypeRegistry:
    """
    Turns the class names written in annotations into classes.

    Resolution order:
      1) classes registered with register()
      2) aliases (short name -> dotted path)
      3) import of 'package.module.Class' or 'package.module:Class'
    """

    def __init__(self, aliases: Optional[Dict[str, str]] = None):
        self._types: Dict[str, type] = {}
        self._aliases: Dict[str, str] = dict(aliases or {})

    def register(self, cls: type, *, name: Optional[str] = None) -> type:
        self._types[name or cls.__name__] = cls
        self._types[qualified_name(cls)] = cls
        return cls

    def alias(self, name: str, target: str) -> None:
        self._aliases[name] = target

    def resolve_type(self, name: str) -> type:
        ref = normalize_type_ref(name)
        if not ref:
            raise UnresolvedType(name, "empty type reference")

        if ref in self._types:
            return self._types[ref]

        target = self._aliases.get(ref, ref)
        if target in self._types:
            return self._types[target]

        return self._import(target, original=name)

    def _import(self, target: str, *, original: str) -> type:
        if ":" in target:
            module_name, _, attr_path = target.partition(":")
        elif "." in target:
            module_name, _, attr_path = target.rpartition(".")
        else:
            raise UnresolvedType(original, "not registered and not an importable dotted path")

        try:
            obj = importlib.import_module(module_name)
        except ImportError as e:
            raise UnresolvedType(original, str(e)) from e

        for part in attr_path.split("."):
            try:
                obj = getattr(obj, part)
            except AttributeError as e:
                raise UnresolvedType(original, f"module '{module_name}' has no attribute '{attr_path}'") from e

        if not inspect.isclass(obj):
            raise UnresolvedType(original, f"'{target}' is not a class")
        return obj
