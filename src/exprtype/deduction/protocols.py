"""Collaborator interfaces the deducer depends on.

The bundled implementations live in ``exprtype.index.lookups``; any object
with matching methods can be injected instead.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from exprtype.index.models import ClassInfo, ClassRange, FunctionInfo


class VariableTypeProvider(Protocol):
    """Determines the type of a variable at an offset."""

    def get_variable_type(
        self, file: str | None, source: str, name: str, offset: int
    ) -> str | None:
        """Type of ``name`` (including its ``$``) at ``offset``, or None."""
        ...


class ClassListProvider(Protocol):
    """Enumerates the classes declared in a file."""

    def get_class_list(self, file: str | None) -> Mapping[str, ClassRange]:
        """FQN -> declared line range, in a stable enumeration order."""
        ...


class ClassInfoProvider(Protocol):
    """Fetches member signatures for a class."""

    def get_class_info(self, name: str) -> ClassInfo | None:
        ...


class NameResolverProvider(Protocol):
    """Resolves a bare class name as seen from a file and line."""

    def resolve_type(self, name: str, file: str | None, line: int) -> str | None:
        ...


class GlobalFunctionProvider(Protocol):
    """Enumerates global functions."""

    def get_global_functions(self) -> Mapping[str, FunctionInfo]:
        ...


class SpecialTypeClassifier(Protocol):
    def is_special_type(self, type_name: str | None) -> bool:
        ...
