"""Index-backed collaborators for the type deducer.

Each lookup holds a reference to the shared SymbolIndex; ``set_index``
swaps it after an index reload.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from exprtype.deduction.lines import line_of
from exprtype.deduction.root import CLASS_NAME_PATTERN
from exprtype.deduction.special_types import is_special_type

if TYPE_CHECKING:
    from exprtype.deduction.protocols import NameResolverProvider
    from exprtype.deduction.enclosing import EnclosingClassLocator
    from exprtype.index.models import (
        ClassInfo,
        ClassRange,
        FunctionInfo,
        NamespaceBlock,
        SymbolIndex,
    )


class _IndexBacked:
    def __init__(self, index: SymbolIndex) -> None:
        self._index = index

    def set_index(self, index: SymbolIndex) -> None:
        self._index = index


class ClassInfoLookup(_IndexBacked):
    """Class member signatures by fully-qualified name."""

    def get_class_info(self, name: str) -> ClassInfo | None:
        bare = name.removeprefix("\\")
        classes = self._index.classes
        info = classes.get(bare)
        if info is None:
            info = classes.get("\\" + bare)
        return info


class ClassListLookup(_IndexBacked):
    """Class line ranges of a file, in declaration order."""

    def get_class_list(self, file: str | None) -> dict[str, ClassRange]:
        if file is None:
            return {}
        file_info = self._index.files.get(file)
        return dict(file_info.classes) if file_info else {}


class GlobalFunctionLookup(_IndexBacked):
    def get_global_functions(self) -> dict[str, FunctionInfo]:
        return self._index.functions


class NameResolver(_IndexBacked):
    """Resolves class names as written in a file to fully-qualified names.

    Resolution order:
    1. Special types and names starting with ``\\`` are returned unchanged
    2. A first segment matching an import alias (case-insensitive) of the
       namespace block containing the line is replaced by the import
    3. Otherwise the block's namespace is prepended

    Results carry a leading ``\\``.
    """

    def resolve_type(self, name: str, file: str | None, line: int) -> str | None:
        if not name:
            return None
        if is_special_type(name) or name.startswith("\\"):
            return name

        block = self._namespace_at(file, line)
        if block is None:
            return "\\" + name

        head, sep, rest = name.partition("\\")
        for alias, fqn in block.imports.items():
            if alias.lower() == head.lower():
                return "\\" + fqn.removeprefix("\\") + sep + rest

        namespace = block.name.strip("\\")
        if namespace:
            return f"\\{namespace}\\{name}"
        return "\\" + name

    def _namespace_at(self, file: str | None, line: int) -> NamespaceBlock | None:
        if file is None:
            return None
        file_info = self._index.files.get(file)
        if file_info is None:
            return None
        for block in file_info.namespaces:
            if block.contains(line):
                return block
        return None


# Type text inside a docblock, e.g. Foo, ?Foo, Foo[], Foo|null.
_DOC_TYPE = r"[\\\w|\[\]?]+"


class VariableTypeLookup(_IndexBacked):
    """Lightweight variable typing by scanning the source before an offset.

    ``$this`` is the enclosing class. Any other variable takes its type
    from the last of these that appears before the offset:

    - ``@var Foo $x`` or ``@var $x Foo`` docblock annotations
    - typed parameters and catch clauses, ``(Foo $x`` / ``, ?Foo $x``
    - assignments ``$x = new Foo``

    The type text is resolved through the name resolver at the line where
    it was found.
    """

    def __init__(
        self,
        index: SymbolIndex,
        *,
        name_resolver: NameResolverProvider,
        enclosing_class_locator: EnclosingClassLocator,
    ) -> None:
        super().__init__(index)
        self._name_resolver = name_resolver
        self._enclosing_class_locator = enclosing_class_locator

    def get_variable_type(
        self, file: str | None, source: str, name: str, offset: int
    ) -> str | None:
        if name == "$this":
            return self._enclosing_class_locator.locate(file, source, offset)

        variable = name.removeprefix("$")
        if not variable:
            return None

        prefix = source[: max(0, offset)]
        var = re.escape(variable)
        patterns = (
            rf"@var\s+({_DOC_TYPE})\s+\${var}\b",
            rf"@var\s+\${var}\s+({_DOC_TYPE})",
            rf"[(,]\s*\??({CLASS_NAME_PATTERN})\s+&?(?:\.\.\.)?\${var}\b",
            rf"\${var}\s*=\s*new\s+({CLASS_NAME_PATTERN})",
        )

        last: re.Match[str] | None = None
        for pattern in patterns:
            for match in re.finditer(pattern, prefix):
                if last is None or match.start() > last.start():
                    last = match

        if last is None:
            return None

        type_name = _clean_type(last.group(1))
        if type_name is None or is_special_type(type_name):
            return type_name
        return self._name_resolver.resolve_type(type_name, file, line_of(source, last.start()))


def _clean_type(text: str) -> str | None:
    """Reduce docblock type text to a single type name."""
    candidates = [part.lstrip("?") for part in text.split("|")]
    candidates = [part for part in candidates if part and part.lower() != "null"]
    if not candidates:
        return None
    type_name = candidates[0]
    if type_name.endswith("[]"):
        return "array"
    return type_name
