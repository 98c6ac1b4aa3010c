"""Root fragment classification and resolution.

The first fragment of an expression chain establishes the starting type.
It is classified against an ordered rule table; the first matching rule
wins. ``new``/``clone`` must be tried before the generic call and class
name rules, otherwise ``new Foo()`` would be read as a call to a global
function named ``new Foo``.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from exprtype.deduction.special_types import CLOSURE_TYPE

if TYPE_CHECKING:
    from exprtype.deduction.context import SourceContext
    from exprtype.deduction.deducer import TypeDeducer


class RootKind(str, Enum):
    """Syntactic variants a root fragment can take."""

    VARIABLE = "variable"
    CURRENT_CLASS = "current_class"  # self, static
    PARENT_CLASS = "parent_class"
    ARRAY_LITERAL = "array_literal"  # [...]
    INT_LITERAL = "int_literal"
    FLOAT_LITERAL = "float_literal"
    BOOL_LITERAL = "bool_literal"
    STRING_LITERAL = "string_literal"
    ARRAY_CONSTRUCT = "array_construct"  # array(...)
    CLOSURE = "closure"  # function (...) {...}
    NEW = "new"
    CLONE = "clone"
    FUNCTION_CALL = "function_call"
    CLASS_NAME = "class_name"


# Optionally fully-qualified class name, e.g. Foo, \Foo, Foo\Bar_Baz.
CLASS_NAME_PATTERN = r"\\?[A-Za-z_][A-Za-z0-9_]*(?:\\[A-Za-z_][A-Za-z0-9_]*)*"

_Matcher = Callable[[str], "re.Match[str] | None"]

# Order is significant.
ROOT_RULES: tuple[tuple[RootKind, _Matcher], ...] = (
    (RootKind.VARIABLE, re.compile(r"\$").match),
    (RootKind.CURRENT_CLASS, re.compile(r"static|self").fullmatch),
    (RootKind.PARENT_CLASS, re.compile(r"parent").fullmatch),
    (RootKind.ARRAY_LITERAL, re.compile(r"\[").match),
    (RootKind.INT_LITERAL, re.compile(r"(?:0x)?[0-9]+").fullmatch),
    (RootKind.FLOAT_LITERAL, re.compile(r"[0-9]+\.[0-9]+").fullmatch),
    (RootKind.BOOL_LITERAL, re.compile(r"true|false").fullmatch),
    (RootKind.STRING_LITERAL, re.compile(r"\"[\s\S]*\"|'[\s\S]*'").fullmatch),
    (RootKind.ARRAY_CONSTRUCT, re.compile(r"array\s*\(").match),
    (RootKind.CLOSURE, re.compile(r"function\s*\(").match),
    (RootKind.NEW, re.compile(rf"new\s+({CLASS_NAME_PATTERN})(?:\(\))?").match),
    (RootKind.CLONE, re.compile(r"clone\s+(\$[A-Za-z0-9_]+)").match),
    (RootKind.FUNCTION_CALL, re.compile(r"(.*?)\(\)", re.DOTALL).fullmatch),
    # Unanchored: the first name-shaped run is taken, e.g. Foo in Foo::bar.
    (RootKind.CLASS_NAME, re.compile(CLASS_NAME_PATTERN).search),
)

_FIXED_TYPES: dict[RootKind, str] = {
    RootKind.ARRAY_LITERAL: "array",
    RootKind.INT_LITERAL: "int",
    RootKind.FLOAT_LITERAL: "float",
    RootKind.BOOL_LITERAL: "bool",
    RootKind.STRING_LITERAL: "string",
    RootKind.ARRAY_CONSTRUCT: "array",
    RootKind.CLOSURE: CLOSURE_TYPE,
}


def classify_root(fragment: str) -> tuple[RootKind, re.Match[str]] | None:
    """Return the first rule matching ``fragment``, or None."""
    for kind, matcher in ROOT_RULES:
        match = matcher(fragment)
        if match is not None:
            return kind, match
    return None


@dataclass(frozen=True, slots=True)
class RootResolution:
    """Starting type of a chain.

    ``needs_dollar_sign`` is set for static-style roots (``self``,
    ``static``, ``parent``, class names): the accessor right after them is
    only a property access when written with its ``$``.
    """

    type: str | None
    needs_dollar_sign: bool = False
    kind: RootKind | None = None


class RootResolver:
    """Resolves root fragments using the deducer's collaborators.

    ``new``/``clone`` roots recurse into the owning deducer.
    """

    def __init__(self, deducer: TypeDeducer) -> None:
        self._deducer = deducer

    def resolve(self, fragment: str, context: SourceContext) -> RootResolution:
        classified = classify_root(fragment)
        if classified is None:
            return RootResolution(type=None)

        kind, match = classified

        if kind in _FIXED_TYPES:
            return RootResolution(type=_FIXED_TYPES[kind], kind=kind)

        if kind is RootKind.VARIABLE:
            variable_type = self._deducer.variable_types.get_variable_type(
                context.file, context.source, fragment, context.offset
            )
            return RootResolution(type=variable_type, kind=kind)

        if kind is RootKind.CURRENT_CLASS:
            return RootResolution(
                type=self._current_class(context), needs_dollar_sign=True, kind=kind
            )

        if kind is RootKind.PARENT_CLASS:
            return RootResolution(
                type=self._parent_class(context), needs_dollar_sign=True, kind=kind
            )

        if kind in (RootKind.NEW, RootKind.CLONE):
            return RootResolution(
                type=self._deducer.deduce(context, [match.group(1)]), kind=kind
            )

        if kind is RootKind.FUNCTION_CALL:
            return RootResolution(type=self._function_return_type(match.group(1)), kind=kind)

        # RootKind.CLASS_NAME
        resolved = self._deducer.name_resolver.resolve_type(
            match.group(0), context.file, context.line
        )
        return RootResolution(type=resolved, needs_dollar_sign=True, kind=kind)

    def _current_class(self, context: SourceContext) -> str | None:
        return self._deducer.enclosing_class_locator.locate(
            context.file, context.source, context.offset
        )

    def _parent_class(self, context: SourceContext) -> str | None:
        located = self._deducer.enclosing_class_locator.locate_range(
            context.file, context.source, context.offset
        )
        if located is None:
            return None

        current, class_range = located
        # The class record is authoritative; the range only fills in for
        # classes missing from the class index.
        info = self._deducer.class_info.get_class_info(current)
        parents = info.parents if info is not None else class_range.parents
        return parents[0] if parents else current

    def _function_return_type(self, name: str) -> str | None:
        functions = self._deducer.global_functions.get_global_functions()
        function = functions.get(name)
        if function is None:
            function = functions.get(name.removeprefix("\\"))
        if function is None:
            return None
        return function.return_type.type
