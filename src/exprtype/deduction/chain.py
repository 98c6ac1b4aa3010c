"""Narrowing a type across a member-access chain."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from exprtype.core.logging import get_logger

if TYPE_CHECKING:
    from exprtype.deduction.protocols import ClassInfoProvider, SpecialTypeClassifier
    from exprtype.index.models import ClassInfo

log = get_logger("deduction.chain")

CALL_MARKER = "()"
NAMESPACE_ROOT = "\\"


class ChainTraverser:
    """Walks accessors left to right, looking each up on the current type.

    Per accessor:
    - containing ``()``: method call, the method's return type
    - naming a constant of the current type: the constant's type
    - otherwise: property access, the property's type

    A special current type ends the walk with None. A None current type
    does not: later accessors are still attempted and simply miss.
    """

    def __init__(
        self, class_info: ClassInfoProvider, type_analyzer: SpecialTypeClassifier
    ) -> None:
        self._class_info = class_info
        self._type_analyzer = type_analyzer

    def traverse(
        self,
        root_type: str | None,
        accessors: Sequence[str],
        needs_dollar_sign: bool = False,
    ) -> str | None:
        current = root_type

        for accessor in accessors:
            if self._type_analyzer.is_special_type(current):
                current = None
                break

            info = self._class_info.get_class_info(current) if current else None
            resolved = self._step(info, accessor, needs_dollar_sign)
            log.debug("chain_step", owner=current, accessor=accessor, type=resolved)
            current = resolved

            # Only the accessor right after a static-style root needs its $.
            needs_dollar_sign = False

        return self.normalize(current)

    def normalize(self, type_name: str | None) -> str | None:
        """Prefix non-special class names with the namespace root marker."""
        if not type_name or self._type_analyzer.is_special_type(type_name):
            return type_name or None
        if not type_name.startswith(NAMESPACE_ROOT):
            return NAMESPACE_ROOT + type_name
        return type_name

    def _step(self, info: ClassInfo | None, accessor: str, needs_dollar_sign: bool) -> str | None:
        if info is None:
            return None

        if CALL_MARKER in accessor:
            method = info.methods.get(accessor.replace(CALL_MARKER, ""))
            return method.return_type.resolved_type if method else None

        constant = info.constants.get(accessor)
        if constant is not None:
            return constant.return_type.resolved_type

        if needs_dollar_sign:
            if not accessor.startswith("$"):
                return None
            accessor = accessor[1:]

        prop = info.properties.get(accessor)
        return prop.return_type.resolved_type if prop else None
