"""Locating the class that encloses a source offset."""

from __future__ import annotations

from typing import TYPE_CHECKING

from exprtype.deduction.lines import line_of

if TYPE_CHECKING:
    from exprtype.deduction.protocols import ClassListProvider
    from exprtype.index.models import ClassRange


class EnclosingClassLocator:
    """Finds the class whose declared line range contains an offset.

    Ranges are scanned in the order the class list enumerates them and the
    first containing range wins. For nested or overlapping ranges that
    makes enumeration order authoritative.
    """

    def __init__(self, class_list: ClassListProvider) -> None:
        self._class_list = class_list

    def locate(self, file: str | None, source: str, offset: int) -> str | None:
        located = self.locate_range(file, source, offset)
        return located[0] if located is not None else None

    def locate_range(
        self, file: str | None, source: str, offset: int
    ) -> tuple[str, ClassRange] | None:
        """Like ``locate`` but also returns the matching range record."""
        line = line_of(source, offset)

        for fqn, class_range in self._class_list.get_class_list(file).items():
            if class_range.contains(line):
                return fqn, class_range

        return None
