"""Source position a deduction runs against."""

from dataclasses import dataclass

from exprtype.deduction.lines import line_of


@dataclass(frozen=True, slots=True)
class SourceContext:
    """File, source text and offset of the expression being deduced.

    ``offset`` is a str index into ``source``. ``file`` may be None when
    the source did not come from disk (e.g. stdin).
    """

    file: str | None
    source: str
    offset: int

    @property
    def line(self) -> int:
        return line_of(self.source, self.offset)
