"""Offset to line mapping."""


def line_of(source: str, offset: int) -> int:
    """1-based line number of ``offset`` within ``source``.

    Counts the newlines before ``offset``. Offsets outside the source are
    clamped to it.
    """
    offset = max(0, min(offset, len(source)))
    return source.count("\n", 0, offset) + 1


def byte_to_char_offset(source: str, byte_offset: int, encoding: str = "utf-8") -> int:
    """Convert a byte offset into ``source`` (as encoded) to a str index.

    A byte offset that lands inside a multi-byte character maps to the
    start of that character.
    """
    if byte_offset <= 0:
        return 0
    prefix = source.encode(encoding)[:byte_offset]
    return len(prefix.decode(encoding, errors="ignore"))
