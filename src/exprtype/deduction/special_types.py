"""Classification of built-in pseudo types."""

SPECIAL_TYPES = frozenset(
    {
        "int",
        "float",
        "bool",
        "string",
        "array",
        "closure",
        "mixed",
        "null",
        "void",
        "self",
        "static",
        "parent",
    }
)

# Result of ``function () {...}`` roots.
CLOSURE_TYPE = "\\Closure"


def is_special_type(type_name: str | None) -> bool:
    """Whether ``type_name`` is a pseudo type with no member index.

    Case-insensitive; a single leading namespace separator is ignored,
    so ``\\Closure`` counts as the closure pseudo type.
    """
    if not type_name:
        return False
    return type_name.removeprefix("\\").lower() in SPECIAL_TYPES


class TypeAnalyzer:
    """Special-type classifier handed to the deducer."""

    def is_special_type(self, type_name: str | None) -> bool:
        return is_special_type(type_name)
