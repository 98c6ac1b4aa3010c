"""Expression type deduction."""

from exprtype.deduction.chain import ChainTraverser
from exprtype.deduction.context import SourceContext
from exprtype.deduction.deducer import TypeDeducer
from exprtype.deduction.enclosing import EnclosingClassLocator
from exprtype.deduction.lines import byte_to_char_offset, line_of
from exprtype.deduction.root import RootKind, RootResolution, RootResolver, classify_root
from exprtype.deduction.special_types import CLOSURE_TYPE, TypeAnalyzer, is_special_type

__all__ = [
    "CLOSURE_TYPE",
    "ChainTraverser",
    "EnclosingClassLocator",
    "RootKind",
    "RootResolution",
    "RootResolver",
    "SourceContext",
    "TypeAnalyzer",
    "TypeDeducer",
    "byte_to_char_offset",
    "classify_root",
    "is_special_type",
    "line_of",
]
