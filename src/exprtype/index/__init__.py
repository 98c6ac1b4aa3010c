"""Symbol index: models, loading, and lookups."""

from exprtype.index.loader import load_index, parse_index
from exprtype.index.lookups import (
    ClassInfoLookup,
    ClassListLookup,
    GlobalFunctionLookup,
    NameResolver,
    VariableTypeLookup,
)
from exprtype.index.models import (
    ClassInfo,
    ClassRange,
    FileInfo,
    FunctionInfo,
    Member,
    NamespaceBlock,
    ReturnType,
    SymbolIndex,
)

__all__ = [
    "ClassInfo",
    "ClassInfoLookup",
    "ClassListLookup",
    "ClassRange",
    "FileInfo",
    "FunctionInfo",
    "GlobalFunctionLookup",
    "Member",
    "NameResolver",
    "NamespaceBlock",
    "ReturnType",
    "SymbolIndex",
    "VariableTypeLookup",
    "load_index",
    "parse_index",
]
