"""Expression type deduction entry point.

Given an expression split into fragments, e.g. ``["$foo", "getBar()",
"baz"]`` for ``$foo->getBar()->baz``, determine the type the whole
expression evaluates to::

    deducer = TypeDeducer(load_index(Path(".exprtype/index.yaml")))
    deducer.deduce_type("src/A.php", source, ["$foo", "getBar()"], offset)
    # -> "\\Vendor\\Bar" or None

The root fragment is resolved first (see ``root.py``), then each accessor
narrows the type through the class index (see ``chain.py``).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from exprtype.core.logging import deduction_scope, get_logger
from exprtype.deduction.chain import ChainTraverser
from exprtype.deduction.context import SourceContext
from exprtype.deduction.enclosing import EnclosingClassLocator
from exprtype.deduction.root import RootResolver
from exprtype.deduction.special_types import TypeAnalyzer

if TYPE_CHECKING:
    from exprtype.deduction.protocols import (
        ClassInfoProvider,
        ClassListProvider,
        GlobalFunctionProvider,
        NameResolverProvider,
        SpecialTypeClassifier,
        VariableTypeProvider,
    )
    from exprtype.index.models import SymbolIndex

log = get_logger("deduction")


class TypeDeducer:
    """Deduces the type of expression chains.

    Collaborators can be injected; any left out are built on first use
    from the shared symbol index and cached for the lifetime of the
    deducer. ``set_index`` redirects every collaborator to a new index.

    Not thread-safe: use one deducer per thread.
    """

    def __init__(
        self,
        index: SymbolIndex | None = None,
        *,
        variable_types: VariableTypeProvider | None = None,
        class_list: ClassListProvider | None = None,
        class_info: ClassInfoProvider | None = None,
        name_resolver: NameResolverProvider | None = None,
        global_functions: GlobalFunctionProvider | None = None,
        type_analyzer: SpecialTypeClassifier | None = None,
    ) -> None:
        self._index = index
        self._variable_types = variable_types
        self._class_list = class_list
        self._class_info = class_info
        self._name_resolver = name_resolver
        self._global_functions = global_functions
        self._type_analyzer = type_analyzer
        self._enclosing_class_locator: EnclosingClassLocator | None = None
        self._root_resolver: RootResolver | None = None
        self._chain_traverser: ChainTraverser | None = None

    # =========================================================================
    # Index
    # =========================================================================

    @property
    def index(self) -> SymbolIndex:
        if self._index is None:
            from exprtype.index.models import SymbolIndex

            self._index = SymbolIndex()
        return self._index

    def set_index(self, index: SymbolIndex) -> None:
        """Point the deducer and every collaborator built so far at ``index``."""
        self._index = index

        collaborators: list[Any] = [
            self._variable_types,
            self._class_list,
            self._class_info,
            self._name_resolver,
            self._global_functions,
        ]
        for collaborator in collaborators:
            if collaborator is not None and hasattr(collaborator, "set_index"):
                collaborator.set_index(index)

    # =========================================================================
    # Collaborators
    # =========================================================================

    @property
    def class_info(self) -> ClassInfoProvider:
        if self._class_info is None:
            from exprtype.index.lookups import ClassInfoLookup

            self._class_info = ClassInfoLookup(self.index)
        return self._class_info

    @property
    def class_list(self) -> ClassListProvider:
        if self._class_list is None:
            from exprtype.index.lookups import ClassListLookup

            self._class_list = ClassListLookup(self.index)
        return self._class_list

    @property
    def name_resolver(self) -> NameResolverProvider:
        if self._name_resolver is None:
            from exprtype.index.lookups import NameResolver

            self._name_resolver = NameResolver(self.index)
        return self._name_resolver

    @property
    def global_functions(self) -> GlobalFunctionProvider:
        if self._global_functions is None:
            from exprtype.index.lookups import GlobalFunctionLookup

            self._global_functions = GlobalFunctionLookup(self.index)
        return self._global_functions

    @property
    def variable_types(self) -> VariableTypeProvider:
        if self._variable_types is None:
            from exprtype.index.lookups import VariableTypeLookup

            self._variable_types = VariableTypeLookup(
                self.index,
                name_resolver=self.name_resolver,
                enclosing_class_locator=self.enclosing_class_locator,
            )
        return self._variable_types

    @property
    def type_analyzer(self) -> SpecialTypeClassifier:
        if self._type_analyzer is None:
            self._type_analyzer = TypeAnalyzer()
        return self._type_analyzer

    @property
    def enclosing_class_locator(self) -> EnclosingClassLocator:
        if self._enclosing_class_locator is None:
            self._enclosing_class_locator = EnclosingClassLocator(self.class_list)
        return self._enclosing_class_locator

    @property
    def root_resolver(self) -> RootResolver:
        if self._root_resolver is None:
            self._root_resolver = RootResolver(self)
        return self._root_resolver

    @property
    def chain_traverser(self) -> ChainTraverser:
        if self._chain_traverser is None:
            self._chain_traverser = ChainTraverser(self.class_info, self.type_analyzer)
        return self._chain_traverser

    # =========================================================================
    # Deduction
    # =========================================================================

    def deduce_type(
        self,
        file: str | None,
        source: str,
        parts: Sequence[str],
        offset: int,
    ) -> str | None:
        """Type of the expression ``parts`` at ``offset`` in ``source``, or None.

        Args:
            file: Path identifying the source in the index, if any
            source: Full source text
            parts: Expression fragments, root first
            offset: Cursor position as a str index into ``source``
        """
        with deduction_scope(file, offset):
            return self.deduce(SourceContext(file=file, source=source, offset=offset), parts)

    def deduce(self, context: SourceContext, parts: Sequence[str]) -> str | None:
        if not parts:
            return None

        root, *accessors = parts
        resolution = self.root_resolver.resolve(root, context)
        log.debug(
            "root_resolved",
            root=root,
            kind=resolution.kind.value if resolution.kind else None,
            type=resolution.type,
        )

        if not resolution.type:
            return None

        result = self.chain_traverser.traverse(
            resolution.type, accessors, resolution.needs_dollar_sign
        )
        log.debug("deduction_complete", parts=list(parts), type=result)
        return result
