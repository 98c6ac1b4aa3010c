"""Tests for index/lookups.py - index-backed collaborators."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from exprtype.deduction.enclosing import EnclosingClassLocator
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
    NamespaceBlock,
    ReturnType,
    SymbolIndex,
)


@pytest.fixture
def index() -> SymbolIndex:
    return SymbolIndex(
        classes={
            "App\\Foo": ClassInfo(name="App\\Foo"),
            "\\Legacy": ClassInfo(name="\\Legacy"),
        },
        files={
            "src/Foo.php": FileInfo(
                namespaces=[
                    NamespaceBlock(
                        name="App",
                        start_line=3,
                        end_line=40,
                        imports={"Response": "Http\\Response", "Models": "\\App\\Models"},
                    ),
                    NamespaceBlock(name="", start_line=41),
                ],
                classes={
                    "App\\Foo": ClassRange(start_line=7, end_line=30),
                    "App\\Other": ClassRange(start_line=32, end_line=40),
                },
            )
        },
        functions={"strlen": FunctionInfo(name="strlen", return_type=ReturnType(type="int"))},
    )


class TestClassInfoLookup:
    def test_finds_with_or_without_leading_separator(self, index: SymbolIndex) -> None:
        lookup = ClassInfoLookup(index)
        assert lookup.get_class_info("App\\Foo") is index.classes["App\\Foo"]
        assert lookup.get_class_info("\\App\\Foo") is index.classes["App\\Foo"]

    def test_finds_keys_stored_with_leading_separator(self, index: SymbolIndex) -> None:
        lookup = ClassInfoLookup(index)
        assert lookup.get_class_info("Legacy") is index.classes["\\Legacy"]

    def test_unknown_class_is_none(self, index: SymbolIndex) -> None:
        assert ClassInfoLookup(index).get_class_info("Nope") is None

    def test_set_index_redirects(self, index: SymbolIndex) -> None:
        lookup = ClassInfoLookup(SymbolIndex())
        assert lookup.get_class_info("App\\Foo") is None

        lookup.set_index(index)

        assert lookup.get_class_info("App\\Foo") is not None


class TestClassListLookup:
    def test_returns_ranges_in_declaration_order(self, index: SymbolIndex) -> None:
        classes = ClassListLookup(index).get_class_list("src/Foo.php")
        assert list(classes) == ["App\\Foo", "App\\Other"]

    def test_unknown_or_missing_file_is_empty(self, index: SymbolIndex) -> None:
        lookup = ClassListLookup(index)
        assert lookup.get_class_list("src/Nope.php") == {}
        assert lookup.get_class_list(None) == {}


class TestGlobalFunctionLookup:
    def test_returns_all_functions(self, index: SymbolIndex) -> None:
        functions = GlobalFunctionLookup(index).get_global_functions()
        assert functions["strlen"].return_type.type == "int"


class TestNameResolver:
    @pytest.fixture
    def resolver(self, index: SymbolIndex) -> NameResolver:
        return NameResolver(index)

    def test_fully_qualified_unchanged(self, resolver: NameResolver) -> None:
        assert resolver.resolve_type("\\Some\\Thing", "src/Foo.php", 10) == "\\Some\\Thing"

    def test_special_type_unchanged(self, resolver: NameResolver) -> None:
        assert resolver.resolve_type("int", "src/Foo.php", 10) == "int"

    def test_import_alias(self, resolver: NameResolver) -> None:
        assert resolver.resolve_type("Response", "src/Foo.php", 10) == "\\Http\\Response"

    def test_import_alias_case_insensitive(self, resolver: NameResolver) -> None:
        assert resolver.resolve_type("response", "src/Foo.php", 10) == "\\Http\\Response"

    def test_partially_qualified_through_import(self, resolver: NameResolver) -> None:
        result = resolver.resolve_type("Models\\User", "src/Foo.php", 10)
        assert result == "\\App\\Models\\User"

    def test_current_namespace_prepended(self, resolver: NameResolver) -> None:
        assert resolver.resolve_type("Bar", "src/Foo.php", 10) == "\\App\\Bar"

    def test_global_namespace_block(self, resolver: NameResolver) -> None:
        assert resolver.resolve_type("Bar", "src/Foo.php", 45) == "\\Bar"

    def test_outside_any_block(self, resolver: NameResolver) -> None:
        assert resolver.resolve_type("Bar", "src/Foo.php", 1) == "\\Bar"

    def test_unknown_file(self, resolver: NameResolver) -> None:
        assert resolver.resolve_type("Bar", None, 1) == "\\Bar"

    def test_empty_name(self, resolver: NameResolver) -> None:
        assert resolver.resolve_type("", "src/Foo.php", 10) is None


class TestVariableTypeLookup:
    @pytest.fixture
    def lookup(self, index: SymbolIndex) -> VariableTypeLookup:
        return VariableTypeLookup(
            index,
            name_resolver=NameResolver(index),
            enclosing_class_locator=EnclosingClassLocator(ClassListLookup(index)),
        )

    def _source(self, body: str) -> str:
        # Body starts on line 10, inside App\Foo (lines 7-30) and namespace App.
        return "<?php\n" + "\n" * 8 + body

    def test_this_is_enclosing_class(self, lookup: VariableTypeLookup) -> None:
        source = self._source("$this->bar();\n")
        assert lookup.get_variable_type("src/Foo.php", source, "$this", len(source)) == "App\\Foo"

    def test_new_assignment(self, lookup: VariableTypeLookup) -> None:
        source = self._source("$x = new Response();\n$x->")
        assert lookup.get_variable_type("src/Foo.php", source, "$x", len(source)) == (
            "\\Http\\Response"
        )

    def test_var_annotation(self, lookup: VariableTypeLookup) -> None:
        source = self._source("/** @var Bar $x */\n$x = make();\n$x->")
        assert lookup.get_variable_type("src/Foo.php", source, "$x", len(source)) == "\\App\\Bar"

    def test_var_annotation_name_first(self, lookup: VariableTypeLookup) -> None:
        source = self._source("/** @var $x \\Other\\Thing */\n$x->")
        assert lookup.get_variable_type("src/Foo.php", source, "$x", len(source)) == (
            "\\Other\\Thing"
        )

    def test_nullable_union_annotation(self, lookup: VariableTypeLookup) -> None:
        source = self._source("/** @var null|Bar $x */\n$x->")
        assert lookup.get_variable_type("src/Foo.php", source, "$x", len(source)) == "\\App\\Bar"

    def test_array_annotation_is_array(self, lookup: VariableTypeLookup) -> None:
        source = self._source("/** @var Bar[] $items */\n$items")
        assert lookup.get_variable_type("src/Foo.php", source, "$items", len(source)) == "array"

    def test_typed_parameter(self, lookup: VariableTypeLookup) -> None:
        source = self._source("public function run(int $n, ?Bar $bar) {\n    $bar->")
        assert lookup.get_variable_type("src/Foo.php", source, "$bar", len(source)) == "\\App\\Bar"
        assert lookup.get_variable_type("src/Foo.php", source, "$n", len(source)) == "int"

    def test_last_occurrence_before_offset_wins(self, lookup: VariableTypeLookup) -> None:
        source = self._source("$x = new Bar();\n$x = new Response();\n")
        first_end = source.index("$x = new Response")

        assert lookup.get_variable_type("src/Foo.php", source, "$x", first_end) == "\\App\\Bar"
        assert lookup.get_variable_type("src/Foo.php", source, "$x", len(source)) == (
            "\\Http\\Response"
        )

    def test_return_statement_is_not_a_type(self, lookup: VariableTypeLookup) -> None:
        source = self._source("return $x;\n")
        assert lookup.get_variable_type("src/Foo.php", source, "$x", len(source)) is None

    def test_other_variable_names_ignored(self, lookup: VariableTypeLookup) -> None:
        source = self._source("$xy = new Bar();\n")
        assert lookup.get_variable_type("src/Foo.php", source, "$x", len(source)) is None

    def test_resolves_at_line_of_declaration(self) -> None:
        resolver = MagicMock()
        resolver.resolve_type.return_value = "\\Resolved"
        lookup = VariableTypeLookup(
            SymbolIndex(),
            name_resolver=resolver,
            enclosing_class_locator=MagicMock(),
        )
        source = "<?php\n\n$x = new Thing;\n\n\n$x"

        result = lookup.get_variable_type("a.php", source, "$x", len(source))

        assert result == "\\Resolved"
        resolver.resolve_type.assert_called_once_with("Thing", "a.php", 3)
