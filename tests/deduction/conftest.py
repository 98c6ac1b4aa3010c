"""Shared fixtures for deduction tests."""

from __future__ import annotations

import pytest

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

# Line 1: <?php, line 2: namespace, class A on lines 4-13, class B on lines 15-20.
SOURCE = """\
<?php
namespace NS;

class A extends Base
{
    public $prop;

    public function run(Foo $f)
    {
        self::$prop;
        $f->bar();
    }
}

class B
{
    public function run()
    {
    }
}
"""

FILE = "src/NS/A.php"


def member(resolved_type: str | None) -> Member:
    return Member(return_type=ReturnType(type=resolved_type, resolved_type=resolved_type))


@pytest.fixture
def source() -> str:
    return SOURCE


@pytest.fixture
def offset_in_a() -> int:
    return SOURCE.index("self::$prop")


@pytest.fixture
def offset_in_b() -> int:
    return SOURCE.index("    }\n}\n", SOURCE.index("class B"))


@pytest.fixture
def index() -> SymbolIndex:
    return SymbolIndex(
        classes={
            "NS\\A": ClassInfo(
                name="NS\\A",
                parents=["NS\\Base"],
                methods={"make": member("NS\\A"), "count": member("int")},
                properties={"prop": member("\\NS\\B"), "self": member("NS\\A")},
                constants={"INSTANCE": member("NS\\A")},
            ),
            "NS\\Base": ClassInfo(
                name="NS\\Base",
                methods={"base": member("NS\\Base")},
            ),
            "NS\\B": ClassInfo(
                name="NS\\B",
                methods={"toFoo": member("NS\\Foo")},
                properties={"a": member("NS\\A")},
            ),
            "NS\\Foo": ClassInfo(
                name="NS\\Foo",
                methods={"bar": member("Baz"), "toB": member("NS\\B")},
                properties={"b": member("NS\\B")},
            ),
            "Baz": ClassInfo(name="Baz"),
        },
        files={
            FILE: FileInfo(
                namespaces=[NamespaceBlock(name="NS", start_line=2)],
                classes={
                    "NS\\A": ClassRange(start_line=4, end_line=13, parents=["NS\\Base"]),
                    "NS\\B": ClassRange(start_line=15, end_line=20),
                },
            )
        },
        functions={
            "make_foo": FunctionInfo(
                name="make_foo", return_type=ReturnType(type="NS\\Foo", resolved_type="NS\\B")
            ),
            "strlen": FunctionInfo(name="strlen", return_type=ReturnType(type="int")),
        },
    )
