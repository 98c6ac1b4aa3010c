"""Symbol index records.

The index is produced by an external indexer and consumed read-only here.
Every record has a fixed shape; member lookups go through plain
``dict[str, Member]`` maps keyed by member name.

Class keys are fully-qualified names. They may be stored with or without
the leading namespace separator; lookups normalize it away.
"""

from pydantic import BaseModel, Field, model_validator


class ReturnType(BaseModel):
    """Return type descriptor of a member or function."""

    type: str | None = None  # As written in the declaration
    resolved_type: str | None = None  # Fully qualified


class Member(BaseModel):
    """A method, property or constant of a class."""

    return_type: ReturnType = Field(default_factory=ReturnType)


class ClassInfo(BaseModel):
    """Member signatures of one class, interface or trait."""

    name: str
    parents: list[str] = Field(default_factory=list)
    methods: dict[str, Member] = Field(default_factory=dict)
    properties: dict[str, Member] = Field(default_factory=dict)
    constants: dict[str, Member] = Field(default_factory=dict)


class ClassRange(BaseModel):
    """Declared line range of a class within a file (1-based, inclusive)."""

    start_line: int = Field(ge=1)
    end_line: int = Field(ge=1)
    parents: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_order(self) -> "ClassRange":
        if self.end_line < self.start_line:
            raise ValueError(f"end_line {self.end_line} precedes start_line {self.start_line}")
        return self

    def contains(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line


class NamespaceBlock(BaseModel):
    """A namespace declaration and the imports active inside it."""

    name: str = ""  # Empty for the global namespace
    start_line: int = Field(default=1, ge=1)
    end_line: int | None = None  # None = until end of file
    imports: dict[str, str] = Field(default_factory=dict)  # alias -> FQN

    def contains(self, line: int) -> bool:
        if line < self.start_line:
            return False
        return self.end_line is None or line <= self.end_line


class FileInfo(BaseModel):
    """Per-file index data."""

    classes: dict[str, ClassRange] = Field(default_factory=dict)  # Declaration order
    namespaces: list[NamespaceBlock] = Field(default_factory=list)


class FunctionInfo(BaseModel):
    """A global (non-member) function."""

    name: str
    return_type: ReturnType = Field(default_factory=ReturnType)


class SymbolIndex(BaseModel):
    """The complete symbol index shared by all lookups."""

    classes: dict[str, ClassInfo] = Field(default_factory=dict)
    files: dict[str, FileInfo] = Field(default_factory=dict)
    functions: dict[str, FunctionInfo] = Field(default_factory=dict)
