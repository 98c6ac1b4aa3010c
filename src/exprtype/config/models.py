"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (EXPRTYPE__SECTION__KEY)
3. Project YAML (.exprtype/config.yaml)
4. Global YAML (~/.config/exprtype/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    EXPRTYPE__<SECTION>__<KEY>=<VALUE>

Examples:
    EXPRTYPE__LOGGING__LEVEL=DEBUG
    EXPRTYPE__INDEX__INDEX_PATH=/abs/path/to/index.yaml
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_INDEX_PATH = ".exprtype/index.yaml"


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        EXPRTYPE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG traces every root and chain step.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class IndexConfig(BaseModel):
    """Symbol index configuration.

    Env vars:
        EXPRTYPE__INDEX__INDEX_PATH: Location of the YAML/JSON symbol index
    """

    index_path: str = Field(
        default=DEFAULT_INDEX_PATH,
        description="Symbol index file. Relative paths are resolved against the project root.",
    )

    @field_validator("index_path")
    @classmethod
    def validate_index_path(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Index path must not be empty")
        return v

    def resolve_path(self, project_root: Path) -> Path:
        path = Path(self.index_path).expanduser()
        if path.is_absolute():
            return path
        return project_root / path


class ExprTypeConfig(BaseModel):
    """Root configuration for exprtype."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    index: IndexConfig = Field(default_factory=IndexConfig)
