"""Config module exports."""

from exprtype.config.loader import load_config
from exprtype.config.models import (
    ExprTypeConfig,
    IndexConfig,
    LoggingConfig,
    LogOutputConfig,
)

__all__ = [
    "load_config",
    "ExprTypeConfig",
    "IndexConfig",
    "LoggingConfig",
    "LogOutputConfig",
]
