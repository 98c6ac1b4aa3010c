"""Core module exports."""

from exprtype.core.errors import (
    ConfigError,
    ErrorCode,
    ExprTypeError,
    IndexLoadError,
    InputError,
    InternalError,
)
from exprtype.core.logging import (
    clear_request_id,
    configure_logging,
    deduction_scope,
    get_logger,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "ExprTypeError",
    "IndexLoadError",
    "InputError",
    "InternalError",
    # Logging
    "clear_request_id",
    "configure_logging",
    "deduction_scope",
    "get_logger",
    "get_request_id",
    "set_request_id",
]
