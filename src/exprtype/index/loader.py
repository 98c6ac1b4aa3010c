"""Loading the symbol index from YAML or JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from exprtype.core.errors import IndexLoadError
from exprtype.core.logging import get_logger
from exprtype.index.models import SymbolIndex

log = get_logger("index.loader")


def _read_raw(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise IndexLoadError.parse_error(str(path), str(e)) from e
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise IndexLoadError.parse_error(str(path), str(e)) from e


def parse_index(data: Any, *, source: str = "<memory>") -> SymbolIndex:
    """Validate raw index data into a SymbolIndex.

    ``None`` (an empty document) yields an empty index.
    """
    if data is None:
        return SymbolIndex()
    if not isinstance(data, dict):
        raise IndexLoadError.parse_error(source, "top-level value must be a mapping")
    try:
        return SymbolIndex.model_validate(data)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise IndexLoadError.invalid_schema(source, field, err["msg"]) from e


def load_index(path: Path) -> SymbolIndex:
    """Load a symbol index file.

    ``.json`` files are parsed as JSON, anything else as YAML.

    Raises:
        IndexLoadError: If the file is missing, unparsable, or malformed.
    """
    if not path.is_file():
        raise IndexLoadError.file_not_found(str(path))

    index = parse_index(_read_raw(path), source=str(path))
    log.info(
        "index_loaded",
        path=str(path),
        classes=len(index.classes),
        files=len(index.files),
        functions=len(index.functions),
    )
    return index
