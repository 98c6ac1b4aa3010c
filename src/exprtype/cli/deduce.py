"""exprtype deduce command - deduce the type of an expression."""

import json
from pathlib import Path

import click

from exprtype.config.models import ExprTypeConfig
from exprtype.core.errors import ExprTypeError, InputError
from exprtype.core.logging import get_logger, set_request_id
from exprtype.deduction import TypeDeducer, byte_to_char_offset
from exprtype.index.loader import load_index
from exprtype.index.models import SymbolIndex

log = get_logger("cli.deduce")


def read_source(file_path: Path | None, use_stdin: bool) -> str:
    """Source text from stdin or from ``file_path``."""
    if use_stdin:
        return click.get_text_stream("stdin").read()
    if file_path is None:
        raise InputError.missing_source()
    if not file_path.is_file():
        raise InputError.source_not_found(str(file_path))
    return file_path.read_text(encoding="utf-8")


def resolve_index(index_path: Path | None, config: ExprTypeConfig) -> SymbolIndex:
    """Load the index given on the command line, else the configured one.

    A missing configured index is not an error; deduction then runs
    against an empty index.
    """
    if index_path is not None:
        return load_index(index_path)

    configured = config.index.resolve_path(Path.cwd())
    if not configured.is_file():
        log.warning("index_not_found", path=str(configured))
        return SymbolIndex()
    return load_index(configured)


def run_deduce(
    *,
    file_path: Path | None,
    use_stdin: bool,
    parts: tuple[str, ...],
    offset: int | None,
    char_offset: bool,
    index: SymbolIndex,
) -> str | None:
    """Validate caller input, then deduce.

    Raises:
        InputError: Missing source, offset or parts, or offset out of range.
    """
    if file_path is None and not use_stdin:
        raise InputError.missing_source()
    if offset is None:
        raise InputError.missing_offset()
    if not parts:
        raise InputError.missing_parts()

    source = read_source(file_path, use_stdin)

    length = len(source) if char_offset else len(source.encode("utf-8"))
    if not 0 <= offset <= length:
        raise InputError.invalid_offset(offset, length)
    if not char_offset:
        offset = byte_to_char_offset(source, offset)

    deducer = TypeDeducer(index)
    return deducer.deduce_type(
        str(file_path) if file_path is not None else None,
        source,
        list(parts),
        offset,
    )


@click.command()
@click.option(
    "--file",
    "file_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="The file to examine (also used to look it up in the index)",
)
@click.option(
    "--stdin",
    "use_stdin",
    is_flag=True,
    help="Read the source from STDIN instead of from --file",
)
@click.option(
    "--part",
    "parts",
    multiple=True,
    help="A part of the expression. Repeat once per part, root first.",
)
@click.option("--offset", type=int, default=None, help="Byte offset into the source")
@click.option(
    "--char-offset",
    is_flag=True,
    help="Interpret --offset as a character offset instead of a byte offset",
)
@click.option(
    "--index",
    "index_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Symbol index file (YAML or JSON). Defaults to the configured index.",
)
@click.pass_context
def deduce_command(
    ctx: click.Context,
    file_path: Path | None,
    use_stdin: bool,
    parts: tuple[str, ...],
    offset: int | None,
    char_offset: bool,
    index_path: Path | None,
) -> None:
    """Deduce the type of an expression such as $foo->bar()->baz.

    Example: exprtype deduce --file src/A.php --offset 120 --part '$foo' --part 'bar()'
    """
    set_request_id()
    config: ExprTypeConfig = (ctx.obj or {}).get("config") or ExprTypeConfig()

    try:
        index = resolve_index(index_path, config)
        result = run_deduce(
            file_path=file_path,
            use_stdin=use_stdin,
            parts=parts,
            offset=offset,
            char_offset=char_offset,
            index=index,
        )
    except ExprTypeError as e:
        log.error("deduce_failed", error=e.error_name, message=e.message)
        raise click.ClickException(str(e)) from e

    click.echo(json.dumps({"success": True, "result": result}))
