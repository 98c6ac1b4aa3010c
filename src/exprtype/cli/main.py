"""exprtype CLI - exprtype command."""

import click

from exprtype.cli.deduce import deduce_command
from exprtype.config.loader import load_config
from exprtype.core.errors import ConfigError
from exprtype.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="exprtype")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """exprtype - Static type deduction for PHP expressions."""
    try:
        config = load_config()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        config.logging.level = "DEBUG"
    configure_logging(config=config.logging)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = config


cli.add_command(deduce_command, name="deduce")


if __name__ == "__main__":
    cli()
