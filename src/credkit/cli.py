"""Credkit CLI - Command-line client for the secrets service."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from credkit.commands.generate import generate


@click.group()
@click.version_option(package_name="credkit")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to the config file (default: ~/.config/credkit/config.yaml)",
)
@click.option("--verbose", "-v", is_flag=True, help="Log requests to stderr")
@click.pass_context
def ck(ctx: click.Context, config_file: Optional[Path], verbose: bool):
    """Secrets service command-line client."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    obj = ctx.ensure_object(dict)
    obj["config_file"] = config_file


ck.add_command(generate)


if __name__ == "__main__":
    ck()
