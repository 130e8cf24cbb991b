# -*- coding: utf-8 -*-
#
# This file is part of `cueread`, a library for the cue list notation
#
# Copyright © 2026 by the cueread authors
#
# This module is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This module is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.


"""
Command line interface: read a cue list file and show what was read.
"""

import logging
from pathlib import Path

import typer

from . import decode, version_string
from .tokenizer import ParseError, Parser


logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)

RULE = "-" * 75


@app.command()
def main(
    filename: Path = typer.Argument(..., help="The cue list file to read"),
    encoding: str = typer.Option("utf-8", help="Encoding of the file"),
    radix: bool = typer.Option(True, help="Let the radix marker select the base of numbers"),
    tree: bool = typer.Option(False, "--tree", help="Also show the element tree"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debugging information"),
):
    """Read a cue list file and print the symbols and the keyframes."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s - %(name)s - %(message)s",
    )
    logger.info("cueread %s reading %s", version_string, filename)
    try:
        raw = decode(filename.read_text(encoding=encoding))
    except (OSError, UnicodeDecodeError) as e:
        typer.echo("Can't read {}: {}".format(filename, e), err=True)
        raise typer.Exit(1)

    typer.echo("Raw object code:")
    typer.echo(raw)
    typer.echo()
    typer.echo("Interpreted symbols:")
    try:
        result = Parser(honour_radix=radix).parse(raw)
    except ParseError as e:
        typer.echo("Error: {}".format(e), err=True)
        raise typer.Exit(1)
    typer.echo(result.trace)
    typer.echo()
    typer.echo("Count of KeyFrames:{}".format(len(result.cuelist)))
    typer.echo(RULE)
    typer.echo("Dump:")
    typer.echo(result.cuelist.dump_text())
    if tree:
        typer.echo(RULE)
        result.cuelist.dump()

