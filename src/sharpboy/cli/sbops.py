"""
sbops - SM83 Opcode Reference Command-Line Interface
====================================================

This module implements a terminal front end for the SM83 opcode reference.

Commands
--------
- **table**: Print the primary or CB-prefixed opcode table
- **show**: Show the details of one opcode
- **search**: List the instructions matching a query, in opcode order

Usage Examples
--------------
Print the primary table:
    $ sbops table

Print the CB table with loads into A flagged:
    $ sbops table --cb -q "ld a"

Highlight the row and column of an opcode:
    $ sbops table -s 3e

Show one opcode:
    $ sbops show cb11

Search by mnemonic, opcode or category:
    $ sbops search ld a
    $ sbops search 0x3e
    $ sbops search bitwise -n 20

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import logging
from typing import Optional

import click

from sharpboy import __version__
from sharpboy.browser import OpcodeBrowser
from sharpboy.cli.errors import handle_cli_exception
from sharpboy.config import BrowserConfig
from sharpboy.cpu.instructions import Instruction
from sharpboy.grid import GRID_SIZE


CELL_WIDTH = 12

CAPTIONS = (
    "8-bit opcodes",
    "16-bit opcodes (0xCB prefix)",
)


# =============================================================================
# CLI Context
# =============================================================================

class Context:
    """
    Shared context for CLI commands.

    Stores the verbosity flag and the presentation settings.
    """

    def __init__(self) -> None:
        self.verbose: bool = False
        self.config: BrowserConfig = BrowserConfig()

    def setup_logging(self) -> None:
        """Configure logging based on verbosity."""
        level = logging.DEBUG if self.verbose else logging.WARNING
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(message)s" if self.verbose else "%(message)s",
        )

    def style(self, text: str, **styles) -> str:
        return click.style(text, **styles) if self.config.color else text


pass_context = click.make_pass_decorator(Context, ensure=True)


# =============================================================================
# Formatting Helpers
# =============================================================================

def format_cell(instruction: Optional[Instruction], is_match: bool) -> str:
    """Fixed-width text for one grid cell."""
    if instruction is None:
        return " " * CELL_WIDTH
    marker = "*" if is_match else " "
    return f"{marker}{instruction.mnemonic[:CELL_WIDTH - 2]:<{CELL_WIDTH - 1}}"


def format_details(instruction: Instruction) -> list[str]:
    """Lines of the details view for one instruction."""
    lines = [
        instruction.mnemonic,
        f"Opcode: 0x{instruction.opcode}",
        f"Number of Bytes: {instruction.bytes}",
        f"Number of Cycles: {instruction.cycles}",
        f"Flags: {instruction.flags.details()}",
        f"Category: {instruction.type}",
        "",
        "Description",
        instruction.description or "Coming Soon",
    ]
    return lines


def format_result(instruction: Instruction) -> str:
    return f"0x{instruction.opcode.upper():<6} {instruction.mnemonic}"


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
@click.option(
    "--color/--no-color",
    default=None,
    help="Colour output (default: SHARPBOY_COLOR or enabled)",
)
@click.version_option(version=__version__, prog_name="sbops")
@pass_context
def main(ctx: Context, verbose: bool, color: Optional[bool]) -> None:
    """
    SM83 (Game Boy CPU) opcode reference.

    Browse the opcode tables, look up a single opcode, or search by
    mnemonic, opcode (3e, 0x3e, cb11) or category (load, jump, bitwise...).

    \b
    Examples:
      sbops table
      sbops table --cb -q "bit 7"
      sbops show 3e
      sbops search ld a
    """
    ctx.verbose = verbose
    ctx.setup_logging()
    ctx.config = BrowserConfig.from_env()
    if color is not None:
        ctx.config.color = color


# =============================================================================
# Table Command
# =============================================================================

@main.command("table")
@click.option(
    "--cb", "extended",
    is_flag=True,
    help="Show the CB-prefixed table instead of the primary table",
)
@click.option(
    "-q", "--query",
    default="",
    help="Flag instructions matching this query with '*'",
)
@click.option(
    "--hide-non-matches",
    is_flag=True,
    default=None,
    help="Blank out cells that do not match the query",
)
@click.option(
    "-s", "--select", "selected",
    default=None,
    help="Highlight the row and column of this opcode",
)
@pass_context
def cmd_table(
    ctx: Context,
    extended: bool,
    query: str,
    hide_non_matches: Optional[bool],
    selected: Optional[str],
) -> None:
    """
    Print an opcode table.

    Rows are the high nibble of the opcode, columns the low nibble.

    \b
    Examples:
      sbops table
      sbops table --cb
      sbops table -q jump --hide-non-matches
      sbops table -s cb7c
    """
    try:
        if hide_non_matches is not None:
            ctx.config.hide_non_matches = hide_non_matches
        browser = OpcodeBrowser(ctx.config)
        browser.set_query(query)
        if selected:
            browser.select(selected)

        grid = 1 if extended else 0
        click.echo(CAPTIONS[grid])

        header = ["    "]
        for column in range(GRID_SIZE):
            label = f"x{column:X}"
            if browser.is_active_column(grid, column):
                header.append(ctx.style(f"[{label}]".ljust(CELL_WIDTH), bold=True))
            else:
                header.append(f" {label}".ljust(CELL_WIDTH))
        click.echo("".join(header).rstrip())

        for row in range(GRID_SIZE):
            label = f"{row:X}x"
            if browser.is_active_row(grid, row):
                line = [ctx.style(f">{label} ", bold=True)]
            else:
                line = [f" {label} "]
            for column in range(GRID_SIZE):
                instruction = browser.visible_instruction(grid, row, column)
                is_match = instruction is not None and browser.is_match(instruction)
                text = format_cell(instruction, is_match)
                if instruction is not None and instruction is browser.selected:
                    text = ctx.style(text, reverse=True)
                elif is_match:
                    text = ctx.style(text, fg="green")
                line.append(text)
            click.echo("".join(line).rstrip())

        if browser.has_query:
            click.echo("")
            click.echo(browser.match_summary)

    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


# =============================================================================
# Show Command
# =============================================================================

@main.command("show")
@click.argument("opcode")
@pass_context
def cmd_show(ctx: Context, opcode: str) -> None:
    """
    Show the details of one opcode.

    OPCODE is two hex digits (3E), optionally with a 0x prefix, or CB
    followed by two hex digits (CB11).

    \b
    Examples:
      sbops show 3e
      sbops show 0xCB7C
    """
    try:
        browser = OpcodeBrowser(ctx.config)
        instruction = browser.select(opcode)
        lines = format_details(instruction)
        click.echo(ctx.style(lines[0], bold=True))
        for line in lines[1:]:
            click.echo(line)

    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


# =============================================================================
# Search Command
# =============================================================================

@main.command("search")
@click.argument("query", nargs=-1, required=True)
@click.option(
    "-n", "--limit",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum number of results shown (default: 300)",
)
@pass_context
def cmd_search(ctx: Context, query: tuple[str, ...], limit: Optional[int]) -> None:
    """
    Search instructions by mnemonic, opcode or category.

    All words of QUERY must appear in the mnemonic, opcode or category.
    An opcode query (3e, 0x3e, cb11) also matches on the opcode alone.
    Results are listed in opcode order.

    \b
    Examples:
      sbops search ld a
      sbops search 0x3e
      sbops search bitwise -n 20
    """
    try:
        text = " ".join(query)
        if not text.strip():
            raise click.BadParameter("query must not be blank", param_hint="QUERY")
        if limit is not None:
            ctx.config.result_limit = limit
        browser = OpcodeBrowser(ctx.config)
        browser.set_query(text)

        click.echo(browser.match_summary)
        if not browser.matches:
            click.echo("No matches.")
            return

        for instruction in browser.visible_results:
            click.echo(format_result(instruction))

        hidden = browser.match_count - len(browser.visible_results)
        if hidden > 0:
            click.echo(f"... {hidden} more (use --limit to show more)")

    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
