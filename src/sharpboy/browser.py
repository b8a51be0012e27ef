"""
Opcode Browser Session
======================

Session state for an opcode reference view: the cached catalog and grids,
the current search query, and the selected instruction.

A renderer (the ``sbops`` CLI, or any other front end) owns one
``OpcodeBrowser`` and asks it what to draw:

- which instructions match the query, in address order, capped for display
- whether a grid cell should be flagged as a match or hidden
- which row and column headers to highlight for the selected instruction

Usage:
    browser = OpcodeBrowser()
    browser.set_query("0x3e")
    browser.match_summary                 # "2 matches" (3E, CB3E)
    browser.select("3E")
    browser.is_active_row(0, 3)           # True

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import logging
from typing import Optional, Sequence, Union

from sharpboy.addressing import GridCell, address_to_cell
from sharpboy.config import BrowserConfig
from sharpboy.cpu.instructions import EMPTY_INSTRUCTION, Instruction
from sharpboy.cpu.sm83 import get_catalog
from sharpboy.errors import UnknownOpcodeError
from sharpboy.grid import OpCodeGrids, build_grids
from sharpboy.search import (
    matched_opcodes,
    normalize_query,
    search_instructions,
)

logger = logging.getLogger(__name__)


class OpcodeBrowser:
    """
    Query and selection state over the instruction catalog.

    The catalog and grids are computed once per session. The match list is
    recomputed whenever the query changes.

    Attributes:
        config: Presentation settings
        instructions: The catalog being browsed
        grids: Primary and CB-prefixed grids built from the catalog
        selected: The selected instruction (EMPTY_INSTRUCTION if none)
        active_cell: Grid cell of the selected instruction, or None
    """

    def __init__(
        self,
        config: Optional[BrowserConfig] = None,
        instructions: Optional[Sequence[Instruction]] = None,
    ):
        self.config = config or BrowserConfig()
        self.instructions = tuple(instructions) if instructions is not None else get_catalog()
        self.grids: OpCodeGrids = build_grids(self.instructions)

        self.selected: Instruction = EMPTY_INSTRUCTION
        self.active_cell: Optional[GridCell] = None

        self._query = ""
        self._matches: list[Instruction] = []
        self._matched_opcodes: frozenset[str] = frozenset()

    # =========================================================================
    # Search
    # =========================================================================

    @property
    def query(self) -> str:
        return self._query

    @property
    def has_query(self) -> bool:
        """True when the query holds anything besides whitespace."""
        return bool(normalize_query(self._query))

    def set_query(self, query: str) -> list[Instruction]:
        """
        Update the search query and recompute the matches.

        Returns:
            The new match list (empty when the query is blank)
        """
        self._query = query
        if self.has_query:
            self._matches = search_instructions(self.instructions, query.strip())
        else:
            self._matches = []
        self._matched_opcodes = matched_opcodes(self._matches)
        logger.debug(f"Query {query!r} matched {len(self._matches)} instructions")
        return list(self._matches)

    @property
    def matches(self) -> list[Instruction]:
        """All matches in address order; empty while no query is active."""
        return list(self._matches)

    @property
    def visible_results(self) -> list[Instruction]:
        """Matches capped at the configured result limit."""
        return self._matches[:self.config.result_limit]

    @property
    def match_count(self) -> int:
        return len(self._matches)

    @property
    def match_summary(self) -> str:
        count = self.match_count
        return f"{count} match" if count == 1 else f"{count} matches"

    def is_match(self, instruction: Instruction) -> bool:
        """True if the instruction matches the active query."""
        if not self.has_query:
            return False
        return instruction.opcode.lower() in self._matched_opcodes

    def visible_instruction(self, grid: int, row: int, column: int) -> Optional[Instruction]:
        """
        Instruction to draw in a grid cell.

        Returns None for an empty cell, and for a non-matching cell when
        hide-non-matches is enabled and a query is active.
        """
        instruction = self.grids[grid][row, column]
        if instruction is None:
            return None
        if self.config.hide_non_matches and self.has_query and not self.is_match(instruction):
            return None
        return instruction

    # =========================================================================
    # Selection
    # =========================================================================

    def select(self, target: Union[Instruction, str]) -> Instruction:
        """
        Select an instruction for the details view.

        Args:
            target: An instruction record or opcode text ("3E", "cb11", "0x3e")

        Returns:
            The selected instruction

        Raises:
            UnknownOpcodeError: If opcode text names no instruction
        """
        if isinstance(target, Instruction):
            instruction = target
        else:
            text = target.strip()
            if text.lower().startswith("0x"):
                text = text[2:]
            instruction = self.grids.find(text)
            if instruction is None:
                raise UnknownOpcodeError(
                    target,
                    hint="use two hex digits (e.g. 3E) or CB plus two hex digits (e.g. CB11)",
                )

        self.selected = instruction
        self.active_cell = address_to_cell(instruction.opcode)
        return instruction

    def clear_selection(self) -> None:
        self.selected = EMPTY_INSTRUCTION
        self.active_cell = None

    @property
    def has_selection(self) -> bool:
        return not self.selected.is_placeholder

    def is_active_grid(self, grid: int) -> bool:
        return self.active_cell is not None and self.active_cell.grid == grid

    def is_active_row(self, grid: int, row: int) -> bool:
        """True if the row header should be highlighted for the selection."""
        return self.is_active_grid(grid) and self.active_cell.row == row

    def is_active_column(self, grid: int, column: int) -> bool:
        """True if the column header should be highlighted for the selection."""
        return self.is_active_grid(grid) and self.active_cell.column == column
