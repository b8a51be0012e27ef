"""
Opcode Grids
============

Arranges the instruction catalog into the two 16×16 opcode tables: one for
the primary opcodes and one for the CB-prefixed opcodes.

Each cell holds an instruction or None (the empty marker for an undefined
code point). The grids are built once from the catalog and never modified
afterwards.

Usage:
    grids = build_grids(get_catalog())
    grids.primary[0x3, 0xE].mnemonic     # "LD A,d8"
    grids.find("CB11").mnemonic          # "RL C"

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from sharpboy.addressing import GridCell, Namespace, address_to_cell
from sharpboy.cpu.instructions import Instruction

logger = logging.getLogger(__name__)

GRID_SIZE = 16

Row = tuple[Optional[Instruction], ...]


# =============================================================================
# Grid
# =============================================================================

@dataclass(frozen=True)
class OpCodeGrid:
    """
    A 16×16 table of instructions indexed by (row, column).

    Attributes:
        namespace: Which opcode space this grid shows
        rows: Sixteen rows of sixteen cells; a cell is an instruction or None
    """
    namespace: Namespace
    rows: tuple[Row, ...]

    def __getitem__(self, position: tuple[int, int]) -> Optional[Instruction]:
        row, column = position
        return self.rows[row][column]

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def cells(self) -> Iterator[tuple[int, int, Optional[Instruction]]]:
        """Yield (row, column, cell) in reading order."""
        for row_index, row in enumerate(self.rows):
            for column_index, cell in enumerate(row):
                yield row_index, column_index, cell

    def instructions(self) -> list[Instruction]:
        """Occupied cells in reading order."""
        return [cell for _, _, cell in self.cells() if cell is not None]

    @property
    def occupied(self) -> int:
        return sum(1 for _, _, cell in self.cells() if cell is not None)


@dataclass(frozen=True)
class OpCodeGrids:
    """The primary and CB-prefixed grids, indexable by grid number."""
    primary: OpCodeGrid
    extended: OpCodeGrid

    def __getitem__(self, index: int) -> OpCodeGrid:
        return (self.primary, self.extended)[index]

    def __iter__(self) -> Iterator[OpCodeGrid]:
        return iter((self.primary, self.extended))

    def __len__(self) -> int:
        return 2

    def at(self, cell: GridCell) -> Optional[Instruction]:
        """Instruction at a grid cell, or None if the cell is empty."""
        return self[cell.grid][cell.row, cell.column]

    def find(self, opcode: str) -> Optional[Instruction]:
        """
        Instruction for opcode text.

        Returns None for malformed text or an undefined code point.
        """
        cell = address_to_cell(opcode)
        if cell is None:
            return None
        return self.at(cell)


# =============================================================================
# Construction
# =============================================================================

def _empty_grid() -> list[list[Optional[Instruction]]]:
    return [[None] * GRID_SIZE for _ in range(GRID_SIZE)]


def build_grids(instructions: Iterable[Instruction]) -> OpCodeGrids:
    """
    Place every instruction at the cell implied by its opcode.

    If two instructions map to the same cell the later one wins. The catalog
    guarantees unique opcodes, so this only happens with hand-built input.
    Instructions whose opcode has no placement are skipped.

    Args:
        instructions: Instruction records, normally the catalog

    Returns:
        The two populated grids
    """
    tables = [_empty_grid(), _empty_grid()]
    placed = 0

    for instruction in instructions:
        cell = address_to_cell(instruction.opcode)
        if cell is None:
            logger.warning(
                f"Skipping instruction '{instruction.mnemonic}' with "
                f"unplaceable opcode {instruction.opcode!r}"
            )
            continue
        tables[cell.grid][cell.row][cell.column] = instruction
        placed += 1

    logger.debug(f"Placed {placed} instructions in opcode grids")

    primary, extended = (tuple(tuple(row) for row in table) for table in tables)
    return OpCodeGrids(
        primary=OpCodeGrid(Namespace.PRIMARY, primary),
        extended=OpCodeGrid(Namespace.EXTENDED, extended),
    )
