"""
SharpBoy - SM83 Opcode Reference
================================

This package is a reference browser for the instruction set of the SM83, the
Sharp LR35902 CPU core of the Nintendo Game Boy.

The SM83 has 245 primary opcodes and 256 opcodes behind the $CB prefix byte.
SharpBoy lays both sets out as 16×16 tables (high nibble by low nibble), looks
up single opcodes and searches the instruction set by mnemonic, opcode or
category.

Main Components
---------------
- **cpu**: Instruction records and the catalog generated from the static
  SM83 opcode table
- **addressing**: Opcode text parsing ("3E", "CB11") into namespace/value
  and grid placement
- **grid**: The two 16×16 opcode tables
- **search**: Free-text and opcode-aware instruction matching
- **browser**: Query and selection state for a reference view
- **cli**: The ``sbops`` command-line tool

Quick Start
-----------
Look up an opcode:
    >>> from sharpboy import get_instruction
    >>> get_instruction("cb11").mnemonic
    'RL C'

Search the instruction set:
    >>> from sharpboy import get_catalog, search_instructions
    >>> [i.opcode for i in search_instructions(get_catalog(), "0x3e")]
    ['3E', 'CB3E']

Browse the tables:
    >>> from sharpboy import build_grids
    >>> grids = build_grids(get_catalog())
    >>> grids.primary[0x3, 0xE].mnemonic
    'LD A,d8'

Or use the command-line tool:
    $ sbops table --cb
    $ sbops show 3e
    $ sbops search ld a

Reference Documentation
-----------------------
- Pan Docs: https://gbdev.io/pandocs/CPU_Instruction_Set.html
- Opcode tables: https://gbdev.io/gb-opcodes/optables/

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from sharpboy.errors import (
    SharpBoyError,
    CatalogError,
    ConfigError,
    LookupFailure,
    UnknownOpcodeError,
)

from sharpboy.cpu import (
    Instruction,
    InstructionType,
    FlagEffects,
    EMPTY_INSTRUCTION,
    generate_all_instructions,
    get_catalog,
    get_instruction,
    get_instructions_by_type,
)

from sharpboy.addressing import (
    Namespace,
    OpCodeAddress,
    GridCell,
    parse_address,
    address_to_cell,
    address_sort_key,
    compare_opcodes,
    sort_opcodes,
    format_opcode,
)

from sharpboy.grid import (
    OpCodeGrid,
    OpCodeGrids,
    build_grids,
)

from sharpboy.search import (
    matches_instruction,
    search_instructions,
    sort_by_address,
    matched_opcodes,
)

from sharpboy.config import BrowserConfig
from sharpboy.browser import OpcodeBrowser

__all__ = [
    # Version info
    "__version__",
    # Exception hierarchy
    "SharpBoyError",
    "CatalogError",
    "ConfigError",
    "LookupFailure",
    "UnknownOpcodeError",
    # Instruction catalog
    "Instruction",
    "InstructionType",
    "FlagEffects",
    "EMPTY_INSTRUCTION",
    "generate_all_instructions",
    "get_catalog",
    "get_instruction",
    "get_instructions_by_type",
    # Addressing
    "Namespace",
    "OpCodeAddress",
    "GridCell",
    "parse_address",
    "address_to_cell",
    "address_sort_key",
    "compare_opcodes",
    "sort_opcodes",
    "format_opcode",
    # Grids
    "OpCodeGrid",
    "OpCodeGrids",
    "build_grids",
    # Search
    "matches_instruction",
    "search_instructions",
    "sort_by_address",
    "matched_opcodes",
    # Session
    "BrowserConfig",
    "OpcodeBrowser",
]
