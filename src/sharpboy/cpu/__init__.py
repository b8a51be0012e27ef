"""
SharpBoy CPU Package
====================

Instruction set definitions for the SM83, the Sharp LR35902 core used in the
Game Boy. Everything else in SharpBoy (addressing, grids, search, the CLI)
works from the catalog produced here.

Modules:
    instructions: Instruction record, flag effects and category types.
    sm83: The static instruction table and the catalog generator.

Usage:
    from sharpboy.cpu import (
        Instruction,
        InstructionType,
        get_catalog,
        get_instruction,
    )

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

# =============================================================================
# Public API Exports
# =============================================================================

from sharpboy.cpu.instructions import (
    # Core types
    Instruction,
    InstructionType,
    FlagEffects,
    EMPTY_INSTRUCTION,
    # Flag markers
    FLAG_NAMES,
    UNAFFECTED,
    RESET,
    SET,
    CARRY_8BIT,
    CARRY_16BIT,
)
from sharpboy.cpu.sm83 import (
    # Static table
    OpcodeSpec,
    REGISTERS,
    # Catalog generation
    build_catalog,
    generate_all_instructions,
    # Lookup functions
    get_catalog,
    get_instruction,
    get_instructions_by_type,
)

__all__ = [
    # Core types
    "Instruction",
    "InstructionType",
    "FlagEffects",
    "EMPTY_INSTRUCTION",
    # Flag markers
    "FLAG_NAMES",
    "UNAFFECTED",
    "RESET",
    "SET",
    "CARRY_8BIT",
    "CARRY_16BIT",
    # Static table
    "OpcodeSpec",
    "REGISTERS",
    # Catalog generation
    "build_catalog",
    "generate_all_instructions",
    # Lookup functions
    "get_catalog",
    "get_instruction",
    "get_instructions_by_type",
]
