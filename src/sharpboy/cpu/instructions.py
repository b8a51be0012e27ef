"""
Instruction Record Types
========================

Core record types shared by the catalog, the grids and the search matcher.

An instruction record describes one opcode of the SM83 CPU: its mnemonic,
category, flag effects, cycle cost, length and (sometimes) a long-form
description. Records are frozen dataclasses; once the catalog is generated
nothing can modify them.

Flag Effects
------------
Each of the four condition flags (Z, N, H, CY) carries one of:

- ``"-"``: unaffected
- ``"0"`` / ``"1"``: always cleared / always set
- a conditional descriptor: ``"Z"``, ``"H"``, ``"CY"`` (set according to the
  result) or ``"8-bit"`` / ``"16-bit"`` (carry or half-carry out of an 8-bit
  or 16-bit operation)

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# =============================================================================
# Flag Markers
# =============================================================================

UNAFFECTED = "-"
RESET = "0"
SET = "1"
CARRY_8BIT = "8-bit"
CARRY_16BIT = "16-bit"

FLAG_NAMES = ("Z", "N", "H", "CY")

# Every marker a flag column may legally hold
FLAG_MARKERS = frozenset({
    UNAFFECTED, RESET, SET, CARRY_8BIT, CARRY_16BIT, "Z", "N", "H", "CY",
})


# =============================================================================
# Instruction Category
# =============================================================================

class InstructionType(Enum):
    """
    Instruction category used for grouping and styling.

    The value is the tag users search for (``"load"``, ``"alu"``...).
    """
    CONTROL = "control"     # NOP, HALT, STOP, DI, EI, PREFIX CB
    JUMP = "jump"           # JR, JP, CALL, RET, RETI, RST
    LOAD = "load"           # 8-bit loads
    LOAD16 = "load16"       # 16-bit loads, PUSH, POP
    ALU = "alu"             # 8-bit arithmetic and logic
    ALU16 = "alu16"         # 16-bit arithmetic
    BITWISE = "bitwise"     # Rotates, shifts and bit operations

    def __str__(self) -> str:
        return self.value


# =============================================================================
# Flag Effects
# =============================================================================

@dataclass(frozen=True)
class FlagEffects:
    """
    Effect of an instruction on the four condition flags.

    Supports lookup by flag name, so ``flags["CY"]`` and ``flags.cy`` are
    equivalent.
    """
    z: str = UNAFFECTED
    n: str = UNAFFECTED
    h: str = UNAFFECTED
    cy: str = UNAFFECTED

    def __getitem__(self, name: str) -> str:
        if name not in FLAG_NAMES:
            raise KeyError(name)
        return getattr(self, name.lower())

    def as_dict(self) -> dict[str, str]:
        """Return the effects keyed by flag name, in Z N H CY order."""
        return {name: self[name] for name in FLAG_NAMES}

    def summary(self) -> str:
        """
        Compact four-column summary, e.g. ``"Z 0 H CY"``.

        Empty markers render as ``-``; the carry descriptors collapse to the
        flag name since the grid cell has no room for "8-bit".
        """
        z = self.z or UNAFFECTED
        n = self.n or UNAFFECTED
        h = self.h or UNAFFECTED
        if h in (CARRY_8BIT, CARRY_16BIT):
            h = "H"
        cy = self.cy or UNAFFECTED
        if cy in (CARRY_8BIT, CARRY_16BIT):
            cy = "CY"
        return f"{z} {n} {h} {cy}"

    def details(self) -> str:
        """Full four-column listing, keeping the carry descriptors."""
        return " ".join(self[name] or UNAFFECTED for name in FLAG_NAMES)


# =============================================================================
# Instruction Record
# =============================================================================

@dataclass(frozen=True)
class Instruction:
    """
    A single SM83 instruction.

    Attributes:
        mnemonic: Human-readable instruction, e.g. "LD A,B"
        type: Instruction category
        flags: Effect on Z, N, H and CY
        cycles: Cycle cost in T-states; conditional branches use "taken/not"
        bytes: Instruction length including any prefix (-1 for the placeholder)
        opcode: Two hex digits, prefixed with "CB" in the extended namespace
        description: Optional long-form explanation
    """
    mnemonic: str
    type: Optional[InstructionType]
    flags: FlagEffects
    cycles: str
    bytes: int
    opcode: str
    description: Optional[str] = None

    @property
    def is_placeholder(self) -> bool:
        """True for the "nothing selected" record."""
        return self.bytes == -1

    @property
    def is_prefixed(self) -> bool:
        return len(self.opcode) == 4 and self.opcode.upper().startswith("CB")

    def __str__(self) -> str:
        return f"0x{self.opcode}: {self.mnemonic}"


# Placeholder for "no instruction selected yet"; never part of the catalog
EMPTY_INSTRUCTION = Instruction(
    mnemonic="",
    type=None,
    flags=FlagEffects(z="", n="", h="", cy=""),
    cycles="",
    bytes=-1,
    opcode="",
    description=None,
)
