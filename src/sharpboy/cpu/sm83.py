"""
SM83 Instruction Catalog
========================

This module holds the static table of the SM83 instruction set (the
Sharp LR35902 core of the Game Boy) and generates the instruction catalog
from it.

The SM83 has two opcode spaces of 256 entries each:

1. **Primary**: single-byte opcodes $00-$FF. Eleven code points ($D3, $DB,
   $DD, $E3, $E4, $EB, $EC, $ED, $F4, $FC, $FD) are undefined.

2. **Extended**: opcodes following the $CB prefix byte. All 256 are defined
   (rotates, shifts, SWAP, BIT, RES, SET).

Table Layout
------------
Most of the instruction set is regular: the $40-$7F block is ``LD r,r'`` over
the register order B C D E H L (HL) A, the $80-$BF block is the eight 8-bit
ALU operations over the same registers, and the entire $CB space is an
operation times register grid. Those blocks are generated from patterns; the
irregular opcodes are listed row by row.

Cycle counts are in T-states (4.19 MHz clock). Conditional branches list the
cost when taken and when not taken, e.g. ``"12/8"``.

Usage:
    from sharpboy.cpu import get_catalog, get_instruction

    for instruction in get_catalog():
        print(instruction.opcode, instruction.mnemonic)

    get_instruction("cb11").mnemonic   # "RL C"

Reference
---------
- Pan Docs: https://gbdev.io/pandocs/CPU_Instruction_Set.html
- Opcode table: https://gbdev.io/gb-opcodes/optables/

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import functools
import logging
import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from sharpboy.cpu.instructions import (
    FLAG_MARKERS,
    FlagEffects,
    Instruction,
    InstructionType,
)
from sharpboy.errors import CatalogError

logger = logging.getLogger(__name__)


# =============================================================================
# Operand Orderings
# =============================================================================
# Register order used by every regular block of the opcode map. The operand
# index is the low three bits of the opcode (source) or bits 3-5 (target).

REGISTERS = ("B", "C", "D", "E", "H", "L", "(HL)", "A")
REGISTER_PAIRS = ("BC", "DE", "HL", "SP")
STACK_PAIRS = ("BC", "DE", "HL", "AF")
CONDITIONS = ("NZ", "Z", "NC", "C")

# 8-bit ALU operations in opcode order: (mnemonic prefix, flags)
ALU_OPERATIONS = (
    ("ADD A,", "Z 0 8-bit 8-bit"),
    ("ADC A,", "Z 0 8-bit 8-bit"),
    ("SUB ", "Z 1 8-bit 8-bit"),
    ("SBC A,", "Z 1 8-bit 8-bit"),
    ("AND ", "Z 0 1 0"),
    ("XOR ", "Z 0 0 0"),
    ("OR ", "Z 0 0 0"),
    ("CP ", "Z 1 8-bit 8-bit"),
)

# $CB00-$CB3F rotate/shift operations in opcode order
SHIFT_OPERATIONS = ("RLC", "RRC", "RL", "RR", "SLA", "SRA", "SWAP", "SRL")

NO_FLAGS = "- - - -"

_OPCODE_PATTERN = re.compile(r"(CB)?[0-9A-F]{2}")
_CYCLES_PATTERN = re.compile(r"\d+(/\d+)?")


# =============================================================================
# Table Rows
# =============================================================================

@dataclass(frozen=True)
class OpcodeSpec:
    """
    One row of the static instruction table.

    Flags are written as four space-separated markers in Z N H CY order,
    e.g. ``"Z 0 8-bit -"``.
    """
    opcode: str
    mnemonic: str
    bytes: int
    cycles: str
    type: InstructionType
    flags: str = NO_FLAGS


def _spec(
    value: int,
    mnemonic: str,
    length: int,
    cycles: str,
    kind: InstructionType,
    flags: str = NO_FLAGS,
    prefix: str = "",
) -> OpcodeSpec:
    return OpcodeSpec(f"{prefix}{value:02X}", mnemonic, length, cycles, kind, flags)


# Irregular primary opcodes that no pattern below covers.
# (opcode, mnemonic, bytes, cycles, type, flags)
_PRIMARY_ROWS = (
    (0x00, "NOP", 1, "4", InstructionType.CONTROL, NO_FLAGS),
    (0x02, "LD (BC),A", 1, "8", InstructionType.LOAD, NO_FLAGS),
    (0x07, "RLCA", 1, "4", InstructionType.BITWISE, "0 0 0 CY"),
    (0x08, "LD (a16),SP", 3, "20", InstructionType.LOAD16, NO_FLAGS),
    (0x0A, "LD A,(BC)", 1, "8", InstructionType.LOAD, NO_FLAGS),
    (0x0F, "RRCA", 1, "4", InstructionType.BITWISE, "0 0 0 CY"),
    (0x10, "STOP 0", 2, "4", InstructionType.CONTROL, NO_FLAGS),
    (0x12, "LD (DE),A", 1, "8", InstructionType.LOAD, NO_FLAGS),
    (0x17, "RLA", 1, "4", InstructionType.BITWISE, "0 0 0 CY"),
    (0x18, "JR r8", 2, "12", InstructionType.JUMP, NO_FLAGS),
    (0x1A, "LD A,(DE)", 1, "8", InstructionType.LOAD, NO_FLAGS),
    (0x1F, "RRA", 1, "4", InstructionType.BITWISE, "0 0 0 CY"),
    (0x22, "LD (HL+),A", 1, "8", InstructionType.LOAD, NO_FLAGS),
    (0x27, "DAA", 1, "4", InstructionType.ALU, "Z - 0 CY"),
    (0x2A, "LD A,(HL+)", 1, "8", InstructionType.LOAD, NO_FLAGS),
    (0x2F, "CPL", 1, "4", InstructionType.ALU, "- 1 1 -"),
    (0x32, "LD (HL-),A", 1, "8", InstructionType.LOAD, NO_FLAGS),
    (0x37, "SCF", 1, "4", InstructionType.ALU, "- 0 0 1"),
    (0x3A, "LD A,(HL-)", 1, "8", InstructionType.LOAD, NO_FLAGS),
    (0x3F, "CCF", 1, "4", InstructionType.ALU, "- 0 0 CY"),
    (0x76, "HALT", 1, "4", InstructionType.CONTROL, NO_FLAGS),
    (0xC3, "JP a16", 3, "16", InstructionType.JUMP, NO_FLAGS),
    (0xC9, "RET", 1, "16", InstructionType.JUMP, NO_FLAGS),
    (0xCB, "PREFIX CB", 1, "4", InstructionType.CONTROL, NO_FLAGS),
    (0xCD, "CALL a16", 3, "24", InstructionType.JUMP, NO_FLAGS),
    (0xD9, "RETI", 1, "16", InstructionType.JUMP, NO_FLAGS),
    (0xE0, "LDH (a8),A", 2, "12", InstructionType.LOAD, NO_FLAGS),
    (0xE2, "LD (C),A", 1, "8", InstructionType.LOAD, NO_FLAGS),
    (0xE8, "ADD SP,r8", 2, "16", InstructionType.ALU16, "0 0 16-bit 16-bit"),
    (0xE9, "JP (HL)", 1, "4", InstructionType.JUMP, NO_FLAGS),
    (0xEA, "LD (a16),A", 3, "16", InstructionType.LOAD, NO_FLAGS),
    (0xF0, "LDH A,(a8)", 2, "12", InstructionType.LOAD, NO_FLAGS),
    (0xF2, "LD A,(C)", 1, "8", InstructionType.LOAD, NO_FLAGS),
    (0xF3, "DI", 1, "4", InstructionType.CONTROL, NO_FLAGS),
    (0xF8, "LD HL,SP+r8", 2, "12", InstructionType.LOAD16, "0 0 16-bit 16-bit"),
    (0xF9, "LD SP,HL", 1, "8", InstructionType.LOAD16, NO_FLAGS),
    (0xFA, "LD A,(a16)", 3, "16", InstructionType.LOAD, NO_FLAGS),
    (0xFB, "EI", 1, "4", InstructionType.CONTROL, NO_FLAGS),
)

DESCRIPTIONS = {
    "00": "No operation. Only advances the program counter.",
    "10": (
        "Enter very low power mode until a button is pressed. Also used to "
        "switch the CGB double-speed mode. The byte after the opcode is ignored."
    ),
    "27": (
        "Decimal adjust A after a BCD addition or subtraction, using the N, H "
        "and CY flags to decide the correction."
    ),
    "2F": "Complement A (flip every bit).",
    "37": "Set the carry flag.",
    "3F": "Complement the carry flag.",
    "76": "Suspend the CPU until an interrupt is pending.",
    "CB": "Prefix byte. The next byte is decoded from the CB opcode table.",
    "D9": "Return from subroutine and enable interrupts (RET followed by EI).",
    "F3": "Disable interrupts by clearing the IME flag.",
    "FB": "Enable interrupts. IME is set after the instruction following EI.",
}


def _cost(register: str, plain: str, memory: str) -> str:
    return memory if register == "(HL)" else plain


def _primary_specs() -> Iterator[OpcodeSpec]:
    """Yield the primary opcode space: irregular rows, then the patterns."""
    for row in _PRIMARY_ROWS:
        yield _spec(*row)

    # 16-bit register pair column: LD rr,d16 / INC rr / ADD HL,rr / DEC rr
    for i, pair in enumerate(REGISTER_PAIRS):
        base = i << 4
        yield _spec(base | 0x01, f"LD {pair},d16", 3, "12", InstructionType.LOAD16)
        yield _spec(base | 0x03, f"INC {pair}", 1, "8", InstructionType.ALU16)
        yield _spec(base | 0x09, f"ADD HL,{pair}", 1, "8", InstructionType.ALU16,
                    "- 0 16-bit 16-bit")
        yield _spec(base | 0x0B, f"DEC {pair}", 1, "8", InstructionType.ALU16)

    # 8-bit register column: INC r / DEC r / LD r,d8
    for i, reg in enumerate(REGISTERS):
        base = i << 3
        yield _spec(base | 0x04, f"INC {reg}", 1, _cost(reg, "4", "12"),
                    InstructionType.ALU, "Z 0 8-bit -")
        yield _spec(base | 0x05, f"DEC {reg}", 1, _cost(reg, "4", "12"),
                    InstructionType.ALU, "Z 1 8-bit -")
        yield _spec(base | 0x06, f"LD {reg},d8", 2, _cost(reg, "8", "12"),
                    InstructionType.LOAD)

    # $40-$7F: LD r,r' (LD (HL),(HL) is HALT, listed above)
    for target_index, target in enumerate(REGISTERS):
        for source_index, source in enumerate(REGISTERS):
            value = 0x40 | (target_index << 3) | source_index
            if value == 0x76:
                continue
            cycles = "8" if "(HL)" in (target, source) else "4"
            yield _spec(value, f"LD {target},{source}", 1, cycles, InstructionType.LOAD)

    # $80-$BF: ALU A,r and the immediate forms at $C6 + 8n
    for op_index, (prefix, flags) in enumerate(ALU_OPERATIONS):
        for source_index, source in enumerate(REGISTERS):
            value = 0x80 | (op_index << 3) | source_index
            yield _spec(value, f"{prefix}{source}", 1, _cost(source, "4", "8"),
                        InstructionType.ALU, flags)
        yield _spec(0xC6 | (op_index << 3), f"{prefix}d8", 2, "8",
                    InstructionType.ALU, flags)

    # Conditional control flow
    for i, condition in enumerate(CONDITIONS):
        base = i << 3
        yield _spec(0x20 | base, f"JR {condition},r8", 2, "12/8", InstructionType.JUMP)
        yield _spec(0xC0 | base, f"RET {condition}", 1, "20/8", InstructionType.JUMP)
        yield _spec(0xC2 | base, f"JP {condition},a16", 3, "16/12", InstructionType.JUMP)
        yield _spec(0xC4 | base, f"CALL {condition},a16", 3, "24/12", InstructionType.JUMP)

    # Stack
    for i, pair in enumerate(STACK_PAIRS):
        base = 0xC0 | (i << 4)
        pop_flags = "Z N H CY" if pair == "AF" else NO_FLAGS
        yield _spec(base | 0x01, f"POP {pair}", 1, "12", InstructionType.LOAD16, pop_flags)
        yield _spec(base | 0x05, f"PUSH {pair}", 1, "16", InstructionType.LOAD16)

    # Restarts
    for i in range(8):
        yield _spec(0xC7 | (i << 3), f"RST {i << 3:02X}H", 1, "16", InstructionType.JUMP)


def _extended_specs() -> Iterator[OpcodeSpec]:
    """Yield the $CB opcode space. Lengths include the prefix byte."""
    for op_index, operation in enumerate(SHIFT_OPERATIONS):
        flags = "Z 0 0 0" if operation == "SWAP" else "Z 0 0 CY"
        for reg_index, reg in enumerate(REGISTERS):
            yield _spec((op_index << 3) | reg_index, f"{operation} {reg}", 2,
                        _cost(reg, "8", "16"), InstructionType.BITWISE, flags, prefix="CB")

    for bit in range(8):
        for reg_index, reg in enumerate(REGISTERS):
            low = (bit << 3) | reg_index
            yield _spec(0x40 | low, f"BIT {bit},{reg}", 2, _cost(reg, "8", "12"),
                        InstructionType.BITWISE, "Z 0 1 -", prefix="CB")
            yield _spec(0x80 | low, f"RES {bit},{reg}", 2, _cost(reg, "8", "16"),
                        InstructionType.BITWISE, prefix="CB")
            yield _spec(0xC0 | low, f"SET {bit},{reg}", 2, _cost(reg, "8", "16"),
                        InstructionType.BITWISE, prefix="CB")


# =============================================================================
# Catalog Construction
# =============================================================================

def _parse_flags(spec: OpcodeSpec) -> FlagEffects:
    markers = spec.flags.split()
    if len(markers) != 4:
        raise CatalogError(
            f"expected 4 flag markers (Z N H CY), got {len(markers)}: {spec.flags!r}",
            spec.opcode,
        )
    for marker in markers:
        if marker not in FLAG_MARKERS:
            raise CatalogError(f"invalid flag marker {marker!r}", spec.opcode)
    return FlagEffects(*markers)


def _to_instruction(spec: OpcodeSpec) -> Instruction:
    if not _OPCODE_PATTERN.fullmatch(spec.opcode):
        raise CatalogError("opcode must be two uppercase hex digits, optionally "
                           "prefixed by CB", spec.opcode)
    if not spec.mnemonic.strip():
        raise CatalogError("empty mnemonic", spec.opcode)
    if spec.bytes <= 0:
        raise CatalogError(f"invalid instruction length {spec.bytes}", spec.opcode)
    if not _CYCLES_PATTERN.fullmatch(spec.cycles):
        raise CatalogError(f"invalid cycle count {spec.cycles!r}", spec.opcode)
    if not isinstance(spec.type, InstructionType):
        raise CatalogError(f"invalid instruction type {spec.type!r}", spec.opcode)

    return Instruction(
        mnemonic=spec.mnemonic,
        type=spec.type,
        flags=_parse_flags(spec),
        cycles=spec.cycles,
        bytes=spec.bytes,
        opcode=spec.opcode,
        description=DESCRIPTIONS.get(spec.opcode),
    )


def build_catalog(specs: Iterable[OpcodeSpec]) -> tuple[Instruction, ...]:
    """
    Validate table rows and turn them into instruction records.

    Records keep the order of ``specs``.

    Raises:
        CatalogError: If any row is malformed or an opcode appears twice
    """
    instructions = []
    seen: set[str] = set()
    for spec in specs:
        instruction = _to_instruction(spec)
        if instruction.opcode in seen:
            raise CatalogError("duplicate opcode in instruction table", spec.opcode)
        seen.add(instruction.opcode)
        instructions.append(instruction)
    return tuple(instructions)


def generate_all_instructions() -> tuple[Instruction, ...]:
    """
    Generate the full SM83 instruction catalog.

    Primary opcodes come first, then the $CB space, each in ascending opcode
    order. Undefined code points are simply absent.

    Raises:
        CatalogError: If the static table is malformed
    """
    primary = sorted(_primary_specs(), key=lambda spec: int(spec.opcode, 16))
    extended = sorted(_extended_specs(), key=lambda spec: int(spec.opcode[2:], 16))
    catalog = build_catalog(primary + extended)
    logger.debug(
        f"Generated {len(catalog)} instructions "
        f"({len(primary)} primary, {len(extended)} CB-prefixed)"
    )
    return catalog


# =============================================================================
# Lookup Functions
# =============================================================================

@functools.lru_cache(maxsize=None)
def get_catalog() -> tuple[Instruction, ...]:
    """Return the process-wide catalog, generating it on first use."""
    return generate_all_instructions()


@functools.lru_cache(maxsize=None)
def _catalog_index() -> dict[str, Instruction]:
    return {instruction.opcode: instruction for instruction in get_catalog()}


def get_instruction(opcode: str) -> Optional[Instruction]:
    """
    Look up an instruction by opcode text.

    Case-insensitive; a leading ``0x`` is accepted.

    Returns:
        The instruction, or None if the opcode is undefined or malformed

    Example:
        >>> get_instruction("3e").mnemonic
        'LD A,d8'
        >>> get_instruction("D3") is None
        True
    """
    key = opcode.strip().upper()
    if key.startswith("0X"):
        key = key[2:]
    return _catalog_index().get(key)


def get_instructions_by_type(kind: InstructionType) -> list[Instruction]:
    """Get all catalog instructions of the given category, in catalog order."""
    return [instruction for instruction in get_catalog() if instruction.type is kind]
