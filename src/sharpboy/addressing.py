"""
Opcode Addressing
=================

Parses textual opcode identifiers into a normalized address and a grid
placement.

Opcode text comes in two shapes that share one format:

- ``"3E"``: a primary opcode, two hex digits
- ``"CB11"``: an extended opcode, the literal ``CB`` marker followed by two
  hex digits

Parsing is case-insensitive. ``"CB"`` on its own is the primary opcode $CB
(the prefix instruction itself), since the marker only counts when exactly
two hex digits follow it.

Hex parsing is strict, unlike ``int(text, 16)``: surrounding whitespace, a
``0x`` prefix or a value above $FF all give ``value=None``. Callers taking
user input strip those first (see ``get_instruction`` and
``OpcodeBrowser.select``).

Every address maps to exactly one cell of the two 16×16 grids: the namespace
selects the grid, the high nibble the row and the low nibble the column.

None of these functions raise on malformed input. An unparseable value is
reported as ``value=None`` and an unplaceable opcode as a ``None`` cell, which
callers treat as "address unknown" and "nothing to highlight".

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


EXTENDED_MARKER = "CB"

_HEX_PATTERN = re.compile(r"[0-9A-F]+")


# =============================================================================
# Address Types
# =============================================================================

class Namespace(IntEnum):
    """
    Opcode namespace.

    The integer value is the grid index and the sort rank: primary opcodes
    come before extended ones.
    """
    PRIMARY = 0
    EXTENDED = 1

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class OpCodeAddress:
    """
    Normalized opcode address.

    Attributes:
        namespace: PRIMARY or EXTENDED
        value: Opcode value 0-255, or None when the text is not valid hex
    """
    namespace: Namespace
    value: Optional[int]

    @property
    def is_known(self) -> bool:
        return self.value is not None


@dataclass(frozen=True)
class GridCell:
    """
    Placement of an opcode in the grids.

    Attributes:
        grid: 0 for primary opcodes, 1 for CB-prefixed opcodes
        row: High nibble of the opcode value (0-15)
        column: Low nibble of the opcode value (0-15)
    """
    grid: int
    row: int
    column: int

    @property
    def namespace(self) -> Namespace:
        return Namespace(self.grid)

    @property
    def value(self) -> int:
        return (self.row << 4) | self.column


# =============================================================================
# Parsing
# =============================================================================

def _split_marker(opcode: str) -> tuple[bool, str]:
    """Uppercase the text and strip the CB marker when it applies."""
    normalized = str(opcode).upper()
    if normalized.startswith(EXTENDED_MARKER) and len(normalized) == 4:
        return True, normalized[2:]
    return False, normalized


def _parse_hex(text: str) -> Optional[int]:
    if not _HEX_PATTERN.fullmatch(text):
        return None
    value = int(text, 16)
    return value if value <= 0xFF else None


def parse_address(opcode: str) -> OpCodeAddress:
    """
    Parse opcode text into a normalized address.

    Args:
        opcode: Opcode text such as "3E", "cb11"

    Returns:
        The address; ``value`` is None if the text is not hex or exceeds $FF

    Example:
        >>> parse_address("cb11")
        OpCodeAddress(namespace=<Namespace.EXTENDED: 1>, value=17)
    """
    extended, raw = _split_marker(opcode)
    namespace = Namespace.EXTENDED if extended else Namespace.PRIMARY
    return OpCodeAddress(namespace, _parse_hex(raw))


def address_to_cell(opcode: str) -> Optional[GridCell]:
    """
    Compute the grid cell for opcode text.

    Returns:
        The cell, or None if the value part is not exactly two hex digits

    Example:
        >>> address_to_cell("3E")
        GridCell(grid=0, row=3, column=14)
        >>> address_to_cell("3") is None
        True
    """
    extended, raw = _split_marker(opcode)
    if len(raw) != 2:
        return None

    row = _parse_hex(raw[0])
    column = _parse_hex(raw[1])
    if row is None or column is None:
        return None

    grid = Namespace.EXTENDED if extended else Namespace.PRIMARY
    return GridCell(int(grid), row, column)


def format_opcode(address: OpCodeAddress) -> str:
    """
    Canonical opcode text for an address ("3E", "CB11").

    Raises:
        ValueError: If the address value is unknown
    """
    if address.value is None:
        raise ValueError("cannot format an unknown address")
    prefix = EXTENDED_MARKER if address.namespace is Namespace.EXTENDED else ""
    return f"{prefix}{address.value:02X}"


# =============================================================================
# Ordering
# =============================================================================
# Opcodes sort by namespace, then by value, which is the reading order of the
# grids (row-major, primary grid first). Unknown values sort after every known
# value of their namespace.

def address_sort_key(opcode: str) -> tuple[int, int, int]:
    """Sort key implementing the address order for opcode text."""
    address = parse_address(opcode)
    if address.value is None:
        return (int(address.namespace), 1, 0)
    return (int(address.namespace), 0, address.value)


def compare_opcodes(a: str, b: str) -> int:
    """
    Three-way comparison in address order.

    Returns:
        Negative if a sorts first, positive if b sorts first, 0 if equal
    """
    key_a = address_sort_key(a)
    key_b = address_sort_key(b)
    return (key_a > key_b) - (key_a < key_b)


def sort_opcodes(opcodes) -> list[str]:
    """Sort opcode text in address order (stable)."""
    return sorted(opcodes, key=address_sort_key)
