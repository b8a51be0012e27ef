"""
Unit Tests for Opcode Addressing
================================

Test coverage includes:
- Parsing opcode text into (namespace, value)
- Grid placement (grid, row, column)
- Malformed input (never raises)
- Address ordering

Run tests with:
    pytest tests/test_addressing.py -v

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import pytest

from sharpboy.addressing import (
    GridCell,
    Namespace,
    OpCodeAddress,
    address_sort_key,
    address_to_cell,
    compare_opcodes,
    format_opcode,
    parse_address,
    sort_opcodes,
)


# =============================================================================
# parse_address Tests
# =============================================================================

class TestParseAddress:
    """Tests for parse_address."""

    def test_primary(self):
        assert parse_address("3E") == OpCodeAddress(Namespace.PRIMARY, 0x3E)

    def test_extended_lowercase(self):
        assert parse_address("cb11") == OpCodeAddress(Namespace.EXTENDED, 0x11)

    def test_prefix_opcode_itself(self):
        """'CB' alone is the primary opcode $CB."""
        assert parse_address("CB") == OpCodeAddress(Namespace.PRIMARY, 0xCB)

    def test_mixed_case(self):
        assert parse_address("Cb7c") == OpCodeAddress(Namespace.EXTENDED, 0x7C)

    def test_not_hex(self):
        """Non-hex text gives an unknown value, not an exception."""
        address = parse_address("zz")
        assert address.namespace == Namespace.PRIMARY
        assert address.value is None
        assert not address.is_known

    def test_extended_not_hex(self):
        address = parse_address("CBZZ")
        assert address.namespace == Namespace.EXTENDED
        assert address.value is None

    def test_empty(self):
        assert parse_address("").value is None

    def test_out_of_range(self):
        """Three hex digits exceed a byte."""
        assert parse_address("CB1").value is None
        assert parse_address("100").value is None

    def test_rejects_python_literals(self):
        """Only bare hex digits are accepted."""
        assert parse_address("0x3E").value is None
        assert parse_address("3_E").value is None
        assert parse_address(" 3E").value is None


# =============================================================================
# address_to_cell Tests
# =============================================================================

class TestAddressToCell:
    """Tests for address_to_cell."""

    def test_primary(self):
        assert address_to_cell("3E") == GridCell(grid=0, row=3, column=14)

    def test_extended(self):
        assert address_to_cell("CB11") == GridCell(grid=1, row=1, column=1)

    def test_lowercase(self):
        assert address_to_cell("cbff") == GridCell(grid=1, row=15, column=15)

    def test_prefix_opcode_itself(self):
        assert address_to_cell("CB") == GridCell(grid=0, row=12, column=11)

    def test_wrong_length(self):
        assert address_to_cell("3") is None
        assert address_to_cell("") is None
        assert address_to_cell("CB1") is None
        assert address_to_cell("123") is None

    def test_bad_digit(self):
        assert address_to_cell("3G") is None
        assert address_to_cell("CBG1") is None

    def test_cell_value_and_namespace(self):
        cell = address_to_cell("CB7C")
        assert cell.value == 0x7C
        assert cell.namespace == Namespace.EXTENDED

    def test_bijective(self):
        """All 512 addresses map to distinct cells."""
        cells = set()
        for value in range(256):
            cells.add(address_to_cell(f"{value:02X}"))
            cells.add(address_to_cell(f"CB{value:02X}"))
        assert len(cells) == 512
        assert None not in cells

    def test_agrees_with_parse_address(self):
        for opcode in ("00", "3E", "FF", "CB00", "CB11", "CBFF"):
            address = parse_address(opcode)
            cell = address_to_cell(opcode)
            assert cell.grid == int(address.namespace)
            assert cell.value == address.value


# =============================================================================
# Formatting and Ordering Tests
# =============================================================================

class TestOrdering:
    """Tests for the address order."""

    def test_mixed_sort(self):
        """Primary before extended, ascending within each."""
        assert sort_opcodes(["CB11", "05", "CB00", "10"]) == ["05", "10", "CB00", "CB11"]

    def test_numeric_not_lexicographic(self):
        """'CB' (primary $CB) sorts before 'D3' and before every CB-prefixed code."""
        assert sort_opcodes(["CB00", "D3", "CB", "0A"]) == ["0A", "CB", "D3", "CB00"]

    def test_case_insensitive(self):
        assert address_sort_key("cb11") == address_sort_key("CB11")

    def test_compare(self):
        assert compare_opcodes("05", "10") < 0
        assert compare_opcodes("CB00", "FF") > 0
        assert compare_opcodes("3e", "3E") == 0

    def test_unknown_sorts_last_in_namespace(self):
        assert sort_opcodes(["zz", "CB00", "FF"]) == ["FF", "zz", "CB00"]

    def test_format_opcode(self):
        assert format_opcode(OpCodeAddress(Namespace.PRIMARY, 0x3E)) == "3E"
        assert format_opcode(OpCodeAddress(Namespace.EXTENDED, 0x01)) == "CB01"
        assert format_opcode(parse_address("cb7c")) == "CB7C"

    def test_format_unknown(self):
        with pytest.raises(ValueError):
            format_opcode(parse_address("zz"))
