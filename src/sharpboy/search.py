"""
Instruction Search
==================

Free-text matching of instructions.

A query is matched two ways at once, and an instruction matches if either
succeeds:

1. **Text terms**: the query is split on whitespace and every term must be a
   substring of the instruction's mnemonic, opcode or category. "ld a" finds
   every load into A; terms may hit different fields, in any order.

2. **Opcode lookup**: the whole query, with a leading "0x" removed, must be a
   substring of the opcode. This lets "0x3e" find opcode 3E even though
   "0x3e" appears in no field.

The two paths stay separate predicates. They serve different query shapes
and merging them into one rule would break one of the two.

Results are presented in address order (primary before CB-prefixed, then by
value), which is the reading order of the grids. There is no relevance
ranking.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from typing import Iterable, Optional

from sharpboy.addressing import address_sort_key
from sharpboy.cpu.instructions import Instruction


def normalize_query(query: str) -> str:
    return query.strip().lower()


def normalize_opcode_query(query: str) -> str:
    """Normalized query with one leading "0x" removed."""
    normalized = normalize_query(query)
    if normalized.startswith("0x"):
        return normalized[2:]
    return normalized


def _haystack(instruction: Instruction) -> str:
    fields = (
        instruction.mnemonic,
        instruction.opcode,
        str(instruction.type) if instruction.type else "",
    )
    return " ".join(field for field in fields if field).lower()


def _matches_terms(instruction: Instruction, terms: list[str]) -> bool:
    haystack = _haystack(instruction)
    return all(term in haystack for term in terms)


def _matches_opcode(instruction: Instruction, opcode_term: str) -> bool:
    return bool(opcode_term) and opcode_term in instruction.opcode.lower()


def matches_instruction(instruction: Instruction, query: str) -> bool:
    """
    Check whether an instruction matches a search query.

    An empty or blank query matches everything.

    Example:
        >>> ld = get_instruction("7F")        # LD A,A
        >>> matches_instruction(ld, "ld a")
        True
        >>> matches_instruction(ld, "0x7f")
        True
    """
    normalized = normalize_query(query)
    if not normalized:
        return True

    terms = normalized.split()
    opcode_term = normalize_opcode_query(normalized)

    by_terms = _matches_terms(instruction, terms)
    by_opcode = _matches_opcode(instruction, opcode_term)
    return by_terms or by_opcode


def sort_by_address(instructions: Iterable[Instruction]) -> list[Instruction]:
    """Stable sort of instructions in address order."""
    return sorted(instructions, key=lambda instruction: address_sort_key(instruction.opcode))


def search_instructions(
    instructions: Iterable[Instruction],
    query: str,
    limit: Optional[int] = None,
) -> list[Instruction]:
    """
    Find all instructions matching a query, in address order.

    Args:
        instructions: Records to search, normally the catalog
        query: Free-text query; blank matches everything
        limit: Maximum number of results to return (default: all)

    Returns:
        Matching instructions sorted by address, at most ``limit`` of them
    """
    matches = sort_by_address(
        instruction for instruction in instructions
        if matches_instruction(instruction, query)
    )
    if limit is not None:
        return matches[:max(limit, 0)]
    return matches


def matched_opcodes(instructions: Iterable[Instruction]) -> frozenset[str]:
    """Lower-cased opcodes of a match list, for flagging grid cells."""
    return frozenset(instruction.opcode.lower() for instruction in instructions)
