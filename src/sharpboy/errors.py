"""
SharpBoy Error Hierarchy
========================

This module defines the exception hierarchy for the SharpBoy opcode reference.
All exceptions inherit from SharpBoyError, allowing callers to catch every
library error with a single except clause if desired.

Exception Hierarchy
-------------------
SharpBoyError (base)
├── CatalogError - the static instruction table is malformed (startup fatal)
├── ConfigError - invalid browser configuration value
└── LookupFailure (lookup-related)
    └── UnknownOpcodeError - opcode text names no catalog instruction

Design Philosophy
-----------------
Addressing and matching never raise: malformed opcode text simply has no
placement, and an undefined code point is an empty grid cell. Exceptions are
reserved for conditions the caller must act on: a broken catalog (the table
cannot be trusted at all) and explicit lookups of an opcode that does not
exist.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class SharpBoyError(Exception):
    """
    Base exception for all SharpBoy errors.

        try:
            browser.select("D3")
        except SharpBoyError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Catalog Exceptions
# =============================================================================

class CatalogError(SharpBoyError):
    """
    The static instruction table is malformed.

    Raised while the catalog is generated. A partially built catalog would
    corrupt grid placement, so this error is never caught inside the library;
    it surfaces at startup.

    Attributes:
        message: The error description
        opcode: The opcode text of the offending row (optional)
    """

    def __init__(self, message: str, opcode: Optional[str] = None):
        self.message = message
        self.opcode = opcode
        if opcode:
            super().__init__(f"opcode {opcode}: {message}")
        else:
            super().__init__(message)


# =============================================================================
# Configuration Exceptions
# =============================================================================

class ConfigError(SharpBoyError):
    """Invalid browser configuration value."""
    pass


# =============================================================================
# Lookup Exceptions
# =============================================================================

class LookupFailure(SharpBoyError):
    """Base exception for failed explicit lookups."""
    pass


class UnknownOpcodeError(LookupFailure):
    """
    Opcode text does not name an instruction in the catalog.

    Attributes:
        opcode: The opcode text as given by the caller
        hint: A suggestion for fixing the lookup (optional)
    """

    def __init__(self, opcode: str, hint: Optional[str] = None):
        self.opcode = opcode
        self.hint = hint
        message = f"unknown opcode '{opcode}'"
        if hint:
            message += f"\nhint: {hint}"
        super().__init__(message)
