"""
SharpBoy Browser Configuration
==============================

Presentation settings passed into the browser session and the CLI renderer.
Configuration can come from:
- Default values (defined here)
- Environment variables
- Command-line options (applied by the CLI on top of the above)

None of these settings affect matching or grid placement; they only control
how results are presented.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass
import os

from sharpboy.errors import ConfigError


DEFAULT_RESULT_LIMIT = 300

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _parse_bool(value: str):
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return None


@dataclass
class BrowserConfig:
    """
    Presentation settings for an opcode browser session.

    Attributes:
        result_limit: Maximum number of search results shown (default: 300)
        hide_non_matches: Blank out grid cells that do not match the query
        color: Use ANSI colours in terminal output
    """

    result_limit: int = DEFAULT_RESULT_LIMIT
    hide_non_matches: bool = False
    color: bool = True

    def __post_init__(self) -> None:
        if self.result_limit <= 0:
            raise ConfigError(f"result_limit must be positive, got {self.result_limit}")

    @classmethod
    def from_env(cls) -> "BrowserConfig":
        """
        Create BrowserConfig from environment variables.

        Environment variables (all optional):
            SHARPBOY_RESULT_LIMIT: Maximum results shown (positive integer)
            SHARPBOY_HIDE_NON_MATCHES: Hide non-matching cells (true/false)
            SHARPBOY_COLOR: Colour output (true/false)

        Invalid values are ignored and the default is kept.

        Returns:
            BrowserConfig with values from environment variables
        """
        config = cls()

        if limit := os.environ.get("SHARPBOY_RESULT_LIMIT"):
            try:
                parsed = int(limit)
            except ValueError:
                parsed = 0
            if parsed > 0:
                config.result_limit = parsed

        if hide := os.environ.get("SHARPBOY_HIDE_NON_MATCHES"):
            flag = _parse_bool(hide)
            if flag is not None:
                config.hide_non_matches = flag

        if color := os.environ.get("SHARPBOY_COLOR"):
            flag = _parse_bool(color)
            if flag is not None:
                config.color = flag

        return config
