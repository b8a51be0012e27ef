"""
Tests for the sbops command-line tool.

Test coverage includes:
- table rendering, match flags and selection highlighting
- show output and unknown opcodes
- search results, summaries and the display limit
- Exit codes

Run tests with:
    pytest tests/test_cli.py -v

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import click
import pytest
from click.testing import CliRunner

from sharpboy import __version__
from sharpboy.cli.errors import ExitCode, handle_cli_exception
from sharpboy.cli.sbops import CELL_WIDTH, format_cell, format_details, format_result, main
from sharpboy.cpu import get_instruction
from sharpboy.errors import UnknownOpcodeError


CLEAN_ENV = {
    "SHARPBOY_RESULT_LIMIT": None,
    "SHARPBOY_HIDE_NON_MATCHES": None,
    "SHARPBOY_COLOR": None,
}


@pytest.fixture
def run():
    runner = CliRunner()

    def invoke(*args):
        return runner.invoke(main, ["--no-color", *args], env=CLEAN_ENV)

    return invoke


# =============================================================================
# Formatting Helper Tests
# =============================================================================

class TestFormatting:

    def test_cell_width(self):
        instr = get_instruction("3E")
        assert len(format_cell(instr, False)) == CELL_WIDTH
        assert len(format_cell(None, False)) == CELL_WIDTH

    def test_cell_match_marker(self):
        assert format_cell(get_instruction("76"), True).startswith("*HALT")
        assert format_cell(get_instruction("76"), False).startswith(" HALT")

    def test_long_mnemonic_truncated(self):
        cell = format_cell(get_instruction("E2"), False)
        assert len(cell) == CELL_WIDTH

    def test_details(self):
        lines = format_details(get_instruction("3E"))
        assert lines[0] == "LD A,d8"
        assert "Opcode: 0x3E" in lines
        assert lines[-1] == "Coming Soon"

    def test_details_with_description(self):
        lines = format_details(get_instruction("27"))
        assert lines[-1] != "Coming Soon"

    def test_result(self):
        assert format_result(get_instruction("cb11")).startswith("0xCB11 ")


# =============================================================================
# Main Group Tests
# =============================================================================

class TestMain:

    def test_help(self, run):
        result = run("--help")
        assert result.exit_code == 0
        for command in ("table", "show", "search"):
            assert command in result.output

    def test_version(self, run):
        result = run("--version")
        assert result.exit_code == 0
        assert __version__ in result.output


# =============================================================================
# table Command Tests
# =============================================================================

class TestTableCommand:

    def test_primary_table(self, run):
        result = run("table")
        assert result.exit_code == 0
        assert "8-bit opcodes" in result.output
        assert "LD A,d8" in result.output
        assert " x0" in result.output
        assert " Fx " in result.output

    def test_extended_table(self, run):
        result = run("table", "--cb")
        assert result.exit_code == 0
        assert "16-bit opcodes (0xCB prefix)" in result.output
        assert "RL C" in result.output
        assert "LD A,d8" not in result.output

    def test_query_flags_matches(self, run):
        result = run("table", "-q", "halt")
        assert result.exit_code == 0
        assert "*HALT" in result.output
        assert "*NOP" not in result.output
        assert "1 match" in result.output

    def test_no_summary_without_query(self, run):
        result = run("table")
        assert "match" not in result.output

    def test_hide_non_matches(self, run):
        result = run("table", "-q", "halt", "--hide-non-matches")
        assert result.exit_code == 0
        assert "*HALT" in result.output
        assert "NOP" not in result.output

    def test_select_highlights_headers(self, run):
        result = run("table", "-s", "3e")
        assert result.exit_code == 0
        assert "[xE]" in result.output
        assert ">3x" in result.output
        assert "[x3]" not in result.output

    def test_selection_in_other_grid(self, run):
        result = run("table", "--cb", "-s", "3e")
        assert result.exit_code == 0
        assert "[xE]" not in result.output

    def test_select_unknown(self, run):
        result = run("table", "-s", "d3")
        assert result.exit_code == ExitCode.LOOKUP_ERROR
        assert "unknown opcode" in result.output


# =============================================================================
# show Command Tests
# =============================================================================

class TestShowCommand:

    def test_show(self, run):
        result = run("show", "3e")
        assert result.exit_code == 0
        assert "LD A,d8" in result.output
        assert "Opcode: 0x3E" in result.output
        assert "Number of Bytes: 2" in result.output
        assert "Number of Cycles: 8" in result.output
        assert "Flags: - - - -" in result.output
        assert "Coming Soon" in result.output

    def test_show_flags(self, run):
        result = run("show", "27")
        assert result.exit_code == 0
        assert "Flags: Z - 0 CY" in result.output
        assert "Category: alu" in result.output

    def test_show_extended(self, run):
        result = run("show", "0xCB11")
        assert result.exit_code == 0
        assert "RL C" in result.output
        assert "Opcode: 0xCB11" in result.output

    def test_show_undefined(self, run):
        result = run("show", "d3")
        assert result.exit_code == ExitCode.LOOKUP_ERROR
        assert "unknown opcode" in result.output

    def test_show_missing_argument(self, run):
        result = run("show")
        assert result.exit_code == 2


# =============================================================================
# search Command Tests
# =============================================================================

class TestSearchCommand:

    def test_hex_search(self, run):
        result = run("search", "0x3e")
        assert result.exit_code == 0
        assert "2 matches" in result.output
        assert "0x3E" in result.output
        assert "0xCB3E" in result.output
        assert result.output.index("0x3E ") < result.output.index("0xCB3E")

    def test_multi_word_query(self, run):
        result = run("search", "ld", "a,d8")
        assert result.exit_code == 0
        assert "1 match" in result.output
        assert "LD A,d8" in result.output

    def test_no_matches(self, run):
        result = run("search", "xyzzy")
        assert result.exit_code == 0
        assert "0 matches" in result.output
        assert "No matches." in result.output

    def test_limit(self, run):
        result = run("search", "ld", "-n", "3")
        assert result.exit_code == 0
        result_lines = [line for line in result.output.splitlines() if line.startswith("0x")]
        assert len(result_lines) == 3
        assert "more (use --limit to show more)" in result.output

    def test_invalid_limit(self, run):
        result = run("search", "ld", "-n", "0")
        assert result.exit_code == 2

    def test_query_required(self, run):
        result = run("search")
        assert result.exit_code == 2

    @pytest.mark.parametrize("query", ["", "   "])
    def test_blank_query_rejected(self, run, query):
        result = run("search", query)
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "query must not be blank" in result.output
        assert "No matches." not in result.output

    def test_bad_parameter_exit_code(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(click.BadParameter("bad value"))
        assert exc_info.value.code == ExitCode.INVALID_ARGS
        assert "bad value" in capsys.readouterr().err

    def test_env_limit(self):
        runner = CliRunner()
        env = dict(CLEAN_ENV, SHARPBOY_RESULT_LIMIT="2")
        result = runner.invoke(main, ["--no-color", "search", "ld"], env=env)
        assert result.exit_code == 0
        assert len([line for line in result.output.splitlines() if line.startswith("0x")]) == 2


# =============================================================================
# Error Handler Tests
# =============================================================================

class TestHandleCliException:

    def test_lookup_error(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(UnknownOpcodeError("D3"))
        assert exc_info.value.code == ExitCode.LOOKUP_ERROR
        assert "unknown opcode 'D3'" in capsys.readouterr().err

    def test_internal_error(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(RuntimeError("boom"))
        assert exc_info.value.code == ExitCode.INTERNAL_ERROR
        assert "Internal error: boom" in capsys.readouterr().err
