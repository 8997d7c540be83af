"""Typed errors for huffkit.

Single source of truth for exit codes lives here.

Policy:
- Errors are small and boring.
- The CLI maps errors to stable exit codes (see EXIT_* constants).
- docs/exit_codes.md is generated from this module (scripts/gen_exit_codes_md.py).
"""

from __future__ import annotations

from dataclasses import dataclass

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERIC = 10
EXIT_EMPTY_INPUT = 11
EXIT_UNKNOWN_SYMBOL = 12
EXIT_INVALID_CODE = 13


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage/config error (invalid args, invalid code table JSON, etc.)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Generic failure (unexpected error)"),
    ExitCodeInfo(EXIT_EMPTY_INPUT, "EMPTY_INPUT", "Input has no symbols, no tree can be built"),
    ExitCodeInfo(EXIT_UNKNOWN_SYMBOL, "UNKNOWN_SYMBOL", "Input symbol missing from the code table"),
    ExitCodeInfo(EXIT_INVALID_CODE, "INVALID_CODE", "Encoded data matches no code (corrupt or mismatched table)"),
)

_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE, do not edit manually.\n")
    lines.append("> Source of truth: `src/huffkit/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `python scripts/gen_exit_codes_md.py`.\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- Every library error extends `HuffkitError` and carries an `exit_code`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class HuffkitError(Exception):
    """Base error for huffkit."""

    exit_code: int = EXIT_GENERIC


class UsageError(HuffkitError):
    exit_code = EXIT_USAGE


class CodeTableSpecError(UsageError, ValueError):
    """Code table JSON is malformed or violates the table invariants."""


class EmptyInputError(HuffkitError):
    exit_code = EXIT_EMPTY_INPUT


class UnknownSymbolError(HuffkitError):
    exit_code = EXIT_UNKNOWN_SYMBOL

    def __init__(self, symbol: object, position: int | None = None):
        self.symbol = symbol
        self.position = position
        where = f" at offset {position}" if position is not None else ""
        super().__init__(f"symbol {_sym_repr(symbol)}{where} not in code table")


class InvalidCodeError(HuffkitError):
    exit_code = EXIT_INVALID_CODE


def _sym_repr(sym: object) -> str:
    # callers may hand in anything, not only bytes
    if not isinstance(sym, int) or isinstance(sym, bool) or not 0 <= sym <= 0x10FFFF:
        return repr(sym)
    ch = chr(sym)
    return f"{sym} ({ch!r})" if ch.isprintable() else f"{sym} (0x{sym:02x})"
