"""Typed errors for huffpack.

Single source of truth for exit codes lives here.

Policy:
- Errors are small and boring.
- The CLI maps errors to stable exit codes (see EXIT_* constants).
- ``huffpack exit-codes`` renders the table from this module.
"""

from __future__ import annotations

from dataclasses import dataclass

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERIC = 10
EXIT_UNSUPPORTED_VERSION = 11
EXIT_HASH_MISMATCH = 13
EXIT_INSUFFICIENT_ALPHABET = 14
EXIT_UNMAPPED_SYMBOL = 15


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage/config error (invalid args, invalid pipeline spec, etc.)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Generic failure (corrupt container, malformed tree/message, etc.)"),
    ExitCodeInfo(EXIT_UNSUPPORTED_VERSION, "UNSUPPORTED_VERSION", "Unsupported container version"),
    ExitCodeInfo(EXIT_HASH_MISMATCH, "HASH_MISMATCH", "Integrity failure (decoded text does not match stored sha256)"),
    ExitCodeInfo(
        EXIT_INSUFFICIENT_ALPHABET,
        "INSUFFICIENT_ALPHABET",
        "Input text has fewer than 2 distinct symbols",
    ),
    ExitCodeInfo(EXIT_UNMAPPED_SYMBOL, "UNMAPPED_SYMBOL", "Text contains a symbol the encoding tree does not cover"),
)

# For convenience (fast lookup)
_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render the exit code table as markdown."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> Source of truth: `src/huffpack/errors.py` (EXIT_CODES).\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- Every internal error extends `HuffpackError` and carries an `exit_code`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class HuffpackError(Exception):
    """Base error for huffpack."""

    exit_code: int = EXIT_GENERIC


class UsageError(HuffpackError):
    exit_code = EXIT_USAGE


class CorruptPayload(HuffpackError):
    exit_code = EXIT_GENERIC


class BadMagic(CorruptPayload):
    pass


class UnsupportedVersion(HuffpackError):
    exit_code = EXIT_UNSUPPORTED_VERSION


class HashMismatch(HuffpackError):
    exit_code = EXIT_HASH_MISMATCH


# Core Huffman errors


class InsufficientAlphabetError(HuffpackError):
    """The text has fewer than 2 distinct symbols: no prefix tree can be built."""

    exit_code = EXIT_INSUFFICIENT_ALPHABET

    def __init__(self, distinct: int) -> None:
        super().__init__(f"servono almeno 2 simboli distinti, trovati {distinct}")
        self.distinct = distinct


class UnmappedSymbolError(HuffpackError):
    exit_code = EXIT_UNMAPPED_SYMBOL

    def __init__(self, symbol: str, position: int) -> None:
        super().__init__(f"simbolo {symbol!r} in posizione {position} assente dall'albero")
        self.symbol = symbol
        self.position = position


class MalformedTreeDataError(CorruptPayload):
    """shape/leaves do not describe a valid encoding tree."""


class MalformedMessageError(CorruptPayload):
    """The message bits are not a concatenation of complete codes."""
