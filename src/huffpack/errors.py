"""Typed errors for huffpack.

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
EXIT_UNSUPPORTED_VERSION = 11
EXIT_IO = 12
EXIT_CORRUPT_STREAM = 13
EXIT_EMPTY_INPUT = 14
EXIT_SENTINEL_COLLISION = 15


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage/config error (invalid args, invalid options spec, etc.)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Generic failure (unexpected error)"),
    ExitCodeInfo(EXIT_UNSUPPORTED_VERSION, "UNSUPPORTED_VERSION", "Unsupported artifact version"),
    ExitCodeInfo(EXIT_IO, "IO", "Input missing/unreadable or output not writable"),
    ExitCodeInfo(
        EXIT_CORRUPT_STREAM,
        "CORRUPT_STREAM",
        "Corrupt artifact (bad header, truncated payload, bits not ending on a leaf)",
    ),
    ExitCodeInfo(EXIT_EMPTY_INPUT, "EMPTY_INPUT", "Empty input: no Huffman tree can be built"),
    ExitCodeInfo(
        EXIT_SENTINEL_COLLISION,
        "SENTINEL_COLLISION",
        "Input already contains the space sentinel ('_'); output would not round-trip",
    ),
)

# For convenience (fast lookup)
_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE, do not edit manually.\n")
    lines.append("> Source of truth: `src/huffpack/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `python scripts/gen_exit_codes_md.py`.\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- Internal errors extend `HuffpackError` and carry an `exit_code`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    lines.append("- `show --json` and `verify --json` print a JSON object to stdout on success.\n")
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class HuffpackError(Exception):
    """Base error for huffpack."""

    exit_code: int = EXIT_GENERIC


class UsageError(HuffpackError):
    exit_code = EXIT_USAGE


class HuffpackIOError(HuffpackError):
    exit_code = EXIT_IO


class InputNotFound(HuffpackIOError):
    pass


class OutputNotWritable(HuffpackIOError):
    pass


class CorruptStream(HuffpackError):
    exit_code = EXIT_CORRUPT_STREAM


class BadMagic(CorruptStream):
    pass


class UnsupportedVersion(HuffpackError):
    exit_code = EXIT_UNSUPPORTED_VERSION


class EmptyInput(HuffpackError):
    exit_code = EXIT_EMPTY_INPUT


class SentinelCollision(HuffpackError):
    exit_code = EXIT_SENTINEL_COLLISION
