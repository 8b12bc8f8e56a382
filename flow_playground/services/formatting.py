"""Check and pretty-print generated JavaScript."""

from __future__ import annotations

import asyncio

import esprima
import jsbeautifier
from esprima.error_handler import Error as ParseError


class CodeFormattingError(RuntimeError):
    """Raised when generated test code is invalid or cannot be formatted."""


def _options() -> jsbeautifier.BeautifierOptions:
    options = jsbeautifier.default_options()
    options.indent_size = 2
    options.preserve_newlines = True
    options.max_preserve_newlines = 2
    options.end_with_newline = True
    options.space_after_anon_function = True
    return options


def check_syntax(source: str) -> None:
    """Parse `source` as an ES module; raise CodeFormattingError if it is not valid."""
    try:
        esprima.parseModule(source)
    except ParseError as exc:
        raise CodeFormattingError(f"Generated code is not valid JavaScript: {exc}") from exc


def format_code(source: str) -> str:
    """Format `source` deterministically; raise CodeFormattingError on failure."""
    check_syntax(source)
    try:
        return jsbeautifier.beautify(source, _options())
    except Exception as exc:  # noqa: BLE001
        raise CodeFormattingError(f"Failed to format generated code: {exc}") from exc


async def format_code_async(source: str) -> str:
    return await asyncio.to_thread(format_code, source)
