"""Best-effort lexical extraction of facts from Cadence source.

Nothing here parses Cadence. Each helper runs one narrow pattern over the raw
text and returns an empty result when the pattern does not match, so callers
can feed it half-written editor buffers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List


_IMPORT_PATTERN = re.compile(r"import\s*(\w*)\s*from\s*(0x\w*)")
_ACCOUNT_CALL_PATTERN = re.compile(r"getAccount\(\s*(0x\w*)\s*\)")
_ARGUMENTS_PATTERN = re.compile(r"transaction\s*\((.*)\).*|fun main\((.*)\).*")
_PREPARE_PATTERN = re.compile(r"prepare.*\((.*)\)\s*")
_CONTRACT_PATTERN = re.compile(r"contract\s*(\w*)\s*\{")
_WHITESPACE = re.compile(r"\s")


class MissingPrepareClauseError(ValueError):
    """Raised when signer extraction runs on source without a `prepare` block."""


@dataclass(slots=True)
class ImportRef:
    name: str
    address: str


@dataclass(slots=True)
class ArgumentDecl:
    name: str
    type: str


def extract_imports(text: str) -> List[ImportRef]:
    """Return every `import X from 0x...` in source order, duplicates included."""
    return [
        ImportRef(name=match.group(1), address=match.group(2))
        for match in _IMPORT_PATTERN.finditer(text or "")
    ]


def extract_account_calls(text: str) -> List[str]:
    """Return the addresses passed to `getAccount(...)`, sorted."""
    return sorted(match.group(1) for match in _ACCOUNT_CALL_PATTERN.finditer(text or ""))


def extract_arguments(text: str) -> List[ArgumentDecl]:
    """Return the parameters of the first `transaction(...)` or `fun main(...)`."""
    match = _ARGUMENTS_PATTERN.search(text or "")
    if not match:
        return []

    params = match.group(1) or match.group(2)
    if not params:
        return []

    decls: List[ArgumentDecl] = []
    for pair in params.split(","):
        name, _, type_name = _WHITESPACE.sub("", pair).partition(":")
        decls.append(ArgumentDecl(name=name, type=type_name))
    return decls


def extract_signer_count(text: str) -> int:
    """Count the parameters of the `prepare(...)` block of a transaction.

    Only transaction source is expected here; anything without a `prepare`
    block raises MissingPrepareClauseError.
    """
    match = _PREPARE_PATTERN.search(text or "")
    if match is None:
        raise MissingPrepareClauseError("Transaction has no prepare block.")
    params = _WHITESPACE.sub("", match.group(1))
    return len(params.split(",")) if params else 0


def extract_contract_name(text: str) -> str | None:
    match = _CONTRACT_PATTERN.search(text or "")
    if match is None:
        return None
    return match.group(1)
