"""Address book for the default emulator accounts."""

from __future__ import annotations

import logging
from typing import Iterable, List

from ..defaults import ADDRESS_BOOK, DEFAULT_ACCOUNTS


logger = logging.getLogger(__name__)


def name_of(address: str) -> str | None:
    return ADDRESS_BOOK.get(address)


def account_address(raw: str) -> str:
    """Map a stored account address (0x...0001) to its short form (0x01)."""
    clean = (raw or "").strip()
    return f"0x0{clean[-1:]}"


def unused_accounts(accounts: Iterable[str]) -> List[str]:
    """Return default accounts not in `accounts`, in address book order."""
    taken = set(accounts)
    return [address for address in DEFAULT_ACCOUNTS if address not in taken]


def pad_to_signer_count(accounts: List[str], required: int) -> List[str]:
    """Top up `accounts` with unused default accounts until `required` are present.

    Lists that are already long enough come back untouched. Otherwise unused
    accounts are appended in address book order and the result is sorted.
    """
    if len(accounts) >= required:
        return accounts

    available = unused_accounts(accounts)
    shortfall = required - len(accounts)
    if shortfall > len(available):
        logger.warning(
            "Transaction needs %s signers but only %s default accounts exist.",
            required,
            len(DEFAULT_ACCOUNTS),
        )
    return sorted([*accounts, *available[:shortfall]])
