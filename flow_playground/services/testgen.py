"""Generate flow-js-testing test cases from Cadence source."""

from __future__ import annotations

import json
import logging
from typing import Awaitable, Callable, List, Sequence

from .accounts import name_of, pad_to_signer_count
from .arguments import ArgumentGroup, group_arguments, render_literal
from .extraction import (
    ImportRef,
    MissingPrepareClauseError,
    extract_account_calls,
    extract_arguments,
    extract_contract_name,
    extract_imports,
    extract_signer_count,
)
from .formatting import format_code_async
from .templating import render_template


Formatter = Callable[[str], Awaitable[str]]

logger = logging.getLogger(__name__)


SCRIPT_TEST_SKELETON = """\
test("test script template ##SCRIPT-NAME##", async () => {
  // ##ADDRESS-MAP##

  let code = await getScriptCode({
    name: "##SCRIPT-NAME##",
    // ##ADDRESS-MAP-CONDITIONAL##
  });

  // ##ARGUMENTS##

  // ##GET-ACCOUNTS##

  // ##CODE-REPLACEMENT##

  const result = await executeScript({
    code,
    // ##ARGUMENTS-CONDITIONAL##
  });

  // Add your expectations here
  expect().toBe();
});
"""

TRANSACTION_TEST_SKELETON = """\
test("test transaction template ##TX-NAME##", async () => {
  // ##ADDRESS-MAP##

  // ##ARGUMENTS##

  let code = await getTransactionCode({
    name: "##TX-NAME##",
    // ##ADDRESS-MAP-CONDITIONAL##
  });

  // ##GET-ACCOUNTS##
  // ##SIGNERS##

  // ##CODE-REPLACEMENT##

  let txResult;
  try {
    txResult = await sendTransaction({
      code,
      // ##SIGNERS-CONDITIONAL##
      // ##ARGUMENTS-CONDITIONAL##
    });
  } catch (e) {
    console.log(e);
  }

  // Add your expectations here
  expect(txResult.errorMessage).toBe("");
});
"""

CONTRACT_TEST_SKELETON = """\
test("Deploy ##CONTRACT-NAME## contract", async () => {
  const name = "##CONTRACT-NAME##";
  // ##ADDRESS-MAP##
  // ##TARGET-ADDRESS##

  let deployContract;
  try {
    deployContract = await deployContractByName({
      name,
      to,
      // ##ADDRESS-MAP-CONDITIONAL##
    });
  } catch (e) {
    console.log(e);
  }
  expect(deployContract.errorMessage).toBe("");
});
"""

CONDITIONAL_NAMES = {
    "ADDRESS-MAP": "addressMap,",
    "ARGUMENTS": "args,",
    "SIGNERS": "signers,",
}


def _string_body(value: str) -> str:
    """Escape `value` for use between double quotes in JavaScript."""
    return json.dumps(value)[1:-1]


def _named_accounts(accounts: Sequence[str]) -> List[tuple[str, str]]:
    named = []
    for address in accounts:
        name = name_of(address)
        if name is None:
            logger.debug("Skipping account %s outside the default address book.", address)
            continue
        named.append((address, name))
    return named


def generate_address_map(imports: Sequence[ImportRef]) -> str:
    imports = [item for item in imports if item.name]
    if not imports:
        return ""
    lines = [
        f'const {item.name} = await getContractAddress("{_string_body(item.name)}");'
        for item in imports
    ]
    members = ",\n".join(f"  {item.name}" for item in imports)
    return "\n".join(lines) + "\n\nconst addressMap = {\n" + members + "\n};"


def generate_get_accounts(accounts: Sequence[str]) -> str:
    named = _named_accounts(accounts)
    if not named:
        return ""
    return "".join(
        f'const {name} = await getAccountAddress("{name}");\n' for _, name in named
    )


def generate_code_replacement(accounts: Sequence[str]) -> str:
    """Emit code that rewrites `getAccount(0x..)` calls to the test accounts."""
    named = _named_accounts(accounts)
    if not named:
        return ""
    entries = ",\n".join(f'    "{address}": {name}' for address, name in named)
    return (
        "code = code.replace(/(?:getAccount\\()(0x\\w*)(?:\\))/g, (_, match) => {\n"
        "  const accounts = {\n"
        f"{entries}\n"
        "  };\n"
        "  return `getAccount(${accounts[match]})`;\n"
        "});"
    )


def generate_arguments_code(groups: Sequence[ArgumentGroup]) -> str:
    if not groups:
        return ""
    entries = ",\n".join(
        "  [{}, types.{}]".format(",".join(render_literal(v) for v in group.values), group.type)
        for group in groups
    )
    return f"const args = [\n{entries}\n];"


def generate_signers_code(amount: int, accounts: Sequence[str]) -> str:
    if amount <= 0:
        return ""
    names = ",".join(name for _, name in _named_accounts(accounts))
    return f"const signers = [{names}];"


def generate_contract_target(address: str) -> str:
    name = name_of(address) or address
    return f'const to = await getAccountAddress("{_string_body(name)}");'


def signer_count_or_zero(source: str) -> int:
    try:
        return extract_signer_count(source)
    except MissingPrepareClauseError:
        logger.debug("No prepare block found; generating a test without signers.")
        return 0


async def assemble_script_test(
    name: str,
    source: str,
    formatter: Formatter = format_code_async,
) -> str:
    accounts = extract_account_calls(source)
    fragments = {
        "SCRIPT-NAME": _string_body(name),
        "ADDRESS-MAP": generate_address_map(extract_imports(source)),
        "ARGUMENTS": generate_arguments_code(group_arguments(extract_arguments(source))),
        "GET-ACCOUNTS": generate_get_accounts(accounts),
        "CODE-REPLACEMENT": generate_code_replacement(accounts),
    }
    return await formatter(render_template(SCRIPT_TEST_SKELETON, fragments, CONDITIONAL_NAMES))


async def assemble_transaction_test(
    name: str,
    source: str,
    formatter: Formatter = format_code_async,
) -> str:
    signers_amount = signer_count_or_zero(source)
    accounts = extract_account_calls(source)
    full_accounts = pad_to_signer_count(accounts, signers_amount)
    fragments = {
        "TX-NAME": _string_body(name),
        "ADDRESS-MAP": generate_address_map(extract_imports(source)),
        "ARGUMENTS": generate_arguments_code(group_arguments(extract_arguments(source))),
        "GET-ACCOUNTS": generate_get_accounts(full_accounts),
        "SIGNERS": generate_signers_code(signers_amount, full_accounts),
        "CODE-REPLACEMENT": generate_code_replacement(accounts),
    }
    return await formatter(render_template(TRANSACTION_TEST_SKELETON, fragments, CONDITIONAL_NAMES))


async def assemble_contract_test(
    address: str,
    source: str,
    formatter: Formatter = format_code_async,
) -> str:
    fragments = {
        "CONTRACT-NAME": _string_body(extract_contract_name(source) or ""),
        "ADDRESS-MAP": generate_address_map(extract_imports(source)),
        "TARGET-ADDRESS": generate_contract_target(address),
    }
    return await formatter(render_template(CONTRACT_TEST_SKELETON, fragments, CONDITIONAL_NAMES))
