"""Shared defaults for the playground and the test generator."""

from types import MappingProxyType

# Default emulator accounts offered by the editor, in fixed order.
ADDRESS_BOOK = MappingProxyType({
    "0x01": "Alice",
    "0x02": "Bob",
    "0x03": "Charlie",
    "0x04": "Dave",
})
DEFAULT_ACCOUNTS: tuple[str, ...] = tuple(ADDRESS_BOOK)

# Representative argument values used in generated tests.
TYPE_DEFAULTS = MappingProxyType({
    "Int": 1337,
    "Int8": 8,
    "Int16": 16,
    "Int32": 32,
    "UInt": 1337,
    "UInt8": 8,
    "UInt16": 16,
    "UInt32": 32,
    "UFix64": 1.0,
    "String": "Hello",
    "Address": "0x0ae53cb6e3f42a79",  # FlowToken on the emulator
})

DEFAULT_CONTRACT = """\
pub contract HelloWorld {
    pub let greeting: String

    init() {
        self.greeting = "Hello, World!"
    }

    pub fun hello(): String {
        return self.greeting
    }
}
"""

DEFAULT_TRANSACTION_TITLE = "Say Hello"
DEFAULT_TRANSACTION = """\
import HelloWorld from 0x01

transaction {
    prepare(acct: AuthAccount) {}

    execute {
        log(HelloWorld.hello())
    }
}
"""

DEFAULT_SCRIPT_TITLE = "Get Greeting"
DEFAULT_SCRIPT = """\
import HelloWorld from 0x01

pub fun main(): String {
    return HelloWorld.greeting
}
"""
