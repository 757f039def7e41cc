"""Exception types raised while reading and writing the function registry."""

from __future__ import annotations


class RegistryError(Exception):
    """Base class for function list errors.

    ``line`` is the 1-based line number of the offending row, filled in by
    the loader when the error comes from a specific record.
    """

    def __init__(self, msg: str, *, line: int | None = None) -> None:
        super().__init__(msg)
        self.msg = msg
        self.line = line

    def __str__(self) -> str:
        if self.line is None:
            return self.msg
        return f"failed to parse CSV record at line {self.line}: {self.msg}"


class FormatError(RegistryError, ValueError):
    """Wrong header, wrong field count, or a value the format cannot hold."""


class ParseError(RegistryError, ValueError):
    """Malformed hex address or decimal size."""


class AddressRangeError(RegistryError, ValueError):
    """Absolute address lies below the address base."""


class UnknownStatusCode(RegistryError, ValueError):
    """Quality field holds something other than O/m/M/U/W/L."""


class MissingStatusCode(RegistryError, ValueError):
    """Quality field is empty."""


class MissingName(RegistryError):
    """A decompiled function has no name."""

    def __init__(self, address: int) -> None:
        super().__init__(
            f"function at 0x{address:016x} is marked as O/M/m/W but has an empty name"
        )
        self.address = address


class DuplicateNames(RegistryError):
    """One or more names appear on several functions.

    ``names`` lists every duplicated name once, in file order.
    """

    def __init__(self, names: list[str]) -> None:
        super().__init__(f"found duplicates: {', '.join(names)}")
        self.names = names


class DemangleError(ValueError):
    """Name is not a valid Itanium-mangled symbol."""
