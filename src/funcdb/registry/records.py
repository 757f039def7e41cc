"""registry/records.py - Function entries and the per-row CSV codec.

Addresses are absolute on disk and relative to the address base in memory.
"""

import re
from dataclasses import dataclass
from enum import Enum

from funcdb.errors import (
    AddressRangeError,
    FormatError,
    MissingStatusCode,
    ParseError,
    UnknownStatusCode,
)

CSV_HEADER: tuple[str, str, str, str] = ("Address", "Quality", "Size", "Name")
ADDRESS_BASE = 0x71_0000_0000

_U64_MAX = (1 << 64) - 1
_U32_MAX = (1 << 32) - 1

_HEX_RE = re.compile(r"[0-9a-fA-F]+")
_DEC_RE = re.compile(r"[0-9]+")


# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------


class Status(Enum):
    """Decompilation status of a function; the value is its on-disk code."""

    MATCHING = "O"
    NON_MATCHING_MINOR = "m"
    NON_MATCHING_MAJOR = "M"
    NOT_DECOMPILED = "U"
    WIP = "W"
    LIBRARY = "L"

    @property
    def code(self) -> str:
        return self.value

    @property
    def description(self) -> str:
        return _STATUS_DESCRIPTIONS[self]

    @property
    def is_decompiled(self) -> bool:
        return self not in (Status.NOT_DECOMPILED, Status.LIBRARY)

    @classmethod
    def from_code(cls, code: str) -> "Status":
        """Map a Quality field to its status."""
        if not code:
            raise MissingStatusCode("missing status code")
        try:
            return cls(code)
        except ValueError:
            raise UnknownStatusCode(f"unexpected status code: {code}") from None


_STATUS_DESCRIPTIONS: dict[Status, str] = {
    Status.MATCHING: "matching",
    Status.NON_MATCHING_MINOR: "non-matching (minor)",
    Status.NON_MATCHING_MAJOR: "non-matching (major)",
    Status.NOT_DECOMPILED: "not decompiled",
    Status.WIP: "WIP",
    Status.LIBRARY: "library function",
}


@dataclass
class FunctionInfo:
    """One row of the function list. ``addr`` is relative to the address base."""

    addr: int
    size: int
    name: str
    status: Status

    @property
    def is_decompiled(self) -> bool:
        return self.status.is_decompiled


# ---------------------------------------------------------------------------
# Addresses
# ---------------------------------------------------------------------------


def parse_hex(text: str) -> int:
    """Parse a hex number, with or without a ``0x`` prefix."""
    digits = text[2:] if text.startswith("0x") else text
    if not _HEX_RE.fullmatch(digits):
        raise ParseError(f"invalid hex number: {text!r}")
    value = int(digits, 16)
    if value > _U64_MAX:
        raise ParseError(f"hex number out of range: {text!r}")
    return value


def to_relative(absolute: int, base: int) -> int:
    if absolute < base:
        raise AddressRangeError(f"address 0x{absolute:x} is below the base 0x{base:x}")
    return absolute - base


def to_absolute(relative: int, base: int) -> int:
    return relative + base


def parse_address(text: str, base: int = ADDRESS_BASE) -> int:
    """Parse an absolute on-disk address into a relative one."""
    return to_relative(parse_hex(text), base)


# ---------------------------------------------------------------------------
# Rows
# ---------------------------------------------------------------------------


def _parse_size(text: str) -> int:
    if not _DEC_RE.fullmatch(text):
        raise ParseError(f"invalid size: {text!r}")
    size = int(text)
    if size > _U32_MAX:
        raise ParseError(f"size out of range: {text!r}")
    return size


def decode_record(fields: list[str], base: int = ADDRESS_BASE) -> FunctionInfo:
    """Build a :class:`FunctionInfo` from an (Address, Quality, Size, Name) row."""
    if len(fields) != 4:
        raise FormatError(f"invalid record; expected 4 fields, got {len(fields)}")

    addr = parse_address(fields[0], base)
    status = Status.from_code(fields[1])
    size = _parse_size(fields[2])
    return FunctionInfo(addr=addr, size=size, name=fields[3], status=status)


def encode_record(info: FunctionInfo, base: int = ADDRESS_BASE) -> tuple[str, str, str, str]:
    """Format *info* as an on-disk row."""
    absolute = to_absolute(info.addr, base)
    if not 0 <= absolute <= _U64_MAX:
        raise FormatError(f"cannot write address 0x{absolute:x}; it does not fit in 64 bits")
    return (
        f"0x{absolute:016x}",
        info.status.code,
        f"{info.size:06}",
        info.name,
    )
