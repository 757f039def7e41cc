"""Tests for function entries, address arithmetic and the row codec."""

import pytest

from funcdb.errors import (
    AddressRangeError,
    FormatError,
    MissingStatusCode,
    ParseError,
    RegistryError,
    UnknownStatusCode,
)
from funcdb.registry.records import (
    ADDRESS_BASE,
    FunctionInfo,
    Status,
    decode_record,
    encode_record,
    parse_address,
    parse_hex,
    to_absolute,
    to_relative,
)

# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------


class TestStatus:
    def test_codes(self) -> None:
        assert {s.code for s in Status} == {"O", "m", "M", "U", "W", "L"}
        assert Status.MATCHING.code == "O"
        assert Status.NON_MATCHING_MINOR.code == "m"
        assert Status.NON_MATCHING_MAJOR.code == "M"
        assert Status.NOT_DECOMPILED.code == "U"
        assert Status.WIP.code == "W"
        assert Status.LIBRARY.code == "L"

    def test_from_code_inverts_code(self) -> None:
        for status in Status:
            assert Status.from_code(status.code) is status

    def test_descriptions(self) -> None:
        assert Status.MATCHING.description == "matching"
        assert Status.NON_MATCHING_MINOR.description == "non-matching (minor)"
        assert Status.NON_MATCHING_MAJOR.description == "non-matching (major)"
        assert Status.NOT_DECOMPILED.description == "not decompiled"
        assert Status.WIP.description == "WIP"
        assert Status.LIBRARY.description == "library function"

    def test_unknown_code(self) -> None:
        with pytest.raises(UnknownStatusCode, match="unexpected status code: X"):
            Status.from_code("X")

    def test_code_is_case_sensitive(self) -> None:
        assert Status.from_code("m") is Status.NON_MATCHING_MINOR
        assert Status.from_code("M") is Status.NON_MATCHING_MAJOR
        with pytest.raises(UnknownStatusCode):
            Status.from_code("o")

    def test_multiple_characters_rejected(self) -> None:
        with pytest.raises(UnknownStatusCode):
            Status.from_code("OM")

    def test_missing_code(self) -> None:
        with pytest.raises(MissingStatusCode):
            Status.from_code("")


class TestIsDecompiled:
    @pytest.mark.parametrize(
        "status",
        [Status.MATCHING, Status.NON_MATCHING_MINOR, Status.NON_MATCHING_MAJOR, Status.WIP],
    )
    def test_decompiled(self, status: Status) -> None:
        assert FunctionInfo(addr=0, size=4, name="f", status=status).is_decompiled

    @pytest.mark.parametrize("status", [Status.NOT_DECOMPILED, Status.LIBRARY])
    def test_not_decompiled(self, status: Status) -> None:
        assert not FunctionInfo(addr=0, size=4, name="", status=status).is_decompiled


# ---------------------------------------------------------------------------
# Addresses
# ---------------------------------------------------------------------------


class TestParseHex:
    def test_prefixed(self) -> None:
        assert parse_hex("0x7100000010") == 0x7100000010

    def test_bare(self) -> None:
        assert parse_hex("7100000010") == 0x7100000010

    def test_uppercase_digits(self) -> None:
        assert parse_hex("0xDEADBEEF") == 0xDEADBEEF

    def test_max_u64(self) -> None:
        assert parse_hex("0xffffffffffffffff") == (1 << 64) - 1

    @pytest.mark.parametrize("text", ["", "0x", "0xzz", "12g4", " 0x10", "0x1_0", "-0x10", "+10"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(ParseError):
            parse_hex(text)

    def test_overflow(self) -> None:
        with pytest.raises(ParseError, match="out of range"):
            parse_hex("0x10000000000000000")


class TestAddressArithmetic:
    def test_to_relative(self) -> None:
        assert to_relative(0x7100000010, ADDRESS_BASE) == 0x10

    def test_to_relative_at_base(self) -> None:
        assert to_relative(ADDRESS_BASE, ADDRESS_BASE) == 0

    def test_below_base(self) -> None:
        with pytest.raises(AddressRangeError):
            to_relative(0x10, ADDRESS_BASE)

    def test_to_absolute(self) -> None:
        assert to_absolute(0x10, ADDRESS_BASE) == 0x7100000010

    def test_parse_address(self) -> None:
        assert parse_address("0x0000007100001234") == 0x1234

    def test_parse_address_custom_base(self) -> None:
        assert parse_address("0x10001000", 0x10000000) == 0x1000

    def test_errors_are_registry_errors(self) -> None:
        with pytest.raises(RegistryError):
            parse_address("0x10")


# ---------------------------------------------------------------------------
# Row codec
# ---------------------------------------------------------------------------


class TestDecodeRecord:
    def test_basic(self) -> None:
        info = decode_record(["0x0000007100000010", "O", "000004", "foo"])
        assert info == FunctionInfo(addr=0x10, size=4, name="foo", status=Status.MATCHING)

    def test_empty_name(self) -> None:
        info = decode_record(["0x0000007100000020", "U", "000008", ""])
        assert info.name == ""
        assert info.status is Status.NOT_DECOMPILED

    def test_name_taken_verbatim(self) -> None:
        info = decode_record(["0x0000007100000020", "L", "8", ' spaced "quoted" '])
        assert info.name == ' spaced "quoted" '

    def test_unpadded_size(self) -> None:
        assert decode_record(["7100000020", "W", "123", "f"]).size == 123

    @pytest.mark.parametrize("fields", [[], ["0x7100000000"], ["0x7100000000", "O", "4"],
                                        ["0x7100000000", "O", "4", "f", "extra"]])
    def test_wrong_arity(self, fields: list[str]) -> None:
        with pytest.raises(FormatError, match="expected 4 fields"):
            decode_record(fields)

    def test_bad_address(self) -> None:
        with pytest.raises(ParseError):
            decode_record(["0xnothex", "O", "4", "f"])

    def test_address_below_base(self) -> None:
        with pytest.raises(AddressRangeError):
            decode_record(["0x10", "O", "4", "f"])

    def test_unknown_status(self) -> None:
        with pytest.raises(UnknownStatusCode):
            decode_record(["0x7100000000", "Q", "4", "f"])

    def test_missing_status(self) -> None:
        with pytest.raises(MissingStatusCode):
            decode_record(["0x7100000000", "", "4", "f"])

    @pytest.mark.parametrize("size", ["", "-4", "4.0", "0x10", " 4", "4294967296"])
    def test_bad_size(self, size: str) -> None:
        with pytest.raises(ParseError):
            decode_record(["0x7100000000", "O", size, "f"])

    def test_max_size(self) -> None:
        assert decode_record(["0x7100000000", "O", "4294967295", "f"]).size == 0xFFFFFFFF


class TestEncodeRecord:
    def test_basic(self) -> None:
        info = FunctionInfo(addr=0x10, size=4, name="foo", status=Status.MATCHING)
        assert encode_record(info) == ("0x0000007100000010", "O", "000004", "foo")

    def test_lowercase_hex(self) -> None:
        info = FunctionInfo(addr=0xABCDEF, size=1, name="", status=Status.NOT_DECOMPILED)
        assert encode_record(info)[0] == "0x0000007100abcdef"

    def test_wide_size_not_truncated(self) -> None:
        info = FunctionInfo(addr=0, size=1234567, name="big", status=Status.WIP)
        assert encode_record(info)[2] == "1234567"

    def test_custom_base(self) -> None:
        info = FunctionInfo(addr=0x1000, size=16, name="f", status=Status.LIBRARY)
        assert encode_record(info, 0x10000000) == ("0x0000000010001000", "L", "000016", "f")

    @pytest.mark.parametrize("addr", [1 << 64, -(ADDRESS_BASE + 1)])
    def test_address_out_of_range(self, addr: int) -> None:
        info = FunctionInfo(addr=addr, size=4, name="f", status=Status.MATCHING)
        with pytest.raises(FormatError, match="64 bits"):
            encode_record(info)

    def test_decode_inverts_encode(self) -> None:
        for status in Status:
            info = FunctionInfo(addr=0x40, size=12, name=f"f_{status.code}", status=status)
            assert decode_record(list(encode_record(info))) == info
