"""Tests for signedhook.protocol.header module."""

from __future__ import annotations

import pytest

from signedhook.protocol.errors import (
    HeaderParseError,
    InvalidSignatureEncodingError,
    InvalidTimestampError,
    NoMatchingSchemeError,
)
from signedhook.protocol.header import format_header, is_signature_key, parse_header

SIG_A = "a" * 64
SIG_B = "0123456789abcdef" * 4


class TestValidHeaders:
    def test_timestamp_and_signature(self):
        h = parse_header(f"t=1614556800,v1={SIG_A}")
        assert h.timestamp == 1614556800
        assert h.signatures_for("v1") == (bytes.fromhex(SIG_A),)

    def test_order_insensitive(self):
        h = parse_header(f"v1={SIG_A},t=42")
        assert h.timestamp == 42
        assert h.signatures_for("v1") == (bytes.fromhex(SIG_A),)

    def test_multiple_v1_entries_kept_in_order(self):
        h = parse_header(f"t=1,v1={SIG_A},v1={SIG_B}")
        assert h.signatures_for("v1") == (bytes.fromhex(SIG_A), bytes.fromhex(SIG_B))

    def test_legacy_v0_entry_decoded(self):
        h = parse_header(f"t=1,v1={SIG_A},v0=ABCD")
        assert h.signatures_for("v0") == (b"\xab\xcd",)
        assert h.schemes == ("v1", "v0")

    def test_empty_legacy_value_allowed(self):
        h = parse_header(f"t=1,v1={SIG_A},v0=")
        assert h.signatures_for("v0") == (b"",)

    def test_non_hex_legacy_value_kept_as_extra(self):
        h = parse_header(f"t=1,v1={SIG_A},v0=not-hex")
        assert h.signatures_for("v0") == ()
        assert h.extras == (("v0", "not-hex"),)

    def test_unknown_keys_preserved(self):
        h = parse_header(f"t=1,v1={SIG_A},kid=key_2024,alg=hmac-sha256")
        assert h.extras == (("kid", "key_2024"), ("alg", "hmac-sha256"))

    def test_value_split_on_first_equals(self):
        h = parse_header(f"t=1,v1={SIG_A},note=a=b")
        assert h.extras == (("note", "a=b"),)

    def test_surrounding_whitespace_stripped(self):
        h = parse_header(f"  t = 7 , v1 = {SIG_A}  ")
        assert h.timestamp == 7
        assert h.signatures_for("v1") == (bytes.fromhex(SIG_A),)

    def test_zero_timestamp(self):
        assert parse_header(f"t=0,v1={SIG_A}").timestamp == 0

    def test_custom_scheme(self):
        h = parse_header(f"t=1,v2={SIG_A}", scheme="v2")
        assert h.signatures_for("v2") == (bytes.fromhex(SIG_A),)

    def test_custom_digest_size(self):
        h = parse_header("t=1,v1=" + "ab" * 20, digest_size=20)
        assert len(h.signatures_for("v1")[0]) == 20


class TestMalformedStructure:
    def test_empty_string(self):
        with pytest.raises(HeaderParseError):
            parse_header("")

    def test_whitespace_only(self):
        with pytest.raises(HeaderParseError):
            parse_header("   ")

    def test_segment_without_equals(self):
        with pytest.raises(HeaderParseError):
            parse_header(f"t=1,v1={SIG_A},garbage")

    def test_trailing_comma(self):
        with pytest.raises(HeaderParseError):
            parse_header(f"t=1,v1={SIG_A},")

    def test_empty_key(self):
        with pytest.raises(HeaderParseError):
            parse_header(f"t=1,={SIG_A}")

    @pytest.mark.parametrize("header", [None, b"t=1", 1614556800])
    def test_non_str_header(self, header):
        with pytest.raises(HeaderParseError, match="must be str"):
            parse_header(header)


class TestTimestamp:
    @pytest.mark.parametrize("raw", ["abc", "-1", "+5", "1.5", "1e9", "", "١٢٣"])
    def test_invalid_values(self, raw):
        with pytest.raises(InvalidTimestampError):
            parse_header(f"t={raw},v1={SIG_A}")

    def test_missing(self):
        with pytest.raises(InvalidTimestampError):
            parse_header(f"v1={SIG_A}")

    def test_repeated(self):
        with pytest.raises(InvalidTimestampError):
            parse_header(f"t=1,t=2,v1={SIG_A}")

    def test_oversized_value(self):
        """Thousands of digits fail as a timestamp error, not a bare ValueError."""
        with pytest.raises(InvalidTimestampError):
            parse_header("t=" + "1" * 5000 + f",v1={SIG_A}")

    def test_twenty_one_digits_rejected(self):
        with pytest.raises(InvalidTimestampError):
            parse_header("t=" + "9" * 21 + f",v1={SIG_A}")

    def test_twenty_digits_accepted(self):
        assert parse_header("t=" + "9" * 20 + f",v1={SIG_A}").timestamp == int("9" * 20)

    def test_leading_zeros_kept_verbatim(self):
        h = parse_header(f"t=01614556800,v1={SIG_A}")
        assert h.timestamp == 1614556800
        assert h.raw_timestamp == "01614556800"
        assert h.signed_timestamp == "01614556800"


class TestSignatureEncoding:
    def test_too_short(self):
        with pytest.raises(InvalidSignatureEncodingError):
            parse_header("t=1,v1=" + "a" * 62)

    def test_too_long(self):
        with pytest.raises(InvalidSignatureEncodingError):
            parse_header("t=1,v1=" + "a" * 66)

    def test_non_hex_characters(self):
        with pytest.raises(InvalidSignatureEncodingError):
            parse_header("t=1,v1=" + "g" * 64)

    def test_uppercase_rejected(self):
        with pytest.raises(InvalidSignatureEncodingError):
            parse_header("t=1,v1=" + "A" * 64)

    def test_inner_whitespace_rejected(self):
        with pytest.raises(InvalidSignatureEncodingError):
            parse_header("t=1,v1=" + "a" * 31 + " " + "a" * 32)

    def test_one_bad_entry_rejects_header(self):
        with pytest.raises(InvalidSignatureEncodingError):
            parse_header(f"t=1,v1={SIG_A},v1=zz")

    def test_encoding_checked_is_error_subclass(self):
        with pytest.raises(HeaderParseError):
            parse_header("t=1,v1=xyz")


class TestNoMatchingScheme:
    def test_only_legacy_scheme(self):
        with pytest.raises(NoMatchingSchemeError):
            parse_header(f"t=1,v0={SIG_A}")

    def test_timestamp_only(self):
        with pytest.raises(NoMatchingSchemeError):
            parse_header("t=1")

    def test_expected_scheme_differs(self):
        with pytest.raises(NoMatchingSchemeError):
            parse_header(f"t=1,v1={SIG_A}", scheme="v2")


class TestIsSignatureKey:
    @pytest.mark.parametrize("key", ["v0", "v1", "v12"])
    def test_signature_keys(self, key):
        assert is_signature_key(key)

    @pytest.mark.parametrize("key", ["t", "v", "V1", "v1a", "kid", ""])
    def test_other_keys(self, key):
        assert not is_signature_key(key)


class TestFormatHeader:
    def test_single_signature(self):
        assert format_header(1614556800, [bytes.fromhex(SIG_A)]) == f"t=1614556800,v1={SIG_A}"

    def test_multiple_signatures(self):
        header = format_header(5, [bytes.fromhex(SIG_A), bytes.fromhex(SIG_B)])
        assert header == f"t=5,v1={SIG_A},v1={SIG_B}"

    def test_custom_scheme(self):
        assert format_header(5, [b"\x01"], scheme="v0") == "t=5,v0=01"

    def test_negative_timestamp_rejected(self):
        with pytest.raises(ValueError):
            format_header(-1, [b"\x01"])

    def test_parses_back(self):
        sig = bytes.fromhex(SIG_B)
        h = parse_header(format_header(99, [sig]))
        assert h.timestamp == 99
        assert h.signatures_for("v1") == (sig,)
