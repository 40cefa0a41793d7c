from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from vault_ids.abi import UINT256_MAX, decode, encode, encode_single, parse_type
from vault_ids.abi.types import TupleType, parse_types, parse_uint
from vault_ids.errors import AbiTypeError, ValidationError

ONE = "0x0000000000000000000000000000000000000001"


def word(n: int) -> bytes:
    return n.to_bytes(32, "big")


def padded(b: bytes) -> bytes:
    return b + b"\x00" * (-len(b) % 32)


# ---------------------------------------------------------------------------
# Static values
# ---------------------------------------------------------------------------


def test_uint_and_address_words() -> None:
    assert encode(["uint256"], [1]) == word(1)
    assert encode(["uint256"], [UINT256_MAX]) == b"\xff" * 32
    assert encode(["address"], [ONE]) == word(1)
    assert encode(["uint8"], [255]) == word(255)


def test_bool_int_and_fixed_bytes() -> None:
    assert encode(["bool", "bool"], [True, False]) == word(1) + word(0)
    assert encode(["int256"], [-1]) == b"\xff" * 32
    assert encode(["bytes4"], ["0xa9059cbb"]) == bytes.fromhex("a9059cbb") + b"\x00" * 28


def test_static_tuple_is_inline() -> None:
    out = encode(["(address,uint256)"], [(ONE, 5)])
    assert out == word(1) + word(5)
    assert parse_type("(address,uint256)").head_size == 64


# ---------------------------------------------------------------------------
# Dynamic values
# ---------------------------------------------------------------------------


def test_single_string() -> None:
    assert encode(["string"], ["this"]) == word(0x20) + word(4) + padded(b"this")


def test_empty_string_has_length_word_only() -> None:
    assert encode(["string"], [""]) == word(0x20) + word(0)


def test_exact_word_string_gets_no_extra_padding() -> None:
    s = "x" * 32
    out = encode(["string"], [s])
    assert out == word(0x20) + word(32) + s.encode()
    assert len(out) == 96


def test_multibyte_utf8_length_counts_bytes() -> None:
    out = encode(["string"], ["é"])
    assert out[32:64] == word(2)
    assert out[64:66] == "é".encode("utf-8")


def test_string_then_address_offsets_past_head() -> None:
    out = encode(["string", "address"], ["this", ONE])
    assert out == word(0x40) + word(1) + word(4) + padded(b"this")


def test_two_dynamic_values() -> None:
    out = encode(["string", "string"], ["a", "bc"])
    assert out == (
        word(0x40) + word(0x80) + word(1) + padded(b"a") + word(2) + padded(b"bc")
    )


def test_dynamic_value_after_static_tuple() -> None:
    # head: 5 words of inline tuple + 1 offset word
    out = encode(["(address,address,address,address,uint256)", "bytes"], [(ONE, ONE, ONE, ONE, 7), b"\x01\x02"])
    assert out[5 * 32 : 6 * 32] == word(6 * 32)
    assert out[6 * 32 :] == word(2) + padded(b"\x01\x02")


def test_dynamic_tuple_is_referenced_by_offset() -> None:
    out = encode(["(string,uint256)"], [("ab", 7)])
    assert out == word(0x20) + word(0x40) + word(7) + word(2) + padded(b"ab")
    assert parse_type("(string,uint256)").is_dynamic


def test_types_accept_comma_separated_string() -> None:
    assert encode("string, address", ["this", ONE]) == encode(["string", "address"], ["this", ONE])
    assert [t.name for t in parse_types("string,(address,uint256)")] == ["string", "(address,uint256)"]
    assert parse_type("tuple(address,uint256)") == parse_type("(address,uint256)")


# ---------------------------------------------------------------------------
# Rejection
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "types,values",
    [
        (["uint256"], [UINT256_MAX + 1]),
        (["uint256"], [-1]),
        (["uint8"], [256]),
        (["uint256"], [True]),
        (["uint256"], ["1"]),
        (["bool"], [1]),
        (["string"], [b"bytes"]),
        (["address"], ["0x1234"]),
        (["bytes4"], ["0xa9059c"]),
        (["uint256", "uint256"], [1]),
        (["(address,uint256)"], [(ONE,)]),
    ],
)
def test_invalid_values_raise_before_encoding(types, values) -> None:
    with pytest.raises(ValidationError):
        encode(types, values)


@pytest.mark.parametrize("spec", ["uint257", "uint7", "int0", "bytes33", "bytes0", "uint256[]", "()", "foo", "(address", ""])
def test_invalid_type_specs(spec: str) -> None:
    with pytest.raises(AbiTypeError):
        parse_type(spec)


def test_error_builtin_bases() -> None:
    with pytest.raises(TypeError):
        parse_type("float")
    with pytest.raises(ValueError):
        encode(["uint256"], [-1])


@pytest.mark.parametrize("text", ["", "-1", "+1", "1.0", "0x10", " 1", "1_000", "86%"])
def test_parse_uint_rejects_non_decimal(text: str) -> None:
    with pytest.raises(ValidationError):
        parse_uint(text, field="lltv")


def test_parse_uint_bounds() -> None:
    assert parse_uint("0") == 0
    assert parse_uint(str(UINT256_MAX)) == UINT256_MAX
    with pytest.raises(ValidationError) as ei:
        parse_uint(str(UINT256_MAX + 1), field="lltv")
    assert ei.value.data["field"] == "lltv"


def test_parse_uint_checks_length_before_converting() -> None:
    # longer than the int/str conversion limit on current interpreters
    assert parse_uint("0" * 5000 + "1") == 1
    assert parse_uint("0" * 10 + str(UINT256_MAX)) == UINT256_MAX
    with pytest.raises(ValidationError) as ei:
        parse_uint("9" * 5000, field="lltv")
    assert "exceeds" in ei.value.message
    assert len(ei.value.message) < 200


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


@given(st.text(max_size=200))
def test_string_encoding_shape(s: str) -> None:
    raw = s.encode("utf-8")
    out = encode(["string"], [s])
    assert len(out) % 32 == 0
    assert len(out) == 64 + len(padded(raw))
    assert decode(["string"], out) == (s,)


@given(st.integers(min_value=0, max_value=UINT256_MAX), st.binary(max_size=100))
def test_encoding_is_deterministic(n: int, b: bytes) -> None:
    types = ["uint256", "bytes", "(string,uint256)"]
    values = [n, b, ("this", n)]
    assert encode(types, values) == encode(types, values)
    assert encode_single("uint256", n) == n.to_bytes(32, "big")
    assert TupleType(tuple(parse_types(types))).is_dynamic
