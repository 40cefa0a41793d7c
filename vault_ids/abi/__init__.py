"""
vault_ids.abi
=============

Solidity-compatible `abi.encode` for the small type set identifier schemes
need (address, bool, uintN/intN, bytesN, bytes, string, tuples):

  • Type parsing and value validation (types)
  • Canonical head/tail encoder (encoding)
  • Strict inverse decoder (decoding)

Everything here is pure and deterministic.
"""

from __future__ import annotations

from .decoding import decode
from .encoding import encode, encode_normalized, encode_single
from .types import (UINT256_MAX, AbiType, AddressType, BoolType, BytesType,
                    FixedBytesType, IntType, StringType, TupleType, UIntType,
                    coerce_int, coerce_uint, parse_type, parse_types,
                    parse_uint)

__all__ = [
    "encode",
    "encode_single",
    "encode_normalized",
    "decode",
    "AbiType",
    "AddressType",
    "BoolType",
    "UIntType",
    "IntType",
    "FixedBytesType",
    "BytesType",
    "StringType",
    "TupleType",
    "parse_type",
    "parse_types",
    "parse_uint",
    "coerce_int",
    "coerce_uint",
    "UINT256_MAX",
]
