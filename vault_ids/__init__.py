"""
vault_ids — identifiers for vault caps and allocations.

A small, stable façade over the encoder and the identifier schemes:

- adapter_id(adapter) -> IdResult
    keccak256(abi.encode("this", adapter))
- collateral_id(token) -> IdResult
    keccak256(abi.encode("collateralToken", token))
- market_id(adapter, params) -> IdResult
    keccak256(abi.encode("this/marketParams", adapter, params))
- encode_market_params(params) -> bytes
    abi.encode(params), the 160-byte allocate/deallocate payload
- decode_market_params(data) -> MarketParams

Every function is pure: equal inputs give byte-identical outputs. Invalid
input raises ValidationError before anything is encoded.
"""

from __future__ import annotations

from .abi import decode, encode
from .address import parse_address, to_checksum_address
from .errors import (AbiTypeError, DecodeError, UsageError, ValidationError,
                     VaultIdsError)
from .ids import (MARKET_DATA_SIZE, IdResult, MarketParams, adapter_id,
                  collateral_id, decode_market_params, derive_id,
                  encode_market_params, market_id)
from .utils.hash import keccak256
from .version import __version__

__all__ = [
    "__version__",
    "adapter_id",
    "collateral_id",
    "market_id",
    "derive_id",
    "encode_market_params",
    "decode_market_params",
    "MarketParams",
    "IdResult",
    "MARKET_DATA_SIZE",
    "encode",
    "decode",
    "keccak256",
    "parse_address",
    "to_checksum_address",
    "VaultIdsError",
    "ValidationError",
    "AbiTypeError",
    "DecodeError",
    "UsageError",
]
