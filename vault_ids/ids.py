"""
vault_ids.ids — identifier schemes for vault caps and allocations.

Each identifier is `keccak256(abi.encode(tag, *fields))`. The literal tag is
always the first encoded value, so two schemes can never produce the same
preimage even when their remaining fields coincide.

    scheme       tag                    fields
    ---------    -------------------    ---------------------------------
    adapter      "this"                 address adapter
    collateral   "collateralToken"      address token
    market       "this/marketParams"    address adapter, MarketParams

Market data (the `data` argument of allocate/deallocate) is
`abi.encode(MarketParams)` with no tag and no hash.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple, Union

from .abi import decode, encode
from .abi.types import coerce_uint
from .address import Address, parse_address
from .errors import ValidationError
from .logging import get_logger
from .utils.bytes import to_hex
from .utils.hash import keccak256

log = get_logger(__name__)

MARKET_PARAMS_TYPE = "(address,address,address,address,uint256)"
MARKET_DATA_SIZE = 5 * 32

__all__ = [
    "MARKET_PARAMS_TYPE",
    "MARKET_DATA_SIZE",
    "MarketParams",
    "IdScheme",
    "IdResult",
    "SCHEMES",
    "ADAPTER",
    "COLLATERAL",
    "MARKET",
    "derive_id",
    "adapter_id",
    "collateral_id",
    "market_id",
    "encode_market_params",
    "decode_market_params",
]


@dataclass(frozen=True)
class MarketParams:
    """
    Lending market parameters. Addresses are stored checksummed; `lltv` is an
    18-decimal fixed-point fraction held as an arbitrary-precision int.
    """

    loan_token: Address
    collateral_token: Address
    oracle: Address
    irm: Address
    lltv: int

    def __post_init__(self) -> None:
        for name in ("loan_token", "collateral_token", "oracle", "irm"):
            object.__setattr__(self, name, parse_address(getattr(self, name)))
        object.__setattr__(self, "lltv", coerce_uint(self.lltv, bits=256))

    def as_tuple(self) -> Tuple[str, str, str, str, int]:
        return (self.loan_token, self.collateral_token, self.oracle, self.irm, self.lltv)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "loanToken": self.loan_token,
            "collateralToken": self.collateral_token,
            "oracle": self.oracle,
            "irm": self.irm,
            "lltv": str(self.lltv),
        }


@dataclass(frozen=True)
class IdScheme:
    name: str
    tag: str
    field_types: Tuple[str, ...]

    @property
    def abi_types(self) -> Tuple[str, ...]:
        return ("string",) + self.field_types

    @property
    def signature(self) -> str:
        return ", ".join(self.abi_types)


@dataclass(frozen=True)
class IdResult:
    scheme: str
    encoded: bytes
    hash: bytes

    @property
    def encoded_hex(self) -> str:
        return to_hex(self.encoded)

    @property
    def hash_hex(self) -> str:
        return to_hex(self.hash)

    def as_dict(self) -> Dict[str, str]:
        return {"scheme": self.scheme, "encoded": self.encoded_hex, "hash": self.hash_hex}


ADAPTER = IdScheme("adapter", "this", ("address",))
COLLATERAL = IdScheme("collateral", "collateralToken", ("address",))
MARKET = IdScheme("market", "this/marketParams", ("address", MARKET_PARAMS_TYPE))

SCHEMES: Dict[str, IdScheme] = {s.name: s for s in (ADAPTER, COLLATERAL, MARKET)}


def _field_value(value: Any) -> Any:
    return value.as_tuple() if isinstance(value, MarketParams) else value


def derive_id(scheme: Union[str, IdScheme], *fields: Any) -> IdResult:
    """
    Encode `(tag, *fields)` with the scheme's ABI types and hash the result.

    Raises ValidationError if the scheme is unknown or any field does not
    match its type; nothing is encoded in that case.
    """
    if isinstance(scheme, str):
        try:
            scheme = SCHEMES[scheme]
        except KeyError:
            raise ValidationError(
                f"unknown identifier scheme {scheme!r}", known=sorted(SCHEMES)
            ) from None

    encoded = encode(scheme.abi_types, [scheme.tag, *(_field_value(f) for f in fields)])
    digest = keccak256(encoded)
    log.debug("derived id", extra={"scheme": scheme.name, "id": digest})
    return IdResult(scheme=scheme.name, encoded=encoded, hash=digest)


def adapter_id(adapter: str) -> IdResult:
    """`keccak256(abi.encode("this", adapter))`: caps and allocations of one adapter."""
    return derive_id(ADAPTER, adapter)


def collateral_id(token: str) -> IdResult:
    """`keccak256(abi.encode("collateralToken", token))`: caps across all markets."""
    return derive_id(COLLATERAL, token)


def market_id(adapter: str, params: MarketParams) -> IdResult:
    """`keccak256(abi.encode("this/marketParams", adapter, params))`."""
    if not isinstance(params, MarketParams):
        raise ValidationError("market params must be a MarketParams instance")
    return derive_id(MARKET, adapter, params)


def encode_market_params(params: MarketParams) -> bytes:
    """`abi.encode(params)` as the opaque allocate/deallocate payload. Not hashed."""
    if not isinstance(params, MarketParams):
        raise ValidationError("market params must be a MarketParams instance")
    return encode([MARKET_PARAMS_TYPE], [params.as_tuple()])


def decode_market_params(data: Union[bytes, str]) -> MarketParams:
    """Inverse of encode_market_params; the payload must be exactly 160 bytes."""
    (fields,) = decode([MARKET_PARAMS_TYPE], data)
    loan, collateral, oracle, irm, lltv = fields
    return MarketParams(loan, collateral, oracle, irm, lltv)

