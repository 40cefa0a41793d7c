"""
Text and JSON rendering for CLI results.

Every renderer returns a string (text) or a plain dict (JSON); the command
layer decides where it goes. Byte values are always lowercase `0x` hex.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

from ..examples import Example
from ..ids import MARKET_PARAMS_TYPE, IdResult, MarketParams
from ..utils.bytes import to_hex

RULE = "─"

USAGE = """\
Usage:
  vault-ids [--json] [-v] adapter <address>
  vault-ids [--json] [-v] collateral <address>
  vault-ids [--json] [-v] market <adapter> <loanToken> <collateralToken> <oracle> <irm> <lltv>
  vault-ids [--json] [-v] market-data <loanToken> <collateralToken> <oracle> <irm> <lltv>
  vault-ids examples
  vault-ids version
  vault-ids help

Identifiers:
  adapter      keccak256(abi.encode("this", adapter))
  collateral   keccak256(abi.encode("collateralToken", token))
  market       keccak256(abi.encode("this/marketParams", adapter, marketParams))
  market-data  abi.encode(marketParams)   (allocate/deallocate payload, not hashed)

Addresses are 0x + 40 hex characters; any uppercase letter makes it an
EIP-55 checksum, which must be valid. lltv is a base-10 integer with 18
decimals (860000000000000000 = 86%).

Running with no command prints worked examples."""


def lltv_percent(lltv: int) -> str:
    """`lltv / 1e16` as an exact decimal string with a `%` suffix."""
    pct = (Decimal(lltv) / (Decimal(10) ** 16)).normalize()
    return f"{pct:f}%"


def display_address(address: str, checksum: bool = True) -> str:
    return address if checksum else address.lower()


def _heading(title: str) -> List[str]:
    return [title, RULE * len(title)]


def _params_lines(params: MarketParams, checksum: bool) -> List[str]:
    return [
        f"  loanToken:        {display_address(params.loan_token, checksum)}",
        f"  collateralToken:  {display_address(params.collateral_token, checksum)}",
        f"  oracle:           {display_address(params.oracle, checksum)}",
        f"  irm:              {display_address(params.irm, checksum)}",
        f"  lltv:             {params.lltv} ({lltv_percent(params.lltv)})",
    ]


def render_id(
    title: str,
    result: IdResult,
    call: str,
    params: Optional[MarketParams] = None,
    checksum: bool = True,
) -> str:
    lines = _heading(title)
    if params is not None:
        lines.append("MarketParams:")
        lines += _params_lines(params, checksum)
    lines += [
        f"Input:    {call}",
        f"Encoded:  {result.encoded_hex}",
        f"Hash ID:  {result.hash_hex}",
    ]
    return "\n".join(lines)


def render_market_data(data: bytes, params: MarketParams, checksum: bool = True) -> str:
    lines = _heading("MARKET DATA")
    lines.append("MarketParams:")
    lines += _params_lines(params, checksum)
    lines += [
        f"Input:    abi.encode({MARKET_PARAMS_TYPE})",
        f"Data:     {to_hex(data)}",
        f"Length:   {len(data)} bytes",
    ]
    return "\n".join(lines)


def adapter_call(address: str) -> str:
    return f'abi.encode("this", {address})'


def collateral_call(address: str) -> str:
    return f'abi.encode("collateralToken", {address})'


def market_call(adapter: str) -> str:
    return f'abi.encode("this/marketParams", {adapter}, marketParams)'


def id_payload(result: IdResult, inputs: Dict[str, Any], params: Optional[MarketParams] = None) -> Dict[str, Any]:
    out: Dict[str, Any] = {"scheme": result.scheme, "inputs": dict(inputs)}
    if params is not None:
        out["marketParams"] = params.as_dict()
        out["lltvPercent"] = lltv_percent(params.lltv)
    out["encoded"] = result.encoded_hex
    out["hash"] = result.hash_hex
    return out


def market_data_payload(data: bytes, params: MarketParams) -> Dict[str, Any]:
    return {
        "scheme": "market-data",
        "marketParams": params.as_dict(),
        "lltvPercent": lltv_percent(params.lltv),
        "data": to_hex(data),
        "length": len(data),
    }


def render_example(example: Example, checksum: bool = True) -> str:
    if isinstance(example.result, IdResult):
        call = _example_call(example, checksum)
        return render_id(example.title, example.result, call, example.params, checksum)
    lines = _heading(example.title)
    if example.params is not None:
        lines.append("MarketParams:")
        lines += _params_lines(example.params, checksum)
    lines.append(f"Data:     {to_hex(example.result)}")
    return "\n".join(lines)


def _example_call(example: Example, checksum: bool) -> str:
    result = example.result
    if result.scheme == "adapter":
        return adapter_call(display_address(example.inputs["address"], checksum))
    if result.scheme == "collateral":
        return collateral_call(display_address(example.inputs["address"], checksum))
    return market_call(display_address(example.inputs["adapter"], checksum))


def example_payload(example: Example) -> Dict[str, Any]:
    if isinstance(example.result, IdResult):
        out = id_payload(example.result, example.inputs, example.params)
    else:
        out = market_data_payload(example.result, example.params)
    out["title"] = example.title
    return out


__all__ = [
    "USAGE",
    "lltv_percent",
    "display_address",
    "render_id",
    "render_market_data",
    "render_example",
    "adapter_call",
    "collateral_call",
    "market_call",
    "id_payload",
    "market_data_payload",
    "example_payload",
]
