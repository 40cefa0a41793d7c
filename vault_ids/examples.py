"""
Worked examples against a Base deployment: two adapter ids, a collateral id,
and the id and allocation payload of the cbBTC/USDC market at 86% LLTV.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Union

from .ids import (IdResult, MarketParams, adapter_id, collateral_id,
                  encode_market_params, market_id)

VAULT_V1_ADAPTER = "0xAcd4fFdBABDc627e5474FA9d507Db1436CF65Cc7"
MARKET_ADAPTER = "0x26E2878CD6fC34BBFEBc7A3bD2C3BFd32a3b0600"
EULER_ADAPTER = "0x98Cb0aB186F459E65936DB0C0E457F0D7d349c65"

USDC = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"
CBBTC = "0xcbB7C0000aB88B473b1f5aFd9ef808440eed33Bf"

CBBTC_USDC_ORACLE = "0x663BECd10daE6C4A3Dcd89F1d76c1174199639B9"
ADAPTIVE_IRM = "0x46415998764C29aB2a25CbeA6254146D50D22687"


@dataclass(frozen=True)
class Example:
    title: str
    inputs: Dict[str, str]
    result: Union[IdResult, bytes]
    params: Union[MarketParams, None] = field(default=None)


def cbbtc_usdc_market() -> MarketParams:
    return MarketParams(
        loan_token=USDC,
        collateral_token=CBBTC,
        oracle=CBBTC_USDC_ORACLE,
        irm=ADAPTIVE_IRM,
        lltv=860_000_000_000_000_000,
    )


def build_examples() -> List[Example]:
    market = cbbtc_usdc_market()
    return [
        Example("Adapter id (VaultV1)", {"address": VAULT_V1_ADAPTER}, adapter_id(VAULT_V1_ADAPTER)),
        Example("Adapter id (Euler ERC4626)", {"address": EULER_ADAPTER}, adapter_id(EULER_ADAPTER)),
        Example("Collateral id (cbBTC)", {"address": CBBTC}, collateral_id(CBBTC)),
        Example(
            "Market id (cbBTC/USDC)",
            {"adapter": MARKET_ADAPTER},
            market_id(MARKET_ADAPTER, market),
            market,
        ),
        Example(
            "Market params data (for allocate/deallocate)",
            {},
            encode_market_params(market),
            market,
        ),
    ]


__all__ = [
    "Example",
    "build_examples",
    "cbbtc_usdc_market",
    "VAULT_V1_ADAPTER",
    "MARKET_ADAPTER",
    "EULER_ADAPTER",
    "USDC",
    "CBBTC",
    "CBBTC_USDC_ORACLE",
    "ADAPTIVE_IRM",
]
