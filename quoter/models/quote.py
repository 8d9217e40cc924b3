"""Quote request and result types."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from quoter.models.types import OrderSide, SwapMode


@dataclass(frozen=True)
class QuoteParams:
    """An exact-input quote request.

    Attributes:
        input_mint: Token the caller supplies
        output_mint: Token the caller receives
        amount: Input amount in minor units
        swap_mode: Only SwapMode.EXACT_IN is quotable
    """

    input_mint: str
    output_mint: str
    amount: int
    swap_mode: SwapMode = SwapMode.EXACT_IN


@dataclass(frozen=True)
class Quote:
    """Result of a simulated swap.

    Attributes:
        in_amount: Input actually consumed (includes the fee on a buy)
        out_amount: Output produced (net of the fee on a sell)
        fee_amount: Fee in currency-token minor units
        fee_mint: Currency token address
        fee_pct: Fee over the currency-side amount (input on a buy, output on a sell)
    """

    in_amount: int
    out_amount: int
    fee_amount: int
    fee_mint: str
    fee_pct: Decimal


@dataclass(frozen=True)
class SwapLeg:
    """What a settlement builder needs to know about a resolved swap.

    BID means the caller pays currency and receives the asset.
    """

    side: OrderSide
    instr_id: int
    asset_account: str
    currency_account: str
