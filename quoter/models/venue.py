"""Decoded venue account records.

These are read-only views of the fixed-layout account data; see
quoter.snapshot.layout for the byte formats.
"""

from __future__ import annotations

from dataclasses import dataclass

from quoter.constants import NULL_ORDER


@dataclass(frozen=True)
class PriceLevel:
    """One resting order-book line.

    Attributes:
        price: Fixed-point price scaled by PRICE_SCALE
        qty: Resting quantity in asset minor units
        next: Arena index of the next (worse) line, NULL_ORDER at the tail
        prev: Arena index of the previous (better) line, NULL_ORDER at the head
        origin: Allocation tag; NULL_ORDER marks an empty slot
        orders_count: Number of orders aggregated in this line
    """

    price: int
    qty: int
    next: int = NULL_ORDER
    prev: int = NULL_ORDER
    origin: int = 0
    orders_count: int = 0

    @property
    def is_empty(self) -> bool:
        """True if this slot holds no line."""
        return self.origin == NULL_ORDER


@dataclass(frozen=True)
class InstrumentHeader:
    """Instrument account header: reserves, cached prices and book heads."""

    instr_id: int
    asset_token_id: int
    crncy_token_id: int
    ps: int
    asset_mint: str
    crncy_mint: str
    maps_address: str
    dec_factor: int
    asset_tokens: int
    crncy_tokens: int
    best_bid: int
    best_ask: int
    last_px: int
    bid_lines_begin: int
    ask_lines_begin: int
    bid_lines_count: int
    ask_lines_count: int
    day_volatility: float

    @property
    def trading_enabled(self) -> bool:
        return self.ps != 0

    def market_px(self) -> int:
        """Reference price: the best quote that improves on the last trade.

        Returns best ask if below the last price, else best bid if above it,
        else the last price.
        """
        if self.best_ask < self.last_px:
            return self.best_ask
        if self.best_bid > self.last_px:
            return self.best_bid
        return self.last_px


@dataclass(frozen=True)
class TokenState:
    """Token registration record kept by the venue."""

    address: str
    program_address: str
    id: int
    mask: int

    @property
    def decimals(self) -> int:
        """Token decimals (low byte of mask)."""
        return self.mask & 0xFF


@dataclass(frozen=True)
class CommunityHeader:
    """Community account header holding the spot fee rate."""

    tag: int
    version: int
    spot_fee_rate: int

    def fee_rate_factor(self, fee_rate_step: float) -> float:
        """Fee rate per unit of day volatility."""
        return self.spot_fee_rate * fee_rate_step
