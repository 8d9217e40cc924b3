"""Constant-product curve of the venue's built-in AMM.

The venue prices its AMM as x * y = k, where x is the asset reserve and y
the currency reserve. The instantaneous price in fixed point is

    price = k * dec_factor / x**2 = y**2 * dec_factor / k

All conversions use float intermediates and truncate toward zero when
narrowing back to integers. The quote engine's tie-break comparisons depend
on that rounding direction.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from quoter.constants import INFINITE_PRICE, MAX_NOTIONAL
from quoter.errors import ArithmeticOverflow
from quoter.models.types import OrderSide
from quoter.models.venue import InstrumentHeader
from quoter.safe_int import S, W, f64_div, f64_sqrt, saturating_cast, trunc_div


@dataclass
class ConstantProductCurve:
    """Constant-product state for one quote simulation.

    k stays fixed for the lifetime of a simulation while the reserves move
    with each hypothetical fill. Instances are cheap to copy; the engine
    always works on a private copy so the snapshot is never touched.

    Attributes:
        k: Invariant, asset_reserve * currency_reserve at snapshot time (i128)
        asset_reserve: Asset tokens held by the AMM (i64)
        currency_reserve: Currency tokens held by the AMM (i64)
        df: Instrument decimal factor as float
        rdf: 1 / df
    """

    k: int = 0
    asset_reserve: int = 0
    currency_reserve: int = 0
    df: float = 1.0
    rdf: float = 1.0

    @classmethod
    def from_header(cls, header: InstrumentHeader) -> ConstantProductCurve:
        """Build the curve from an instrument header's reserves."""
        df = float(header.dec_factor)
        return cls(
            k=(W(header.asset_tokens) * header.crncy_tokens).value,
            asset_reserve=header.asset_tokens,
            currency_reserve=header.crncy_tokens,
            df=df,
            rdf=f64_div(1.0, df),
        )

    def copy(self) -> ConstantProductCurve:
        return replace(self)

    # --- Level conversions ---

    def trade_notional(self, qty: int, price: int) -> int:
        """Currency notional of qty at a fixed level price.

        Raises:
            ArithmeticOverflow: If the result is negative, NaN or above MAX_NOTIONAL
        """
        notional = (float(qty) * float(price)) * self.rdf
        if math.isnan(notional) or math.copysign(1.0, notional) < 0:
            raise ArithmeticOverflow(f"Arithmetic overflow: notional {notional}")
        if notional > MAX_NOTIONAL:
            raise ArithmeticOverflow(f"Arithmetic overflow: notional {notional} above bound")
        return saturating_cast(notional)

    # --- Asset-driven conversions (sell side budget) ---

    def quantity_for_price(self, price: int, side: OrderSide) -> int:
        """Asset quantity the curve absorbs before its price reaches price.

        Bid: reserve grows until the price falls to price.
        Ask: reserve shrinks until the price rises to price.
        """
        target = S.from_float(f64_sqrt(f64_div(float(self.k) * self.df, float(price))))
        if side == OrderSide.BID:
            return (target - self.asset_reserve).max(0).value
        return (S(self.asset_reserve) - target).max(0).value

    def price_after_quantity(self, qty: int, side: OrderSide) -> int:
        """Curve price after hypothetically trading qty of the asset."""
        if side == OrderSide.BID:
            new_reserve = (S(self.asset_reserve) + qty).value
        else:
            if qty >= self.asset_reserve:
                return INFINITE_PRICE
            new_reserve = (S(self.asset_reserve) - qty).value
        return self._price_at_asset_reserve(new_reserve)

    def notional_for_quantity(self, traded_qty: int, side: OrderSide) -> int:
        """Currency notional realized by trading traded_qty against the curve."""
        if side == OrderSide.BID:
            if self.asset_reserve == 0:
                return 0
            new_reserve = (S(self.asset_reserve) + traded_qty).value
            return (W(self.currency_reserve) - trunc_div(self.k, new_reserve)).max(0).narrow().value
        new_reserve = self.asset_reserve - traded_qty
        if new_reserve <= 0:
            return 0
        return (W(trunc_div(self.k, new_reserve)) - self.currency_reserve).max(0).narrow().value

    # --- Currency-driven conversions (buy side budget) ---

    def price_for_notional(self, notional: int) -> int:
        """Curve price after hypothetically paying notional of currency in."""
        if self.currency_reserve == 0:
            return INFINITE_PRICE
        new_currency = (S(self.currency_reserve) + notional).value
        squared = float(W(new_currency) * new_currency)
        return saturating_cast(f64_div(squared * self.df, float(self.k)))

    def quantity_for_notional(self, traded_notional: int) -> int:
        """Asset quantity bought by paying traded_notional of currency in."""
        if self.currency_reserve == 0:
            return 0
        new_currency = (S(self.currency_reserve) + traded_notional).value
        return (S(self.asset_reserve) - W(trunc_div(self.k, new_currency)).narrow()).value

    def notional_for_price(self, price: int) -> int:
        """Currency notional that moves the curve up to price, never negative."""
        if self.currency_reserve == 0:
            return 0
        target = S.from_float(f64_sqrt(f64_div(float(self.k) * float(price), self.df)))
        return (target - self.currency_reserve).max(0).value

    # --- Reserve updates ---

    def absorb_sell(self, qty: int, notional: int) -> None:
        """Caller sells qty of the asset into the curve for notional currency."""
        self.asset_reserve = (S(self.asset_reserve) + qty).value
        self.currency_reserve = (S(self.currency_reserve) - notional).value

    def absorb_buy(self, qty: int, notional: int) -> None:
        """Caller buys qty of the asset from the curve for notional currency."""
        self.asset_reserve = (S(self.asset_reserve) - qty).value
        self.currency_reserve = (S(self.currency_reserve) + notional).value

    def _price_at_asset_reserve(self, reserve: int) -> int:
        squared = float(W(reserve) * reserve)
        return saturating_cast(f64_div(float(self.k) * self.df, squared))

    # --- Tie-break predicates ---

    @staticmethod
    def partial_fill(amm_px: int, price: int, side: OrderSide) -> bool:
        """True if the execution bound stops the curve before the budget is spent."""
        if side == OrderSide.BID:
            return amm_px < price
        return amm_px > price

    @staticmethod
    def last_line(amm_px: int, line_px: int, side: OrderSide) -> bool:
        """True if the curve is already at or past the line's price."""
        if side == OrderSide.BID:
            return amm_px >= line_px
        return amm_px <= line_px

    @staticmethod
    def cover_line(amm_px: int, price: int, line_px: int, side: OrderSide) -> bool:
        """True if both the curve and the bound stay on the line's side."""
        if side == OrderSide.BID:
            return max(amm_px, price) <= line_px
        return min(amm_px, price) >= line_px

    @staticmethod
    def line_is_unreachable(price: int, line_px: int, side: OrderSide) -> bool:
        """True if the execution bound is strictly worse than the line."""
        if side == OrderSide.BID:
            return price > line_px
        return price < line_px
