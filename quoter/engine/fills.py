"""Running totals of a simulated swap.

A FillLedger owns the private curve copy of one simulation together with
the unspent budget, the filled amount and the accrued fee. Every update is
checked 64-bit arithmetic; an overflow aborts the whole quote.

Budget and filled amount are denominated by direction:

    buy:  remaining is currency, filled is asset received
    sell: remaining is asset, filled is currency received
"""

from __future__ import annotations

from dataclasses import dataclass

from quoter.amm.curve import ConstantProductCurve
from quoter.safe_int import S, saturating_cast


@dataclass
class FillLedger:
    curve: ConstantProductCurve
    fee_rate: float
    remaining: int
    filled: int = 0
    fees: int = 0

    def charge_fee(self, notional: int) -> None:
        """Accrue trunc(notional * fee_rate)."""
        self.fees = (S(self.fees) + saturating_cast(notional * self.fee_rate)).value

    # --- Buy (currency in, asset out) ---

    def buy_from_curve(self, qty: int, notional: int) -> None:
        """Pay notional into the curve for qty of the asset.

        The fee is charged only when both legs moved.
        """
        self.remaining = (S(self.remaining) - notional).value
        self.filled = (S(self.filled) + qty).value
        self.curve.absorb_buy(qty, notional)
        if qty != 0 and notional != 0:
            self.charge_fee(notional)

    def buy_from_line(self, qty: int, notional: int) -> None:
        """Take qty of a resting ask for notional."""
        self.filled = (S(self.filled) + qty).value
        self.charge_fee(notional)
        self.remaining = (S(self.remaining) - notional).value

    # --- Sell (asset in, currency out) ---

    def sell_to_curve(self, qty: int, notional: int) -> None:
        """Sell qty of the asset into the curve for notional.

        The fee is charged only when both legs moved.
        """
        self.remaining = (S(self.remaining) - qty).value
        self.filled = (S(self.filled) + notional).value
        self.curve.absorb_sell(qty, notional)
        if qty != 0 and notional != 0:
            self.charge_fee(notional)

    def sell_to_line(self, qty: int, notional: int) -> None:
        """Hit a resting bid with qty for notional."""
        self.charge_fee(notional)
        self.remaining = (S(self.remaining) - qty).value
        self.filled = (S(self.filled) + notional).value
