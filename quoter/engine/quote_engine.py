"""Quote engine: merge the AMM curve and the order book into one fill.

A buy spends a currency budget against the ask side, a sell spends an asset
budget against the bid side. Each iteration looks at the next resting line
and at where the curve would end up if the whole remaining budget went into
it, then decides which source fills next:

- no line left: the curve takes the rest, capped at the execution bound
- the budget fits inside the line: the curve fills first if it already
  beats the line (or the line is beyond the bound), otherwise the curve is
  walked up to the line price and the line takes the leftover
- the budget exceeds the line: the line is consumed whole while the curve
  stays behind it, otherwise the curve fills up to the line and the walk ends

Execution is bounded by market_px +/- (market_px >> max_price_shift).
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from quoter.config import DEFAULT_CONFIG, QuoterConfig
from quoter.engine.fills import FillLedger
from quoter.errors import SwapFailed, UnsupportedMode
from quoter.models.quote import Quote, QuoteParams
from quoter.models.types import OrderSide, SwapMode, normalize_key
from quoter.models.venue import PriceLevel
from quoter.safe_int import S, f64_div, saturating_cast
from quoter.snapshot.assembler import VenueState

logger = structlog.get_logger()


class QuoteEngine:
    """Simulates exact-input swaps against a VenueState.

    The engine holds no per-call state; each quote works on its own copy of
    the curve, so one engine can serve any number of snapshots.
    """

    def __init__(self, config: QuoterConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def execution_bound(self, market_px: int, buy: bool) -> int:
        """Worst price a fill may reach on the given direction."""
        max_diff = market_px >> self.config.max_price_shift
        if buy:
            return (S(market_px) + max_diff).value
        return (S(market_px) - max_diff).value

    def quote(self, state: VenueState, params: QuoteParams) -> Quote:
        """Price an exact-input swap.

        Raises:
            UnsupportedMode: If params asks for anything but exact input
            SwapFailed: If the simulation moves nothing on either side
            ArithmeticOverflow: If any checked step overflows
        """
        if params.swap_mode != SwapMode.EXACT_IN:
            raise UnsupportedMode(f"Swap mode {params.swap_mode.value} is not supported")

        buy = normalize_key(params.input_mint) == state.currency_token.address
        px = state.header.market_px()
        price = self.execution_bound(px, buy)
        book = state.book

        client_tokens = 0
        client_mints = 0
        fees = 0

        if buy and (price > px or book.crosses(price, OrderSide.ASK)):
            ledger = self._simulate_buy(state, params.amount, price)
            client_tokens = ledger.filled
            client_mints = (-(S(params.amount) - ledger.remaining) - ledger.fees).value
            fees = ledger.fees
        elif not buy and (price < px or book.crosses(price, OrderSide.BID)):
            ledger = self._simulate_sell(state, params.amount, price)
            client_tokens = (-(S(params.amount) - ledger.remaining)).value
            client_mints = (S(ledger.filled) - ledger.fees).value
            fees = ledger.fees

        if client_tokens == 0 or client_mints == 0:
            raise SwapFailed(
                f"Swap failed: no liquidity for {params.amount} "
                f"{'buy' if buy else 'sell'} at bound {price}"
            )

        if buy:
            in_amount, out_amount = -client_mints, client_tokens
            fee_base = in_amount
        else:
            in_amount, out_amount = -client_tokens, client_mints
            fee_base = out_amount
        if in_amount <= 0 or out_amount <= 0:
            raise SwapFailed(
                f"Swap failed: non-positive leg (in={in_amount}, out={out_amount})"
            )

        quote = Quote(
            in_amount=in_amount,
            out_amount=out_amount,
            fee_amount=fees,
            fee_mint=state.currency_token.address,
            fee_pct=Decimal(fees) / Decimal(fee_base),
        )
        logger.debug(
            "quote_computed",
            instr_id=state.header.instr_id,
            side="buy" if buy else "sell",
            amount=params.amount,
            market_px=px,
            bound=price,
            in_amount=quote.in_amount,
            out_amount=quote.out_amount,
            fee=quote.fee_amount,
        )
        return quote

    # --- Buy: currency budget against asks ---

    def _simulate_buy(self, state: VenueState, amount: int, price: int) -> FillLedger:
        fee_rate = state.fee_rate
        curve = state.curve.copy()
        input_sum = saturating_cast(f64_div(float(amount), 1.0 + fee_rate))
        ledger = FillLedger(curve=curve, fee_rate=fee_rate, remaining=input_sum)
        lines = state.book.iter_side(OrderSide.ASK)

        while True:
            entry = next(lines, None)
            amm_px = curve.price_for_notional(ledger.remaining)

            if entry is None:
                self._buy_rest_from_curve(ledger, amm_px, price)
                break

            _, line = entry
            line_sum = curve.trade_notional(line.qty, line.price)

            if ledger.remaining <= line_sum:
                self._buy_inside_line(ledger, amm_px, price, line)
                break

            next_amm_px = curve.price_for_notional((S(ledger.remaining) - line_sum).value)
            if curve.cover_line(next_amm_px, price, line.price, OrderSide.ASK):
                ledger.buy_from_line(line.qty, line_sum)
                continue

            # Crossing line: walk the curve up to the better of line and bound
            notional = min(curve.notional_for_price(min(line.price, price)), ledger.remaining)
            qty = curve.quantity_for_notional(notional)
            if qty != 0 and notional != 0:
                ledger.buy_from_curve(qty, notional)
            if curve.cover_line(amm_px, price, line.price, OrderSide.ASK):
                ledger.buy_from_line(line.qty, line_sum)
            break

        return ledger

    def _buy_at_bound(self, ledger: FillLedger, price: int) -> None:
        curve = ledger.curve
        qty = curve.quantity_for_price(price, OrderSide.ASK)
        notional = curve.notional_for_quantity(qty, OrderSide.ASK)
        if qty == 0 or notional == 0:
            return
        ledger.buy_from_curve(qty, notional)

    def _buy_rest_from_curve(self, ledger: FillLedger, amm_px: int, price: int) -> None:
        curve = ledger.curve
        if curve.partial_fill(amm_px, price, OrderSide.ASK):
            self._buy_at_bound(ledger, price)
            return
        qty = curve.quantity_for_notional(ledger.remaining)
        if qty == 0:
            return
        ledger.buy_from_curve(qty, ledger.remaining)

    def _buy_inside_line(
        self, ledger: FillLedger, amm_px: int, price: int, line: PriceLevel
    ) -> None:
        curve = ledger.curve
        if curve.last_line(amm_px, line.price, OrderSide.ASK):
            self._buy_rest_from_curve(ledger, amm_px, price)
            return
        if curve.line_is_unreachable(price, line.price, OrderSide.ASK):
            self._buy_at_bound(ledger, price)
            return

        qty = curve.quantity_for_price(line.price, OrderSide.ASK)
        notional = curve.notional_for_quantity(qty, OrderSide.ASK)
        if qty != 0 and notional != 0:
            ledger.buy_from_curve(qty, notional)
        if ledger.remaining > 0:
            fill_qty = saturating_cast(
                f64_div(float(ledger.remaining) * curve.df, float(line.price))
            )
            ledger.buy_from_line(fill_qty, ledger.remaining)

    # --- Sell: asset budget against bids ---

    def _simulate_sell(self, state: VenueState, amount: int, price: int) -> FillLedger:
        curve = state.curve.copy()
        ledger = FillLedger(curve=curve, fee_rate=state.fee_rate, remaining=amount)
        lines = state.book.iter_side(OrderSide.BID)

        while True:
            entry = next(lines, None)
            amm_px = curve.price_after_quantity(ledger.remaining, OrderSide.BID)

            if entry is None:
                self._sell_rest_to_curve(ledger, amm_px, price)
                break

            _, line = entry

            if ledger.remaining <= line.qty:
                self._sell_inside_line(ledger, amm_px, price, line)
                break

            next_amm_px = curve.price_after_quantity(
                (S(ledger.remaining) - line.qty).value, OrderSide.BID
            )
            if curve.cover_line(next_amm_px, price, line.price, OrderSide.BID):
                ledger.sell_to_line(line.qty, curve.trade_notional(line.qty, line.price))
                continue

            # Crossing line: walk the curve down to the better of line and bound.
            # The line itself is not hit; it was just shown not to cover.
            qty = min(
                curve.quantity_for_price(max(line.price, price), OrderSide.BID),
                ledger.remaining,
            )
            notional = curve.notional_for_quantity(qty, OrderSide.BID)
            if qty != 0 and notional != 0:
                ledger.sell_to_curve(qty, notional)
            break

        return ledger

    def _sell_at_bound(self, ledger: FillLedger, price: int) -> None:
        curve = ledger.curve
        qty = curve.quantity_for_price(price, OrderSide.BID)
        notional = curve.notional_for_quantity(qty, OrderSide.BID)
        if qty == 0 or notional == 0:
            return
        ledger.sell_to_curve(qty, notional)

    def _sell_rest_to_curve(self, ledger: FillLedger, amm_px: int, price: int) -> None:
        curve = ledger.curve
        if curve.partial_fill(amm_px, price, OrderSide.BID):
            self._sell_at_bound(ledger, price)
            return
        notional = curve.notional_for_quantity(ledger.remaining, OrderSide.BID)
        if notional == 0:
            return
        ledger.sell_to_curve(ledger.remaining, notional)

    def _sell_inside_line(
        self, ledger: FillLedger, amm_px: int, price: int, line: PriceLevel
    ) -> None:
        curve = ledger.curve
        if curve.last_line(amm_px, line.price, OrderSide.BID):
            self._sell_rest_to_curve(ledger, amm_px, price)
            return
        if curve.line_is_unreachable(price, line.price, OrderSide.BID):
            self._sell_at_bound(ledger, price)
            return

        qty = curve.quantity_for_price(line.price, OrderSide.BID)
        notional = curve.notional_for_quantity(qty, OrderSide.BID)
        if qty != 0 and notional != 0:
            ledger.sell_to_curve(qty, notional)
        if ledger.remaining > 0:
            fill_sum = curve.trade_notional(ledger.remaining, line.price)
            ledger.sell_to_line(ledger.remaining, fill_sum)
