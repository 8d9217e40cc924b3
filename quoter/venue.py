"""Hybrid AMM + order book venue.

HybridVenue is the narrow surface a router, service or CLI talks to:

    venue = HybridVenue(accounts)
    fetch = venue.accounts_to_update()       # ids to fetch
    venue.update(snapshot)                   # {id: raw bytes}
    quote = venue.quote(QuoteParams(...))

update() replaces the held state wholesale; quote() never mutates it.
"""

from __future__ import annotations

from collections.abc import Mapping

import structlog

from quoter.config import DEFAULT_CONFIG, QuoterConfig
from quoter.engine.quote_engine import QuoteEngine
from quoter.errors import InvalidAccount, InvalidSwapPair
from quoter.models.quote import Quote, QuoteParams, SwapLeg
from quoter.models.types import OrderSide, normalize_key
from quoter.snapshot.assembler import VenueAccounts, VenueState, assemble

logger = structlog.get_logger()


class HybridVenue:
    """One instrument of the venue, quotable from account snapshots.

    Args:
        accounts: Account ids making up the venue
        config: Deployment configuration. If None, uses DEFAULT_CONFIG.
        engine: Quote engine to use. If None, builds one from config.
    """

    def __init__(
        self,
        accounts: VenueAccounts,
        config: QuoterConfig | None = None,
        engine: QuoteEngine | None = None,
    ) -> None:
        self.accounts = accounts
        self.config = config if config is not None else DEFAULT_CONFIG
        self.engine = engine if engine is not None else QuoteEngine(self.config)
        self._state: VenueState | None = None

    @property
    def key(self) -> str:
        """The instrument header account identifies the venue."""
        return self.accounts.instr_header

    @property
    def label(self) -> str:
        return self.config.label

    @property
    def program_id(self) -> str:
        return self.config.program_id

    @property
    def state(self) -> VenueState:
        """The last assembled snapshot.

        Raises:
            InvalidAccount: If update() has not succeeded yet
        """
        if self._state is None:
            raise InvalidAccount(f"Venue {self.key} has no snapshot; call update() first")
        return self._state

    def accounts_to_update(self) -> list[str]:
        return self.accounts.to_list()

    def update(self, snapshot: Mapping[str, bytes]) -> None:
        """Decode a fresh snapshot and replace the held state.

        On failure the previous state is kept.

        Raises:
            InvalidAccount: If the snapshot is incomplete or malformed
        """
        self._state = assemble(snapshot, self.accounts, self.config)
        logger.debug("venue_updated", venue=self.key, instr_id=self._state.header.instr_id)

    def quote(self, params: QuoteParams) -> Quote:
        """Quote an exact-input swap against the held snapshot."""
        return self.engine.quote(self.state, params)

    def is_active(self) -> bool:
        """True if trading is enabled and the book has ever held lines."""
        header = self.state.header
        total_lines_count = max(header.bid_lines_count, header.ask_lines_count)
        return total_lines_count != 0 and header.trading_enabled

    def reserve_mints(self) -> list[str]:
        """Asset and currency token addresses, in that order."""
        state = self.state
        return [state.asset_token.address, state.currency_token.address]

    def swap_leg(
        self,
        source_mint: str,
        destination_mint: str,
        *,
        source_account: str | None = None,
        destination_account: str | None = None,
    ) -> SwapLeg:
        """Resolve which side of the instrument a swap trades.

        Paying the currency buys the asset (BID), paying the asset sells it
        (ASK). Token accounts default to the mints themselves.

        Raises:
            InvalidSwapPair: If the mints are not this venue's pair
        """
        state = self.state
        asset = state.asset_token.address
        currency = state.currency_token.address
        source = normalize_key(source_mint)
        destination = normalize_key(destination_mint)
        source_account = normalize_key(source_account or source)
        destination_account = normalize_key(destination_account or destination)

        if source == currency:
            if destination != asset:
                raise InvalidSwapPair(
                    f"Invalid swap pair: {source} -> {destination}, expected asset {asset}"
                )
            return SwapLeg(
                side=OrderSide.BID,
                instr_id=state.header.instr_id,
                asset_account=destination_account,
                currency_account=source_account,
            )
        if destination == currency:
            if source != asset:
                raise InvalidSwapPair(
                    f"Invalid swap pair: {source} -> {destination}, expected asset {asset}"
                )
            return SwapLeg(
                side=OrderSide.ASK,
                instr_id=state.header.instr_id,
                asset_account=source_account,
                currency_account=destination_account,
            )
        raise InvalidSwapPair(
            f"Invalid swap pair: neither {source} nor {destination} is {currency}"
        )
