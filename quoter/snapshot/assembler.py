"""Snapshot assembly.

Turns a mapping of account id -> raw account bytes into a VenueState: the
decoded records plus the curve and order book the quote engine runs on.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

import structlog

from quoter.amm.curve import ConstantProductCurve
from quoter.book.order_book import OrderBook
from quoter.config import DEFAULT_CONFIG, QuoterConfig
from quoter.errors import InvalidAccount
from quoter.models.types import normalize_key
from quoter.models.venue import CommunityHeader, InstrumentHeader, TokenState
from quoter.snapshot.layout import (
    decode_community_header,
    decode_instrument_header,
    decode_price_levels,
    decode_token_state,
)

logger = structlog.get_logger()


@dataclass(frozen=True)
class VenueAccounts:
    """Account ids that make up one venue snapshot.

    The a_* accounts belong to the asset token and the b_* accounts to the
    currency token.
    """

    instr_header: str
    a_token_state: str
    b_token_state: str
    community: str
    lines: str
    a_mint: str
    b_mint: str

    def __post_init__(self) -> None:
        for name in (
            "instr_header",
            "a_token_state",
            "b_token_state",
            "community",
            "lines",
            "a_mint",
            "b_mint",
        ):
            object.__setattr__(self, name, normalize_key(getattr(self, name)))

    def to_list(self) -> list[str]:
        """Ids in the order a caller should fetch them."""
        return [
            self.instr_header,
            self.a_token_state,
            self.b_token_state,
            self.community,
            self.lines,
            self.a_mint,
            self.b_mint,
        ]


@dataclass(frozen=True)
class VenueState:
    """Everything one quote needs, decoded from a single snapshot.

    The curve here is the snapshot's curve; the engine simulates on a copy.
    """

    header: InstrumentHeader
    asset_token: TokenState
    currency_token: TokenState
    community: CommunityHeader
    book: OrderBook
    curve: ConstantProductCurve
    fee_rate_factor: float

    @property
    def fee_rate(self) -> float:
        """Fee rate applied to every filled notional."""
        return self.header.day_volatility * self.fee_rate_factor


def _get_account(accounts: Mapping[str, bytes], account_id: str) -> bytes:
    try:
        return accounts[account_id]
    except KeyError:
        raise InvalidAccount(f"Account {account_id} missing from snapshot") from None


def assemble(
    accounts: Mapping[str, bytes],
    venue_accounts: VenueAccounts,
    config: QuoterConfig = DEFAULT_CONFIG,
) -> VenueState:
    """Decode a snapshot into a VenueState.

    Args:
        accounts: Raw account data keyed by account id (any key casing)
        venue_accounts: Which ids hold which venue account
        config: Deployment configuration

    Raises:
        InvalidAccount: If an account is missing, too short, or the community
            account was written by another schema version
    """
    accounts = {normalize_key(key): data for key, data in accounts.items()}

    header = decode_instrument_header(
        _get_account(accounts, venue_accounts.instr_header), venue_accounts.instr_header
    )
    asset_token = decode_token_state(
        _get_account(accounts, venue_accounts.a_token_state), venue_accounts.a_token_state
    )
    currency_token = decode_token_state(
        _get_account(accounts, venue_accounts.b_token_state), venue_accounts.b_token_state
    )
    community = decode_community_header(
        _get_account(accounts, venue_accounts.community), venue_accounts.community
    )
    if community.version != config.schema_version:
        raise InvalidAccount(
            f"Account {venue_accounts.community} has schema version {community.version}, "
            f"expected {config.schema_version}"
        )

    lines = decode_price_levels(
        _get_account(accounts, venue_accounts.lines),
        config.lines_header_size,
        venue_accounts.lines,
    )

    # Mint accounts carry nothing the engine reads but must be present
    _get_account(accounts, venue_accounts.a_mint)
    _get_account(accounts, venue_accounts.b_mint)

    if header.asset_token_id != asset_token.id or header.crncy_token_id != currency_token.id:
        logger.warning(
            "token_id_mismatch",
            instr_id=header.instr_id,
            header_asset=header.asset_token_id,
            header_currency=header.crncy_token_id,
            asset_token=asset_token.id,
            currency_token=currency_token.id,
        )

    state = VenueState(
        header=header,
        asset_token=asset_token,
        currency_token=currency_token,
        community=community,
        book=OrderBook.from_header(header, lines),
        curve=ConstantProductCurve.from_header(header),
        fee_rate_factor=community.fee_rate_factor(config.fee_rate_step),
    )
    logger.debug(
        "snapshot_assembled",
        instr_id=header.instr_id,
        lines=len(lines),
        asset_reserve=header.asset_tokens,
        currency_reserve=header.crncy_tokens,
    )
    return state
