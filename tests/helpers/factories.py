"""Factory functions for venue snapshots.

Snapshots are built as raw account bytes with the production encoders, so
every test that goes through make_snapshot() also exercises the decoder.

Usage:
    from tests.helpers import make_header, make_snapshot, make_venue

    lines = reference_lines()
    header = make_header(lines=lines, bid_begin=1, ask_begin=2)
    venue = make_venue(make_snapshot(header, lines))
"""

import base64
from collections.abc import Sequence

from quoter.constants import LINES_HEADER_SIZE, MAX_PRICE, NULL_ORDER, PRICE_SCALE
from quoter.models.quote import QuoteParams
from quoter.models.types import SwapMode
from quoter.models.venue import CommunityHeader, InstrumentHeader, PriceLevel, TokenState
from quoter.snapshot.assembler import VenueAccounts
from quoter.snapshot.layout import (
    encode_community_header,
    encode_instrument_header,
    encode_lines_account,
    encode_token_state,
)
from quoter.venue import HybridVenue
from tests.helpers.constants import (
    ASSET_DECIMALS,
    ASSET_MINT,
    ASSET_TOKEN_ID,
    ASSET_TOKEN_STATE,
    COMMUNITY,
    CURRENCY_DECIMALS,
    CURRENCY_MINT,
    CURRENCY_TOKEN_ID,
    CURRENCY_TOKEN_STATE,
    DEC_FACTOR,
    INSTR_HEADER,
    LINES,
    MAPS,
    TOKEN_PROGRAM,
)


def px(value: float) -> int:
    """Fixed-point price, truncated like an on-chain cast (10.4 -> 10_400_000_000)."""
    return int(value * PRICE_SCALE)


def line(
    price: float,
    qty: int = 100_000,
    next: int = NULL_ORDER,
    prev: int = NULL_ORDER,
    origin: int = 0,
) -> PriceLevel:
    """A resting line at a human-readable price."""
    return PriceLevel(price=px(price), qty=qty, next=next, prev=prev, origin=origin)


def reference_lines() -> list[PriceLevel]:
    """Seven-slot arena shared by the book scenarios.

    With bid_begin=1 and ask_begin=2:
        bids: [1] 10.4 -> [0] 10.1 -> [3] 10.0
        asks: [2] 9.9  -> [4] 10.1 -> [6] 10.1
    Slot 5 is unused.
    """
    return [
        line(10.1, next=3, prev=1, origin=0),  # bid
        line(10.4, next=0, prev=NULL_ORDER, origin=1),  # bid
        line(9.9, next=4, prev=NULL_ORDER),  # ask
        line(10.0, next=NULL_ORDER, prev=3),  # bid
        line(10.1, next=6, prev=NULL_ORDER),  # ask
        PriceLevel(price=0, qty=0),  # unused
        line(10.1, next=NULL_ORDER, prev=4),  # ask
    ]


def make_header(
    lines: Sequence[PriceLevel] = (),
    bid_begin: int = 0,
    ask_begin: int = 0,
    asset_tokens: int = 0,
    crncy_tokens: int = 0,
    last_px: int | None = None,
    ps: int = 1,
    day_volatility: float = 0.0,
    **overrides: object,
) -> InstrumentHeader:
    """Instrument header for a book laid out in lines.

    Line counts are set to len(lines) on both sides. Best ask and best bid
    are read from the side heads, falling back to MAX_PRICE and 0.
    """
    best_ask = lines[ask_begin].price if 0 <= ask_begin < len(lines) else MAX_PRICE
    best_bid = lines[bid_begin].price if 0 <= bid_begin < len(lines) else 0
    fields: dict[str, object] = {
        "instr_id": 1,
        "asset_token_id": ASSET_TOKEN_ID,
        "crncy_token_id": CURRENCY_TOKEN_ID,
        "ps": ps,
        "asset_mint": ASSET_MINT,
        "crncy_mint": CURRENCY_MINT,
        "maps_address": MAPS,
        "dec_factor": DEC_FACTOR,
        "asset_tokens": asset_tokens,
        "crncy_tokens": crncy_tokens,
        "best_bid": best_bid,
        "best_ask": best_ask,
        "last_px": px(10.0) if last_px is None else last_px,
        "bid_lines_begin": bid_begin,
        "ask_lines_begin": ask_begin,
        "bid_lines_count": len(lines),
        "ask_lines_count": len(lines),
        "day_volatility": day_volatility,
    }
    fields.update(overrides)
    return InstrumentHeader(**fields)  # type: ignore[arg-type]


def make_accounts() -> VenueAccounts:
    return VenueAccounts(
        instr_header=INSTR_HEADER,
        a_token_state=ASSET_TOKEN_STATE,
        b_token_state=CURRENCY_TOKEN_STATE,
        community=COMMUNITY,
        lines=LINES,
        a_mint=ASSET_MINT,
        b_mint=CURRENCY_MINT,
    )


def make_snapshot(
    header: InstrumentHeader,
    lines: Sequence[PriceLevel] = (),
    spot_fee_rate: int = 0,
    version: int = 1,
) -> dict[str, bytes]:
    """Raw account map for a venue, keyed by the ids in make_accounts()."""
    asset_token = TokenState(
        address=ASSET_MINT, program_address=TOKEN_PROGRAM, id=ASSET_TOKEN_ID, mask=ASSET_DECIMALS
    )
    currency_token = TokenState(
        address=CURRENCY_MINT,
        program_address=TOKEN_PROGRAM,
        id=CURRENCY_TOKEN_ID,
        mask=CURRENCY_DECIMALS,
    )
    community = CommunityHeader(tag=0, version=version, spot_fee_rate=spot_fee_rate)
    return {
        INSTR_HEADER: encode_instrument_header(header),
        ASSET_TOKEN_STATE: encode_token_state(asset_token),
        CURRENCY_TOKEN_STATE: encode_token_state(currency_token),
        COMMUNITY: encode_community_header(community),
        LINES: encode_lines_account(list(lines), LINES_HEADER_SIZE),
        ASSET_MINT: bytes(82),
        CURRENCY_MINT: bytes(82),
    }


def make_venue(snapshot: dict[str, bytes]) -> HybridVenue:
    """A venue over make_accounts(), already updated with snapshot."""
    venue = HybridVenue(make_accounts())
    venue.update(snapshot)
    return venue


def sell(amount: int, swap_mode: SwapMode = SwapMode.EXACT_IN) -> QuoteParams:
    """Sell amount of the asset for the currency."""
    return QuoteParams(
        input_mint=ASSET_MINT, output_mint=CURRENCY_MINT, amount=amount, swap_mode=swap_mode
    )


def buy(amount: int, swap_mode: SwapMode = SwapMode.EXACT_IN) -> QuoteParams:
    """Spend amount of the currency on the asset."""
    return QuoteParams(
        input_mint=CURRENCY_MINT, output_mint=ASSET_MINT, amount=amount, swap_mode=swap_mode
    )


def make_request_body(
    snapshot: dict[str, bytes],
    input_mint: str = ASSET_MINT,
    output_mint: str = CURRENCY_MINT,
    amount: int | str = 140_000,
    **extra: object,
) -> dict[str, object]:
    """JSON body for POST /quote with base64-encoded account data."""
    accounts = make_accounts()
    body: dict[str, object] = {
        "accounts": {
            "instrHeader": accounts.instr_header,
            "aTokenState": accounts.a_token_state,
            "bTokenState": accounts.b_token_state,
            "community": accounts.community,
            "lines": accounts.lines,
            "aMint": accounts.a_mint,
            "bMint": accounts.b_mint,
        },
        "snapshot": {key: base64.b64encode(data).decode() for key, data in snapshot.items()},
        "inputMint": input_mint,
        "outputMint": output_mint,
        "amount": str(amount),
    }
    body.update(extra)
    return body
