"""Fixed-layout decoding of venue account data.

All records are little-endian and packed. Every decode checks the buffer
length first; a short buffer raises InvalidAccount instead of reading
garbage.

Instrument header (184 bytes):
    instr_id u32, asset_token_id u32, crncy_token_id u32, ps u32,
    asset_mint [32], crncy_mint [32], maps_address [32],
    dec_factor i64, asset_tokens i64, crncy_tokens i64,
    best_bid i64, best_ask i64, last_px i64,
    bid_lines_begin u32, ask_lines_begin u32,
    bid_lines_count u32, ask_lines_count u32,
    day_volatility f64

Token state (72 bytes):
    address [32], program_address [32], id u32, mask u32

Community header (16 bytes):
    tag u32, version u32, spot_fee_rate u32, reserved u32

Lines account:
    header (lines_header_size bytes, skipped), then 32-byte price levels:
    price i64, qty i64, next u32, prev u32, origin u32, orders_count u32
"""

from __future__ import annotations

import struct

import structlog

from quoter.errors import InvalidAccount
from quoter.models.types import key_from_bytes, key_to_bytes
from quoter.models.venue import CommunityHeader, InstrumentHeader, PriceLevel, TokenState

logger = structlog.get_logger()

INSTRUMENT_HEADER = struct.Struct("<IIII32s32s32sqqqqqqIIIId")
TOKEN_STATE = struct.Struct("<32s32sII")
COMMUNITY_HEADER = struct.Struct("<IIII")
PRICE_LEVEL = struct.Struct("<qqIIII")


def _require_length(data: bytes, size: int, account_id: str, what: str) -> None:
    if len(data) < size:
        raise InvalidAccount(
            f"Account {account_id} too short for {what}: {len(data)} < {size} bytes"
        )


def decode_instrument_header(data: bytes, account_id: str = "?") -> InstrumentHeader:
    """Decode an instrument header from the start of data.

    Raises:
        InvalidAccount: If data is shorter than the header
    """
    _require_length(data, INSTRUMENT_HEADER.size, account_id, "instrument header")
    (
        instr_id,
        asset_token_id,
        crncy_token_id,
        ps,
        asset_mint,
        crncy_mint,
        maps_address,
        dec_factor,
        asset_tokens,
        crncy_tokens,
        best_bid,
        best_ask,
        last_px,
        bid_lines_begin,
        ask_lines_begin,
        bid_lines_count,
        ask_lines_count,
        day_volatility,
    ) = INSTRUMENT_HEADER.unpack_from(data)
    return InstrumentHeader(
        instr_id=instr_id,
        asset_token_id=asset_token_id,
        crncy_token_id=crncy_token_id,
        ps=ps,
        asset_mint=key_from_bytes(asset_mint),
        crncy_mint=key_from_bytes(crncy_mint),
        maps_address=key_from_bytes(maps_address),
        dec_factor=dec_factor,
        asset_tokens=asset_tokens,
        crncy_tokens=crncy_tokens,
        best_bid=best_bid,
        best_ask=best_ask,
        last_px=last_px,
        bid_lines_begin=bid_lines_begin,
        ask_lines_begin=ask_lines_begin,
        bid_lines_count=bid_lines_count,
        ask_lines_count=ask_lines_count,
        day_volatility=day_volatility,
    )


def decode_token_state(data: bytes, account_id: str = "?") -> TokenState:
    """Decode a token state record.

    Raises:
        InvalidAccount: If data is shorter than the record
    """
    _require_length(data, TOKEN_STATE.size, account_id, "token state")
    address, program_address, token_id, mask = TOKEN_STATE.unpack_from(data)
    return TokenState(
        address=key_from_bytes(address),
        program_address=key_from_bytes(program_address),
        id=token_id,
        mask=mask,
    )


def decode_community_header(data: bytes, account_id: str = "?") -> CommunityHeader:
    """Decode the community account header.

    Raises:
        InvalidAccount: If data is shorter than the header
    """
    _require_length(data, COMMUNITY_HEADER.size, account_id, "community header")
    tag, version, spot_fee_rate, _reserved = COMMUNITY_HEADER.unpack_from(data)
    return CommunityHeader(tag=tag, version=version, spot_fee_rate=spot_fee_rate)


def decode_price_levels(
    data: bytes, header_size: int, account_id: str = "?"
) -> list[PriceLevel]:
    """Decode the price-level arena that follows the lines account header.

    An account no longer than its header holds no lines. Trailing bytes that
    do not make up a whole record are ignored.
    """
    if len(data) <= header_size:
        return []
    body = memoryview(data)[header_size:]
    count, trailing = divmod(len(body), PRICE_LEVEL.size)
    if trailing:
        logger.warning(
            "lines_trailing_bytes",
            account=account_id,
            trailing=trailing,
            record_size=PRICE_LEVEL.size,
        )
    return [
        PriceLevel(*fields)
        for fields in PRICE_LEVEL.iter_unpack(body[: count * PRICE_LEVEL.size])
    ]


# --- Encoding (fixtures and tooling) ---


def encode_instrument_header(header: InstrumentHeader) -> bytes:
    return INSTRUMENT_HEADER.pack(
        header.instr_id,
        header.asset_token_id,
        header.crncy_token_id,
        header.ps,
        key_to_bytes(header.asset_mint),
        key_to_bytes(header.crncy_mint),
        key_to_bytes(header.maps_address),
        header.dec_factor,
        header.asset_tokens,
        header.crncy_tokens,
        header.best_bid,
        header.best_ask,
        header.last_px,
        header.bid_lines_begin,
        header.ask_lines_begin,
        header.bid_lines_count,
        header.ask_lines_count,
        header.day_volatility,
    )


def encode_token_state(token: TokenState) -> bytes:
    return TOKEN_STATE.pack(
        key_to_bytes(token.address),
        key_to_bytes(token.program_address),
        token.id,
        token.mask,
    )


def encode_community_header(header: CommunityHeader) -> bytes:
    return COMMUNITY_HEADER.pack(header.tag, header.version, header.spot_fee_rate, 0)


def encode_lines_account(lines: list[PriceLevel], header_size: int) -> bytes:
    """Encode a lines account: zeroed header followed by the records."""
    body = b"".join(
        PRICE_LEVEL.pack(
            line.price, line.qty, line.next, line.prev, line.origin, line.orders_count
        )
        for line in lines
    )
    return bytes(header_size) + body
