"""Snapshot decoding and assembly."""

from quoter.snapshot.assembler import VenueAccounts, VenueState, assemble
from quoter.snapshot.layout import (
    decode_community_header,
    decode_instrument_header,
    decode_price_levels,
    decode_token_state,
)

__all__ = [
    "VenueAccounts",
    "VenueState",
    "assemble",
    "decode_community_header",
    "decode_instrument_header",
    "decode_price_levels",
    "decode_token_state",
]
