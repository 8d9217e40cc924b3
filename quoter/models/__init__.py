"""Data models for venue state and quotes."""

from quoter.models.quote import Quote, QuoteParams, SwapLeg
from quoter.models.types import (
    AccountKey,
    Amount,
    OrderSide,
    SwapMode,
    is_valid_key,
    normalize_key,
)
from quoter.models.venue import CommunityHeader, InstrumentHeader, PriceLevel, TokenState

__all__ = [
    # Types
    "AccountKey",
    "Amount",
    "OrderSide",
    "SwapMode",
    "is_valid_key",
    "normalize_key",
    # Venue records
    "CommunityHeader",
    "InstrumentHeader",
    "PriceLevel",
    "TokenState",
    # Quotes
    "Quote",
    "QuoteParams",
    "SwapLeg",
]
