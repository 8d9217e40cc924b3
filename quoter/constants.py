"""Venue constants for the hybrid AMM + order book quoter.

Centralizes sentinels and numeric bounds shared by the curve, the order
book view and the snapshot decoder.
"""

from quoter.safe_int import I64_MAX

# Link value meaning "no record" in the price-level arena
NULL_ORDER = 0xFFFF_FFFF

# Fixed-point scale of level prices and cached header prices (price 10.0 == 10 * PRICE_SCALE)
PRICE_SCALE = 10**9

# Price returned when the curve would have to divide by a non-positive reserve
INFINITE_PRICE = I64_MAX >> 1

# Upper bound on a single level's notional; larger values mean a corrupted snapshot
MAX_NOTIONAL = float(I64_MAX >> 1)

# Cached best ask of an empty ask side
MAX_PRICE = I64_MAX >> 1

# Execution bound: market price +/- (market price >> MAX_PRICE_SHIFT), i.e. one eighth
MAX_PRICE_SHIFT = 3

# Value of one community fee-rate step
FEE_RATE_STEP = 0.0001

# Size of the lines account header preceding the price-level records
LINES_HEADER_SIZE = 64


def get_dec_factor(decs_count: int) -> int:
    """Return 10 ** decs_count as the integer decimal factor."""
    if decs_count < 0:
        raise ValueError(f"Decimal count cannot be negative: {decs_count}")
    return 10**decs_count
