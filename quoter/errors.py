"""Quote error classes.

Every failure of a quote call is one of these. They are local and
non-retryable; refetching a fresher snapshot is the caller's decision.
"""


class QuoteError(Exception):
    """Base error for quote operations."""

    code = "quote_error"


class ArithmeticOverflow(QuoteError, ArithmeticError):
    """A checked numeric operation overflowed or a notional bound tripped."""

    code = "arithmetic_overflow"


class UnsupportedMode(QuoteError):
    """Only exact-input quotes are supported."""

    code = "unsupported_mode"


class SwapFailed(QuoteError):
    """The simulation moved nothing on one side of the trade."""

    code = "swap_failed"


class InvalidAccount(QuoteError):
    """A required account is missing from the snapshot or too short to decode."""

    code = "invalid_account"


class InvalidSwapPair(QuoteError):
    """Source and destination mints do not match the venue's token pair."""

    code = "invalid_swap_pair"
