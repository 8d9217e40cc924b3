"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Token mints, venue account ids and reserves
- factories: Price levels, headers and encoded snapshots
"""

from tests.helpers.constants import (
    ASSET_MINT,
    ASSET_RESERVE,
    CURRENCY_MINT,
    CURRENCY_RESERVE,
    DEC_FACTOR,
    INSTR_HEADER,
)
from tests.helpers.factories import (
    buy,
    line,
    make_accounts,
    make_header,
    make_request_body,
    make_snapshot,
    make_venue,
    px,
    reference_lines,
    sell,
)

__all__ = [
    # Constants
    "ASSET_MINT",
    "CURRENCY_MINT",
    "ASSET_RESERVE",
    "CURRENCY_RESERVE",
    "DEC_FACTOR",
    "INSTR_HEADER",
    # Factories
    "buy",
    "line",
    "make_accounts",
    "make_header",
    "make_request_body",
    "make_snapshot",
    "make_venue",
    "px",
    "reference_lines",
    "sell",
]
