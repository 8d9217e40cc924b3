"""Pytest configuration and fixtures."""

import pytest

from quoter.amm.curve import ConstantProductCurve
from quoter.venue import HybridVenue
from tests.helpers.constants import ASSET_RESERVE, CURRENCY_RESERVE, DEC_FACTOR
from tests.helpers.factories import make_header, make_snapshot, make_venue, reference_lines


@pytest.fixture
def curve() -> ConstantProductCurve:
    """Curve holding 1,000,000 A against 10,000,000 B (price 10.0)."""
    return ConstantProductCurve(
        k=ASSET_RESERVE * CURRENCY_RESERVE,
        asset_reserve=ASSET_RESERVE,
        currency_reserve=CURRENCY_RESERVE,
        df=float(DEC_FACTOR),
        rdf=1.0 / DEC_FACTOR,
    )


@pytest.fixture
def book_only_venue() -> HybridVenue:
    """Reference book (bids from slot 1, asks from slot 2) with an empty AMM."""
    lines = reference_lines()
    header = make_header(lines=lines, bid_begin=1, ask_begin=2)
    return make_venue(make_snapshot(header, lines))


@pytest.fixture
def amm_only_venue() -> HybridVenue:
    """AMM at price 10.0 with an empty book."""
    header = make_header(asset_tokens=ASSET_RESERVE, crncy_tokens=CURRENCY_RESERVE)
    return make_venue(make_snapshot(header))


@pytest.fixture
def hybrid_venue() -> HybridVenue:
    """AMM at price 10.0 plus the reference arena with both heads at slot 0."""
    lines = reference_lines()
    header = make_header(
        lines=lines,
        bid_begin=0,
        ask_begin=0,
        asset_tokens=ASSET_RESERVE,
        crncy_tokens=CURRENCY_RESERVE,
    )
    return make_venue(make_snapshot(header, lines))
