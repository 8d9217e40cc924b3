"""Tests for the HybridVenue surface."""

import pytest

from quoter.config import QuoterConfig
from quoter.errors import InvalidAccount, InvalidSwapPair
from quoter.models.types import OrderSide
from quoter.venue import HybridVenue
from tests.helpers import (
    ASSET_MINT,
    CURRENCY_MINT,
    INSTR_HEADER,
    make_accounts,
    make_header,
    make_snapshot,
    make_venue,
    reference_lines,
    sell,
)

OTHER_MINT = "0x" + "c3" * 32
USER_ASSET_ACCOUNT = "0x" + "d4" * 32
USER_CURRENCY_ACCOUNT = "0x" + "e5" * 32


class TestIdentity:
    def test_key_and_label(self):
        config = QuoterConfig(label="spot-sol-usdc", program_id="0x" + "99" * 32)
        venue = HybridVenue(make_accounts(), config=config)

        assert venue.key == INSTR_HEADER
        assert venue.label == "spot-sol-usdc"
        assert venue.program_id == "0x" + "99" * 32

    def test_default_config(self):
        venue = HybridVenue(make_accounts())
        assert venue.label == "hybrid-venue"

    def test_accounts_to_update(self):
        venue = HybridVenue(make_accounts())
        assert venue.accounts_to_update() == make_accounts().to_list()
        assert venue.accounts_to_update()[0] == INSTR_HEADER


class TestUpdate:
    def test_state_before_update_raises(self):
        venue = HybridVenue(make_accounts())
        with pytest.raises(InvalidAccount, match="no snapshot"):
            _ = venue.state
        with pytest.raises(InvalidAccount):
            venue.quote(sell(140_000))

    def test_failed_update_keeps_previous_state(self, amm_only_venue):
        previous = amm_only_venue.state
        with pytest.raises(InvalidAccount):
            amm_only_venue.update({})
        assert amm_only_venue.state is previous

    def test_update_replaces_state(self, amm_only_venue):
        lines = reference_lines()
        amm_only_venue.update(make_snapshot(make_header(lines=lines, bid_begin=1), lines))
        assert amm_only_venue.state.book.bid_begin_line == 1
        assert amm_only_venue.state.curve.k == 0


class TestIsActive:
    def test_book_with_lines(self, book_only_venue):
        assert book_only_venue.is_active()

    def test_never_held_lines(self, amm_only_venue):
        """A venue whose book never held a line is inactive, AMM or not."""
        assert not amm_only_venue.is_active()

    def test_trading_disabled(self):
        lines = reference_lines()
        venue = make_venue(make_snapshot(make_header(lines=lines, ps=0), lines))
        assert not venue.is_active()


class TestReserveMints:
    def test_asset_then_currency(self, amm_only_venue):
        assert amm_only_venue.reserve_mints() == [ASSET_MINT, CURRENCY_MINT]


class TestSwapLeg:
    """Resolving a mint pair to a side of the instrument."""

    def test_paying_currency_is_bid(self, amm_only_venue):
        leg = amm_only_venue.swap_leg(CURRENCY_MINT, ASSET_MINT)
        assert leg.side == OrderSide.BID
        assert leg.instr_id == 1
        assert leg.asset_account == ASSET_MINT
        assert leg.currency_account == CURRENCY_MINT

    def test_paying_asset_is_ask(self, amm_only_venue):
        leg = amm_only_venue.swap_leg(
            ASSET_MINT,
            CURRENCY_MINT,
            source_account=USER_ASSET_ACCOUNT,
            destination_account=USER_CURRENCY_ACCOUNT,
        )
        assert leg.side == OrderSide.ASK
        assert leg.asset_account == USER_ASSET_ACCOUNT
        assert leg.currency_account == USER_CURRENCY_ACCOUNT

    def test_user_accounts_on_bid(self, amm_only_venue):
        leg = amm_only_venue.swap_leg(
            CURRENCY_MINT,
            ASSET_MINT,
            source_account=USER_CURRENCY_ACCOUNT,
            destination_account=USER_ASSET_ACCOUNT,
        )
        assert leg.asset_account == USER_ASSET_ACCOUNT
        assert leg.currency_account == USER_CURRENCY_ACCOUNT

    def test_mint_casing_is_ignored(self, amm_only_venue):
        leg = amm_only_venue.swap_leg(CURRENCY_MINT.upper()[2:], ASSET_MINT)
        assert leg.side == OrderSide.BID

    @pytest.mark.parametrize(
        "source,destination",
        [
            (CURRENCY_MINT, OTHER_MINT),
            (OTHER_MINT, CURRENCY_MINT),
            (ASSET_MINT, OTHER_MINT),
            (OTHER_MINT, ASSET_MINT),
            (CURRENCY_MINT, CURRENCY_MINT),
        ],
    )
    def test_foreign_pair_raises(self, amm_only_venue, source, destination):
        with pytest.raises(InvalidSwapPair):
            amm_only_venue.swap_leg(source, destination)
