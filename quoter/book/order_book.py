"""Read-only view over the venue's price-level arena.

Lines for both sides share one flat record array. Each side is a singly
walked linked list: the instrument header stores the head index and every
record stores the index of the next (worse) line. NULL_ORDER terminates a
list.

Links come from an untrusted snapshot, so traversal is always bounded by
the header's declared line count and stops at self-links and out-of-range
indices instead of looping or raising.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

import structlog

from quoter.constants import NULL_ORDER
from quoter.models.types import OrderSide
from quoter.models.venue import InstrumentHeader, PriceLevel

logger = structlog.get_logger()


@dataclass(frozen=True)
class OrderBook:
    """Both sides of the book over a shared line arena.

    Attributes:
        lines: Flat record array; links are indices into it
        bid_begin_line: Index of the best bid line
        ask_begin_line: Index of the best ask line
        total_lines_count: Maximum number of steps any traversal may take
    """

    lines: tuple[PriceLevel, ...] = field(default_factory=tuple)
    bid_begin_line: int = NULL_ORDER
    ask_begin_line: int = NULL_ORDER
    total_lines_count: int = 0

    @classmethod
    def from_header(
        cls, header: InstrumentHeader, lines: Sequence[PriceLevel]
    ) -> OrderBook:
        """Build the view from an instrument header and decoded lines."""
        book = cls(
            lines=tuple(lines),
            bid_begin_line=header.bid_lines_begin,
            ask_begin_line=header.ask_lines_begin,
            total_lines_count=max(header.bid_lines_count, header.ask_lines_count),
        )
        logger.debug(
            "order_book_built",
            lines=len(book.lines),
            bid_begin=book.bid_begin_line,
            ask_begin=book.ask_begin_line,
            max_steps=book.total_lines_count,
        )
        return book

    def _begin_index(self, side: OrderSide) -> int:
        if side == OrderSide.BID:
            return self.bid_begin_line
        return self.ask_begin_line

    def head_line(self, side: OrderSide) -> PriceLevel | None:
        """Best line of a side, or None if the side is empty."""
        idx = self._begin_index(side)
        if not 0 <= idx < len(self.lines):
            return None
        line = self.lines[idx]
        if line.is_empty:
            return None
        return line

    def crosses(self, price: int, side: OrderSide) -> bool:
        """True if an order at price would trade against the head of side.

        Bid: price at or below the best bid. Ask: price at or above the best ask.
        """
        head = self.head_line(side)
        if head is None:
            return False
        if side == OrderSide.BID:
            return price <= head.price
        return price >= head.price

    def iter_side(self, side: OrderSide) -> Iterator[tuple[int, PriceLevel]]:
        """Lines of side from best to worst, as linked."""
        return self.iter_from(self._begin_index(side))

    def iter_from(self, start_idx: int) -> Iterator[tuple[int, PriceLevel]]:
        """Follow next links from start_idx for at most total_lines_count steps.

        Yields:
            (index, line) pairs
        """
        remaining = self.total_lines_count
        idx = start_idx
        while remaining > 0 and idx != NULL_ORDER:
            if not 0 <= idx < len(self.lines):
                logger.warning("line_index_out_of_range", index=idx, lines=len(self.lines))
                return
            line = self.lines[idx]
            remaining -= 1
            yield idx, line
            if line.next == idx:
                return
            idx = line.next
