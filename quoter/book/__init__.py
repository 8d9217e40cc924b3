"""Order book view over the price-level arena."""

from quoter.book.order_book import OrderBook

__all__ = ["OrderBook"]
