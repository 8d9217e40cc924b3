"""Hybrid venue quoter: exact-input quotes over an AMM merged with an order book."""

__version__ = "0.1.0"

from quoter.venue import HybridVenue  # noqa: E402

__all__ = ["HybridVenue", "__version__"]
