"""Quote simulation over the curve and the order book."""

from quoter.engine.fills import FillLedger
from quoter.engine.quote_engine import QuoteEngine

__all__ = ["FillLedger", "QuoteEngine"]
