"""AMM curve model."""

from quoter.amm.curve import ConstantProductCurve

__all__ = ["ConstantProductCurve"]
