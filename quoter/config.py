"""Deployment configuration for the quoter."""

from __future__ import annotations

import os
from dataclasses import dataclass

from quoter.constants import FEE_RATE_STEP, LINES_HEADER_SIZE, MAX_PRICE_SHIFT


@dataclass(frozen=True)
class QuoterConfig:
    """Centralized configuration for one venue deployment.

    Program-wide identifiers are passed in rather than compiled in, so the
    same code can quote against several deployments.

    Attributes:
        label: Human-readable venue name reported to routers
        program_id: Address of the venue program (used for labelling only)
        schema_version: Account schema version the snapshot is expected to use
        fee_rate_step: Value of one community fee-rate step (default: 1e-4)
        max_price_shift: Execution bound is market price +/- price >> shift
            (default: 3, i.e. one eighth)
        lines_header_size: Bytes preceding the price-level records in the
            lines account (default: 64)
    """

    label: str = "hybrid-venue"
    program_id: str = ""
    schema_version: int = 1
    fee_rate_step: float = FEE_RATE_STEP
    max_price_shift: int = MAX_PRICE_SHIFT
    lines_header_size: int = LINES_HEADER_SIZE

    def __post_init__(self) -> None:
        if self.fee_rate_step < 0:
            raise ValueError(f"fee_rate_step must be non-negative, got {self.fee_rate_step}")
        if not 0 <= self.max_price_shift < 63:
            raise ValueError(f"max_price_shift must be in [0, 63), got {self.max_price_shift}")
        if self.lines_header_size < 0:
            raise ValueError(
                f"lines_header_size must be non-negative, got {self.lines_header_size}"
            )

    @classmethod
    def from_env(cls) -> QuoterConfig:
        """Build a config from QUOTER_* environment variables, defaulting the rest."""
        return cls(
            label=os.environ.get("QUOTER_LABEL", "hybrid-venue"),
            program_id=os.environ.get("QUOTER_PROGRAM_ID", ""),
            schema_version=int(os.environ.get("QUOTER_SCHEMA_VERSION", "1")),
            fee_rate_step=float(os.environ.get("QUOTER_FEE_RATE_STEP", str(FEE_RATE_STEP))),
        )


# Default configuration instance
DEFAULT_CONFIG = QuoterConfig()
