#!/usr/bin/env python3
"""Quote a swap against a venue snapshot saved as JSON.

The snapshot file uses the same shape as the POST /quote body without the
swap fields:

    {
      "accounts": {"instrHeader": "0x..", "aTokenState": "0x..", ...},
      "snapshot": {"0x..": "<base64 account data>", ...}
    }

Usage:
    python scripts/quote_snapshot.py snapshot.json \
        --input-mint 0x.. --output-mint 0x.. --amount 1400000000
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import structlog

sys.path.insert(0, str(Path(__file__).parent.parent))

from quoter.api.schemas import QuoteRequest, QuoteResponse
from quoter.config import QuoterConfig
from quoter.errors import QuoteError
from quoter.models.types import SwapMode
from quoter.venue import HybridVenue


def load_request(path: Path, input_mint: str, output_mint: str, amount: str) -> QuoteRequest:
    """Merge a snapshot file with the swap given on the command line."""
    with open(path) as f:
        data = json.load(f)
    data.update(
        {
            "inputMint": input_mint,
            "outputMint": output_mint,
            "amount": amount,
            "swapMode": SwapMode.EXACT_IN.value,
        }
    )
    return QuoteRequest.model_validate(data)


def main() -> int:
    parser = argparse.ArgumentParser(description="Quote a swap against a saved venue snapshot")
    parser.add_argument("snapshot", type=Path, help="Snapshot JSON file")
    parser.add_argument("--input-mint", required=True, help="Token paid in")
    parser.add_argument("--output-mint", required=True, help="Token received")
    parser.add_argument("--amount", required=True, help="Input amount in minor units")
    parser.add_argument(
        "--check-active",
        action="store_true",
        help="Fail if the venue is not active (trading disabled or empty book)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    # Logs go to stderr; stdout carries only the quote JSON
    log_level = logging.DEBUG if args.verbose else logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )

    request = load_request(args.snapshot, args.input_mint, args.output_mint, args.amount)
    venue = HybridVenue(request.accounts.to_accounts(), config=QuoterConfig.from_env())

    try:
        venue.update(request.snapshot)
        if args.check_active and not venue.is_active():
            print(json.dumps({"error": "inactive", "venue": venue.key}), file=sys.stderr)
            return 1
        quote = venue.quote(request.to_params())
    except QuoteError as err:
        print(json.dumps({"error": err.code, "message": str(err)}), file=sys.stderr)
        return 1

    response = QuoteResponse.from_quote(quote)
    print(json.dumps(response.model_dump(by_alias=True), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
