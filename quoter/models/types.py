"""Shared type definitions for venue models."""

from enum import Enum
from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from quoter.safe_int import I64_MAX

# Account key: 32 bytes rendered as 0x + 64 hex chars
KEY_LENGTH = 32


class OrderSide(str, Enum):
    """Side of the book a price level rests on."""

    BID = "bid"
    ASK = "ask"


class SwapMode(str, Enum):
    """Which amount of the swap the caller fixes."""

    EXACT_IN = "exactIn"
    EXACT_OUT = "exactOut"


def validate_amount(value: Any) -> int:
    """Validate that a value is a quotable u64 amount.

    Amounts are accepted as ints or decimal strings. The engine works in
    signed 64-bit, so the upper bound is the i64 maximum.

    Raises:
        ValueError: If value is not a non-negative integer within range
    """
    if isinstance(value, bool):
        raise ValueError("Amount must be an integer, got bool")
    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError as err:
            raise ValueError(f"Amount must be a decimal integer string: '{value}'") from err
    if not isinstance(value, int):
        raise ValueError(f"Amount must be string or int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Amount cannot be negative: {value}")
    if value > I64_MAX:
        raise ValueError(f"Amount overflow: {value} > 2^63-1")
    return value


# Swap amount in minor units (validated)
Amount = Annotated[
    int,
    BeforeValidator(validate_amount),
    Field(description="Token amount in minor units"),
]

# Account key (32 bytes as hex)
AccountKey = Annotated[str, Field(pattern=r"^(0x)?[a-fA-F0-9]{64}$")]


def normalize_key(key: str, *, validate: bool = False) -> str:
    """Normalize an account key to lowercase 0x-prefixed hex.

    Args:
        key: Account key (with or without 0x prefix)
        validate: If True, raises ValueError for malformed keys

    Returns:
        Lowercase key with 0x prefix
    """
    normalized = key.lower()
    if not normalized.startswith("0x"):
        normalized = "0x" + normalized

    if validate and not is_valid_key(normalized):
        raise ValueError(f"Invalid account key: {key}")

    return normalized


def is_valid_key(key: str) -> bool:
    """Check if a string is a 0x-prefixed 32-byte hex key."""
    if not isinstance(key, str):
        return False
    if not key.startswith("0x"):
        return False
    if len(key) != 2 + 2 * KEY_LENGTH:
        return False
    try:
        int(key, 16)
        return True
    except ValueError:
        return False


def key_from_bytes(raw: bytes) -> str:
    """Render raw 32-byte key material as a normalized key."""
    return "0x" + raw.hex()


def key_to_bytes(key: str) -> bytes:
    """Inverse of key_from_bytes.

    Raises:
        ValueError: If the key is not a valid 32-byte hex key
    """
    return bytes.fromhex(normalize_key(key, validate=True)[2:])
