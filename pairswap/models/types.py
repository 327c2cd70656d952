"""Shared type definitions for assets, accounts and amounts.

These types are used by the pool engine and the HTTP request models.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field, PlainSerializer

from pairswap.errors import InvalidInput


def normalize_asset(asset: str) -> str:
    """Normalize an asset identifier for comparison and ordering.

    Surrounding whitespace is stripped and the identifier lower-cased, so
    "0xAbC" and " 0xabc" name the same asset.

    Raises:
        InvalidInput: If the identifier is not a string or is empty
    """
    if not isinstance(asset, str):
        raise InvalidInput(f"Asset identifier must be a string, got {type(asset).__name__}")
    normalized = asset.strip().lower()
    if not normalized:
        raise InvalidInput("Asset identifier cannot be empty")
    return normalized


def validate_amount(value: Any) -> int:
    """Validate a non-negative integer amount given as int or decimal string.

    Raises:
        ValueError: If value is not a non-negative integer
    """
    if isinstance(value, bool):
        raise ValueError("Amount must be an integer, got bool")
    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"Amount must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Amount must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Amount cannot be negative: {value}")
    return int_value


# Non-negative integer amount; accepts ints or decimal strings, serializes as string
Amount = Annotated[
    int,
    BeforeValidator(validate_amount),
    PlainSerializer(str, return_type=str),
    Field(description="Non-negative integer amount"),
]

# Asset identifier (any non-empty string, normalized on use)
AssetId = Annotated[str, Field(min_length=1)]

# Account identifier
Account = Annotated[str, Field(min_length=1)]
