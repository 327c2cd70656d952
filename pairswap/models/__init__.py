"""Pydantic models for the HTTP surface."""

from pairswap.models.requests import (
    AddLiquidityRequest,
    AddLiquidityResponse,
    ApproveRequest,
    CreditRequest,
    ErrorResponse,
    LedgerBalanceResponse,
    PoolResponse,
    PriceResponse,
    QuoteResponse,
    RemoveLiquidityRequest,
    RemoveLiquidityResponse,
    ShareBalanceResponse,
    SwapRequest,
    SwapResponse,
    TransferFromRequest,
    TransferRequest,
)
from pairswap.models.types import Account, Amount, AssetId, normalize_asset

__all__ = [
    "Account",
    "Amount",
    "AssetId",
    "normalize_asset",
    "AddLiquidityRequest",
    "AddLiquidityResponse",
    "ApproveRequest",
    "CreditRequest",
    "ErrorResponse",
    "LedgerBalanceResponse",
    "PoolResponse",
    "PriceResponse",
    "QuoteResponse",
    "RemoveLiquidityRequest",
    "RemoveLiquidityResponse",
    "ShareBalanceResponse",
    "SwapRequest",
    "SwapResponse",
    "TransferFromRequest",
    "TransferRequest",
]
