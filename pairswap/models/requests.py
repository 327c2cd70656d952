"""Pydantic models for pool engine requests and responses.

Field names are camelCase on the wire; amounts are serialized as decimal
strings so values beyond 2**53 survive JSON clients.
"""

from pydantic import BaseModel, Field

from pairswap.models.types import Account, Amount, AssetId


class AddLiquidityRequest(BaseModel):
    """Deposit both assets of a pair."""

    caller: Account = Field(description="Account the assets are pulled from.")
    asset_a: AssetId = Field(alias="assetA")
    asset_b: AssetId = Field(alias="assetB")
    desired_a: Amount = Field(alias="desiredA")
    desired_b: Amount = Field(alias="desiredB")
    min_a: Amount = Field(default=0, alias="minA")
    min_b: Amount = Field(default=0, alias="minB")
    recipient: Account = Field(description="Account credited with minted shares.")
    deadline: int | None = Field(default=None, description="Unix timestamp.")

    model_config = {"populate_by_name": True}


class AddLiquidityResponse(BaseModel):
    used_a: Amount = Field(alias="usedA")
    used_b: Amount = Field(alias="usedB")
    shares: Amount

    model_config = {"populate_by_name": True}


class RemoveLiquidityRequest(BaseModel):
    """Burn shares for a proportional slice of the reserves."""

    caller: Account = Field(description="Account whose shares are burned.")
    asset_a: AssetId = Field(alias="assetA")
    asset_b: AssetId = Field(alias="assetB")
    shares: Amount
    min_a: Amount = Field(default=0, alias="minA")
    min_b: Amount = Field(default=0, alias="minB")
    recipient: Account
    deadline: int | None = None

    model_config = {"populate_by_name": True}


class RemoveLiquidityResponse(BaseModel):
    amount_a: Amount = Field(alias="amountA")
    amount_b: Amount = Field(alias="amountB")

    model_config = {"populate_by_name": True}


class SwapRequest(BaseModel):
    """Exact-input swap.

    Supplying amountOut instead of amountIn asks for an exact-output swap
    bounded by maxAmountIn.
    """

    caller: Account
    asset_in: AssetId = Field(alias="assetIn")
    asset_out: AssetId = Field(alias="assetOut")
    amount_in: Amount | None = Field(default=None, alias="amountIn")
    min_amount_out: Amount = Field(default=0, alias="minAmountOut")
    amount_out: Amount | None = Field(default=None, alias="amountOut")
    max_amount_in: Amount | None = Field(default=None, alias="maxAmountIn")
    recipient: Account
    deadline: int | None = None

    model_config = {"populate_by_name": True}

    @property
    def is_exact_output(self) -> bool:
        return self.amount_in is None and self.amount_out is not None


class SwapResponse(BaseModel):
    asset_in: AssetId = Field(alias="assetIn")
    asset_out: AssetId = Field(alias="assetOut")
    amount_in: Amount = Field(alias="amountIn")
    amount_out: Amount = Field(alias="amountOut")

    model_config = {"populate_by_name": True}


class PoolResponse(BaseModel):
    """Reserves in the order the assets appear in the request path."""

    asset_a: AssetId = Field(alias="assetA")
    asset_b: AssetId = Field(alias="assetB")
    reserve_a: Amount = Field(alias="reserveA")
    reserve_b: Amount = Field(alias="reserveB")
    total_shares: Amount = Field(alias="totalShares")

    model_config = {"populate_by_name": True}


class PriceResponse(BaseModel):
    base: AssetId
    quote: AssetId
    price: Amount = Field(description="Quote units per base unit, fixed-point.")
    scale: Amount


class QuoteResponse(BaseModel):
    amount_out: Amount = Field(alias="amountOut")

    model_config = {"populate_by_name": True}


class ShareBalanceResponse(BaseModel):
    account: Account
    balance: Amount
    total_supply: Amount = Field(alias="totalSupply")

    model_config = {"populate_by_name": True}


class TransferRequest(BaseModel):
    sender: Account
    to: Account
    amount: Amount


class ApproveRequest(BaseModel):
    owner: Account
    spender: Account
    amount: Amount


class TransferFromRequest(BaseModel):
    spender: Account
    owner: Account
    to: Account
    amount: Amount


class CreditRequest(BaseModel):
    """Fund an account in the in-memory asset ledger."""

    asset: AssetId
    account: Account
    amount: Amount


class LedgerBalanceResponse(BaseModel):
    asset: AssetId
    account: Account
    balance: Amount


class ErrorResponse(BaseModel):
    error: str = Field(description="Error category, e.g. SlippageExceeded.")
    detail: str
