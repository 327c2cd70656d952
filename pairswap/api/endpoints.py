"""API endpoints for the pool engine."""

import structlog
from fastapi import APIRouter, Depends, Query, Request

from pairswap.assets import InMemoryAssetLedger
from pairswap.engine import Engine
from pairswap.errors import InvalidInput
from pairswap.models import (
    AddLiquidityRequest,
    AddLiquidityResponse,
    ApproveRequest,
    CreditRequest,
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

logger = structlog.get_logger()

router = APIRouter()


def get_engine(request: Request) -> Engine:
    """Dependency provider for the engine owned by the application.

    Override this in tests to inject a prepared engine:
        app.dependency_overrides[get_engine] = lambda: engine
    """
    return request.app.state.engine


@router.get("/pools/{asset_a}/{asset_b}")
def get_pool(asset_a: str, asset_b: str, engine: Engine = Depends(get_engine)) -> PoolResponse:
    reserve_a, reserve_b = engine.reserves(asset_a, asset_b)
    return PoolResponse(
        asset_a=asset_a,
        asset_b=asset_b,
        reserve_a=reserve_a,
        reserve_b=reserve_b,
        total_shares=engine.total_shares(asset_a, asset_b),
    )


@router.get("/pools/{asset_base}/{asset_quote}/price")
def get_price(
    asset_base: str, asset_quote: str, engine: Engine = Depends(get_engine)
) -> PriceResponse:
    price = engine.spot_price(asset_base, asset_quote)
    return PriceResponse(
        base=asset_base, quote=asset_quote, price=price, scale=engine.config.price_scale
    )


@router.get("/quote")
def get_quote(
    amount_in: int = Query(alias="amountIn", ge=0),
    reserve_in: int = Query(alias="reserveIn", ge=0),
    reserve_out: int = Query(alias="reserveOut", ge=0),
    engine: Engine = Depends(get_engine),
) -> QuoteResponse:
    return QuoteResponse(amount_out=engine.quote_out(amount_in, reserve_in, reserve_out))


@router.post("/liquidity/add")
def add_liquidity(
    body: AddLiquidityRequest, engine: Engine = Depends(get_engine)
) -> AddLiquidityResponse:
    result = engine.add_liquidity(
        body.caller,
        body.asset_a,
        body.asset_b,
        body.desired_a,
        body.desired_b,
        body.min_a,
        body.min_b,
        body.recipient,
        deadline=body.deadline,
    )
    return AddLiquidityResponse(used_a=result.used_a, used_b=result.used_b, shares=result.shares)


@router.post("/liquidity/remove")
def remove_liquidity(
    body: RemoveLiquidityRequest, engine: Engine = Depends(get_engine)
) -> RemoveLiquidityResponse:
    result = engine.remove_liquidity(
        body.caller,
        body.asset_a,
        body.asset_b,
        body.shares,
        body.min_a,
        body.min_b,
        body.recipient,
        deadline=body.deadline,
    )
    return RemoveLiquidityResponse(amount_a=result.amount_a, amount_b=result.amount_b)


@router.post("/swap")
def swap(body: SwapRequest, engine: Engine = Depends(get_engine)) -> SwapResponse:
    if body.is_exact_output:
        if body.max_amount_in is None:
            raise InvalidInput("maxAmountIn is required with amountOut")
        result = engine.swap_for_exact(
            body.caller,
            body.asset_in,
            body.asset_out,
            body.amount_out,
            body.max_amount_in,
            body.recipient,
            deadline=body.deadline,
        )
    elif body.amount_in is not None:
        result = engine.swap_exact(
            body.caller,
            body.asset_in,
            body.asset_out,
            body.amount_in,
            body.min_amount_out,
            body.recipient,
            deadline=body.deadline,
        )
    else:
        raise InvalidInput("One of amountIn or amountOut is required")
    return SwapResponse(
        asset_in=result.asset_in,
        asset_out=result.asset_out,
        amount_in=result.amount_in,
        amount_out=result.amount_out,
    )


@router.get("/shares/{asset_a}/{asset_b}/{account}")
def get_share_balance(
    asset_a: str, asset_b: str, account: str, engine: Engine = Depends(get_engine)
) -> ShareBalanceResponse:
    balance, total_supply = engine.share_balance(asset_a, asset_b, account)
    return ShareBalanceResponse(account=account, balance=balance, total_supply=total_supply)


@router.post("/shares/{asset_a}/{asset_b}/transfer")
def transfer_shares(
    asset_a: str, asset_b: str, body: TransferRequest, engine: Engine = Depends(get_engine)
) -> ShareBalanceResponse:
    token = engine.share_token(asset_a, asset_b)
    token.transfer(body.sender, body.to, body.amount)
    return ShareBalanceResponse(
        account=body.sender,
        balance=token.balance_of(body.sender),
        total_supply=token.total_supply,
    )


@router.post("/shares/{asset_a}/{asset_b}/approve")
def approve_shares(
    asset_a: str, asset_b: str, body: ApproveRequest, engine: Engine = Depends(get_engine)
) -> dict[str, str]:
    token = engine.share_token(asset_a, asset_b)
    token.approve(body.owner, body.spender, body.amount)
    return {"allowance": str(token.allowance(body.owner, body.spender))}


@router.post("/shares/{asset_a}/{asset_b}/transfer-from")
def transfer_shares_from(
    asset_a: str, asset_b: str, body: TransferFromRequest, engine: Engine = Depends(get_engine)
) -> ShareBalanceResponse:
    token = engine.share_token(asset_a, asset_b)
    token.transfer_from(body.spender, body.owner, body.to, body.amount)
    return ShareBalanceResponse(
        account=body.owner,
        balance=token.balance_of(body.owner),
        total_supply=token.total_supply,
    )


def in_memory_ledger(engine: Engine) -> InMemoryAssetLedger:
    if not isinstance(engine.ledger, InMemoryAssetLedger):
        raise InvalidInput("Balances are managed by the configured asset ledger")
    return engine.ledger


@router.post("/ledger/credit")
def credit_ledger(
    body: CreditRequest, engine: Engine = Depends(get_engine)
) -> LedgerBalanceResponse:
    """Fund an account when the engine runs on the in-memory ledger."""
    ledger = in_memory_ledger(engine)
    ledger.credit(body.asset, body.account, body.amount)
    logger.info("ledger_credited", asset=body.asset, account=body.account, amount=body.amount)
    return LedgerBalanceResponse(
        asset=body.asset, account=body.account, balance=ledger.balance_of(body.asset, body.account)
    )


@router.get("/ledger/{asset}/{account}")
def get_ledger_balance(
    asset: str, account: str, engine: Engine = Depends(get_engine)
) -> LedgerBalanceResponse:
    ledger = in_memory_ledger(engine)
    return LedgerBalanceResponse(
        asset=asset, account=account, balance=ledger.balance_of(asset, account)
    )
