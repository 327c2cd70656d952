"""FastAPI application hosting one pool engine.

Caller identity is taken from the request body; authenticating it belongs
to the infrastructure in front of this service.
"""

import os

import structlog
import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from pairswap.api.endpoints import get_engine, router
from pairswap.engine import Engine, get_default_engine
from pairswap.errors import (
    AMMError,
    Expired,
    InsufficientAllowance,
    InsufficientShares,
    SlippageExceeded,
    TransferFailed,
)
from pairswap.log_config import configure_logging

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("PAIRSWAP_HOST", "0.0.0.0")
PORT = int(os.environ.get("PAIRSWAP_PORT", "8000"))
DEBUG = os.environ.get("PAIRSWAP_DEBUG", "false").lower() in ("true", "1", "yes")
LOG_LEVEL = os.environ.get("PAIRSWAP_LOG_LEVEL", "INFO")

# HTTP status per error category; anything else is a 400
ERROR_STATUS: dict[type[AMMError], int] = {
    Expired: 408,
    SlippageExceeded: 409,
    InsufficientShares: 409,
    InsufficientAllowance: 409,
    TransferFailed: 402,
}

logger = structlog.get_logger()

app = FastAPI(
    title="pairswap",
    description="Constant product pool engine",
    version="0.1.0",
)
app.state.engine = get_default_engine()


def status_for(err: AMMError) -> int:
    for error_type, status in ERROR_STATUS.items():
        if isinstance(err, error_type):
            return status
    return 400


@app.exception_handler(AMMError)
async def amm_error_handler(request: Request, err: AMMError) -> JSONResponse:
    """Report a domain error as a JSON body with its category."""
    status = status_for(err)
    logger.info("request_rejected", path=request.url.path, error=err.code, status=status)
    return JSONResponse(status_code=status, content={"error": err.code, "detail": str(err)})


app.include_router(router)


@app.get("/health")
def health(engine: Engine = Depends(get_engine)) -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "pairs": len(engine.pairs())}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - PAIRSWAP_HOST: Host to bind to (default: 0.0.0.0)
    - PAIRSWAP_PORT: Port to bind to (default: 8000)
    - PAIRSWAP_DEBUG: Enable reload mode (default: false)
    - PAIRSWAP_LOG_LEVEL: Log level (default: INFO)
    - PAIRSWAP_FEE_NUMERATOR / PAIRSWAP_FEE_DENOMINATOR: Fee tier (default: 997/1000)
    - PAIRSWAP_LEDGER_FACTORY: "module:callable" building the asset ledger
      (default: an empty in-memory ledger funded through /ledger/credit)
    """
    configure_logging(LOG_LEVEL)
    uvicorn.run(
        "pairswap.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
