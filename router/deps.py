# router/deps.py

from fastapi import Header, HTTPException, Request
from fastapi.responses import JSONResponse

from crud.ledger_crud import LedgerNotDeployed
from utils.errors import LedgerError
from utils.identity import normalize_address


def get_caller(x_caller_address: str = Header(...)) -> str:
    """The wallet-supplied identity of whoever is calling; trusted as given."""
    try:
        return normalize_address(x_caller_address)
    except ValueError:
        raise HTTPException(
            status_code=401,
            detail={"error": "Unauthorized", "message": "X-Caller-Address is not a valid account address"},
        )


def parse_address(address: str) -> str:
    try:
        return normalize_address(address)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


def ledger_http_error(e: LedgerError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.to_detail())


async def ledger_not_deployed_handler(request: Request, exc: LedgerNotDeployed) -> JSONResponse:
    return JSONResponse(
        status_code=503,
        content={"detail": {"error": "LedgerNotDeployed", "message": str(exc)}},
    )
