"""API endpoints for the quote service."""

import asyncio

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from quoter.api.schemas import ErrorResponse, QuoteRequest, QuoteResponse
from quoter.config import QuoterConfig
from quoter.errors import ArithmeticOverflow, QuoteError
from quoter.models.quote import Quote
from quoter.venue import HybridVenue

logger = structlog.get_logger()

router = APIRouter()


def get_config() -> QuoterConfig:
    """Dependency provider for the quoter configuration.

    Override this in tests to inject a custom config:
        app.dependency_overrides[get_config] = lambda: config
    """
    return QuoterConfig.from_env()


def _run_quote(request: QuoteRequest, config: QuoterConfig) -> Quote:
    venue = HybridVenue(request.accounts.to_accounts(), config=config)
    venue.update(request.snapshot)
    return venue.quote(request.to_params())


def _error_status(err: QuoteError) -> int:
    if isinstance(err, ArithmeticOverflow):
        return 422
    return 400


@router.post(
    "/quote",
    response_model=QuoteResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def quote(
    request: QuoteRequest,
    config: QuoterConfig = Depends(get_config),
) -> QuoteResponse | JSONResponse:
    """Quote an exact-input swap against the posted snapshot.

    A fresh venue is built per request; nothing is cached between calls.

    Error Handling:
        - Invalid request schema: 422 Validation Error (Pydantic)
        - ArithmeticOverflow: 422 with an ErrorResponse body
        - Any other quote failure: 400 with an ErrorResponse body
    """
    logger.info(
        "received_quote_request",
        venue=request.accounts.instr_header,
        input_mint=request.input_mint,
        output_mint=request.output_mint,
        amount=request.amount,
        swap_mode=request.swap_mode.value,
        accounts=len(request.snapshot),
    )

    loop = asyncio.get_running_loop()
    try:
        result = await loop.run_in_executor(None, _run_quote, request, config)
    except QuoteError as err:
        status = _error_status(err)
        logger.warning(
            "quote_rejected",
            venue=request.accounts.instr_header,
            error=err.code,
            status=status,
            message=str(err),
        )
        body = ErrorResponse(error=err.code, message=str(err))
        return JSONResponse(status_code=status, content=body.model_dump())

    logger.info(
        "returning_quote",
        venue=request.accounts.instr_header,
        in_amount=result.in_amount,
        out_amount=result.out_amount,
        fee=result.fee_amount,
    )
    return QuoteResponse.from_quote(result)
