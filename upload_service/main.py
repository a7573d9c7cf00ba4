"""
FastAPI application for the upload service.

Mounts the v1 API and renders every error with the ErrorResponse envelope.
"""
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from upload_service.api.v1.router import router as v1_router
from upload_service.logging_config import setup_logging
from upload_service.schemas.common import ErrorResponse

app = FastAPI(title="Upload Service")

app.include_router(v1_router, prefix="/api/v1")

logger = setup_logging()


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Return dict details as-is and wrap plain string details in ErrorResponse."""
    if isinstance(exc.detail, dict):
        return JSONResponse(status_code=exc.status_code, content=exc.detail)

    body = ErrorResponse(error="Error", message=str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: "
        f"{exc.__class__.__name__}: {str(exc)}",
        exc_info=True,
    )

    # Static message; internal details stay in the logs
    body = ErrorResponse(
        error="Internal Server Error",
        message="An unexpected error occurred",
    )
    return JSONResponse(status_code=500, content=body.model_dump())
