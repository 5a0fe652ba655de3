import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from .custom import StorageError

logger = logging.getLogger(__name__)


async def storage_error_handler(_request: Request, exc: StorageError) -> JSONResponse:
    logger.error("Storage error: %s (status=%s)", exc.message, exc.status_code)
    return JSONResponse(
        status_code=503,
        content={"detail": f"Storage error: {exc.message}"},
    )
