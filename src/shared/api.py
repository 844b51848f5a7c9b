"""HTTP error mapping shared by every FastAPI app serving the domains."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from shared.exceptions import GenerationExhaustedError
from shared.logging import get_logger

logger = get_logger(__name__)


async def generation_exhausted_handler(request: Request, exc: GenerationExhaustedError):
    logger.error("identifier_generation_exhausted", path=request.url.path, messages=exc.messages)
    return JSONResponse(status_code=503, content={"error": exc.messages})


def register_error_handlers(app: FastAPI) -> None:
    """Protean's standard error mapping, plus 503 when identifier generation gives up."""
    register_exception_handlers(app)
    app.add_exception_handler(GenerationExhaustedError, generation_exhausted_handler)
