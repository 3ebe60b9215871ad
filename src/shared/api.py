"""HTTP error mapping shared by every router."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from shared.errors import FetchError, NotFoundError, SubmissionError


async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"error": exc.messages})


async def object_not_found_handler(request: Request, exc: ObjectNotFoundError):
    return JSONResponse(status_code=404, content={"error": str(exc)})


async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"error": exc.message, **exc.details})


async def upstream_error_handler(request: Request, exc: FetchError | SubmissionError):
    return JSONResponse(status_code=502, content={"error": exc.message, **exc.details})


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, object_not_found_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(FetchError, upstream_error_handler)
    app.add_exception_handler(SubmissionError, upstream_error_handler)
