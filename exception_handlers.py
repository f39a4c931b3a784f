import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from services.errors import PostServiceError, StoreError

logger = logging.getLogger(__name__)


async def post_service_error_handler(request: Request, exc: PostServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %r", request.method, request.url.path, exc.__cause__ or exc)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.msg)
    return JSONResponse(status_code=exc.status_code, content=exc.body())


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report body validation failures as 400 with one entry per field"""
    errors = []
    for error in exc.errors():
        loc = error.get("loc") or ("body",)
        message = error.get("msg", "Invalid value")
        param = str(loc[-1])
        if error.get("type") == "missing":
            message = f"{param} is required"
        # Drop pydantic's "Value error, " prefix from custom validator messages
        elif error.get("type") == "value_error" and "ctx" in error:
            message = str(error["ctx"].get("error", message))
        errors.append({"msg": message, "param": param, "location": str(loc[0])})
    return JSONResponse(status_code=400, content={"msg": errors})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error in %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=StoreError().body())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PostServiceError, post_service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
