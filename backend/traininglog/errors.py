import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

log = logging.getLogger("uvicorn")

GENERIC_ERROR = "Something went wrong"
ROOT_KEY = "_root"

def field_errors(errors) -> dict[str, list[str]]:
    """Collapse pydantic errors into {field: [messages]} keyed by the top-level field."""
    out: dict[str, list[str]] = {}
    for err in errors:
        loc = err.get("loc", ())
        # loc[0] is where the value came from: body, query, path...
        key = str(loc[1]) if len(loc) > 1 and err.get("type") != "json_invalid" else ROOT_KEY
        msg = err.get("msg", "Invalid value").removeprefix("Value error, ")
        out.setdefault(key, []).append(msg)
    return out

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": field_errors(exc.errors())})

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )

async def unhandled_exception_handler(request: Request, exc: Exception):
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": GENERIC_ERROR})

def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
