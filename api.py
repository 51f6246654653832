"""
EventHub HTTP API.

Run:
    uvicorn api:app --reload
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException as StarletteHTTPException

from EventHub.config import settings
from EventHub.errors import EventHubError
from EventHub.logger import logger
from EventHub import routers  # noqa: F401  registers every route on api_router
from EventHub.routers.base import api_router

app = FastAPI(
    title="EventHub API",
    description="Event planning marketplace: vendors, events, bookings and AI recommendations",
    version="1.0.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


def envelope(status_code: int, message: str, data=None, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "data": jsonable_encoder(data)},
        headers=headers,
    )


@app.get("/")
def root():
    return {"success": True, "message": "EventHub API is running", "data": {"version": app.version}}


@app.get("/health")
def health():
    return {"success": True, "message": "ok", "data": None}


# ============================================================================
# Error Handlers
# ============================================================================

@app.exception_handler(EventHubError)
async def eventhub_error_handler(request: Request, exc: EventHubError):
    if exc.public:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return envelope(exc.status_code, exc.message)
    logger.error(f"{request.method} {request.url.path} -> {type(exc).__name__}: {exc.message}")
    return envelope(exc.status_code, "Server Error")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return envelope(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return envelope(422, "Validation failed", exc.errors())


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url}: {exc!r}")
    return envelope(500, "Server Error")


# ============================================================================
# Main
# ============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
