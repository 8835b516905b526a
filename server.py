# FastAPI Server for the Campaign Marketplace
# Advertisers post experience campaigns, influencers apply, advertisers select

import time
import uuid

from fastapi import FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.app_config import CORS_ORIGINS
from config.logging_config import get_logger
from database.config import engine, init_db
from routers import applications_router, auth_router, campaigns_router
from services.errors import ServiceError

logger = get_logger("cheheomdan", component="api")

app = FastAPI(
    title="Cheheomdan API",
    description="Experience campaign marketplace for advertisers and influencers",
    version="1.0.0"
)


@app.on_event("startup")
def startup_event():
    init_db()
    logger.info("API started", extra={"db_url": engine.url.render_as_string(hide_password=True)})


# CORS Setup
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials="*" not in CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["x-request-id"],
)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    start = time.time()

    try:
        response: Response = await call_next(request)
    except Exception:
        logger.exception(
            "Unhandled exception",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
            },
        )
        raise

    duration_ms = int((time.time() - start) * 1000)

    logger.info(
        "request",
        extra={
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )

    response.headers["x-request-id"] = request_id
    return response


# ============================================================================
# ERROR ENVELOPE
# ============================================================================

@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = jsonable_encoder(exc.errors(), custom_encoder={Exception: str})
    error = ServiceError.validation_error(details)
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled error",
        exc_info=exc,
        extra={"method": request.method, "path": request.url.path},
    )
    error = ServiceError.internal_error()
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


# ============================================================================
# ROUTERS
# ============================================================================
app.include_router(auth_router, prefix="/api")
app.include_router(campaigns_router, prefix="/api")
app.include_router(applications_router, prefix="/api")


@app.get("/")
def root():
    return {
        "message": "Cheheomdan API",
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/health")
def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
