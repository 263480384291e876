# type: ignore
# pyright: reportGeneralTypeIssues=false
# pyright: reportOptionalMemberAccess=false
"""
Kitchensink Member Service
==========================
Member registration over a relational store: validation, atomic id
sequences and email uniqueness, exposed as a JSON REST API.

Every stored member has a unique id issued by the ``memberId`` sequence
(first id 0) and a unique email enforced by the ``ux_members_email`` index.

Port: 8080
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from kitchensink.controllers import member_controller, system_controller
from kitchensink.core import dependencies
from kitchensink.core.config import settings
from kitchensink.core.logging import get_logger
from kitchensink.middleware import MetricsMiddleware, RequestIDMiddleware
from kitchensink.schemas import ErrorResponse

logger = get_logger(settings.SERVICE_NAME)


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    if dependencies.get_data_seeder().run():
        logger.info("Member store ready")
    else:
        logger.warning("Starting without a seeded store — DB may not be ready yet")
    yield
    dependencies.shutdown()
    logger.info("Shutting down — event workers drained, connection pool disposed")


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Kitchensink Member Service",
    description="Registers members with validated fields, sequential ids and unique emails.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
    responses={500: {"model": ErrorResponse, "description": "Internal server error"}},
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)


# ── Global exception handler ─────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    req_id = getattr(request.state, "request_id", None)
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path,
                     extra={"request_id": req_id})
    return JSONResponse(
        status_code=500,
        content={"error": "internal_server_error",
                 "detail": "An unexpected error occurred",
                 "request_id": req_id},
    )


app.include_router(system_controller.router)
app.include_router(member_controller.router)


# ── Entrypoint ────────────────────────────────────────────────────────────
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_level="info")
