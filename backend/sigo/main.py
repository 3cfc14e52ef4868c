import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sigo.core.config import settings
from sigo.core.database import create_tables
from sigo.core.exceptions import InvalidCodeError, InvalidIntervalError, LeaveConflictError, SigoError
from sigo.core.logging_config import setup_logging
from sigo.api.v1.personnel import router as personnel_router
from sigo.api.v1.leaves import router as leaves_router
from sigo.api.v1.restrictions import router as restrictions_router
from sigo.api.v1.dashboard import router as dashboard_router
from sigo.api.v1.audit import router as audit_router
from sigo.api.v1.constants import router as constants_router

setup_logging()
logger = logging.getLogger("sigo")

VERSION = "2.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create tables on startup (SQLite / local development)
    await create_tables()
    logger.info("SIGO API %s started (%s)", VERSION, settings.APP_ENV)
    yield


app = FastAPI(
    title="SIGO API",
    description="Sistema Integrado de Gestão Operacional – pessoal, afastamentos e restrições",
    version=VERSION,
    lifespan=lifespan,
    # Swagger UI only in development – set DEBUG=false in production
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    logger.info("%s %s - %s (%.0fms)", request.method, request.url.path, response.status_code, duration_ms)
    return response


# ── Domain errors ─────────────────────────────────────────────────────────────

@app.exception_handler(InvalidCodeError)
async def invalid_code_handler(request: Request, exc: InvalidCodeError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc), "invalid_codes": exc.invalid_codes},
    )


@app.exception_handler(InvalidIntervalError)
async def invalid_interval_handler(request: Request, exc: InvalidIntervalError):
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc)},
    )


@app.exception_handler(LeaveConflictError)
async def leave_conflict_handler(request: Request, exc: LeaveConflictError):
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": str(exc), "conflict": jsonable_encoder(exc.conflict)},
    )


@app.exception_handler(SigoError)
async def domain_error_handler(request: Request, exc: SigoError):
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc)},
    )


API_PREFIX = "/api/v1"

app.include_router(personnel_router, prefix=API_PREFIX)
app.include_router(leaves_router, prefix=API_PREFIX)
app.include_router(restrictions_router, prefix=API_PREFIX)
app.include_router(dashboard_router, prefix=API_PREFIX)
app.include_router(audit_router, prefix=API_PREFIX)
app.include_router(constants_router, prefix=API_PREFIX)


@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "SIGO API", "version": VERSION}
