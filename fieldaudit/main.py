from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fieldaudit.api.middleware import RequestTimingMiddleware
from fieldaudit.api.v1.router import v1_router
from fieldaudit.common.logging import get_logger, setup_logging
from fieldaudit.config import settings

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("Starting FieldAudit API (%s)", settings.APP_ENV)
    yield


app = FastAPI(
    title="FieldAudit API",
    description="Site audit derivation, review and quoting service",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS
origins = settings.ALLOWED_ORIGINS.split(",") if settings.ALLOWED_ORIGINS != "*" else ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestTimingMiddleware)

# API routes
app.include_router(v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": "fieldaudit",
        "version": "1.0.0",
        "env": settings.APP_ENV,
    }
