from fastapi import APIRouter

from fieldaudit.api.v1.audits import router as audits_router
from fieldaudit.api.v1.projects import router as projects_router
from fieldaudit.api.v1.quotes import router as quotes_router

v1_router = APIRouter()

v1_router.include_router(audits_router)
v1_router.include_router(quotes_router)
v1_router.include_router(projects_router)
