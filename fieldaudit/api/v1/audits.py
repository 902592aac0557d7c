import uuid
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fieldaudit.api.deps import get_db, get_site_audit
from fieldaudit.api.v1.projects import ProjectResponse
from fieldaudit.api.v1.quotes import QuoteResponse
from fieldaudit.common.enums import AuditStatus
from fieldaudit.common.logging import get_logger
from fieldaudit.common.pagination import PaginatedResponse, PaginationParams, paginate
from fieldaudit.config import settings
from fieldaudit.core.audit_engine.review import build_review, select_review_branch
from fieldaudit.core.audit_engine.schemas import AdaptedView, ReviewSummary
from fieldaudit.core.audit_engine.service import adapt_audit, coerce_record, record_columns
from fieldaudit.core.sales.service import SalesService
from fieldaudit.db.models.site_audit import SiteAudit

router = APIRouter(prefix="/audits", tags=["Audits"])
logger = get_logger("api.audits")

_sales = SalesService()


# ---------- Schemas ----------


class AuditCreateRequest(BaseModel):
    record: dict[str, Any] = Field(default_factory=dict)
    status: AuditStatus = AuditStatus.DRAFT


class AuditUpdateRequest(BaseModel):
    record: dict[str, Any] | None = None
    status: AuditStatus | None = None


class AuditPreviewRequest(BaseModel):
    record: dict[str, Any] = Field(default_factory=dict)


class AuditResponse(BaseModel):
    id: uuid.UUID
    record: dict[str, Any]
    client_name: str
    status: str
    service_types: list[str]
    engineer: str | None
    moved_to_project: bool
    project_id: str | None
    created_at: str

    model_config = {"from_attributes": True}

    @classmethod
    def from_orm_instance(cls, audit: SiteAudit) -> "AuditResponse":
        return cls(
            id=audit.id,
            record=audit.record,
            client_name=audit.client_name,
            status=audit.status,
            service_types=audit.service_types or [],
            engineer=audit.engineer,
            moved_to_project=audit.moved_to_project,
            project_id=audit.project_id,
            created_at=audit.created_at.isoformat(),
        )


class AuditReviewResponse(BaseModel):
    primary_service: str | None
    branch: str
    view: AdaptedView
    review: ReviewSummary


# ---------- Helpers ----------


def _merge_layers(stored: dict[str, Any], patch: dict[str, Any]) -> dict[str, Any]:
    """Layer-wise shallow merge: patched layers update stored ones key by key."""
    merged = dict(stored)
    for key, value in patch.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = {**current, **value}
        else:
            merged[key] = value
    return merged


def _sync_columns(audit: SiteAudit) -> None:
    for column, value in record_columns(audit.record).items():
        setattr(audit, column, value)


def _review_payload(record: dict[str, Any], audit_id: str | None = None) -> AuditReviewResponse:
    parsed = coerce_record(record)
    view = adapt_audit(parsed)
    review = build_review(
        parsed, view, audit_id=audit_id, filename_prefix=settings.REPORT_FILENAME_PREFIX
    )
    return AuditReviewResponse(
        primary_service=parsed.primary_service,
        branch=select_review_branch(parsed.services).value,
        view=view,
        review=review,
    )


# ---------- Endpoints ----------


@router.post("", response_model=AuditResponse, status_code=201)
async def create_audit(
    body: AuditCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    audit = SiteAudit(record=body.record, status=body.status.value)
    _sync_columns(audit)
    db.add(audit)
    await db.flush()
    await db.refresh(audit)

    logger.info("Saved audit %s for %s", audit.id, audit.client_name)
    return AuditResponse.from_orm_instance(audit)


@router.get("", response_model=PaginatedResponse[AuditResponse])
async def list_audits(
    status: AuditStatus | None = None,
    params: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    query = select(SiteAudit).where(SiteAudit.is_deleted.is_(False))
    if status:
        query = query.where(SiteAudit.status == status.value)

    audits, total = await paginate(
        db, query, params, model=SiteAudit, search_column=SiteAudit.client_name
    )
    return PaginatedResponse.build(
        [AuditResponse.from_orm_instance(a) for a in audits], total, params
    )


@router.post("/preview", response_model=AuditReviewResponse)
async def preview_audit(body: AuditPreviewRequest):
    return _review_payload(body.record)


@router.get("/{audit_id}", response_model=AuditResponse)
async def get_audit(audit: SiteAudit = Depends(get_site_audit)):
    return AuditResponse.from_orm_instance(audit)


@router.patch("/{audit_id}", response_model=AuditResponse)
async def update_audit(
    body: AuditUpdateRequest,
    audit: SiteAudit = Depends(get_site_audit),
    db: AsyncSession = Depends(get_db),
):
    if body.record is not None:
        audit.record = _merge_layers(audit.record or {}, body.record)
        _sync_columns(audit)
    if body.status is not None:
        audit.status = body.status.value

    await db.flush()
    await db.refresh(audit)

    logger.info("Updated audit %s", audit.id)
    return AuditResponse.from_orm_instance(audit)


@router.delete("/{audit_id}", status_code=204)
async def delete_audit(
    audit: SiteAudit = Depends(get_site_audit),
    db: AsyncSession = Depends(get_db),
):
    audit.soft_delete()
    await db.flush()
    logger.info("Deleted audit %s", audit.id)


@router.get("/{audit_id}/review", response_model=AuditReviewResponse)
async def review_audit(audit: SiteAudit = Depends(get_site_audit)):
    payload = _review_payload(audit.record, audit_id=str(audit.id))
    logger.info("Built %s review for audit %s", payload.branch, audit.id)
    return payload


@router.post("/{audit_id}/quote", response_model=QuoteResponse, status_code=201)
async def generate_quote(
    audit: SiteAudit = Depends(get_site_audit),
    db: AsyncSession = Depends(get_db),
):
    quote = await _sales.create_quote(audit, db)
    return QuoteResponse.from_orm_instance(quote)


@router.post("/{audit_id}/project", response_model=ProjectResponse, status_code=201)
async def move_to_project(
    audit: SiteAudit = Depends(get_site_audit),
    db: AsyncSession = Depends(get_db),
):
    project = await _sales.move_to_project(audit, db)
    return ProjectResponse.from_orm_instance(project)
