from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fieldaudit.common.exceptions import ConflictError
from fieldaudit.common.logging import get_logger
from fieldaudit.config import settings
from fieldaudit.core.audit_engine.service import adapt_audit, coerce_record
from fieldaudit.core.sales.project_builder import draft_project
from fieldaudit.core.sales.quote_builder import draft_quote
from fieldaudit.core.sales.schemas import PricingConfig
from fieldaudit.db.models.project import Project
from fieldaudit.db.models.quote import Quote
from fieldaudit.db.models.site_audit import SiteAudit

logger = get_logger("sales.service")


class SalesService:
    async def create_quote(self, audit: SiteAudit, db: AsyncSession) -> Quote:
        record = coerce_record(audit.record)
        view = adapt_audit(record)
        draft = draft_quote(str(audit.id), record, view, PricingConfig.from_settings())

        quote = Quote(
            audit_id=audit.id,
            client_id=draft.client_id,
            client_name=draft.client_name,
            service_type=draft.service_type,
            specs=draft.specs,
            equipment=[line.model_dump(mode="json") for line in draft.equipment],
            total_amount=Decimal(str(draft.total_amount)),
            status=draft.status.value,
        )
        db.add(quote)
        await db.flush()
        await db.refresh(quote)

        logger.info(
            "Drafted quote %s for audit %s (%s, total %.2f)",
            quote.id, audit.id, draft.service_type, draft.total_amount,
        )
        return quote

    async def move_to_project(self, audit: SiteAudit, db: AsyncSession) -> Project:
        if audit.moved_to_project:
            raise ConflictError(f"Audit {audit.id} has already been moved to project {audit.project_id}")

        record = coerce_record(audit.record)
        view = adapt_audit(record)
        draft = draft_project(
            str(audit.id),
            record,
            view,
            now=datetime.now(timezone.utc),
            due_days=settings.PROJECT_DUE_DAYS,
        )

        project = Project(
            audit_id=audit.id,
            name=draft.name,
            client_id=draft.client_id,
            client_name=draft.client_name,
            lead_id=draft.lead_id,
            status=draft.status.value,
            phase=draft.phase.value,
            progress=draft.progress,
            health=draft.health.value,
            value=Decimal(str(draft.value)),
            specs=draft.specs.model_dump(mode="json"),
            due_date=draft.due_date,
            created_from=draft.created_from,
        )
        db.add(project)
        try:
            await db.flush()
        except IntegrityError as exc:
            # a concurrent move inserted the project first (unique audit_id)
            logger.warning("Concurrent move of audit %s to a project", audit.id)
            raise ConflictError(f"Audit {audit.id} has already been moved to a project") from exc

        audit.moved_to_project = True
        audit.project_id = str(project.id)
        await db.flush()
        await db.refresh(project)
        await db.refresh(audit)

        logger.info("Moved audit %s to project %s", audit.id, project.id)
        return project
