import uuid
from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fieldaudit.common.exceptions import NotFoundError
from fieldaudit.db.models.site_audit import SiteAudit
from fieldaudit.db.session import async_session_factory


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_site_audit(
    audit_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> SiteAudit:
    result = await db.execute(
        select(SiteAudit).where(SiteAudit.id == audit_id, SiteAudit.is_deleted.is_(False))
    )
    audit = result.scalar_one_or_none()
    if not audit:
        raise NotFoundError("Audit", str(audit_id))
    return audit
