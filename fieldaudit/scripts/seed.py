"""
Seed script for the FieldAudit service.

Creates the tables if they do not exist and stores a handful of demo site
audits (solar, CCTV, generator and an unfinished draft) so that the review,
quote and project endpoints have something to work on.

Usage:
    python -m fieldaudit.scripts.seed
"""

import asyncio

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fieldaudit.common.enums import AuditStatus
from fieldaudit.core.audit_engine.service import record_columns
from fieldaudit.db.base import Base
from fieldaudit.db.models import SiteAudit
from fieldaudit.db.session import async_session_factory, engine

DEMO_AUDITS = [
    {
        "status": AuditStatus.SUBMITTED,
        "record": {
            "services": ["solar"],
            "engineer": "Tunde Bakare",
            "client": {
                "id": "client-001",
                "leadId": "lead-001",
                "clientName": "Chioma Eze",
                "phone": "08031234567",
                "address": "14 Admiralty Way, Lekki, Lagos",
                "buildingType": "Duplex",
                "gps": {"lat": 6.4474, "lng": 3.4723},
            },
            "site": {
                "roofMaterial": "Stone-coated steel",
                "capturedOrientation": "South",
                "capturedTilt": 15,
                "hazardsList": ["Overhanging tree"],
            },
            "load": {
                "items": [
                    {"name": "Refrigerator", "power": 250, "qty": 1, "hours": 24, "critical": True},
                    {"name": "Air conditioner (1.5HP)", "power": 1100, "qty": 2, "hours": 6},
                    {"name": "LED bulbs", "power": 10, "qty": 20, "hours": 8, "critical": True},
                    {"name": "Water pump", "power": 750, "qty": 1, "hours": 1},
                ],
                "stats": {
                    "totalLoad": 3.4,
                    "totalDailyEnergy": 22.35,
                    "criticalLoad": 0.45,
                    "peakSimultaneousLoad": 2.72,
                    "surgePower": 5.6,
                },
            },
            "infra": {"dbType": "TPN", "earthingValue": 1.4, "hasEarthing": True},
            "design": {
                "recommendedInverter": 5,
                "batteryCapacity": 15,
                "solarArraySize": 7.2,
                "backupHours": 10,
                "independenceLevel": 75,
                "monthlySavings": 120000,
                "paybackYears": 4,
                "totalSystemCostEstimate": 6200000,
                "batteryType": "Lithium",
                "targetCoverage": 80,
            },
        },
    },
    {
        "status": AuditStatus.SUBMITTED,
        "record": {
            "services": ["cctv"],
            "client": {"clientName": "Hassan Logistics Ltd", "engineerName": "Ifeoma Nwosu"},
            "site": {"riskLevel": "High", "cameras": [{"qty": 1, "type": "Bullet"}] * 3},
            "load": {
                "cameras": [{"qty": 1, "type": "Bullet", "resolution": "4MP"}] * 9,
                "stats": {"totalLoad": 0.6},
            },
        },
    },
    {
        "status": AuditStatus.DRAFT,
        "record": {
            "services": ["generator"],
            "client": {"clientName": "Grace Ministries"},
            "load": {"stats": {"totalLoad": 18}},
            "infra": {"genExists": True, "genCapacity": 20, "atsType": "Manual"},
        },
    },
    {
        "status": AuditStatus.DRAFT,
        "record": {"client": {"clientName": "Walk-in Prospect"}},
    },
]


async def seed_audits(session: AsyncSession) -> int:
    """Store the demo audits unless any audit already exists; returns the count added."""
    result = await session.execute(select(SiteAudit.id).limit(1))
    if result.first() is not None:
        return 0

    for demo in DEMO_AUDITS:
        record = demo["record"]
        session.add(
            SiteAudit(record=record, status=demo["status"].value, **record_columns(record))
        )
    await session.flush()
    return len(DEMO_AUDITS)


async def main() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as session:
        added = await seed_audits(session)
        await session.commit()

    if added:
        print(f"Seeded: {added} audits")
    else:
        print("Database already seeded -- skipping.")


if __name__ == "__main__":
    asyncio.run(main())
