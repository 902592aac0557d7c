"""Map an audit onto a new delivery project in its planning phase."""

from __future__ import annotations

from datetime import datetime, timedelta

from fieldaudit.common.enums import ServiceType
from fieldaudit.core.audit_engine.schemas import AdaptedView, RawAuditRecord
from fieldaudit.core.sales.schemas import ProjectDraft, ProjectSpecs

_PROJECT_TITLES = {
    ServiceType.SOLAR.value: "Solar Installation",
    ServiceType.CCTV.value: "CCTV Security System",
}


def project_name(primary_service: str | None, client_name: str | None) -> str:
    title = _PROJECT_TITLES.get(primary_service or "", "Electrical")
    return f"{title} for {client_name or 'Unknown Client'}"


def draft_project(
    audit_id: str,
    record: RawAuditRecord,
    view: AdaptedView,
    now: datetime,
    due_days: int = 30,
) -> ProjectDraft:
    results = view.derived_results
    client = record.client
    client_name = view.client_profile.client_name

    return ProjectDraft(
        name=project_name(record.primary_service, client_name),
        audit_id=audit_id,
        client_id=(client.id if client else None) or "unknown",
        client_name=client_name,
        lead_id=client.lead_id if client else None,
        value=results.total_cost,
        specs=ProjectSpecs(
            service_type=record.primary_service,
            system_size=results.rec_solar_result,
            battery_size=results.rec_battery,
            inverter_size=results.rec_inverter,
            camera_count=results.total_cameras,
        ),
        due_date=now + timedelta(days=due_days),
    )
