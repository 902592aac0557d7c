import uuid

import pytest

from fieldaudit.db.models import Project


async def _create_audit(client, record):
    response = await client.post("/api/v1/audits", json={"record": record})
    return response.json()["id"]


@pytest.mark.asyncio
async def test_move_audit_to_project(client, solar_record):
    audit_id = await _create_audit(client, solar_record)

    response = await client.post(f"/api/v1/audits/{audit_id}/project")
    assert response.status_code == 201
    project = response.json()
    assert project["name"] == "Solar Installation for Ada Obi"
    assert project["status"] == "Planning"
    assert project["phase"] == "Planning"
    assert project["health"] == "healthy"
    assert project["progress"] == 0
    assert project["value"] == 4500000
    assert project["lead_id"] == "lead-9"
    assert project["created_from"] == "audit"
    assert project["specs"] == {
        "service_type": "solar",
        "system_size": 6,
        "battery_size": 10,
        "inverter_size": 5,
        "camera_count": 1,
    }
    assert project["due_date"] is not None

    audit = (await client.get(f"/api/v1/audits/{audit_id}")).json()
    assert audit["moved_to_project"] is True
    assert audit["project_id"] == project["id"]


@pytest.mark.asyncio
async def test_second_move_conflicts(client, cctv_record):
    audit_id = await _create_audit(client, cctv_record)

    first = await client.post(f"/api/v1/audits/{audit_id}/project")
    assert first.status_code == 201

    second = await client.post(f"/api/v1/audits/{audit_id}/project")
    assert second.status_code == 409


@pytest.mark.asyncio
async def test_get_project(client, cctv_record):
    audit_id = await _create_audit(client, cctv_record)
    created = (await client.post(f"/api/v1/audits/{audit_id}/project")).json()

    response = await client.get(f"/api/v1/projects/{created['id']}")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "CCTV Security System for Kano Warehouse Ltd."
    assert data["specs"]["camera_count"] == 5


@pytest.mark.asyncio
async def test_move_missing_audit(client):
    response = await client.post(f"/api/v1/audits/{uuid.uuid4()}/project")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_get_missing_project(client):
    response = await client.get(f"/api/v1/projects/{uuid.uuid4()}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_move_racing_an_existing_project_conflicts(client, db_session, solar_record):
    audit_id = await _create_audit(client, solar_record)

    # another request created the project but this audit row is not yet marked as moved
    db_session.add(Project(audit_id=uuid.UUID(audit_id), name="Solar Installation for Ada Obi"))
    await db_session.flush()

    response = await client.post(f"/api/v1/audits/{audit_id}/project")
    assert response.status_code == 409
