from datetime import datetime, timezone

import pytest

from fieldaudit.common.enums import ProjectHealth, ProjectPhase, QuoteStatus
from fieldaudit.core.audit_engine.service import adapt_audit, coerce_record
from fieldaudit.core.sales.project_builder import draft_project
from fieldaudit.core.sales.quote_builder import build_equipment, draft_quote, service_label
from fieldaudit.core.sales.schemas import PricingConfig

NOW = datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)


def _quote(record, pricing=None):
    parsed = coerce_record(record)
    return draft_quote("AUD-1", parsed, adapt_audit(parsed), pricing)


def _project(record):
    parsed = coerce_record(record)
    return draft_project("AUD-1", parsed, adapt_audit(parsed), now=NOW)


def test_solar_quote(solar_record):
    quote = _quote(solar_record)
    assert quote.service_type == "Solar Project"
    assert quote.client_id == "client-17"
    assert quote.client_name == "Ada Obi"
    assert quote.status is QuoteStatus.DRAFT
    assert quote.specs == {"inverter": 5, "battery": 10, "solar": 6}
    assert [(line.item, line.quantity, line.unit_price) for line in quote.equipment] == [
        ("5kVA Hybrid Inverter", 1, 600000),
        ("10kWh Lithium Battery Bank", 1, 950000),
        ("6kWp Solar Array", 1, 960000),
    ]
    assert quote.total_amount == 2510000


def test_cctv_quote(cctv_record):
    quote = _quote(cctv_record)
    assert quote.service_type == "Cctv Project"
    assert quote.client_id == "unknown"
    assert quote.specs == {}
    assert [(line.category, line.quantity) for line in quote.equipment] == [
        ("Hardware", 5),
        ("Hardware", 1),
        ("Cabling", 3),
    ]
    assert quote.total_amount == 5 * 45000 + 150000 + 3 * 65000


def test_cctv_quote_defaults_to_four_cameras():
    quote = _quote({"services": ["cctv"]})
    assert quote.equipment[0].quantity == 4
    assert quote.equipment[2].quantity == 2
    assert quote.total_amount == 4 * 45000 + 150000 + 2 * 65000


def test_empty_record_gets_placeholder_lines():
    quote = _quote({})
    assert [line.item for line in quote.equipment] == [
        "General Service Implementation",
        "Miscellaneous Materials",
    ]
    assert quote.total_amount == 0
    assert quote.client_name == "Unknown Audit Client"
    assert quote.client_id == "unknown"
    assert quote.service_type == "General Project"


def test_negative_design_values_clamp_total_at_zero():
    quote = _quote({"services": ["solar"], "design": {"recommendedInverter": -10}})
    assert quote.equipment[0].unit_price == -1200000
    assert quote.total_amount == 0


def test_pricing_is_configurable(cctv_record):
    pricing = PricingConfig(cctv_camera_price=10000, cctv_nvr_price=0, cctv_cable_coil_price=0)
    assert _quote(cctv_record, pricing).total_amount == 50000


@pytest.mark.parametrize(
    "service,label",
    [("wiring", "Wiring Project"), ("generator", "Generator Project"), (None, "General Project")],
)
def test_service_label(service, label):
    assert service_label(service) == label


def test_other_services_use_placeholder_equipment(solar_record):
    results = adapt_audit(solar_record).derived_results
    lines = build_equipment("wiring", results)
    assert [line.unit_price for line in lines] == [0, 0]


def test_solar_project_draft(solar_record):
    project = _project(solar_record)
    assert project.name == "Solar Installation for Ada Obi"
    assert project.audit_id == "AUD-1"
    assert project.client_id == "client-17"
    assert project.lead_id == "lead-9"
    assert project.status is ProjectPhase.PLANNING
    assert project.phase is ProjectPhase.PLANNING
    assert project.progress == 0
    assert project.health is ProjectHealth.HEALTHY
    assert project.value == 4500000
    assert project.specs.service_type == "solar"
    assert project.specs.system_size == 6
    assert project.specs.battery_size == 10
    assert project.specs.inverter_size == 5
    assert project.specs.camera_count == 1
    assert project.due_date == datetime(2026, 1, 31, 9, 0, tzinfo=timezone.utc)
    assert project.created_from == "audit"


@pytest.mark.parametrize(
    "record,name",
    [
        ({"services": ["cctv"], "client": {"clientName": "Kano Ltd"}}, "CCTV Security System for Kano Ltd"),
        ({"services": ["wiring"], "client": {"clientName": "Kano Ltd"}}, "Electrical for Kano Ltd"),
        ({}, "Electrical for Unknown Client"),
    ],
)
def test_project_names(record, name):
    assert _project(record).name == name


def test_project_due_days():
    parsed = coerce_record({})
    project = draft_project("AUD-1", parsed, adapt_audit(parsed), now=NOW, due_days=7)
    assert project.due_date == datetime(2026, 1, 8, 9, 0, tzinfo=timezone.utc)
