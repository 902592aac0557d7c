import copy

from fieldaudit.core.audit_engine.schemas import AuditEngineConfig, RawAuditRecord
from fieldaudit.core.audit_engine.service import adapt_audit, coerce_record


def test_equal_records_give_equal_views(solar_record):
    first = adapt_audit(solar_record)
    second = adapt_audit(copy.deepcopy(solar_record))
    assert first == second
    assert first.model_dump() == adapt_audit(solar_record).model_dump()


def test_parsed_and_raw_records_agree(solar_record):
    assert adapt_audit(RawAuditRecord.model_validate(solar_record)) == adapt_audit(solar_record)


def test_views_share_no_state(solar_record):
    first = adapt_audit(solar_record)
    first.attribute_bag["items"].clear()
    first.derived_results.warnings.clear()
    second = adapt_audit(solar_record)
    assert len(second.attribute_bag["items"]) == 3
    assert len(second.derived_results.warnings) == 1


def test_coerce_record_handles_non_mappings():
    assert coerce_record(None) == RawAuditRecord()
    assert coerce_record(["solar"]) == RawAuditRecord()
    record = RawAuditRecord(services=["cctv"])
    assert coerce_record(record) is record


def test_dirty_layers_are_ignored():
    view = adapt_audit({"client": "Ada", "site": 3, "load": None, "services": "solar"})
    assert view.client_profile.client_name is None
    assert view.derived_results.total_load == 0
    assert view.attribute_bag["items"] == []


def test_default_config_matches_settings():
    assert AuditEngineConfig.from_settings() == AuditEngineConfig()


def test_explicit_config_is_used():
    config = AuditEngineConfig(generator_headroom_factor=2.0)
    view = adapt_audit({"load": {"stats": {"totalLoad": 3}}}, config)
    assert view.derived_results.recommended_gen_size == 6
