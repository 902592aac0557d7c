"""Single entry point to the Audit Derivation Engine.

Every consumer (live wizard preview, stored-audit review, quote drafting,
project creation) goes through ``adapt_audit`` so that they all see the
same numbers for the same record.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from fieldaudit.core.audit_engine.normalizer import normalize
from fieldaudit.core.audit_engine.schemas import (
    AdaptedView,
    AuditEngineConfig,
    RawAuditRecord,
)
from fieldaudit.core.audit_engine.sizing import derive


def coerce_record(record: RawAuditRecord | Mapping[str, Any] | None) -> RawAuditRecord:
    """Parse a stored or submitted record; anything non-mapping is an empty audit."""
    if isinstance(record, RawAuditRecord):
        return record
    return RawAuditRecord.model_validate(record if isinstance(record, Mapping) else {})


def adapt_audit(
    record: RawAuditRecord | Mapping[str, Any] | None,
    config: AuditEngineConfig | None = None,
) -> AdaptedView:
    """Normalize *record* and derive its sizing results.

    Pure and deterministic: equal records give equal views, and nothing
    outside the returned ``AdaptedView`` is touched.
    """
    record = coerce_record(record)
    config = config or AuditEngineConfig.from_settings()

    normalized = normalize(record, config)
    load = record.load
    site = record.site

    results = derive(
        normalized.attribute_bag,
        load.stats if load else None,
        record.design,
        fallback_cameras=site.cameras if site else (),
        config=config,
    )

    return AdaptedView(
        client_profile=normalized.client_profile,
        attribute_bag=normalized.attribute_bag,
        derived_results=results,
    )


def record_columns(record: RawAuditRecord | Mapping[str, Any] | None) -> dict[str, Any]:
    """Denormalized values the audit store keeps alongside the raw record."""
    record = coerce_record(record)
    client = record.client
    return {
        "client_name": (client.client_name if client else None) or "Unknown Client",
        "service_types": list(record.services),
        "engineer": record.engineer,
    }
