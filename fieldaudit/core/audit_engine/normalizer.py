"""Record normalizer: flattens a layered audit record for review consumers.

The four survey layers are merged into one attribute bag in a fixed order
(site, load, infra, design; later layers win on key collisions), then the
list-valued fields are re-resolved from their owning layer so they are
always lists.  The client layer becomes a separate profile bag.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from fieldaudit.core.audit_engine.schemas import (
    AuditEngineConfig,
    ClientInfo,
    ClientProfile,
    LoadSurvey,
    NormalizedAudit,
    RawAuditRecord,
    SiteSurvey,
)

_DEFAULT_CONFIG = AuditEngineConfig()


def _dump(layer: BaseModel | None) -> dict[str, Any]:
    """Wire-shaped dict of the keys the wizard actually wrote."""
    if layer is None:
        return {}
    return layer.model_dump(by_alias=True, exclude_unset=True)


def _dump_list(entries: list[Any]) -> list[Any]:
    return [
        e.model_dump(by_alias=True, exclude_unset=True)
        if isinstance(e, BaseModel)
        else copy.deepcopy(e)
        for e in entries
    ]


def build_client_profile(
    record: RawAuditRecord, config: AuditEngineConfig = _DEFAULT_CONFIG
) -> ClientProfile:
    client = record.client or ClientInfo()
    site = record.site or SiteSurvey()

    # client.engineerName never overrides the top-level engineer or the placeholder
    engineer = record.engineer or config.engineer_placeholder

    profile = _dump(client)
    profile.update(
        {
            "photos": _dump_list(client.photos),
            "gps": copy.deepcopy(client.gps),
            "sitePhotos": _dump_list(site.photos),
            "engineerName": engineer,
        }
    )
    return ClientProfile.model_validate(profile)


def build_attribute_bag(record: RawAuditRecord) -> dict[str, Any]:
    site = record.site or SiteSurvey()
    load = record.load or LoadSurvey()

    bag: dict[str, Any] = {}
    for layer in (record.site, record.load, record.infra, record.design):
        bag.update(_dump(layer))

    # Explicit resolutions always win over the generic merge
    bag.update(
        {
            "items": _dump_list(load.items),
            "cameras": _dump_list(load.cameras),
            "machinery": _dump_list(load.machinery),
            "hazards": _dump_list(site.hazards_list),
            "sitePhotos": _dump_list(site.photos),
            "roofPhotos": _dump_list(site.photos),
        }
    )
    return bag


def normalize(
    record: RawAuditRecord | dict[str, Any],
    config: AuditEngineConfig | None = None,
) -> NormalizedAudit:
    """Split *record* into a client profile and a merged attribute bag.

    Parameters
    ----------
    record:
        A ``RawAuditRecord`` or any mapping of the same wire shape.  Missing
        layers are treated as empty.
    config:
        Engine constants; only ``engineer_placeholder`` is used here.

    Returns
    -------
    NormalizedAudit
        Freshly allocated profile and bag; *record* is never mutated.
    """
    if not isinstance(record, RawAuditRecord):
        record = RawAuditRecord.model_validate(record if isinstance(record, Mapping) else {})
    config = config or _DEFAULT_CONFIG

    return NormalizedAudit(
        client_profile=build_client_profile(record, config),
        attribute_bag=build_attribute_bag(record),
    )
