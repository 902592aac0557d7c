from fieldaudit.db.models.project import Project
from fieldaudit.db.models.quote import Quote
from fieldaudit.db.models.site_audit import SiteAudit

__all__ = [
    "Project",
    "Quote",
    "SiteAudit",
]
