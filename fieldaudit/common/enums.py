import enum


class ServiceType(str, enum.Enum):
    SOLAR = "solar"
    CCTV = "cctv"
    WIRING = "wiring"
    GENERATOR = "generator"
    EARTHING = "earthing"
    INDUSTRIAL = "industrial"


class ReviewBranch(str, enum.Enum):
    SOLAR = "solar"
    CCTV = "cctv"
    WIRING = "wiring"
    GENERATOR = "generator"
    EARTHING = "earthing"
    INDUSTRIAL = "industrial"
    GENERIC = "generic"


class AuditStatus(str, enum.Enum):
    DRAFT = "Draft"
    SUBMITTED = "Submitted"
    COMPLETED = "Completed"


class QuoteStatus(str, enum.Enum):
    DRAFT = "Draft"
    SENT = "Sent"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


class ProjectPhase(str, enum.Enum):
    PLANNING = "Planning"
    PROCUREMENT = "Procurement"
    INSTALLATION = "Installation"
    TESTING = "Testing"
    HANDOVER = "Handover"


class ProjectHealth(str, enum.Enum):
    HEALTHY = "healthy"
    AT_RISK = "at_risk"
    CRITICAL = "critical"
