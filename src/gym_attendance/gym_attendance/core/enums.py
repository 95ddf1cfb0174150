from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles used for authorization checks."""

    ADMIN = "admin"
    STUDENT = "student"


class ComplianceStatus(str, Enum):
    """Persisted member status, written only by the compliance job and manual unblock."""

    ACTIVE = "active"
    BLOCKED = "blocked"


class ComplianceTier(str, Enum):
    """Tier derived from an attendance percentage. Never persisted."""

    COMPLIANT = "compliant"
    WARNING = "warning"
    BLOCKED = "blocked"


class LinkType(str, Enum):
    """How a member is affiliated with the institution."""

    STUDENT = "aluno"
    EMPLOYEE = "servidor"
    EXTERNAL = "externo"
