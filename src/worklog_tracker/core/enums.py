from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for access control."""

    USER = "user"
    ADMIN = "admin"


class WorkLogStatus(str, Enum):
    """Lifecycle state of a WorkLog as stored in the database."""

    ACTIVE = "active"
    COMPLETED = "completed"
    WEEK_OFF = "week_off"
