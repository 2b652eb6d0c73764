from enum import Enum


class UserLabel(str, Enum):
    """Status flags carried in ``User.labels``."""

    IS_ACTIVE = "isActive"
    IS_DELETED = "isDeleted"
