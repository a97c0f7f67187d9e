from __future__ import annotations

import enum


class ActivityAction(str, enum.Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    APPROVE = "approve"
    REJECT = "reject"
    OTHER = "other"

    @classmethod
    def normalize(cls, value: str | ActivityAction | None) -> ActivityAction:
        """Map a recorder-supplied verb onto the known set; unknown verbs become OTHER."""
        if isinstance(value, cls):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.OTHER
