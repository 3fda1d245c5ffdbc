from enum import Enum


class FilterVerdict(str, Enum):
    """Outcome of a content classification."""

    ALLOWED = "allowed"
    BLOCKED = "blocked"

    @property
    def is_blocked(self) -> bool:
        return self is FilterVerdict.BLOCKED
