"""Abstract base class for content filters.

This module hides the design decision of how user text is screened
before it is sent anywhere. Implementations must be pure: no I/O, no
state changes, and no exceptions for any string input.
"""

from abc import ABC, abstractmethod

from .models import FilterVerdict


class ContentFilter(ABC):
    """Abstract content filter."""

    @abstractmethod
    def classify(self, text: str) -> FilterVerdict:
        """Classify text as allowed or blocked.

        Args:
            text: Raw user text

        Returns:
            FilterVerdict for the text
        """

    def is_blocked(self, text: str) -> bool:
        """Check whether text would be blocked."""
        return self.classify(text).is_blocked
