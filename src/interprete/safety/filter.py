"""Denylist content filter.

Case-insensitive substring matching against a configured word list,
plus optional regular-expression checks. Empty or whitespace-only text
is not this filter's concern; the admission layer rejects it first.
"""

import re

from .base import ContentFilter
from .models import FilterVerdict


class DenylistContentFilter(ContentFilter):
    """Blocks text containing any denylisted word or matching any pattern.

    Hidden design decisions:
    - Case normalization strategy
    - Pattern compilation (once, at construction)
    """

    def __init__(
        self,
        denylist: list[str] | None = None,
        patterns: list[str] | None = None,
    ):
        """Initialize the filter.

        Args:
            denylist: Words or phrases to block (case-insensitive substrings)
            patterns: Optional regular expressions to block

        Raises:
            re.error: If a pattern does not compile
        """
        self._denylist = tuple(
            word.lower() for word in (denylist or []) if word.strip()
        )
        self._patterns = tuple(
            re.compile(pattern, re.IGNORECASE) for pattern in (patterns or [])
        )

    @property
    def denylist(self) -> tuple[str, ...]:
        return self._denylist

    def classify(self, text: str) -> FilterVerdict:
        if not isinstance(text, str) or not text:
            return FilterVerdict.ALLOWED

        lowered = text.lower()
        if any(word in lowered for word in self._denylist):
            return FilterVerdict.BLOCKED

        if any(pattern.search(text) for pattern in self._patterns):
            return FilterVerdict.BLOCKED

        return FilterVerdict.ALLOWED
