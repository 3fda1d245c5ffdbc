"""Local content screening for user text."""

from .base import ContentFilter
from .filter import DenylistContentFilter
from .models import FilterVerdict

__all__ = [
    "ContentFilter",
    "DenylistContentFilter",
    "FilterVerdict",
]
