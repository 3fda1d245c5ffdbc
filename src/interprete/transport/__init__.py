"""Request construction, execution and response validation."""

from .base import Transport
from .builder import RequestBuilder
from .http import HttpxTransport
from .images import PreparedImage, prepare_image
from .models import RequestDescriptor, TransportResponse
from .validator import ResponseValidator

__all__ = [
    "HttpxTransport",
    "PreparedImage",
    "RequestBuilder",
    "RequestDescriptor",
    "ResponseValidator",
    "Transport",
    "TransportResponse",
    "prepare_image",
]
