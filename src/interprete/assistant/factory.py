from typing import Any

from ..config import AssistantSettings, ResponseProtocol
from ..ratelimit import RateLimiter
from ..transport import HttpxTransport, RequestBuilder, ResponseValidator, Transport
from .base import ResponseStrategy
from .client import AssistantClient
from .completion import CompletionStrategy
from .threads import ThreadedRunStrategy


def create_response_strategy(
    protocol: ResponseProtocol | str,
    transport: Transport,
    builder: RequestBuilder,
    validator: ResponseValidator,
    settings: AssistantSettings,
) -> ResponseStrategy:
    """Create the strategy that obtains text replies.

    Args:
        protocol: 'completion' or 'threads'
        transport: Executes requests
        builder: Builds request descriptors
        validator: Parses response bodies
        settings: Retry and polling configuration

    Returns:
        ResponseStrategy for the protocol

    Raises:
        ValueError: If the protocol is unknown, or 'threads' is requested
            without an assistant id
    """
    protocol_lower = str(getattr(protocol, "value", protocol)).lower()

    if protocol_lower == ResponseProtocol.COMPLETION.value:
        return CompletionStrategy(
            transport,
            builder,
            validator,
            max_retries=settings.max_retries,
            retry_backoff=settings.retry_backoff,
        )

    if protocol_lower == ResponseProtocol.THREADS.value:
        if not settings.assistant_id:
            raise ValueError("threads protocol requires 'assistant_id' in settings")
        return ThreadedRunStrategy(
            transport,
            builder,
            validator,
            assistant_id=settings.assistant_id,
            poll_attempts=settings.run_poll_attempts,
            poll_interval=settings.run_poll_interval,
        )

    raise ValueError(
        f"Unsupported protocol: {protocol}. "
        f"Supported protocols: 'completion', 'threads'"
    )


def create_assistant_client(
    settings: AssistantSettings | None = None,
    transport: Transport | None = None,
    rate_limiter: RateLimiter | None = None,
    **overrides: Any
) -> AssistantClient:
    """Create a fully wired assistant client.

    This factory function hides how the builder, validator, transport and
    strategies are assembled.

    Args:
        settings: Configuration (default: read from the environment)
        transport: Request executor (default: a new HttpxTransport, closed
            together with the client)
        rate_limiter: Admission gate (default: limits from settings)
        **overrides: Settings fields that take precedence

    Returns:
        AssistantClient ready to be started

    Examples:
        >>> client = create_assistant_client(api_key="sk-...", protocol="threads",
        ...                                  assistant_id="asst_...")
    """
    if settings is None:
        settings = AssistantSettings.from_env(**overrides)
    elif overrides:
        settings = AssistantSettings(**{**settings.model_dump(), **overrides})

    owns_transport = transport is None
    transport = transport or HttpxTransport()

    builder = RequestBuilder(settings, api_key=settings.api_key.strip())
    validator = ResponseValidator(max_length=settings.max_response_length)

    strategy = create_response_strategy(settings.protocol, transport, builder, validator, settings)
    if isinstance(strategy, CompletionStrategy):
        image_strategy = strategy
    else:
        image_strategy = CompletionStrategy(
            transport,
            builder,
            validator,
            max_retries=settings.max_retries,
            retry_backoff=settings.retry_backoff,
        )

    client = AssistantClient(settings, strategy, image_strategy, rate_limiter=rate_limiter)
    if owns_transport:
        client.own_transport(transport)
    return client
