"""Stateful thread protocol.

A remote thread is created lazily on first use and reused afterwards.
Each message is posted to the thread, a run is started, the run's status
is polled until it completes, and the newest assistant message is read
back from the thread.
"""

import asyncio
from typing import Any

from ..errors import GeneralError, InvalidResponseError, RunTimeoutError
from ..transport import RequestBuilder, ResponseValidator, Transport
from .base import ResponseStrategy
from .models import Reply

# Run statuses after which polling can never succeed
FAILED_RUN_STATUSES = frozenset({"failed", "cancelled", "expired", "incomplete"})


class ThreadedRunStrategy(ResponseStrategy):
    """Obtains replies through a server-side thread and polled runs.

    Hidden design decisions:
    - At-most-once thread creation under concurrent first use
    - Polling budget and interval
    - Which message in the thread counts as the reply
    """

    def __init__(
        self,
        transport: Transport,
        builder: RequestBuilder,
        validator: ResponseValidator,
        assistant_id: str,
        poll_attempts: int = 30,
        poll_interval: float = 1.0,
    ):
        super().__init__(transport, builder, validator)
        if not assistant_id:
            raise ValueError("ThreadedRunStrategy requires an assistant_id")
        self._assistant_id = assistant_id
        self._poll_attempts = poll_attempts
        self._poll_interval = poll_interval
        self._thread_id: str | None = None
        self._thread_lock = asyncio.Lock()

    @property
    def name(self) -> str:
        return "threads"

    @property
    def thread_id(self) -> str | None:
        """Remote thread id, or None before the first message."""
        return self._thread_id

    async def get_or_create_thread(self) -> str:
        """Get the remote thread id, creating the thread on first use.

        Concurrent first callers wait on the same lock, so at most one
        thread is created.
        """
        async with self._thread_lock:
            if self._thread_id is None:
                response = await self._transport.send(
                    self._builder.build_create_thread_request()
                )
                response.raise_for_status()
                self._thread_id = self._required_str(
                    self._validator.parse_json(response.content), "id", "thread"
                )
                self._debug("info", "threads", f"Created thread {self._thread_id}")
            return self._thread_id

    def reset_thread(self) -> None:
        """Forget the current thread; the next message starts a new one."""
        self._thread_id = None

    async def reply_to_text(self, text: str) -> Reply:
        thread_id = await self.get_or_create_thread()

        response = await self._transport.send(
            self._builder.build_thread_message_request(thread_id, text)
        )
        response.raise_for_status()

        response = await self._transport.send(
            self._builder.build_run_request(thread_id, self._assistant_id)
        )
        response.raise_for_status()
        run_id = self._required_str(
            self._validator.parse_json(response.content), "id", "run"
        )
        self._debug("debug", "threads", f"Started run {run_id} on thread {thread_id}")

        await self._wait_for_run(thread_id, run_id)

        response = await self._transport.send(
            self._builder.build_list_messages_request(thread_id)
        )
        response.raise_for_status()
        return Reply(
            text=self._validator.parse_thread_messages(response.content),
            thread_id=thread_id,
        )

    async def _wait_for_run(self, thread_id: str, run_id: str) -> None:
        request = self._builder.build_run_status_request(thread_id, run_id)

        for attempt in range(1, self._poll_attempts + 1):
            response = await self._transport.send(request)
            response.raise_for_status()
            status = self._required_str(
                self._validator.parse_json(response.content), "status", "run"
            )
            if status == "completed":
                self._debug("debug", "threads", f"Run {run_id} completed after {attempt} polls")
                return
            if status in FAILED_RUN_STATUSES:
                raise GeneralError(f"run {run_id} ended with status '{status}'")
            if attempt < self._poll_attempts:
                await asyncio.sleep(self._poll_interval)

        raise RunTimeoutError(self._poll_attempts)

    @staticmethod
    def _required_str(payload: dict[str, Any], key: str, what: str) -> str:
        value = payload.get(key)
        if not isinstance(value, str) or not value:
            raise InvalidResponseError(f"{what} response has no '{key}'")
        return value
