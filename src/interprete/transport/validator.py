"""Response parsing and sanitization.

Extracts the assistant's text from raw response bodies. Every parsing
problem, including malformed JSON, surfaces as ``InvalidResponseError``.
"""

import json
from typing import Any

from ..errors import InvalidResponseError


class ResponseValidator:
    """Parses raw bodies into clean reply text.

    Accepted shapes:
    - ``{"choices": [{"message": {"content": str | [blocks]}}]}``
    - ``{"candidates": [{"content": {"parts": [{"text": str}]}}]}``
    - ``{"data": [{"content": [{"text": {"value": str}}]}]}`` (thread messages)
    """

    def __init__(self, max_length: int = 5000):
        """Initialize the validator.

        Args:
            max_length: Longest reply accepted, in characters, after trimming
        """
        self._max_length = max_length

    @property
    def max_length(self) -> int:
        return self._max_length

    def parse_json(self, raw: bytes | str) -> dict[str, Any]:
        """Decode a JSON object body.

        Raises:
            InvalidResponseError: If the body is not a JSON object
        """
        try:
            payload = json.loads(raw)
        except (ValueError, RecursionError, TypeError) as e:
            raise InvalidResponseError(f"malformed JSON: {e}") from e
        if not isinstance(payload, dict):
            raise InvalidResponseError("expected a JSON object")
        return payload

    def parse(self, raw: bytes | str) -> str:
        """Extract and sanitize the reply from a completion response.

        Args:
            raw: Raw response body

        Returns:
            Reply text with surrounding whitespace removed

        Raises:
            InvalidResponseError: If the body is malformed, lacks the
                expected fields, or the reply is empty or too long
        """
        payload = self.parse_json(raw)

        if "choices" in payload:
            content = self._first_choice_content(payload["choices"])
        elif "candidates" in payload:
            content = self._first_candidate_content(payload["candidates"])
        else:
            raise InvalidResponseError("response has no choices")

        return self.sanitize(content)

    def parse_thread_messages(self, raw: bytes | str) -> str:
        """Extract the newest assistant message from a thread message list.

        Messages are expected newest first. Entries with a role other than
        'assistant' are skipped; entries without a role are accepted.

        Raises:
            InvalidResponseError: If no assistant text can be found
        """
        payload = self.parse_json(raw)
        data = payload.get("data")
        if not isinstance(data, list):
            raise InvalidResponseError("message list has no data")

        for message in data:
            if not isinstance(message, dict):
                continue
            if message.get("role", "assistant") != "assistant":
                continue
            blocks = message.get("content")
            if not isinstance(blocks, list) or not blocks:
                continue
            block = blocks[0]
            text = block.get("text") if isinstance(block, dict) else None
            value = text.get("value") if isinstance(text, dict) else None
            if isinstance(value, str):
                return self.sanitize(value)

        raise InvalidResponseError("thread has no assistant message")

    def sanitize(self, content: Any) -> str:
        """Trim a reply and enforce the non-empty and length rules."""
        if not isinstance(content, str):
            raise InvalidResponseError("reply content is not text")
        cleaned = content.strip()
        if not cleaned:
            raise InvalidResponseError("reply is empty")
        if len(cleaned) > self._max_length:
            raise InvalidResponseError(
                f"reply has {len(cleaned)} characters (limit {self._max_length})"
            )
        return cleaned

    @staticmethod
    def _first_choice_content(choices: Any) -> Any:
        if not isinstance(choices, list) or not choices:
            raise InvalidResponseError("response has no choices")
        choice = choices[0]
        message = choice.get("message") if isinstance(choice, dict) else None
        if not isinstance(message, dict) or "content" not in message:
            raise InvalidResponseError("first choice has no message content")

        content = message["content"]
        if isinstance(content, list):
            # Structured content: take the first text block
            for block in content:
                if isinstance(block, dict) and isinstance(block.get("text"), str):
                    return block["text"]
            raise InvalidResponseError("message has no text block")
        return content

    @staticmethod
    def _first_candidate_content(candidates: Any) -> Any:
        if not isinstance(candidates, list) or not candidates:
            raise InvalidResponseError("response has no candidates")
        candidate = candidates[0]
        content = candidate.get("content") if isinstance(candidate, dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list) or not parts:
            raise InvalidResponseError("first candidate has no content parts")
        part = parts[0]
        if not isinstance(part, dict) or "text" not in part:
            raise InvalidResponseError("first content part has no text")
        return part["text"]
