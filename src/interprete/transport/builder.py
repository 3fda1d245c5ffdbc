"""Request construction.

Turns validated input into ``RequestDescriptor`` objects. The builder
performs no I/O; it only decides URLs, headers, bodies and timeouts.
"""

from PIL import Image

from ..config import AssistantSettings
from ..prompts import build_user_prompt, get_image_prompt, get_system_prompt
from .images import prepare_image
from .models import RequestDescriptor


class RequestBuilder:
    """Builds request descriptors for both response protocols.

    Hidden design decisions:
    - Endpoint layout of the remote API family
    - Header set (credential, content type, API version marker)
    - Message body shape for text and image requests
    """

    def __init__(self, settings: AssistantSettings, api_key: str):
        """Initialize the builder.

        Args:
            settings: Models, limits and timeouts
            api_key: Validated bearer credential
        """
        self._settings = settings
        self._api_key = api_key
        self._base_url = settings.base_url.rstrip("/")

    def _headers(self, versioned: bool = False) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        if versioned:
            headers[self._settings.api_version_header] = self._settings.api_version
        return headers

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    # Stateless completion

    def build_text_request(self, text: str) -> RequestDescriptor:
        """Build a chat completion request for user text.

        Args:
            text: Trimmed, admitted user text

        Returns:
            RequestDescriptor for POST /chat/completions
        """
        return RequestDescriptor(
            endpoint=self._url("chat/completions"),
            headers=self._headers(),
            body={
                "model": self._settings.text_model,
                "messages": [
                    {"role": "system", "content": get_system_prompt()},
                    {"role": "user", "content": build_user_prompt(text)},
                ],
                "temperature": self._settings.temperature,
                "max_tokens": self._settings.max_tokens,
            },
            timeout=self._settings.text_timeout,
        )

    def build_image_request(self, image: bytes | Image.Image) -> RequestDescriptor:
        """Build a vision completion request for an image.

        The image is downsized and re-encoded before it is embedded as a
        base64 data URI.

        Args:
            image: Encoded image bytes or a decoded Pillow image

        Returns:
            RequestDescriptor for POST /chat/completions

        Raises:
            ImageProcessingError: If the image cannot be prepared
        """
        s = self._settings
        prepared = prepare_image(
            image,
            max_dimension=s.max_image_dimension,
            quality=s.image_quality,
            large_quality=s.large_image_quality,
            large_width=s.large_image_width,
        )

        return RequestDescriptor(
            endpoint=self._url("chat/completions"),
            headers=self._headers(),
            body={
                "model": s.vision_model,
                "messages": [
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": get_image_prompt()},
                            {"type": "image_url", "image_url": {"url": prepared.to_data_uri()}},
                        ],
                    }
                ],
                "max_tokens": s.max_tokens,
            },
            timeout=s.image_timeout,
        )

    # Stateful threads

    def build_create_thread_request(self) -> RequestDescriptor:
        return RequestDescriptor(
            endpoint=self._url("threads"),
            headers=self._headers(versioned=True),
            body={},
            timeout=self._settings.text_timeout,
        )

    def build_thread_message_request(self, thread_id: str, text: str) -> RequestDescriptor:
        return RequestDescriptor(
            endpoint=self._url(f"threads/{thread_id}/messages"),
            headers=self._headers(versioned=True),
            body={"role": "user", "content": build_user_prompt(text)},
            timeout=self._settings.text_timeout,
        )

    def build_run_request(self, thread_id: str, assistant_id: str) -> RequestDescriptor:
        return RequestDescriptor(
            endpoint=self._url(f"threads/{thread_id}/runs"),
            headers=self._headers(versioned=True),
            body={"assistant_id": assistant_id},
            timeout=self._settings.text_timeout,
        )

    def build_run_status_request(self, thread_id: str, run_id: str) -> RequestDescriptor:
        return RequestDescriptor(
            method="GET",
            endpoint=self._url(f"threads/{thread_id}/runs/{run_id}"),
            headers=self._headers(versioned=True),
            timeout=self._settings.text_timeout,
        )

    def build_list_messages_request(self, thread_id: str) -> RequestDescriptor:
        """Build the request listing a thread's messages, newest first."""
        return RequestDescriptor(
            method="GET",
            endpoint=self._url(f"threads/{thread_id}/messages?order=desc&limit=20"),
            headers=self._headers(versioned=True),
            timeout=self._settings.text_timeout,
        )
