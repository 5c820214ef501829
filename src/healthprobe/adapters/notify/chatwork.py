"""Chatwork notifier built on httpx."""

import httpx

from healthprobe.core.errors import DeliveryError
from healthprobe.logging import get_logger

logger = get_logger(__name__)

CHATWORK_API_URL = "https://api.chatwork.com/v1"
TOKEN_HEADER = "X-ChatWorkToken"
DEFAULT_TIMEOUT = 10.0


def format_message(title: str, message: str) -> str:
    """Wrap a message in a Chatwork info block with a title."""
    return f"[info][title]{title}[/title]{message}[/info]"


class ChatworkNotifier:
    """NotifierPort implementation posting to a Chatwork room.

    Example:
        ```python
        notifier = ChatworkNotifier(api_key, room_id, timeout=5.0)
        await notifier.send("Title", "Body")
        ```

    Args:
        api_key: Chatwork API token sent in the X-ChatWorkToken header.
        room_id: Room receiving the messages.
        timeout: Request timeout in seconds.
        base_url: API root, overridable for testing.
        client: Client to reuse. When omitted a client is created per send.
    """

    def __init__(
        self,
        api_key: str,
        room_id: str,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: str = CHATWORK_API_URL,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._room_id = room_id
        self._timeout = timeout
        self._base_url = base_url.rstrip("/")
        self._client = client

    @property
    def url(self) -> str:
        return f"{self._base_url}/rooms/{self._room_id}/messages"

    async def send(self, title: str, message: str) -> None:
        """Post a message to the room.

        Raises:
            DeliveryError: On transport failure or a non-2xx response.
        """
        if self._client is not None:
            await self._post(self._client, title, message)
            return
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            await self._post(client, title, message)

    async def _post(self, client: httpx.AsyncClient, title: str, message: str) -> None:
        try:
            response = await client.post(
                self.url,
                headers={TOKEN_HEADER: self._api_key},
                data={"body": format_message(title, message)},
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            raise DeliveryError(f"Chatwork request failed: {exc}") from exc

        if not response.is_success:
            logger.error(
                "Chatwork API error",
                extra={"status_code": response.status_code, "resp": response.text},
            )
            raise DeliveryError(
                f"Chatwork returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        logger.debug("Chatwork message posted", extra={"room_id": self._room_id})
