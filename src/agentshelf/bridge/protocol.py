"""Transport protocol definition."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Any


class Transport(ABC):
    """Abstract base class for the channel between the UI and the router.

    Requests arrive as decoded JSON objects; responses leave the same way.
    Delivery guarantees belong to the implementation.
    """

    @abstractmethod
    async def receive_requests(self) -> AsyncIterator[dict[str, Any]]:
        """Yield raw request objects until the channel closes."""
        ...

    @abstractmethod
    async def send_response(self, response: dict[str, Any]) -> None:
        """Deliver one raw response object.

        Raises:
            Exception: If sending fails
        """
        ...
