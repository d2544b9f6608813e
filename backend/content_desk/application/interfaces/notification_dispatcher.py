"""Port for outbound reader notifications."""

from abc import ABC, abstractmethod
from typing import Any


class NotificationDispatcher(ABC):
    @abstractmethod
    async def send(self, template: str, payload: dict[str, Any]) -> None:
        """Deliver ``payload`` rendered with ``template``. May raise on transport errors."""
        ...
