"""Notification adapters — deliver reader e-mails through a mailer webhook.

The webhook receives ``{"template": ..., "payload": ...}`` as JSON; rendering
and sending the e-mail is the mailer's job.
"""

import logging
from typing import Any

import httpx
from pydantic_core import to_jsonable_python

from content_desk.application.interfaces import NotificationDispatcher
from content_desk.domain.exceptions import DependencyError

logger = logging.getLogger(__name__)


class WebhookNotificationDispatcher(NotificationDispatcher):
    """Posts notifications to an HTTP endpoint with httpx."""

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._url = url
        self._timeout = timeout
        self._http_client = http_client

    async def send(self, template: str, payload: dict[str, Any]) -> None:
        body = {"template": template, "payload": to_jsonable_python(payload)}

        client = self._http_client or httpx.AsyncClient(timeout=self._timeout)
        should_close = self._http_client is None
        try:
            response = await client.post(self._url, json=body)
            if response.status_code >= 400:
                raise DependencyError(
                    "notification",
                    f"Mailer answered HTTP {response.status_code} for '{template}'",
                )
        except httpx.HTTPError as exc:
            raise DependencyError("notification", f"Mailer unreachable: {exc}") from exc
        finally:
            if should_close:
                await client.aclose()

        logger.info("Notification '%s' delivered", template)


class LoggingNotificationDispatcher(NotificationDispatcher):
    """Fallback used when no mailer webhook is configured."""

    async def send(self, template: str, payload: dict[str, Any]) -> None:
        logger.info("Notification '%s' not delivered (no webhook configured)", template)
        logger.debug("Notification payload: %s", to_jsonable_python(payload))
