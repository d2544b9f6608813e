from .webhook_notification_dispatcher import (
    LoggingNotificationDispatcher,
    WebhookNotificationDispatcher,
)

__all__ = ["LoggingNotificationDispatcher", "WebhookNotificationDispatcher"]
