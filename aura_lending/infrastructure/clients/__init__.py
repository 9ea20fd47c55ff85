"""External API client implementations."""

from .cdp_client import HttpCDPAnalyticsClient
from .notification_client import HttpNotificationClient

__all__ = [
    "HttpCDPAnalyticsClient",
    "HttpNotificationClient",
]
