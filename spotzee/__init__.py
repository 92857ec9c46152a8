"""
Spotzee SDK

Python SDK for tracking events, identifying users, registering devices and
reading in-app notifications through the Spotzee API.
"""

from .client import Client
from .config import ClientConfig, DEFAULT_ENDPOINT
from .errors import ApiError, InvalidRequestError, SpotzeeError
from .facade import (
    alias,
    expose_to_host,
    get_instance,
    get_notifications,
    identify,
    initialize,
    mark_notification_read,
    register_device,
    reset,
    track,
)
from .keys import normalize_keys
from .models import Notification, NotificationPage, PagedResponse, UserProfile
from .session import SessionClient

__version__ = "1.0.0"

__all__ = [
    "Client",
    "SessionClient",
    "ClientConfig",
    "DEFAULT_ENDPOINT",
    "SpotzeeError",
    "ApiError",
    "InvalidRequestError",
    "Notification",
    "NotificationPage",
    "PagedResponse",
    "UserProfile",
    "normalize_keys",
    "initialize",
    "reset",
    "get_instance",
    "track",
    "identify",
    "alias",
    "register_device",
    "get_notifications",
    "mark_notification_read",
    "expose_to_host",
]

expose_to_host()
