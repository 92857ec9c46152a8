"""
Process-wide Spotzee handle.

Call initialize() once at startup, then use the module-level functions from
anywhere. Until initialize() has run every call is a no-op returning None,
so instrumentation does not need to check whether the SDK is set up.
"""

import builtins
import logging
import sys
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from .config import ClientConfig
from .errors import InvalidRequestError
from .models import UserProfile
from .session import SessionClient

logger = logging.getLogger(__name__)

GLOBAL_NAME = "Spotzee"

_instance: Optional[SessionClient] = None


def initialize(config: Optional[ClientConfig] = None, **options: Any) -> SessionClient:
    """
    Start a new global session, discarding any previous one.

    Args:
        config: Explicit configuration; when omitted it is read from the
            environment with **options as overrides
        **options: api_key, endpoint or timeout

    Returns:
        The new SessionClient

    Raises:
        InvalidRequestError: The configuration is incomplete, e.g. no API key
    """
    global _instance
    if config is None:
        try:
            config = ClientConfig.from_env(**options)
        except ValidationError as e:
            message = "; ".join(
                f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors()
            )
            raise InvalidRequestError(message) from e

    reset()
    _instance = SessionClient.from_config(config)
    logger.info(f"Spotzee initialized with session {_instance.anonymous_id}")
    return _instance


def reset() -> None:
    """Drop the global session, if any."""
    global _instance
    if _instance is not None:
        logger.info(f"Discarding Spotzee session {_instance.anonymous_id}")
        _instance.close()
    _instance = None


def get_instance() -> Optional[SessionClient]:
    """Return the global session, or None before initialize()."""
    return _instance


def _uninitialized(operation: str) -> None:
    logger.debug(f"Spotzee.{operation} called before initialize(); ignoring")


async def track(event: str, properties: Optional[Dict[str, Any]] = None, *,
                anonymous_id: Optional[str] = None,
                external_id: Optional[str] = None,
                user: Optional[Union[UserProfile, Dict[str, Any]]] = None) -> Optional[str]:
    """
    Track an event on the global session.

    Args:
        event: Event name
        properties: Free-form event properties
        anonymous_id: Overrides the session's anonymous id
        external_id: Overrides the remembered external id
        user: Profile fields to update alongside the event

    Returns:
        Raw response body, or None before initialize()
    """
    if _instance is None:
        return _uninitialized('track')
    return await _instance.track(
        event, properties, anonymous_id=anonymous_id, external_id=external_id, user=user
    )


async def identify(external_id: str, traits: Optional[Dict[str, Any]] = None,
                   **profile: Any) -> Optional[str]:
    """
    Identify the global session's user.

    Args:
        external_id: Known user identifier (required)
        traits: Free-form user traits
        **profile: anonymous_id, phone, email, timezone or locale

    Returns:
        Raw response body, or None before initialize()
    """
    if _instance is None:
        return _uninitialized('identify')
    return await _instance.identify(external_id, traits, **profile)


async def alias(external_id: str, *, anonymous_id: Optional[str] = None) -> Optional[str]:
    """
    Link the global session to a known user.

    Args:
        external_id: Known user identifier
        anonymous_id: Overrides the session's anonymous id

    Returns:
        Raw response body, or None before initialize()
    """
    if _instance is None:
        return _uninitialized('alias')
    return await _instance.alias(external_id, anonymous_id=anonymous_id)


async def register_device(device_id: str, os: str, model: str,
                          app_build: str, app_version: str, *,
                          token: Optional[str] = None,
                          os_version: Optional[str] = None) -> Optional[str]:
    """
    Register the current device for the global session.

    Returns:
        Raw response body, or None before initialize()
    """
    if _instance is None:
        return _uninitialized('register_device')
    return await _instance.register_device(
        device_id, os, model, app_build, app_version, token=token, os_version=os_version
    )


async def get_notifications(*, anonymous_id: Optional[str] = None,
                            external_id: Optional[str] = None,
                            cursor: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """
    Fetch one page of notifications for the global session.

    Args:
        anonymous_id: Overrides the session's anonymous id
        external_id: Overrides the remembered external id
        cursor: Cursor from the previous page, if any

    Returns:
        The page as sent by the API, or None before initialize()
    """
    if _instance is None:
        return _uninitialized('get_notifications')
    return await _instance.get_notifications(
        anonymous_id=anonymous_id, external_id=external_id, cursor=cursor
    )


async def mark_notification_read(notification_id: int, *,
                                 anonymous_id: Optional[str] = None,
                                 external_id: Optional[str] = None) -> Optional[str]:
    """Mark a notification as read; None before initialize()."""
    if _instance is None:
        return _uninitialized('mark_notification_read')
    return await _instance.mark_notification_read(
        notification_id, anonymous_id=anonymous_id, external_id=external_id
    )


def expose_to_host(name: str = GLOBAL_NAME) -> bool:
    """
    Publish the facade into an interactive host shell, if there is one.

    Inside IPython/Jupyter the module becomes available in the user
    namespace as `Spotzee`. Anywhere else this does nothing.

    Returns:
        True if the facade was exposed
    """
    get_ipython = getattr(builtins, 'get_ipython', None)
    if get_ipython is None:
        return False
    shell = get_ipython()
    if shell is None or not hasattr(shell, 'push'):
        return False
    shell.push({name: sys.modules[__name__]})
    return True
