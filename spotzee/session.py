"""
Client that remembers the identity of the current session.
"""

import logging
import uuid
from typing import Any, Dict, Optional, Union

from .client import Client
from .config import DEFAULT_ENDPOINT, ClientConfig
from .models import AliasRequest, IdentifyRequest, UserProfile

logger = logging.getLogger(__name__)


class SessionClient:
    """
    Wraps a Client and fills in identity from session state.

    A random anonymous id is generated when the session starts and kept for
    its whole lifetime. Once identify() or alias() names the user, their
    external id is sent along with every later call too. Identity passed
    explicitly to a call always wins over the remembered one.
    """

    def __init__(self, api_key: str, endpoint: str = DEFAULT_ENDPOINT,
                 timeout: Optional[float] = None):
        """
        Start a new session with a fresh anonymous id.

        Args:
            api_key: API key for authentication
            endpoint: API base URL
            timeout: Request timeout in seconds, None for no timeout
        """
        self.client = Client(api_key, endpoint=endpoint, timeout=timeout)
        self._anonymous_id = str(uuid.uuid4())
        self._external_id: Optional[str] = None

    @classmethod
    def from_config(cls, config: ClientConfig) -> "SessionClient":
        return cls(config.api_key, endpoint=config.endpoint, timeout=config.timeout)

    @property
    def anonymous_id(self) -> str:
        return self._anonymous_id

    @property
    def external_id(self) -> Optional[str]:
        return self._external_id

    def _remember(self, external_id: str) -> None:
        if external_id != self._external_id:
            logger.info(f"Session {self._anonymous_id} identified as {external_id}")
        self._external_id = external_id

    async def track(self, event: str, properties: Optional[Dict[str, Any]] = None, *,
                    anonymous_id: Optional[str] = None,
                    external_id: Optional[str] = None,
                    user: Optional[Union[UserProfile, Dict[str, Any]]] = None) -> str:
        """
        Track an event for this session.

        Args:
            event: Event name
            properties: Free-form event properties
            anonymous_id: Overrides the session's anonymous id
            external_id: Overrides the remembered external id
            user: Profile fields to update alongside the event

        Returns:
            Raw response body
        """
        return await self.client.track(
            event,
            properties,
            anonymous_id=_pick(anonymous_id, self._anonymous_id),
            external_id=_pick(external_id, self._external_id),
            user=user,
        )

    async def identify(self, external_id: str, traits: Optional[Dict[str, Any]] = None, *,
                       anonymous_id: Optional[str] = None,
                       phone: Optional[str] = None,
                       email: Optional[str] = None,
                       timezone: Optional[str] = None,
                       locale: Optional[str] = None) -> str:
        """
        Identify the session's user and remember their external id.

        The external id is recorded once the whole request passes
        validation, even if the request itself later fails.

        Args:
            external_id: Known user identifier (required)
            traits: Free-form user traits
            anonymous_id: Overrides the session's anonymous id

        Returns:
            Raw response body
        """
        request = IdentifyRequest.build(
            anonymous_id=_pick(anonymous_id, self._anonymous_id),
            external_id=external_id,
            phone=phone,
            email=email,
            timezone=timezone,
            locale=locale,
            data=traits,
        )
        self._remember(request.external_id)
        return await self.client.send_identify(request)

    async def alias(self, external_id: str, *, anonymous_id: Optional[str] = None) -> str:
        """
        Link this session (or the given anonymous id) to a known user.

        Args:
            external_id: Known user identifier, remembered for later calls
            anonymous_id: Overrides the session's anonymous id

        Returns:
            Raw response body
        """
        request = AliasRequest.build(
            anonymous_id=_pick(anonymous_id, self._anonymous_id),
            external_id=external_id,
        )
        self._remember(request.external_id)
        return await self.client.send_alias(request)

    async def register_device(self, device_id: str, os: str, model: str,
                              app_build: str, app_version: str, *,
                              token: Optional[str] = None,
                              os_version: Optional[str] = None) -> str:
        """
        Register the current device for this session's identity.

        Args:
            device_id: Stable device identifier
            os: Operating system name
            model: Device model
            app_build: Build number of the host app
            app_version: Version of the host app
            token: Push token, if any
            os_version: Operating system version

        Returns:
            Raw response body
        """
        return await self.client.register_device(
            device_id, os, model, app_build, app_version,
            anonymous_id=self._anonymous_id,
            external_id=self._external_id,
            token=token,
            os_version=os_version,
        )

    async def get_notifications(self, *, anonymous_id: Optional[str] = None,
                                external_id: Optional[str] = None,
                                cursor: Optional[str] = None) -> Dict[str, Any]:
        """
        Fetch one page of notifications for this session.

        Args:
            anonymous_id: Overrides the session's anonymous id
            external_id: Overrides the remembered external id
            cursor: Cursor from the previous page, if any

        Returns:
            The page as sent by the API
        """
        return await self.client.get_notifications(
            anonymous_id=_pick(anonymous_id, self._anonymous_id),
            external_id=_pick(external_id, self._external_id),
            cursor=cursor,
        )

    async def mark_notification_read(self, notification_id: int, *,
                                     anonymous_id: Optional[str] = None,
                                     external_id: Optional[str] = None) -> str:
        """Mark a notification as read for this session."""
        return await self.client.mark_notification_read(
            notification_id,
            anonymous_id=_pick(anonymous_id, self._anonymous_id),
            external_id=_pick(external_id, self._external_id),
        )

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self.client.close()


def _pick(value: Optional[str], remembered: Optional[str]) -> Optional[str]:
    return remembered if value is None else value
