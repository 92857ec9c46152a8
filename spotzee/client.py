"""
Stateless client for the Spotzee API.
"""

from typing import Any, Dict, Optional, Union

from .config import DEFAULT_ENDPOINT, ClientConfig
from .errors import InvalidRequestError
from .models import (
    AliasRequest, DeviceRequest, IdentifyRequest, Identity, TrackRequest, UserProfile
)
from .transport import Transport


class Client:
    """
    Client where every call carries its own identity.

    Nothing is remembered between calls; see SessionClient for a client
    that keeps track of who the current user is.
    """

    def __init__(self, api_key: str, endpoint: str = DEFAULT_ENDPOINT,
                 timeout: Optional[float] = None):
        """
        Initialize the client.

        Args:
            api_key: API key for authentication
            endpoint: API base URL
            timeout: Request timeout in seconds, None for no timeout
        """
        self.transport = Transport(api_key, endpoint=endpoint, timeout=timeout)

    @classmethod
    def from_config(cls, config: ClientConfig) -> "Client":
        return cls(config.api_key, endpoint=config.endpoint, timeout=config.timeout)

    async def track(self, event: str, properties: Optional[Dict[str, Any]] = None, *,
                    anonymous_id: Optional[str] = None,
                    external_id: Optional[str] = None,
                    user: Optional[Union[UserProfile, Dict[str, Any]]] = None) -> str:
        """
        Track an event.

        Args:
            event: Event name
            properties: Free-form event properties
            anonymous_id: Anonymous session identifier
            external_id: Known user identifier
            user: Profile fields to update alongside the event

        Returns:
            Raw response body
        """
        request = TrackRequest.build(
            name=event,
            anonymous_id=anonymous_id,
            external_id=external_id,
            user=user,
            data=properties,
        )
        return await self.transport.post('events', [request.to_dict()])

    async def identify(self, external_id: str, traits: Optional[Dict[str, Any]] = None, *,
                       anonymous_id: Optional[str] = None,
                       phone: Optional[str] = None,
                       email: Optional[str] = None,
                       timezone: Optional[str] = None,
                       locale: Optional[str] = None) -> str:
        """
        Attach traits and profile fields to a known user.

        Args:
            external_id: Known user identifier (required)
            traits: Free-form user traits
            anonymous_id: Anonymous session to associate with the user

        Returns:
            Raw response body
        """
        request = IdentifyRequest.build(
            anonymous_id=anonymous_id,
            external_id=external_id,
            phone=phone,
            email=email,
            timezone=timezone,
            locale=locale,
            data=traits,
        )
        return await self.send_identify(request)

    async def send_identify(self, request: IdentifyRequest) -> str:
        """Post an already validated identify request."""
        return await self.transport.post('identify', request.to_dict())

    async def alias(self, anonymous_id: str, external_id: str) -> str:
        """Link an anonymous session to a known user."""
        request = AliasRequest.build(anonymous_id=anonymous_id, external_id=external_id)
        return await self.send_alias(request)

    async def send_alias(self, request: AliasRequest) -> str:
        """Post an already validated alias request."""
        return await self.transport.post('alias', request.to_dict())

    async def register_device(self, device_id: str, os: str, model: str,
                              app_build: str, app_version: str, *,
                              anonymous_id: Optional[str] = None,
                              external_id: Optional[str] = None,
                              token: Optional[str] = None,
                              os_version: Optional[str] = None) -> str:
        """
        Register a device, optionally with a push token.

        Raises:
            InvalidRequestError: A device field or both identifiers are missing
        """
        request = DeviceRequest.build(
            anonymous_id=anonymous_id,
            external_id=external_id,
            device_id=device_id,
            token=token,
            os=os,
            os_version=os_version,
            model=model,
            app_build=app_build,
            app_version=app_version,
        )
        return await self.transport.post('devices', request.to_dict())

    async def get_notifications(self, *, anonymous_id: str,
                                external_id: Optional[str] = None,
                                cursor: Optional[str] = None) -> Dict[str, Any]:
        """
        Fetch one page of notifications.

        Args:
            anonymous_id: Anonymous session identifier
            external_id: Known user identifier
            cursor: Cursor from the previous page, if any

        Returns:
            The page as sent by the API: {'results': [...], 'cursor': ...}
        """
        identity = _notification_identity(anonymous_id, external_id)
        return await self.transport.get('notifications', identity.headers(), cursor)

    async def mark_notification_read(self, notification_id: int, *, anonymous_id: str,
                                     external_id: Optional[str] = None) -> str:
        """Mark a notification as read."""
        identity = _notification_identity(anonymous_id, external_id)
        return await self.transport.put(f'notifications/{notification_id}', identity.to_dict())

    def close(self) -> None:
        self.transport.close()


def _notification_identity(anonymous_id: Optional[str], external_id: Optional[str]) -> Identity:
    # The notifications endpoints key on the x-anonymous-id header
    if not anonymous_id:
        raise InvalidRequestError("anonymous_id is required for notifications")
    return Identity.build(anonymous_id=anonymous_id, external_id=external_id)
