"""
Pydantic models for request payloads and API responses.
"""

from datetime import datetime
from typing import Annotated, Any, Dict, Generic, List, Literal, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from .errors import InvalidRequestError

T = TypeVar('T')

DEVICE_FIELDS = ('device_id', 'os', 'model', 'app_build', 'app_version')


class PayloadModel(BaseModel):
    """Base for everything the SDK sends."""
    model_config = ConfigDict(extra='forbid')

    @classmethod
    def build(cls, **fields: Any):
        """Validate fields, raising InvalidRequestError instead of pydantic's error."""
        try:
            return cls(**fields)
        except ValidationError as e:
            message = "; ".join(err['msg'] for err in e.errors())
            raise InvalidRequestError(message) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a request body, leaving out unset top-level fields."""
        data = {}
        for name in type(self).model_fields:
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, PayloadModel):
                value = value.to_dict()
            data[name] = value
        return data


class IdentifiedPayload(PayloadModel):
    """Payload carrying at least one of the two identifiers."""
    anonymous_id: Optional[str] = None
    external_id: Optional[str] = None

    @model_validator(mode='after')
    def check_identity(self):
        if not self.anonymous_id and not self.external_id:
            raise ValueError("Must provide either anonymous_id or external_id")
        return self


class Identity(IdentifiedPayload):
    """Who a call is made on behalf of."""

    def headers(self) -> Dict[str, str]:
        """Identity headers for GET requests."""
        headers = {}
        if self.anonymous_id:
            headers['x-anonymous-id'] = self.anonymous_id
        if self.external_id:
            headers['x-external-id'] = self.external_id
        return headers


class UserProfile(PayloadModel):
    """Profile fields that can ride along with a tracked event."""
    email: Optional[str] = None
    phone: Optional[str] = None
    timezone: Optional[str] = None
    locale: Optional[str] = None
    data: Optional[Dict[str, Any]] = None


class TrackRequest(IdentifiedPayload):
    name: str = Field(min_length=1)
    user: Optional[UserProfile] = None
    data: Optional[Dict[str, Any]] = None


class IdentifyRequest(PayloadModel):
    anonymous_id: Optional[str] = None
    external_id: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    timezone: Optional[str] = None
    locale: Optional[str] = None
    data: Optional[Dict[str, Any]] = None

    @model_validator(mode='after')
    def check_external_id(self):
        if not self.external_id:
            raise ValueError("external_id is required to identify a user")
        return self


class AliasRequest(PayloadModel):
    anonymous_id: Optional[str] = None
    external_id: Optional[str] = None

    @model_validator(mode='after')
    def check_both_ids(self):
        if not self.anonymous_id or not self.external_id:
            raise ValueError("alias requires both anonymous_id and external_id")
        return self


class DeviceRequest(IdentifiedPayload):
    device_id: Optional[str] = None
    token: Optional[str] = None
    os: Optional[str] = None
    os_version: Optional[str] = None
    model: Optional[str] = None
    app_build: Optional[str] = None
    app_version: Optional[str] = None

    @model_validator(mode='before')
    @classmethod
    def check_device_fields(cls, values):
        if isinstance(values, dict):
            missing = [name for name in DEVICE_FIELDS if not values.get(name)]
            if missing:
                raise ValueError(f"Missing required device fields: {', '.join(missing)}")
        return values


# Responses. Bodies are consumed as-is, so both camelCase and snake_case
# keys are accepted.

class ResponseModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BannerContent(ResponseModel):
    type: Literal['banner']
    title: str
    body: str
    custom: Optional[Dict[str, Union[str, int, float]]] = None


class AlertContent(ResponseModel):
    type: Literal['alert']
    title: str
    body: str
    custom: Optional[Dict[str, Union[str, int, float]]] = None
    html: str
    read_on_show: Optional[bool] = None
    image: Optional[str] = None


class HtmlContent(ResponseModel):
    type: Literal['html']
    title: str
    body: str
    custom: Optional[Dict[str, Union[str, int, float]]] = None
    html: str
    read_on_show: Optional[bool] = None


NotificationContent = Annotated[
    Union[BannerContent, AlertContent, HtmlContent],
    Field(discriminator='type'),
]


class Notification(ResponseModel):
    """An in-app notification as returned by the API."""
    id: int
    project_id: int
    user_id: int
    content_type: Literal['banner', 'alert', 'html']
    content: NotificationContent
    read_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @property
    def is_read(self) -> bool:
        return self.read_at is not None


class PagedResponse(ResponseModel, Generic[T]):
    """One page of results plus the cursor for the next page."""
    results: List[T] = Field(default_factory=list)
    cursor: Optional[str] = None

    @property
    def has_more(self) -> bool:
        return bool(self.cursor)


NotificationPage = PagedResponse[Notification]
