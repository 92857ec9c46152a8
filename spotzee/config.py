"""
Client configuration.
"""

import os
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_ENDPOINT = "https://apix.spotzee.com/api"


class ClientConfig(BaseModel):
    """Settings shared by every client flavour."""
    api_key: str = Field(min_length=1)
    endpoint: str = DEFAULT_ENDPOINT
    timeout: Optional[float] = None  # None leaves it to requests (no timeout)

    @field_validator('endpoint')
    def strip_trailing_slash(cls, v):
        return v.rstrip('/')

    @classmethod
    def from_env(cls, **overrides: Any) -> "ClientConfig":
        """
        Build a config from SPOTZEE_* environment variables.

        Args:
            **overrides: Explicit values; these win over the environment

        Returns:
            A validated ClientConfig
        """
        values = {
            'api_key': os.getenv("SPOTZEE_API_KEY"),
            'endpoint': os.getenv("SPOTZEE_ENDPOINT"),
            'timeout': os.getenv("SPOTZEE_TIMEOUT"),
        }
        values.update(overrides)
        return cls(**{k: v for k, v in values.items() if v is not None})
