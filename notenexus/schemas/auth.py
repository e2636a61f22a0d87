"""
Note Nexus Backend — Token Schemas
===================================
"""

from pydantic import ConfigDict, Field

from notenexus.schemas.common import CamelModel


class TokenRequest(CamelModel):
    """Body of POST /jwt. Extra profile fields from the client are ignored."""

    model_config = ConfigDict(extra="ignore")

    email: str = Field(min_length=3, max_length=320)


class TokenResponse(CamelModel):
    token: str
