"""
Note Nexus Backend — Token Route
=================================

POST /jwt issues a bearer token for the email in the body. The client has
already signed the user in with its identity provider; this service only
turns that email into a token its own routes accept.
"""

import logging

from fastapi import APIRouter

from notenexus.auth.tokens import create_access_token
from notenexus.schemas.auth import TokenRequest, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post(
    "/jwt",
    response_model=TokenResponse,
    summary="Issue a bearer token",
)
async def issue_token(body: TokenRequest) -> TokenResponse:
    token = create_access_token(body.email)
    logger.debug("Issued token for %s", body.email)
    return TokenResponse(token=token)
