"""
Bearer token gate applied to every request.

The comparison itself lives behind the CredentialVerifier protocol so a
stronger scheme (per-user tokens, signed JWTs) can be swapped in by overriding
get_credential_verifier, without any change to the route handlers.
"""
import hmac
import logging
from typing import Protocol

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.config import Settings, get_settings
from core.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

# auto_error=False so a missing header produces our 401 body instead of FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


class CredentialVerifier(Protocol):
    """Decides whether a presented bearer credential is acceptable."""

    def verify(self, credential: str) -> bool:
        """Return True if the credential grants access."""
        ...


class StaticTokenVerifier:
    """Accepts exactly one statically configured token."""

    def __init__(self, token: str) -> None:
        self._token = token.encode()

    def verify(self, credential: str) -> bool:
        """Compare in constant time against the configured token."""
        if not self._token:
            return False
        return hmac.compare_digest(credential.encode(), self._token)


def get_credential_verifier(
    settings: Settings = Depends(get_settings),
) -> CredentialVerifier:
    """Provide the verifier used by the access gate."""
    return StaticTokenVerifier(settings.api_token)


async def verify_api_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    verifier: CredentialVerifier = Depends(get_credential_verifier),
) -> None:
    """
    Reject the request unless it carries an accepted bearer token.

    Raises UnauthorizedError (401) when the Authorization header is missing,
    uses a scheme other than Bearer, or holds a token the verifier rejects.
    """
    if credentials is None or not verifier.verify(credentials.credentials):
        logger.warning("Unauthorized request to path %s", request.url.path)
        raise UnauthorizedError()
