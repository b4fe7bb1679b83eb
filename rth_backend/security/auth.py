"""
JWT issuing and verification for admin sessions.

A ``TokenIssuer`` is built once at startup from the signing secret and the
token lifetime, and is shared read-only by every request afterwards.
"""

from datetime import timedelta
from typing import Any, Dict, Union
from uuid import UUID

from jose import JWTError, jwt

from rth_backend.fastapi.core.exceptions import AuthenticationError
from rth_backend.fastapi.core.utils import utcnow

ADMIN_ID_CLAIM = "adminId"

DEFAULT_EXPIRES_IN = timedelta(hours=24)


class TokenIssuer:
    """
    Create and verify signed, time-limited admin tokens.

    Args:
        secret: HMAC signing key; an empty key is refused
        algorithm: JWT signing algorithm
        expires_in: Lifetime of issued tokens

    Raises:
        RuntimeError: If no signing secret is configured
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = DEFAULT_EXPIRES_IN,
    ):
        if not secret:
            raise RuntimeError("JWT_SECRET is not configured; refusing to issue unsigned tokens")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    def issue(self, admin_id: Union[UUID, str]) -> str:
        """
        Create a JWT access token carrying the admin identifier.

        Example:
            >>> issuer = TokenIssuer("secret")
            >>> token = issuer.issue("123e4567-e89b-12d3-a456-426614174000")
            >>> issuer.verify(token)["adminId"]
            '123e4567-e89b-12d3-a456-426614174000'
        """
        now = utcnow()
        to_encode = {
            ADMIN_ID_CLAIM: str(admin_id),
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(to_encode, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """
        Verify signature and expiry and return the decoded payload.

        Raises:
            AuthenticationError: If the token is invalid, expired, or malformed
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except JWTError:
            raise AuthenticationError(
                "Token tidak valid atau sudah kedaluwarsa",
                code="INVALID_OR_EXPIRED_TOKEN",
            )

        if not payload.get(ADMIN_ID_CLAIM):
            raise AuthenticationError(
                "Token tidak valid atau sudah kedaluwarsa",
                code="INVALID_OR_EXPIRED_TOKEN",
            )
        return payload
