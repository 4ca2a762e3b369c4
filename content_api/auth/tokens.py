"""
JWT issuing and verification.

Tokens are HS256-signed JWTs carrying the user id (sub), email, issued-at
(iat) and expiry (exp = iat + ttl). They are stateless: there is no
server-side revocation, a token stays valid until it expires.

The signing secret lives in a TokenService instance that is passed around
explicitly (see content_api.auth.dependencies.get_token_service) instead of
being read from a global at verification time.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from jwt.exceptions import (
    DecodeError,
    ExpiredSignatureError,
    InvalidTokenError,
)
from jwt.exceptions import InvalidSignatureError as JWTInvalidSignatureError

from content_api.errors import (
    InvalidSignatureError,
    MalformedTokenError,
    TokenExpiredError,
)
from content_api.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TTL_SECONDS = 3600


@dataclass(frozen=True)
class TokenClaims:
    """
    Decoded claims of a verified token.

    Attributes:
        sub: The user's id
        email: The user's email at the time the token was issued
        iat: Issued-at, seconds since the epoch
        exp: Expiry, seconds since the epoch (always iat + ttl)
    """
    sub: str
    email: Optional[str]
    iat: int
    exp: int


class TokenService:
    """Issues and verifies signed, time-limited bearer tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
    ):
        if not secret:
            raise ValueError("JWT signing secret is not configured")
        self._secret = secret
        self.algorithm = algorithm
        self.ttl_seconds = ttl_seconds

    def issue(
        self,
        subject: str,
        email: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> str:
        """
        Sign a token for the given subject.

        Args:
            subject: The user's id, stored in the 'sub' claim
            email: Optional email claim
            now: Issue time (defaults to the current UTC time)

        Returns:
            The encoded JWT
        """
        issued_at = now or datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            "sub": str(subject),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + timedelta(seconds=self.ttl_seconds)).timestamp()),
        }
        if email is not None:
            payload["email"] = email
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Verify a token's signature and expiry and return its claims.

        Raises:
            InvalidSignatureError: Signature does not match the secret
            TokenExpiredError: Current time is past the 'exp' claim
            MalformedTokenError: Token cannot be parsed or lacks required claims
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                leeway=0,
                options={"require": ["sub", "iat", "exp"]},
            )
        except ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except JWTInvalidSignatureError:
            raise InvalidSignatureError("Token signature is invalid")
        except DecodeError:
            raise MalformedTokenError("Token could not be decoded")
        except InvalidTokenError as e:
            logger.debug(f"Rejected token: {type(e).__name__}")
            raise MalformedTokenError("Token is missing required claims")

        return TokenClaims(
            sub=str(payload["sub"]),
            email=payload.get("email"),
            iat=int(payload["iat"]),
            exp=int(payload["exp"]),
        )
