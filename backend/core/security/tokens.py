"""
JWT token service for authentication.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt


@dataclass
class TokenPayload:
    """JWT token payload structure."""

    sub: str  # Subject (account ID)
    exp: datetime
    iat: datetime
    type: str
    email: str | None = None


class TokenService:
    """Service for creating and validating signed, time-limited bearer tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 60 * 24,
    ):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._access_token_expire_minutes = access_token_expire_minutes

    @property
    def access_token_expire_seconds(self) -> int:
        return self._access_token_expire_minutes * 60

    def create_access_token(
        self,
        account_id: str,
        email: str | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        """
        Create an access token.

        Args:
            account_id: Account ID to encode in the token
            email: Optional email to include
            expires_delta: Override the configured lifetime

        Returns:
            Encoded JWT access token
        """
        now = datetime.now(UTC)
        expire = now + (expires_delta or timedelta(minutes=self._access_token_expire_minutes))

        payload = {
            "sub": account_id,
            "exp": expire,
            "iat": now,
            "type": "access",
        }
        if email:
            payload["email"] = email

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def decode_token(self, token: str) -> TokenPayload | None:
        """
        Decode and validate a JWT token.

        Returns:
            TokenPayload if valid, None if invalid or expired
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
            )

            for required in ("sub", "exp", "type"):
                if required not in payload:
                    raise JWTError(f"Missing required field: {required}")

            return TokenPayload(
                sub=payload["sub"],
                exp=datetime.fromtimestamp(payload["exp"], tz=UTC),
                iat=datetime.fromtimestamp(payload.get("iat", 0), tz=UTC),
                type=payload["type"],
                email=payload.get("email"),
            )
        except JWTError:
            return None

    def verify_access_token(self, token: str) -> TokenPayload | None:
        """Return the payload for a valid access token, None otherwise."""
        payload = self.decode_token(token)
        if payload and payload.type == "access":
            return payload
        return None
