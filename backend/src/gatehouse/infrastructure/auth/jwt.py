"""JWT creation and verification using python-jose."""
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

from jose import JWTError, jwt

from gatehouse.config import JwtSettings
from gatehouse.domain.identity.entities import Account

USERNAME_CLAIM = "unique_name"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenIssuer:
    """Issues and verifies signed bearer tokens.

    Tokens are self-contained; expiry is the only way one stops being valid.
    """

    def __init__(self, settings: JwtSettings) -> None:
        self._settings = settings

    @property
    def ttl(self) -> timedelta:
        return timedelta(hours=self._settings.expiration_hours)

    def generate_token(self, account: Account) -> str:
        issued_at = _utcnow()
        payload: dict[str, Any] = {
            "sub": str(account.id),
            USERNAME_CLAIM: str(account.username),
            "jti": str(uuid4()),
            "iss": self._settings.issuer,
            "aud": self._settings.audience,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(payload, self._settings.secret_key, algorithm=self._settings.algorithm)

    def decode_token(self, token: str) -> dict[str, Any]:
        """Decode and validate signature, issuer, audience and expiry. Raises JWTError on failure."""
        return jwt.decode(
            token,
            self._settings.secret_key,
            algorithms=[self._settings.algorithm],
            audience=self._settings.audience,
            issuer=self._settings.issuer,
        )

    def subject_id(self, token: str) -> int:
        """Extract the numeric account id from a valid token or raise JWTError."""
        payload = self.decode_token(token)
        try:
            return int(payload["sub"])
        except (KeyError, TypeError, ValueError) as exc:
            raise JWTError("Token subject is not an account id") from exc
