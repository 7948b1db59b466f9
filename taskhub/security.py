"""Password hashing and signed token issuing/verification."""

import hashlib
import time
from dataclasses import dataclass

import bcrypt
from jose import JWTError, jwt

from .utils import new_id


def _pw_prehash(pw: str) -> bytes:
    """Pre-hash to avoid bcrypt's 72-byte input limit."""
    return hashlib.sha256(pw.encode("utf-8")).digest()


def hash_password(pw: str, *, rounds: int = 12) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_pw_prehash(pw), salt).decode("utf-8")


def verify_password(pw: str, pw_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_pw_prehash(pw), pw_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash.
        return False


class TokenError(Exception):
    """Signature, expiry or claim check failed."""


@dataclass(frozen=True)
class TokenService:
    """Stateless signing of time-limited `sub` claims.

    Access and refresh tokens use independent secrets and lifetimes, so one
    kind can never be accepted as the other.
    """

    access_secret: str
    refresh_secret: str
    access_ttl: int = 3600
    refresh_ttl: int = 7 * 24 * 3600
    algorithm: str = "HS256"

    def _encode(self, user_id: str, secret: str, ttl: int) -> str:
        now = int(time.time())
        claims = {"sub": user_id, "iat": now, "exp": now + ttl, "jti": new_id()}
        return jwt.encode(claims, secret, algorithm=self.algorithm)

    def _decode(self, token: str, secret: str) -> str:
        try:
            payload = jwt.decode(token, secret, algorithms=[self.algorithm])
        except JWTError as exc:
            raise TokenError(str(exc)) from exc
        user_id = payload.get("sub")
        if not user_id:
            raise TokenError("Token has no subject")
        return user_id

    def issue_access_token(self, user_id: str) -> str:
        return self._encode(user_id, self.access_secret, self.access_ttl)

    def issue_refresh_token(self, user_id: str) -> str:
        return self._encode(user_id, self.refresh_secret, self.refresh_ttl)

    def verify_access_token(self, token: str) -> str:
        """Return the user id carried by a valid access token."""
        return self._decode(token, self.access_secret)

    def verify_refresh_token(self, token: str) -> str:
        """Return the user id carried by a valid refresh token."""
        return self._decode(token, self.refresh_secret)
