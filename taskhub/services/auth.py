"""Registration, login, token rotation and identity resolution."""

import logging
import sqlite3
from pathlib import Path

from .. import db
from ..errors import (
    InvalidCredentialsError,
    InvalidTokenError,
    NoTokenError,
    UnauthorizedError,
    UserExistsError,
)
from ..models import AuthData, Role, TokenPair, UserPublic
from ..security import TokenError, TokenService, hash_password, verify_password
from ..utils import new_id, now_ts

logger = logging.getLogger(__name__)


def public_user(user: dict) -> UserPublic:
    """Strip credentials from a stored user."""
    return UserPublic(
        id=user["id"],
        username=user["username"],
        email=user["email"],
        role=user["role"],
        created_at=user["created_at"],
    )


class AuthService:
    """Use case: credentials and sessions.

    A user holds at most one live refresh token; issuing a new pair replaces
    it, so an older refresh token stops working.
    """

    def __init__(self, db_path: Path, tokens: TokenService, *, bcrypt_rounds: int = 12):
        self._db_path = db_path
        self._tokens = tokens
        self._bcrypt_rounds = bcrypt_rounds
        # Verified against when the email is unknown.
        self._dummy_hash = hash_password(new_id(), rounds=bcrypt_rounds)

    def _issue_pair(self, user_id: str) -> TokenPair:
        return TokenPair(
            access_token=self._tokens.issue_access_token(user_id),
            refresh_token=self._tokens.issue_refresh_token(user_id),
            expires_in=self._tokens.access_ttl,
        )

    def register(self, *, username: str, email: str, password: str) -> AuthData:
        password_hash = hash_password(password, rounds=self._bcrypt_rounds)
        user_id = new_id()
        tokens = self._issue_pair(user_id)

        with db.get_db(self._db_path, immediate=True) as conn:
            if db.users.find_user_by_email_or_username(conn, email, username):
                raise UserExistsError()
            try:
                db.users.create_user(
                    conn,
                    user_id=user_id,
                    username=username,
                    email=email,
                    password_hash=password_hash,
                    role=Role.USER.value,
                    created_at=now_ts(),
                )
            except sqlite3.IntegrityError as exc:
                raise UserExistsError() from exc
            db.users.set_refresh_token(conn, user_id, tokens.refresh_token, now_ts())
            user = db.users.get_user_by_id(conn, user_id)

        logger.info("Registered user id=%s username=%s", user_id, username)
        return AuthData(user=public_user(user), tokens=tokens)

    def login(self, *, email: str, password: str) -> AuthData:
        with db.get_db(self._db_path) as conn:
            user = db.users.get_user_by_email(conn, email)

        # Same error for unknown email and wrong password.
        pw_hash = user["password_hash"] if user else self._dummy_hash
        if not verify_password(password, pw_hash) or not user:
            logger.info("Failed login for email=%s", email)
            raise InvalidCredentialsError()

        tokens = self._issue_pair(user["id"])
        with db.get_db(self._db_path) as conn:
            db.users.set_refresh_token(conn, user["id"], tokens.refresh_token, now_ts())

        logger.info("User id=%s logged in", user["id"])
        return AuthData(user=public_user(user), tokens=tokens)

    def refresh(self, refresh_token: str | None) -> TokenPair:
        if not refresh_token:
            raise NoTokenError()

        try:
            user_id = self._tokens.verify_refresh_token(refresh_token)
        except TokenError as exc:
            logger.info("Rejected refresh token: %s", exc)
            raise InvalidTokenError() from exc

        tokens = self._issue_pair(user_id)
        with db.get_db(self._db_path, immediate=True) as conn:
            rotated = db.users.rotate_refresh_token(
                conn, user_id, refresh_token, tokens.refresh_token, now_ts()
            )
        if not rotated:
            logger.info("Refresh token for user id=%s is not the live one", user_id)
            raise InvalidTokenError()
        return tokens

    def logout(self, user_id: str) -> None:
        with db.get_db(self._db_path) as conn:
            db.users.set_refresh_token(conn, user_id, None, now_ts())
        logger.info("User id=%s logged out", user_id)

    def resolve_identity(self, access_token: str | None) -> UserPublic:
        """Map a bearer token to its user. Every failure looks the same."""
        if not access_token:
            raise UnauthorizedError()
        try:
            user_id = self._tokens.verify_access_token(access_token)
        except TokenError as exc:
            raise UnauthorizedError() from exc

        with db.get_db(self._db_path) as conn:
            user = db.users.get_user_by_id(conn, user_id)
        if not user:
            raise UnauthorizedError()
        return public_user(user)
