from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from werkzeug.security import check_password_hash

from ..core.constants import DEFAULT_SESSION_MAX_AGE_SECONDS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What a signed session token carries."""

    username: str
    role: Role


class AuthService:
    """Use case: log in and validate the caller-held session token."""

    _SALT = "coaching-attendance-session"

    def __init__(
        self,
        *,
        secret_key: str,
        username: str,
        password_hash: str,
        max_age_seconds: int = DEFAULT_SESSION_MAX_AGE_SECONDS,
    ):
        self._serializer = URLSafeTimedSerializer(secret_key, salt=self._SALT)
        self._username = username
        self._password_hash = password_hash
        self._max_age = int(max_age_seconds)

    def login(self, username: str, password: str) -> str:
        username = (username or "").strip()
        try:
            ok = bool(self._password_hash) and check_password_hash(self._password_hash, password or "")
        except ValueError:
            ok = False

        if not ok or not hmac.compare_digest(username.encode("utf-8"), self._username.encode("utf-8")):
            logger.info("Rejected login for %r", username)
            raise AuthenticationError("Invalid username or password")

        return self._serializer.dumps({"username": username, "role": Role.ADMIN.value})

    def require(self, token: str) -> SessionUser:
        if not token:
            raise AuthenticationError("Please log in to continue")
        try:
            data = self._serializer.loads(token, max_age=self._max_age)
        except SignatureExpired:
            raise AuthenticationError("Session expired, please log in again")
        except BadSignature:
            raise AuthenticationError("Invalid session token")
        return SessionUser(username=data["username"], role=Role(data["role"]))
