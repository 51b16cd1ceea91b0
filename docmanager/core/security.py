"""
Password hashing and access token helpers.

Passwords are stored as bcrypt hashes (``$2b$<rounds>$...``). Access tokens
are HS256 JWTs carrying the user id (sub), email and role.

Dependencies: bcrypt, jwt (PyJWT)
System role: Credential verification and token issuance
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import UUID

import bcrypt
import jwt

from docmanager.core.exceptions import UnauthorizedError

# bcrypt ignores input past 72 bytes; newer releases raise instead
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 12) -> str:
    """
    Hash a plaintext password with a random salt.

    Args:
        password: Plaintext password
        rounds: bcrypt cost factor (log2 of the work)

    Returns:
        str: Encoded hash safe to store
    """
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds)).decode("ascii")


def verify_password(password: str, encoded: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_encode(password), encoded.encode("ascii"))
    except (ValueError, UnicodeEncodeError):
        return False


@dataclass(frozen=True)
class TokenClaims:
    """Verified access token payload."""

    user_id: UUID
    email: str
    role: str


class TokenIssuer:
    """Issues and verifies signed access tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 1440) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._expire = timedelta(minutes=expire_minutes)

    def issue(self, user_id: UUID, email: str, role: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "email": email,
            "role": role,
            "iat": now,
            "exp": now + self._expire,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a token.

        Raises:
            UnauthorizedError: Expired, malformed or wrongly signed token
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
            return TokenClaims(
                user_id=UUID(payload["sub"]),
                email=payload.get("email", ""),
                role=payload.get("role", ""),
            )
        except jwt.ExpiredSignatureError as e:
            raise UnauthorizedError("Token has expired") from e
        except (jwt.InvalidTokenError, KeyError, ValueError) as e:
            raise UnauthorizedError("Invalid token") from e
