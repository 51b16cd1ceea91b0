"""
Authentication service orchestrator.

Registers accounts, verifies credentials, issues bearer tokens and resolves
the acting user behind a token.

Dependencies: docmanager.boundary.db.CRUD, docmanager.core.security
System role: Authentication use case orchestration
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from docmanager.boundary.db.CRUD.user_crud import user_crud
from docmanager.boundary.db.models.user_model import UserModel
from docmanager.core.authorization import Actor
from docmanager.core.exceptions import ConflictError, UnauthorizedError
from docmanager.core.roles import UserRole
from docmanager.core.security import TokenIssuer, hash_password, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    """Authentication service orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        token_issuer: TokenIssuer,
        hash_rounds: int = 12,
    ) -> None:
        """
        Initialize auth service.

        Args:
            db: Async SQLAlchemy session
            token_issuer: Signs and verifies access tokens
            hash_rounds: bcrypt cost factor for new password hashes
        """
        self.db = db
        self.token_issuer = token_issuer
        self.hash_rounds = hash_rounds

    def _issue_token(self, user: UserModel) -> str:
        return self.token_issuer.issue(user.id, user.email, user.role.value)

    async def register(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
    ) -> tuple[str, UserModel]:
        """
        Register a new viewer account and log it in.

        Args:
            email: Login email (must be unused)
            password: Plaintext password
            first_name: Given name
            last_name: Family name

        Returns:
            tuple[str, UserModel]: (access_token, created user)

        Raises:
            ConflictError: If the email is already registered
        """
        if await user_crud.email_exists(self.db, email):
            raise ConflictError(
                "User with this email already exists", details={"email": email}
            )

        user = await user_crud.create(
            self.db,
            email=email,
            password_hash=hash_password(password, self.hash_rounds),
            first_name=first_name,
            last_name=last_name,
            role=UserRole.VIEWER,
            is_active=True,
        )
        await self.db.commit()

        logger.info("User registered", extra={"user_id": str(user.id), "email": email})
        return self._issue_token(user), user

    async def login(self, email: str, password: str) -> tuple[str, UserModel]:
        """
        Verify credentials and issue an access token.

        Unknown email, wrong password and inactive accounts all fail with the
        same message.

        Returns:
            tuple[str, UserModel]: (access_token, authenticated user)

        Raises:
            UnauthorizedError: If the credentials are rejected
        """
        user = await user_crud.get_by_email(self.db, email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Login rejected", extra={"email": email})
            raise UnauthorizedError("Invalid credentials")
        if not user.is_active:
            logger.warning("Login rejected for inactive user", extra={"user_id": str(user.id)})
            raise UnauthorizedError("Invalid credentials")

        logger.info("User logged in", extra={"user_id": str(user.id)})
        return self._issue_token(user), user

    async def resolve_actor(self, token: str) -> Actor:
        """
        Resolve the acting user behind a bearer token.

        The role is read from the stored user, not the token, so role
        changes and deactivation take effect immediately.

        Raises:
            UnauthorizedError: Invalid token, or user missing or inactive
        """
        claims = self.token_issuer.verify(token)
        user = await user_crud.get_by_id(self.db, claims.user_id)
        if user is None or not user.is_active:
            raise UnauthorizedError("User not found or inactive")
        return Actor(id=user.id, role=user.role)
