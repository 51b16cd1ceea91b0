"""
User ORM model.

Accounts authenticated by email + password and authorized by role.

Dependencies: sqlalchemy, docmanager.boundary.db.base
System role: Identity store persistence
"""

from sqlalchemy import Boolean, Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from docmanager.boundary.db.base import Base, TimestampMixin, UUIDMixin
from docmanager.core.roles import UserRole


class UserModel(Base, UUIDMixin, TimestampMixin):
    """
    User ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        email: Unique login email, compared exactly as stored
        password_hash: bcrypt hash, never returned by the API
        first_name: Given name
        last_name: Family name
        role: ADMIN / EDITOR / VIEWER (default VIEWER)
        is_active: Inactive users cannot authenticate
        created_at: Registration timestamp (UTC)
        updated_at: Last modification timestamp (UTC)

    Relationships:
        documents: Documents uploaded by this user
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)

    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    first_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, native_enum=False),
        nullable=False,
        default=UserRole.VIEWER,
    )

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    documents = relationship(
        "DocumentModel",
        back_populates="uploaded_by",
        cascade="all, delete-orphan",
    )
