"""
User model for authentication and account management.

Users register with a username, an e-mail address and a password. Only a
bcrypt digest of the password is stored. Roles are kept as a comma-separated
tag string (``ROLE_USER`` by default) and are checked by the security chain.
"""

from sqlalchemy import Column, Index, String

from todo_app.models.base import Base, TimestampMixin, UUIDMixin


class User(Base, UUIDMixin, TimestampMixin):
    """Registered account that can sign in through the login form."""

    __tablename__ = "users"
    __table_args__ = (
        Index("ix_users_username", "username", unique=True),
        Index("ix_users_email", "email", unique=True),
    )

    username = Column(
        String(50),
        nullable=False,
        comment="Unique username for user identification and login",
    )

    email = Column(
        String(255),
        nullable=False,
        comment="Unique e-mail address of the account",
    )

    hashed_password = Column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password for secure authentication",
    )

    roles = Column(
        String(255),
        nullable=False,
        default="ROLE_USER",
        comment="Comma-separated role tags, e.g. 'ROLE_USER,ROLE_ADMIN'",
    )

    @property
    def role_list(self) -> list[str]:
        return [role.strip() for role in (self.roles or "").split(",") if role.strip()]

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"
