# User account service: registration, lookup, overwrite-style update and deletion


import uuid

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from todo_app.config import settings
from todo_app.db_handlers import UserDBHandler, check_local_db
from todo_app.exceptions import ConflictError, DomainValidationError, NotFoundError
from todo_app.models import User
from todo_app.schemas import UserRegister, UserUpdate
from todo_app.utils.auth import get_password_hash, verify_password
from todo_app.utils.logger import setup_logger

logger = setup_logger(__name__)

_email_adapter = TypeAdapter(EmailStr)


def _require_text(value: str | None, field_name: str) -> str:
    if value is None:
        raise DomainValidationError(f"{field_name} cannot be null")
    if not value.strip():
        raise DomainValidationError(f"{field_name} cannot be blank")
    return value


def _require_email(value: str | None) -> str:
    _require_text(value, "Email")
    try:
        return _email_adapter.validate_python(value)
    except PydanticValidationError as e:
        raise DomainValidationError(
            "Email should be valid", details={"email": value}
        ) from e


class UserService:
    # Username and email are unique; the pre-checks give precise messages,
    # the unique indexes decide races.

    def __init__(self, db_handler: UserDBHandler | None = None):
        self.db_handler = db_handler or UserDBHandler()

    @check_local_db
    async def add_user(
        self, user_data: UserRegister, *, db: AsyncSession = None
    ) -> User:
        username = _require_text(user_data.username, "Username")
        email = _require_email(user_data.email)
        _require_text(user_data.password, "Password")

        if await self.db_handler.get_user_by_username(username, db=db):
            raise ConflictError("Username already exists", details={"username": username})
        if await self.db_handler.get_user_by_email(email, db=db):
            raise ConflictError("Email already exists", details={"email": email})

        try:
            user = await self.db_handler.create(
                {
                    "username": username,
                    "email": email,
                    "hashed_password": get_password_hash(user_data.password),
                    "roles": settings.default_user_role,
                },
                db=db,
            )
        except IntegrityError as e:
            raise ConflictError(
                "Username or email already exists",
                details={"username": username, "email": email},
            ) from e

        logger.info(f"[USER_SERVICE] Registered user '{user.username}' ({user.id})")
        return user

    @check_local_db
    async def get_user_by_username(
        self, username: str, *, db: AsyncSession = None
    ) -> User:
        _require_text(username, "Username")
        user = await self.db_handler.get_user_by_username(username, db=db)
        if user is None:
            raise NotFoundError("User not found", details={"username": username})
        return user

    @check_local_db
    async def get_user_by_email(self, email: str, *, db: AsyncSession = None) -> User:
        email = _require_email(email)
        user = await self.db_handler.get_user_by_email(email, db=db)
        if user is None:
            raise NotFoundError("User not found", details={"email": email})
        return user

    @check_local_db
    async def get_user_by_id(
        self, user_id: uuid.UUID | str, *, db: AsyncSession = None
    ) -> User:
        if user_id is None:
            raise DomainValidationError("Id cannot be null")
        if not isinstance(user_id, uuid.UUID):
            try:
                user_id = uuid.UUID(user_id)
            except ValueError as e:
                raise DomainValidationError(
                    "Id should be a valid UUID", details={"id": user_id}
                ) from e
        user = await self.db_handler.get(user_id, db=db)
        if user is None:
            raise NotFoundError("User not found", details={"id": str(user_id)})
        return user

    @check_local_db
    async def update_user(
        self, user_data: UserUpdate, *, db: AsyncSession = None
    ) -> User:
        """
        Overwrite the stored user that shares ``user_data.username``.

        Every field the caller set is written as-is; a new password is
        hashed first. Email uniqueness is left to the storage constraint.
        """
        username = _require_text(user_data.username, "Username")
        existing = await self.db_handler.get_user_by_username(username, db=db)
        if existing is None:
            raise NotFoundError("User not found", details={"username": username})

        update_data = user_data.model_dump(exclude_unset=True, exclude={"username"})
        if "email" in update_data:
            update_data["email"] = _require_email(update_data["email"])
        if "password" in update_data:
            password = _require_text(update_data.pop("password"), "Password")
            update_data["hashed_password"] = get_password_hash(password)
        if "roles" in update_data:
            _require_text(update_data["roles"], "Roles")

        try:
            user = await self.db_handler.update(existing, update_data, db=db)
        except IntegrityError as e:
            raise ConflictError(
                "Email already exists", details={"email": update_data.get("email")}
            ) from e

        logger.info(
            f"[USER_SERVICE] Updated user '{username}' fields: {sorted(update_data)}"
        )
        return user

    @check_local_db
    async def delete_user(self, username: str, *, db: AsyncSession = None) -> None:
        _require_text(username, "Username")
        removed = await self.db_handler.remove_by_username(username, db=db)
        if removed is None:
            raise NotFoundError("User not found", details={"username": username})
        logger.info(f"[USER_SERVICE] Deleted user '{username}'")

    @check_local_db
    async def get_all_users(self, *, db: AsyncSession = None) -> list[User]:
        # An empty store is reported as an error, unlike the task listing.
        users = await self.db_handler.get_all_users(db=db)
        if not users:
            raise NotFoundError("No users found")
        return users

    @check_local_db
    async def authenticate(
        self, username: str, password: str, *, db: AsyncSession = None
    ) -> User | None:
        """Return the user if the password matches its stored digest."""
        if not username or not password:
            return None
        user = await self.db_handler.get_user_by_username(username, db=db)
        if user is None or not verify_password(password, user.hashed_password):
            logger.info(f"[USER_SERVICE] Failed login attempt for '{username}'")
            return None
        return user
