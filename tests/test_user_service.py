"""
Tests for the user service against a private in-memory database.
"""

import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from todo_app.exceptions import ConflictError, DomainValidationError, NotFoundError
from todo_app.schemas import UserRegister, UserUpdate
from todo_app.utils.auth import verify_password


def _register(username="alice", email="alice@example.com", password="s3cret-pw"):
    return UserRegister(username=username, email=email, password=password)


@pytest.mark.asyncio
async def test_add_user_hashes_password_and_assigns_default_role(
    user_service, db_session
):
    user = await user_service.add_user(_register(), db=db_session)

    assert user.id is not None
    assert user.roles == "ROLE_USER"
    assert user.hashed_password != "s3cret-pw"
    assert verify_password("s3cret-pw", user.hashed_password)


@pytest.mark.asyncio
async def test_add_user_rejects_duplicate_username_without_writing(
    user_service, db_session
):
    await user_service.add_user(_register(), db=db_session)

    with pytest.raises(ConflictError, match="Username already exists"):
        await user_service.add_user(
            _register(email="other@example.com"), db=db_session
        )

    assert len(await user_service.db_handler.get_all_users(db=db_session)) == 1


@pytest.mark.asyncio
async def test_add_user_rejects_duplicate_email_without_writing(
    user_service, db_session
):
    await user_service.add_user(_register(), db=db_session)

    with pytest.raises(ConflictError, match="Email already exists"):
        await user_service.add_user(_register(username="bob"), db=db_session)

    assert len(await user_service.db_handler.get_all_users(db=db_session)) == 1


@pytest.mark.asyncio
async def test_unique_index_rejects_duplicate_when_precheck_is_skipped(
    user_service, db_session, monkeypatch
):
    await user_service.add_user(_register(), db=db_session)

    async def no_user(*args, **kwargs):
        return None

    # Simulate a concurrent writer that passed the existence checks too
    monkeypatch.setattr(user_service.db_handler, "get_user_by_username", no_user)
    monkeypatch.setattr(user_service.db_handler, "get_user_by_email", no_user)

    with pytest.raises(ConflictError) as exc_info:
        await user_service.add_user(
            _register(email="alice2@example.com"), db=db_session
        )
    assert isinstance(exc_info.value.__cause__, IntegrityError)


@pytest.mark.asyncio
async def test_lookups_by_username_email_and_id(user_service, db_session):
    created = await user_service.add_user(_register(), db=db_session)

    by_name = await user_service.get_user_by_username("alice", db=db_session)
    by_email = await user_service.get_user_by_email("alice@example.com", db=db_session)
    by_id = await user_service.get_user_by_id(created.id, db=db_session)

    assert by_name.id == by_email.id == by_id.id == created.id


@pytest.mark.asyncio
async def test_lookups_raise_not_found(user_service, db_session):
    with pytest.raises(NotFoundError):
        await user_service.get_user_by_username("nobody", db=db_session)
    with pytest.raises(NotFoundError):
        await user_service.get_user_by_email("nobody@example.com", db=db_session)
    with pytest.raises(NotFoundError):
        await user_service.get_user_by_id(uuid.uuid4(), db=db_session)


@pytest.mark.asyncio
async def test_lookups_validate_keys(user_service, db_session):
    with pytest.raises(DomainValidationError, match="blank"):
        await user_service.get_user_by_username("   ", db=db_session)
    with pytest.raises(DomainValidationError, match="valid"):
        await user_service.get_user_by_email("not-an-email", db=db_session)
    with pytest.raises(DomainValidationError, match="UUID"):
        await user_service.get_user_by_id("abc", db=db_session)


@pytest.mark.asyncio
async def test_get_all_users_treats_empty_store_as_not_found(user_service, db_session):
    with pytest.raises(NotFoundError, match="No users found"):
        await user_service.get_all_users(db=db_session)

    await user_service.add_user(_register(), db=db_session)
    await user_service.add_user(
        _register(username="bob", email="bob@example.com"), db=db_session
    )
    users = await user_service.get_all_users(db=db_session)
    assert {u.username for u in users} == {"alice", "bob"}


@pytest.mark.asyncio
async def test_update_user_overwrites_supplied_fields(user_service, db_session):
    created = await user_service.add_user(_register(), db=db_session)
    old_digest = created.hashed_password

    updated = await user_service.update_user(
        UserUpdate(username="alice", email="new@example.com", password="n3w-passw0rd"),
        db=db_session,
    )

    assert updated.id == created.id
    assert updated.email == "new@example.com"
    assert updated.roles == "ROLE_USER"
    assert updated.hashed_password != old_digest
    assert verify_password("n3w-passw0rd", updated.hashed_password)


@pytest.mark.asyncio
async def test_update_user_unknown_username(user_service, db_session):
    with pytest.raises(NotFoundError, match="User not found"):
        await user_service.update_user(UserUpdate(username="ghost"), db=db_session)


@pytest.mark.asyncio
async def test_update_user_email_collision_is_rejected_by_storage(
    user_service, db_session
):
    await user_service.add_user(_register(), db=db_session)
    await user_service.add_user(
        _register(username="bob", email="bob@example.com"), db=db_session
    )

    with pytest.raises(ConflictError, match="Email already exists") as exc_info:
        await user_service.update_user(
            UserUpdate(username="bob", email="alice@example.com"), db=db_session
        )
    assert isinstance(exc_info.value.__cause__, IntegrityError)

    # The failed write leaves the stored row untouched
    bob = await user_service.get_user_by_username("bob", db=db_session)
    assert bob.email == "bob@example.com"


@pytest.mark.asyncio
async def test_delete_user(user_service, db_session):
    await user_service.add_user(_register(), db=db_session)

    await user_service.delete_user("alice", db=db_session)

    with pytest.raises(NotFoundError):
        await user_service.get_user_by_username("alice", db=db_session)
    with pytest.raises(NotFoundError):
        await user_service.delete_user("alice", db=db_session)


@pytest.mark.asyncio
async def test_authenticate(user_service, db_session):
    await user_service.add_user(_register(), db=db_session)

    assert (await user_service.authenticate("alice", "s3cret-pw", db=db_session)).username == "alice"
    assert await user_service.authenticate("alice", "wrong-pw", db=db_session) is None
    assert await user_service.authenticate("nobody", "s3cret-pw", db=db_session) is None
