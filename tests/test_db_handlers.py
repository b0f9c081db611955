"""
Tests for the database handlers, including the storage unique constraints.
"""

from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from todo_app.db_handlers import TaskDBHandler, UserDBHandler


def _user(username="carol", email="carol@example.com"):
    return {"username": username, "email": email, "hashed_password": "x" * 60}


@pytest.mark.asyncio
async def test_user_handler_lookups(db_session):
    handler = UserDBHandler()
    created = await handler.create(_user(), db=db_session)

    assert (await handler.get_user_by_username("carol", db=db_session)).id == created.id
    assert (await handler.get_user_by_email("carol@example.com", db=db_session)).id == created.id
    assert await handler.get_user_by_username("dave", db=db_session) is None
    assert created.roles == "ROLE_USER"
    assert created.created_at is not None


@pytest.mark.asyncio
async def test_username_and_email_are_unique_in_storage(db_session):
    handler = UserDBHandler()
    await handler.create(_user(), db=db_session)

    with pytest.raises(IntegrityError):
        await handler.create(_user(email="other@example.com"), db=db_session)
    with pytest.raises(IntegrityError):
        await handler.create(_user(username="other"), db=db_session)

    assert len(await handler.get_all_users(db=db_session)) == 1


@pytest.mark.asyncio
async def test_remove_by_username(db_session):
    handler = UserDBHandler()
    await handler.create(_user(), db=db_session)

    removed = await handler.remove_by_username("carol", db=db_session)

    assert removed.username == "carol"
    assert await handler.remove_by_username("carol", db=db_session) is None
    assert await handler.get_all_users(db=db_session) == []


@pytest.mark.asyncio
async def test_task_title_is_unique_in_storage(db_session):
    handler = TaskDBHandler()
    await handler.create({"title": "water plants"}, db=db_session)

    with pytest.raises(IntegrityError):
        await handler.create({"title": "water plants"}, db=db_session)


@pytest.mark.asyncio
async def test_task_filters(db_session):
    handler = TaskDBHandler()
    day = date(2030, 3, 1)
    await handler.create({"title": "a", "due_date": day}, db=db_session)
    await handler.create({"title": "b", "due_date": day, "completed": True}, db=db_session)
    await handler.create({"title": "c"}, db=db_session)

    open_titles = {t.title for t in await handler.get_tasks_by_completion(False, db=db_session)}
    done_titles = {t.title for t in await handler.get_tasks_by_completion(True, db=db_session)}
    due_titles = [t.title for t in await handler.get_open_tasks_due_on(day, db=db_session)]

    assert open_titles == {"a", "c"}
    assert done_titles == {"b"}
    assert due_titles == ["a"]


@pytest.mark.asyncio
async def test_update_and_to_dict(db_session):
    handler = TaskDBHandler()
    task = await handler.create({"title": "read book"}, db=db_session)

    updated = await handler.update(
        task, {"completed": True, "due_date": date(2030, 1, 1)}, db=db_session
    )
    as_dict = updated.to_dict()

    assert as_dict["id"] == str(task.id)
    assert as_dict["completed"] is True
    assert as_dict["due_date"] == "2030-01-01"
