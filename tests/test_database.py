"""永続化層（SQLite / インメモリ）のテスト"""

import pytest

from src.database import (
    UNIQUE_VIOLATION,
    MemoryDatabase,
    PersistenceError,
    Search,
    SQLiteDatabase,
    create_database,
)

from .fakes import create_user


async def _task(database, user_id, title, description="", status="OPEN"):
    return await database.insert(
        "tasks",
        {"title": title, "description": description, "status": status, "user_id": user_id},
    )


@pytest.mark.asyncio
async def test_insert_returns_row_with_id(database):
    row = await database.insert("users", {"username": "alice", "password": "h", "salt": "s"})

    assert row["id"] >= 1
    assert row["username"] == "alice"


@pytest.mark.asyncio
async def test_unique_violation_reports_sqlstate_code(database):
    await create_user(database, "alice")

    with pytest.raises(PersistenceError) as excinfo:
        await create_user(database, "alice")

    assert excinfo.value.code == UNIQUE_VIOLATION
    assert excinfo.value.is_unique_violation


@pytest.mark.asyncio
async def test_find_filters_by_equality_in_insertion_order(database):
    alice = await create_user(database, "alice")
    bob = await create_user(database, "bob")
    first = await _task(database, alice.id, "first")
    await _task(database, bob.id, "other")
    second = await _task(database, alice.id, "second", status="DONE")

    rows = await database.find("tasks", {"user_id": alice.id})
    assert [row["id"] for row in rows] == [first["id"], second["id"]]

    rows = await database.find("tasks", {"user_id": alice.id, "status": "DONE"})
    assert [row["title"] for row in rows] == ["second"]


@pytest.mark.asyncio
async def test_search_is_case_insensitive_across_columns(database):
    alice = await create_user(database, "alice")
    await _task(database, alice.id, "Buy MILK", "at the store")
    await _task(database, alice.id, "Clean", "the Kitchen")
    await _task(database, alice.id, "Unrelated", "nothing")

    rows = await database.find(
        "tasks", {"user_id": alice.id}, Search("milk", ("title", "description"))
    )
    assert [row["title"] for row in rows] == ["Buy MILK"]

    rows = await database.find(
        "tasks", {"user_id": alice.id}, Search("KITCHEN", ("title", "description"))
    )
    assert [row["title"] for row in rows] == ["Clean"]


@pytest.mark.asyncio
async def test_search_folds_non_ascii_case(database):
    alice = await create_user(database, "alice")
    await _task(database, alice.id, "ÉCOLE", "réunion")
    await _task(database, alice.id, "Straße", "")
    await _task(database, alice.id, "ecole", "ascii only")

    rows = await database.find("tasks", {"user_id": alice.id}, Search("école", ("title",)))
    assert [row["title"] for row in rows] == ["ÉCOLE"]

    rows = await database.find("tasks", {"user_id": alice.id}, Search("STRASSE", ("title",)))
    assert [row["title"] for row in rows] == ["Straße"]


@pytest.mark.asyncio
async def test_search_treats_like_wildcards_literally(database):
    alice = await create_user(database, "alice")
    await _task(database, alice.id, "100% done")
    await _task(database, alice.id, "1000 things")

    rows = await database.find("tasks", {"user_id": alice.id}, Search("0%", ("title",)))

    assert [row["title"] for row in rows] == ["100% done"]


@pytest.mark.asyncio
async def test_update_and_delete_report_affected_count(database):
    alice = await create_user(database, "alice")
    task = await _task(database, alice.id, "title")

    assert await database.update("tasks", {"id": task["id"]}, {"status": "DONE"}) == 1
    assert (await database.find_one("tasks", {"id": task["id"]}))["status"] == "DONE"
    assert await database.update("tasks", {"id": 999}, {"status": "DONE"}) == 0

    assert await database.delete("tasks", {"id": task["id"]}) == 1
    assert await database.delete("tasks", {"id": task["id"]}) == 0
    assert await database.find_one("tasks", {"id": task["id"]}) is None


@pytest.mark.asyncio
async def test_oversized_ids_match_nothing(database):
    alice = await create_user(database, "alice")
    await _task(database, alice.id, "title")
    huge = 99999999999999999999

    assert await database.find_one("tasks", {"id": huge, "user_id": alice.id}) is None
    assert await database.find("tasks", {"id": -huge}) == []
    assert await database.update("tasks", {"id": huge}, {"status": "DONE"}) == 0
    assert await database.delete("tasks", {"id": huge}) == 0


@pytest.mark.asyncio
async def test_returned_rows_are_copies(database):
    alice = await create_user(database, "alice")
    task = await _task(database, alice.id, "unchanged")

    row = await database.find_one("tasks", {"id": task["id"]})
    row["title"] = "mutated"

    assert (await database.find_one("tasks", {"id": task["id"]}))["title"] == "unchanged"


@pytest.mark.asyncio
async def test_unscoped_writes_are_refused(database):
    with pytest.raises(ValueError):
        await database.delete("tasks", {})
    with pytest.raises(ValueError):
        await database.update("tasks", {}, {"status": "DONE"})


@pytest.mark.asyncio
async def test_unknown_identifiers_are_rejected(database):
    with pytest.raises(ValueError):
        await database.find("secrets", {})
    with pytest.raises(ValueError):
        await database.find("tasks", {"owner; DROP TABLE tasks": 1})


@pytest.mark.asyncio
async def test_sqlite_rejects_task_for_missing_user(tmp_path):
    database = SQLiteDatabase(db_path=tmp_path / "fk.db")

    with pytest.raises(PersistenceError) as excinfo:
        await _task(database, 42, "orphan")

    assert not excinfo.value.is_unique_violation


@pytest.mark.asyncio
async def test_sqlite_rows_survive_reopen(tmp_path):
    db_path = tmp_path / "durable.db"
    await create_user(SQLiteDatabase(db_path=db_path), "alice")

    reopened = SQLiteDatabase(db_path=db_path)

    assert (await reopened.find_one("users", {"username": "alice"})) is not None


def test_sqlite_uses_env_path(tmp_path, monkeypatch):
    db_path = tmp_path / "from_env.db"
    monkeypatch.setenv("TASK_TRACKER_DB_PATH", str(db_path))

    database = SQLiteDatabase()

    assert database.db_path == db_path
    assert db_path.exists()


def test_create_database_backends(tmp_path):
    assert isinstance(create_database("memory"), MemoryDatabase)
    assert isinstance(create_database("sqlite", str(tmp_path / "x.db")), SQLiteDatabase)
    with pytest.raises(ValueError, match="Unknown database backend"):
        create_database("postgres")
