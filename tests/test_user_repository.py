"""
Integration tests against a temporary SQLite database: migrations, the
user repository, and sign-up running inside a real transaction.
"""
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from databases import Database

from starter.core.aspects import OperationFailure
from starter.modules.migration_runner import run_migrations
from starter.modules.unit_of_work import DatabaseUnitOfWorkProvider
from starter.modules.users.domain import SignUpRequest
from starter.modules.users.operations import build_aspect_table, create_account_operations
from starter.modules.users.repositories import UserRepository
from starter.modules.users.services import EmailTokenService, SmtpMailService
from starter.modules.users.validation_rules import build_rule_registry


@pytest_asyncio.fixture
async def database(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'test.db'}")
    await db.connect()
    await run_migrations(db)
    yield db
    await db.disconnect()


@pytest.mark.asyncio
async def test_repository_creates_and_finds_users(database):
    repository = UserRepository(database)
    user_id = await repository.create("jdoe", "jdoe@example.com", "John", "Doe", "hash")

    assert (await repository.find_by_id(user_id))["username"] == "jdoe"
    assert (await repository.find_by_email("jdoe@example.com"))["id"] == user_id
    assert await repository.find_by_username("ghost") is None

    assert not await repository.role_exists("User")
    await repository.create_role("User")
    await repository.add_to_role(user_id, "User")
    assert await repository.get_roles(user_id) == ["User"]

    await repository.confirm_email(user_id)
    assert (await repository.find_by_id(user_id))["email_confirmed"]


@pytest.mark.asyncio
async def test_migrations_can_run_twice(database):
    await run_migrations(database)
    assert await database.fetch_val("SELECT COUNT(*) FROM users") == 0


@pytest.mark.asyncio
async def test_failed_sign_up_leaves_no_rows_behind(database, recording_logger):
    repository = UserRepository(database)
    mail_service = AsyncMock(spec=SmtpMailService)
    mail_service.send_email.side_effect = OperationFailure("smtp down")
    aspects = build_aspect_table(
        DatabaseUnitOfWorkProvider({"default": database}), build_rule_registry(), recording_logger
    )
    operations = create_account_operations(repository, mail_service, EmailTokenService(secret="s"), aspects)
    request = SignUpRequest(
        username="jdoe", email="jdoe@example.com", first_name="John", last_name="Doe", password="Secret123"
    )

    with pytest.raises(OperationFailure):
        await operations.sign_up_user(request)
    assert await repository.find_by_username("jdoe") is None
    assert not await repository.role_exists("User")

    mail_service.send_email.side_effect = None
    result = await operations.sign_up_user(request)
    assert result.success
    assert await repository.get_roles(result.data.id) == ["User"]
