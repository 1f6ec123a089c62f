"""
Tests for the `databases`-backed unit of work.
"""
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from starter.core.aspects import DbContextTransactionInterceptor, OperationFailure, Pipeline, TransactionInterceptor
from starter.modules.unit_of_work import DatabaseUnitOfWorkProvider


def mock_database():
    transaction = MagicMock()
    transaction.start = AsyncMock()
    transaction.commit = AsyncMock()
    transaction.rollback = AsyncMock()
    db = MagicMock()
    db.transaction.return_value = transaction
    return db, transaction


@pytest.mark.asyncio
async def test_begin_starts_a_transaction_on_the_default_database():
    db, transaction = mock_database()
    provider = DatabaseUnitOfWorkProvider({"default": db})

    handle = await provider.begin_transaction()
    transaction.start.assert_awaited_once()
    assert handle.context == "default"

    await handle.commit()
    transaction.commit.assert_awaited_once()
    assert handle.finished


@pytest.mark.asyncio
async def test_unknown_context_is_rejected():
    provider = DatabaseUnitOfWorkProvider()
    with pytest.raises(KeyError):
        await provider.begin_transaction("reporting")


@pytest.mark.asyncio
async def test_transaction_interceptor_commits_and_rolls_back_the_database():
    db, transaction = mock_database()
    provider = DatabaseUnitOfWorkProvider({"default": db})

    async def ok():
        return "ok"

    async def failing():
        raise OperationFailure("duplicate")

    assert await Pipeline([TransactionInterceptor(provider)]).wrap(ok)() == "ok"
    transaction.commit.assert_awaited_once()
    transaction.rollback.assert_not_awaited()

    with pytest.raises(OperationFailure):
        await Pipeline([TransactionInterceptor(provider)]).wrap(failing)()
    transaction.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_rollback_after_commit_is_skipped(caplog):
    db, transaction = mock_database()
    provider = DatabaseUnitOfWorkProvider()
    provider.register("identity", db)

    async def ok():
        return 1

    with caplog.at_level(logging.WARNING):
        await Pipeline([DbContextTransactionInterceptor(provider, "identity")]).wrap(ok)()

    transaction.commit.assert_awaited_once()
    transaction.rollback.assert_not_awaited()
    assert "already finished" in caplog.text
