"""
Unit of Work

Adapts `databases` transactions to the handle interface used by the
transaction interceptors. Each named context maps to one Database; the
"default" context is the application database.

`databases` keeps one connection per asyncio task, so every query awaited
inside an intercepted call runs on the transaction's connection.
"""
import logging
from typing import Dict, Optional

from databases import Database
from databases.core import Transaction

logger = logging.getLogger("starter.unit_of_work")

DEFAULT_CONTEXT = "default"


class DatabaseTransactionHandle:
    """One started `databases` transaction."""

    def __init__(self, transaction: Transaction, context: str):
        self._transaction = transaction
        self.context = context
        self.finished = False

    async def commit(self) -> None:
        await self._transaction.commit()
        self.finished = True

    async def rollback(self) -> None:
        if self.finished:
            # `databases` cannot roll back a transaction that already ended.
            logger.warning(f"[DatabaseTransactionHandle.rollback] context '{self.context}' already finished; skipped")
            return
        try:
            await self._transaction.rollback()
        finally:
            self.finished = True


class DatabaseUnitOfWorkProvider:
    """Begins transactions on registered Database instances."""

    def __init__(self, databases: Optional[Dict[str, Database]] = None):
        self._databases: Dict[str, Database] = dict(databases or {})

    def register(self, context: str, database: Database) -> None:
        self._databases[context] = database

    def get_database(self, context: Optional[str] = None) -> Database:
        name = context or DEFAULT_CONTEXT
        if name not in self._databases:
            raise KeyError(f"No database registered for context '{name}'")
        return self._databases[name]

    async def begin_transaction(self, context: Optional[str] = None) -> DatabaseTransactionHandle:
        name = context or DEFAULT_CONTEXT
        transaction = self.get_database(name).transaction()
        await transaction.start()
        logger.debug(f"[DatabaseUnitOfWorkProvider.begin_transaction] context={name}")
        return DatabaseTransactionHandle(transaction, name)
