"""
Transaction Coordinator

Runs an intercepted call inside a unit-of-work boundary and resolves the
boundary to exactly one of commit or rollback.

The active scope is kept in a ContextVar, so every awaited sub-step of one
asyncio task sees the same boundary while sibling tasks do not. A nested
TransactionInterceptor joins the active scope instead of opening another.
"""
import logging
from contextvars import ContextVar
from enum import Enum
from typing import Any, Optional, Protocol

from starter.core.aspects.interceptor import TRANSACTION_PRIORITY, Interceptor
from starter.core.aspects.invocation import Invocation

logger = logging.getLogger("starter.aspects.transaction")


class TransactionHandle(Protocol):
    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkProvider(Protocol):
    async def begin_transaction(self, context: Optional[str] = None) -> TransactionHandle: ...


class TransactionState(str, Enum):
    OPEN = "open"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class TransactionBoundary:
    """
    Tracks one unit-of-work handle through its lifecycle.

    Only the first commit() or rollback() reaches the handle and changes the
    state; later requests are logged and ignored.
    """

    def __init__(self, handle: TransactionHandle, context: Optional[str] = None):
        self.handle = handle
        self.context = context
        self.state = TransactionState.OPEN

    @property
    def is_open(self) -> bool:
        return self.state is TransactionState.OPEN

    async def commit(self) -> None:
        if not self.is_open:
            logger.warning(f"[TransactionBoundary.commit] ignored, boundary already {self.state.value}")
            return
        await self.handle.commit()
        self.state = TransactionState.COMMITTED

    async def rollback(self) -> None:
        if not self.is_open:
            logger.warning(f"[TransactionBoundary.rollback] ignored, boundary already {self.state.value}")
            return
        try:
            await self.handle.rollback()
        finally:
            self.state = TransactionState.ROLLED_BACK


_current_scope: ContextVar[Optional["TransactionScope"]] = ContextVar("starter_transaction_scope", default=None)


def current_scope() -> Optional["TransactionScope"]:
    """The transaction scope bound to the running task, if any."""
    return _current_scope.get()


class TransactionScope:
    """
    Ambient transaction scope.

        async with TransactionScope(provider) as scope:
            ...
            scope.complete()

    Leaving the block after complete() commits; leaving it any other way
    (exception, cancellation, or simply not calling complete) rolls back.
    A failed commit is rolled back too, then re-raised.
    """

    def __init__(self, provider: UnitOfWorkProvider, context: Optional[str] = None):
        self.provider = provider
        self.context = context
        self.boundary: Optional[TransactionBoundary] = None
        self._completed = False
        self._token = None

    @property
    def state(self) -> Optional[TransactionState]:
        return self.boundary.state if self.boundary else None

    def complete(self) -> None:
        self._completed = True

    async def __aenter__(self) -> "TransactionScope":
        if self.boundary is not None:
            raise RuntimeError("TransactionScope cannot be entered twice")
        handle = await self.provider.begin_transaction(self.context)
        self.boundary = TransactionBoundary(handle, self.context)
        self._token = _current_scope.set(self)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        _current_scope.reset(self._token)
        if exc_type is not None:
            await self._rollback_after_failure(exc)
            return False
        if not self._completed:
            await self.boundary.rollback()
            return False
        try:
            await self.boundary.commit()
        except Exception as e:
            await self._rollback_after_failure(e)
            raise
        return False

    async def _rollback_after_failure(self, error: BaseException) -> None:
        # A rollback error must not replace the failure being propagated.
        try:
            await self.boundary.rollback()
        except Exception as e:
            logger.error(
                f"[TransactionScope.__aexit__] rollback failed after {type(error).__name__}: {e}",
                exc_info=True,
            )


class TransactionInterceptor(Interceptor):
    """Wraps the call in an ambient TransactionScope."""

    priority = TRANSACTION_PRIORITY

    def __init__(self, provider: UnitOfWorkProvider, context: Optional[str] = None):
        self.provider = provider
        self.context = context

    async def intercept(self, invocation: Invocation) -> Any:
        active = current_scope()
        if active is not None:
            logger.debug(f"[TransactionInterceptor.intercept] {invocation.full_name} joins active scope")
            return await invocation.proceed()

        async with TransactionScope(self.provider, self.context) as scope:
            result = await invocation.proceed()
            scope.complete()
        logger.debug(f"[TransactionInterceptor.intercept] {invocation.full_name} committed")
        return result


class DbContextTransactionInterceptor(Interceptor):
    """
    Binds directly to one named persistence context and drives its
    transaction by hand.

    Known issue, kept as observed in the deployed system: rollback() is called
    in a finally block, so a successful commit is always followed by a
    rollback attempt on the same transaction. Each such call logs a warning.
    """

    priority = TRANSACTION_PRIORITY

    def __init__(self, provider: UnitOfWorkProvider, context: str):
        if not context:
            raise ValueError("DbContextTransactionInterceptor needs a persistence context name")
        self.provider = provider
        self.context = context
        self.last_boundary: Optional[TransactionBoundary] = None

    async def intercept(self, invocation: Invocation) -> Any:
        handle = await self.provider.begin_transaction(self.context)
        boundary = TransactionBoundary(handle, self.context)
        self.last_boundary = boundary
        try:
            result = await invocation.proceed()
            await boundary.commit()
            return result
        finally:
            if boundary.state is TransactionState.COMMITTED:
                logger.warning(
                    f"[DbContextTransactionInterceptor.intercept] {invocation.full_name}: "
                    f"rolling back context '{self.context}' after a successful commit"
                )
            # The handle is called directly so the attempt reaches the store
            # even though the boundary is already terminal.
            await handle.rollback()
            if boundary.is_open:
                boundary.state = TransactionState.ROLLED_BACK
