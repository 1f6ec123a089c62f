"""
Interceptor Base

An interceptor wraps one Invocation with before/after/exception hooks.
Subclasses override the hooks they need; intercept() can be overridden
outright when a variant has to own the whole call (transactions do).
"""
import asyncio
from typing import Any

from starter.core.aspects.invocation import Invocation

# Lower runs further out. Transactions must wrap everything else.
TRANSACTION_PRIORITY = 0
DEFAULT_PRIORITY = 100


class Interceptor:
    """Base class for all interceptors. Every hook is a no-op by default."""

    priority: int = DEFAULT_PRIORITY

    async def on_before(self, invocation: Invocation) -> None:
        pass

    async def on_after(self, invocation: Invocation) -> None:
        pass

    async def on_exception(self, invocation: Invocation, error: BaseException) -> None:
        pass

    async def intercept(self, invocation: Invocation) -> Any:
        await self.on_before(invocation)
        try:
            result = await invocation.proceed()
        except (Exception, asyncio.CancelledError) as e:
            # Exception hooks observe; the failure always propagates.
            await self.on_exception(invocation, e)
            raise
        await self.on_after(invocation)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(priority={self.priority})"
