"""
Composition Pipeline

Builds one nested call out of an ordered list of interceptors and an async
operation. Interceptors are ordered by priority (stable, so configuration
order holds among equals); the first one is the outermost wrapper.

Usage:

    pipeline = Pipeline([TransactionInterceptor(uow), LoggingInterceptor(file_logger)])
    sign_up = pipeline.wrap(handler.handle)
    result = await sign_up(command)

or, where the interceptors can be built at definition time:

    @intercepted(PerformanceInterceptor(threshold=2))
    async def get_user(username: str): ...
"""
import functools
import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from starter.core.aspects.errors import AspectConfigurationError
from starter.core.aspects.interceptor import Interceptor
from starter.core.aspects.invocation import Invocation, bind_arguments

logger = logging.getLogger("starter.aspects.pipeline")

Operation = Callable[..., Awaitable[Any]]
InterceptorFactory = Callable[[], Interceptor]


def _order(interceptors: Iterable[Interceptor]) -> Tuple[Interceptor, ...]:
    items = list(interceptors)
    for item in items:
        if not isinstance(item, Interceptor):
            raise AspectConfigurationError(f"{item!r} is not an Interceptor")
    return tuple(sorted(items, key=lambda i: i.priority))


def _target_name(operation: Callable) -> str:
    owner = getattr(operation, "__self__", None)
    if owner is not None:
        cls = owner if isinstance(owner, type) else type(owner)
        return f"{cls.__module__}.{cls.__qualname__}"
    qualname = getattr(operation, "__qualname__", "")
    module = getattr(operation, "__module__", "") or ""
    if "." in qualname:
        return f"{module}.{qualname.rsplit('.', 1)[0]}"
    return module


class InterceptedOperation:
    """An async callable that runs an operation through its interceptor chain."""

    def __init__(
        self,
        operation: Operation,
        interceptors: Sequence[Interceptor],
        target: Optional[str] = None,
        method_name: Optional[str] = None,
    ):
        if not inspect.iscoroutinefunction(operation):
            raise TypeError(f"Only coroutine functions can be intercepted, got {operation!r}")
        self.operation = operation
        self.interceptors = _order(interceptors)
        self.target = target if target is not None else _target_name(operation)
        self.method_name = method_name or operation.__name__
        self._signature = inspect.signature(operation)
        functools.update_wrapper(self, operation)

    def __get__(self, instance, owner=None):
        # Support use as a method decorator: bind self like a plain function.
        if instance is None:
            return self
        return functools.partial(self.__call__, instance)

    async def __call__(self, *args, **kwargs) -> Any:
        arguments = bind_arguments(self._signature, args, kwargs)

        async def call_operation():
            return await self.operation(*args, **kwargs)

        proceed: Callable[[], Awaitable[Any]] = call_operation
        for interceptor in reversed(self.interceptors):
            invocation = Invocation(self.target, self.method_name, arguments, proceed)
            proceed = functools.partial(interceptor.intercept, invocation)
        return await proceed()

    def __repr__(self) -> str:
        names = ", ".join(type(i).__name__ for i in self.interceptors)
        return f"InterceptedOperation({self.target}.{self.method_name}, [{names}])"


class Pipeline:
    """An ordered, reusable set of interceptors."""

    def __init__(self, interceptors: Iterable[Interceptor] = ()):
        self.interceptors: Tuple[Interceptor, ...] = _order(interceptors)

    def wrap(
        self,
        operation: Operation,
        target: Optional[str] = None,
        method_name: Optional[str] = None,
    ) -> InterceptedOperation:
        return InterceptedOperation(operation, self.interceptors, target=target, method_name=method_name)

    def __len__(self) -> int:
        return len(self.interceptors)


def intercepted(*interceptors: Interceptor) -> Callable[[Operation], InterceptedOperation]:
    """Decorator form of Pipeline(interceptors).wrap."""
    pipeline = Pipeline(interceptors)

    def decorator(operation: Operation) -> InterceptedOperation:
        return pipeline.wrap(operation)

    return decorator


class AspectTable:
    """
    Configuration table mapping an operation kind to its interceptor list.

    Factories are called once per apply(), so each registered operation gets
    its own interceptor instances (and its own stopwatch, for example).
    """

    def __init__(self):
        self._entries: Dict[str, List[InterceptorFactory]] = {}

    def configure(self, kind: str, *factories: InterceptorFactory) -> "AspectTable":
        if kind in self._entries:
            raise AspectConfigurationError(f"Aspects for '{kind}' are already configured")
        self._entries[kind] = list(factories)
        logger.debug(f"[AspectTable.configure] kind={kind}, interceptors={len(factories)}")
        return self

    def kinds(self) -> List[str]:
        return list(self._entries)

    def interceptors_for(self, kind: str) -> List[Interceptor]:
        if kind not in self._entries:
            raise AspectConfigurationError(f"No aspects configured for '{kind}'")
        return [factory() for factory in self._entries[kind]]

    def apply(self, kind: str, operation: Operation, target: Optional[str] = None) -> InterceptedOperation:
        return Pipeline(self.interceptors_for(kind)).wrap(operation, target=target)
