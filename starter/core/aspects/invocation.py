"""
Invocation Context

Captures one pending call: which operation, with which arguments, and how to
continue with it.
"""
import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional, Tuple

_UNSET = object()


@dataclass(frozen=True)
class Argument:
    """A bound call argument as seen by interceptors."""
    name: str
    value: Any
    type_name: str


class Invocation:
    """
    A pending call handed to an interceptor.

    proceed() runs the continuation (the next interceptor, or the real
    operation) exactly once and propagates whatever it raises.
    """

    def __init__(
        self,
        target: str,
        method_name: str,
        arguments: Tuple[Argument, ...],
        continuation: Callable[[], Awaitable[Any]],
    ):
        self.target = target
        self.method_name = method_name
        self.arguments = arguments
        self._continuation = continuation
        self._proceeded = False
        self._return_value: Any = _UNSET

    @property
    def full_name(self) -> str:
        return f"{self.target}.{self.method_name}" if self.target else self.method_name

    @property
    def has_proceeded(self) -> bool:
        return self._proceeded

    @property
    def return_value(self) -> Any:
        if self._return_value is _UNSET:
            return None
        return self._return_value

    def argument(self, name: str) -> Optional[Argument]:
        for arg in self.arguments:
            if arg.name == name:
                return arg
        return None

    def values(self) -> List[Any]:
        return [arg.value for arg in self.arguments]

    async def proceed(self) -> Any:
        if self._proceeded:
            raise RuntimeError(f"{self.full_name}: proceed() may only be called once per invocation")
        self._proceeded = True
        result = await self._continuation()
        self._return_value = result
        return result

    def __repr__(self) -> str:
        return f"Invocation({self.full_name}, args={[a.name for a in self.arguments]})"


def _type_name(annotation: Any, value: Any) -> str:
    if annotation is inspect.Parameter.empty:
        return type(value).__name__
    if isinstance(annotation, str):
        return annotation
    return getattr(annotation, "__name__", None) or str(annotation)


def bind_arguments(signature: inspect.Signature, args: tuple, kwargs: dict) -> Tuple[Argument, ...]:
    """
    Bind call arguments to parameter names.

    self/cls are skipped. *args and **kwargs are flattened into one entry per
    value so loggers see every argument.
    """
    bound = signature.bind(*args, **kwargs)
    result: List[Argument] = []
    for name, value in bound.arguments.items():
        if name in ("self", "cls"):
            continue
        param = signature.parameters[name]
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            for index, item in enumerate(value):
                result.append(Argument(f"{name}[{index}]", item, type(item).__name__))
        elif param.kind is inspect.Parameter.VAR_KEYWORD:
            for key, item in value.items():
                result.append(Argument(key, item, type(item).__name__))
        else:
            result.append(Argument(name, value, _type_name(param.annotation, value)))
    return tuple(result)
