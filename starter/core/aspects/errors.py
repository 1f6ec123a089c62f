"""
Aspect Failures

Failure taxonomy shared by the interceptors and the operations they wrap.
"""
from typing import Iterable, List, Optional


class AspectError(Exception):
    """Base class for failures raised inside an intercepted call."""


class AspectConfigurationError(AspectError):
    """Raised when a pipeline, interceptor or logger is wired incorrectly."""


class ValidationFailure(AspectError):
    """Raised by a validation interceptor before the operation executes."""

    def __init__(self, errors: Iterable[str], rule_set: Optional[str] = None):
        self.errors: List[str] = list(errors)
        self.rule_set = rule_set
        super().__init__("; ".join(self.errors) or "Validation failed")


class OperationFailure(AspectError):
    """Raised by a wrapped business operation."""


class AggregateFailure(AspectError):
    """
    A single failure carrying several underlying causes.

    str() yields the first cause's message so callers see the same text they
    would for a plain failure; loggers flatten every cause via flatten_messages.
    """

    def __init__(self, causes: Iterable[BaseException]):
        self.causes: List[BaseException] = list(causes)
        if not self.causes:
            raise ValueError("AggregateFailure requires at least one cause")
        super().__init__(str(self.causes[0]))


def flatten_messages(error: BaseException) -> str:
    """
    Render an exception message for logging.

    Aggregates (AggregateFailure or a built-in ExceptionGroup) are flattened to
    their inner messages joined by newlines.
    """
    if isinstance(error, AggregateFailure):
        return "\n".join(str(cause) for cause in error.causes)
    if isinstance(error, BaseExceptionGroup):
        return "\n".join(str(cause) for cause in error.exceptions)
    return str(error)
