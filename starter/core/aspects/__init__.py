"""
Cross-cutting Aspects

Interceptors (transaction, validation, logging, performance) composed around
async operations by an explicit pipeline.
"""

from .errors import (
    AggregateFailure,
    AspectConfigurationError,
    AspectError,
    OperationFailure,
    ValidationFailure,
    flatten_messages,
)
from .interceptor import DEFAULT_PRIORITY, TRANSACTION_PRIORITY, Interceptor
from .invocation import Argument, Invocation
from .logging_aspect import LoggingInterceptor
from .performance import PerformanceInterceptor, PerformanceSample, Stopwatch
from .pipeline import AspectTable, InterceptedOperation, Pipeline, intercepted
from .transaction import (
    DbContextTransactionInterceptor,
    TransactionBoundary,
    TransactionInterceptor,
    TransactionScope,
    TransactionState,
    current_scope,
)
from .validation import RuleSet, RuleSetRegistry, ValidationInterceptor, ValidationResult

__all__ = [
    "AggregateFailure",
    "AspectConfigurationError",
    "AspectError",
    "OperationFailure",
    "ValidationFailure",
    "flatten_messages",
    "DEFAULT_PRIORITY",
    "TRANSACTION_PRIORITY",
    "Interceptor",
    "Argument",
    "Invocation",
    "LoggingInterceptor",
    "PerformanceInterceptor",
    "PerformanceSample",
    "Stopwatch",
    "AspectTable",
    "InterceptedOperation",
    "Pipeline",
    "intercepted",
    "DbContextTransactionInterceptor",
    "TransactionBoundary",
    "TransactionInterceptor",
    "TransactionScope",
    "TransactionState",
    "current_scope",
    "RuleSet",
    "RuleSetRegistry",
    "ValidationInterceptor",
    "ValidationResult",
]
