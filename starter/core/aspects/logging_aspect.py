"""
Logging Interceptor

Sends a serialized LogRecord to a structured logger:
- on_exception (default on): error severity, with the failure message
- on_entry (default off): info severity, before the call runs, for auditing
"""
import logging
from typing import Optional

from starter.core.aspects.errors import AspectConfigurationError, flatten_messages
from starter.core.aspects.interceptor import Interceptor
from starter.core.aspects.invocation import Invocation
from starter.core.request_context import RequestContext, request_context as default_request_context
from starter.core.structured_logging import LoggerServiceBase, LogParameter, LogRecord

logger = logging.getLogger("starter.aspects.logging")


class LoggingInterceptor(Interceptor):

    def __init__(
        self,
        structured_logger: LoggerServiceBase,
        request_context: Optional[RequestContext] = None,
        on_entry: bool = False,
        on_exception: bool = True,
    ):
        if not isinstance(structured_logger, LoggerServiceBase):
            raise AspectConfigurationError(
                f"LoggingInterceptor needs a LoggerServiceBase, got {type(structured_logger).__name__}"
            )
        if not (on_entry or on_exception):
            raise AspectConfigurationError("LoggingInterceptor with nothing to log")
        self.structured_logger = structured_logger
        self.request_context = request_context or default_request_context
        self.log_on_entry = on_entry
        self.log_on_exception = on_exception

    def build_record(self, invocation: Invocation, exception_message: Optional[str] = None) -> LogRecord:
        return LogRecord(
            method_name=invocation.method_name,
            parameters=tuple(LogParameter(a.name, a.value, a.type_name) for a in invocation.arguments),
            user=self.request_context.user_or_unknown(),
            exception_message=exception_message,
        )

    async def on_before(self, invocation: Invocation) -> None:
        if self.log_on_entry:
            self.structured_logger.info(self.build_record(invocation).to_json())

    async def on_exception(self, invocation: Invocation, error: BaseException) -> None:
        if not self.log_on_exception:
            return
        record = self.build_record(invocation, flatten_messages(error))
        try:
            self.structured_logger.error(record.to_json())
        except Exception as e:
            # The original failure must still reach the caller.
            logger.error(f"[LoggingInterceptor.on_exception] could not write log record for {invocation.full_name}: {e}", exc_info=True)
