"""
Account Operations

Wires the user handlers to their dependencies and attaches the cross-cutting
aspects declared in build_aspect_table(). Everything is passed in
explicitly; build_account_operations() supplies the production defaults.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from starter.core import settings
from starter.core.aspects import (
    AspectTable,
    InterceptedOperation,
    LoggingInterceptor,
    PerformanceInterceptor,
    RuleSetRegistry,
    TransactionInterceptor,
    ValidationInterceptor,
)
from starter.core.aspects.transaction import UnitOfWorkProvider
from starter.core.request_context import RequestContext
from starter.core.structured_logging import FileLogger, LoggerServiceBase
from starter.modules.database import database
from starter.modules.unit_of_work import DatabaseUnitOfWorkProvider
from starter.modules.users.domain import Roles
from starter.modules.users.handlers import (
    ConfirmEmailCommandHandler,
    GetUserByUsernameQueryHandler,
    SignUpCommandHandler,
)
from starter.modules.users.repositories import UserRepository
from starter.modules.users.services import EmailTokenService, SmtpMailService
from starter.modules.users.validation_rules import CONFIRM_EMAIL, SIGN_UP, build_rule_registry

logger = logging.getLogger("starter.users.operations")

SIGN_UP_ADMIN = "account.sign_up_admin"
SIGN_UP_USER = "account.sign_up_user"
CONFIRM_EMAIL_OPERATION = "account.confirm_email"
GET_USER_BY_USERNAME = "account.get_user_by_username"


def build_aspect_table(
    unit_of_work: UnitOfWorkProvider,
    rules: RuleSetRegistry,
    structured_logger: LoggerServiceBase,
    request_context: Optional[RequestContext] = None,
    performance_threshold: Optional[float] = None,
) -> AspectTable:
    threshold = settings.PERFORMANCE_THRESHOLD_SECONDS if performance_threshold is None else performance_threshold
    table = AspectTable()
    for kind in (SIGN_UP_ADMIN, SIGN_UP_USER):
        table.configure(
            kind,
            lambda: TransactionInterceptor(unit_of_work),
            lambda: ValidationInterceptor(rules, SIGN_UP),
            lambda: LoggingInterceptor(structured_logger, request_context),
        )
    table.configure(
        CONFIRM_EMAIL_OPERATION,
        lambda: TransactionInterceptor(unit_of_work),
        lambda: ValidationInterceptor(rules, CONFIRM_EMAIL),
        lambda: LoggingInterceptor(structured_logger, request_context),
    )
    table.configure(
        GET_USER_BY_USERNAME,
        lambda: PerformanceInterceptor(threshold, per_call=True),
        lambda: LoggingInterceptor(structured_logger, request_context),
    )
    return table


@dataclass
class AccountOperations:
    sign_up_admin: InterceptedOperation
    sign_up_user: InterceptedOperation
    confirm_email: InterceptedOperation
    get_user_by_username: InterceptedOperation


def create_account_operations(
    repository: UserRepository,
    mail_service: SmtpMailService,
    token_service: EmailTokenService,
    aspects: AspectTable,
    base_url: Optional[str] = None,
) -> AccountOperations:
    admin_handler = SignUpCommandHandler(repository, mail_service, token_service, role=Roles.ADMIN, base_url=base_url)
    user_handler = SignUpCommandHandler(repository, mail_service, token_service, role=Roles.USER, base_url=base_url)
    confirm_handler = ConfirmEmailCommandHandler(repository, token_service)
    query_handler = GetUserByUsernameQueryHandler(repository)

    return AccountOperations(
        sign_up_admin=aspects.apply(SIGN_UP_ADMIN, admin_handler.handle),
        sign_up_user=aspects.apply(SIGN_UP_USER, user_handler.handle),
        confirm_email=aspects.apply(CONFIRM_EMAIL_OPERATION, confirm_handler.handle),
        get_user_by_username=aspects.apply(GET_USER_BY_USERNAME, query_handler.handle),
    )


def build_account_operations() -> AccountOperations:
    """Production wiring: application database, SMTP mail, file logger."""
    logger.info("[build_account_operations] wiring account operations")
    aspects = build_aspect_table(
        unit_of_work=DatabaseUnitOfWorkProvider({"default": database}),
        rules=build_rule_registry(),
        structured_logger=FileLogger(),
    )
    return create_account_operations(
        repository=UserRepository(database),
        mail_service=SmtpMailService(),
        token_service=EmailTokenService(),
        aspects=aspects,
    )
