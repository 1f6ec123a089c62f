"""
Account API Endpoints

Sign-up, email confirmation and user lookup. Handlers run through their
interceptors; failures surfacing here are mapped to HTTP errors.
"""
import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, Query

from starter.core.aspects import ValidationFailure
from starter.modules.users import messages
from starter.modules.users.domain import ConfirmEmailRequest, DataResult, SignUpRequest
from starter.modules.users.operations import AccountOperations, build_account_operations

logger = logging.getLogger("starter.users.api")

router = APIRouter(prefix="/api/account", tags=["account"])

CONFLICT_MESSAGES = {messages.USERNAME_ALREADY_EXIST, messages.EMAIL_ALREADY_EXIST}


@lru_cache(maxsize=1)
def get_account_operations() -> AccountOperations:
    return build_account_operations()


def to_response(result: DataResult) -> dict:
    if not result.success:
        if result.message in CONFLICT_MESSAGES:
            raise HTTPException(status_code=409, detail=result.message)
        if result.message == messages.USER_NOT_FOUND:
            raise HTTPException(status_code=404, detail=result.message)
        raise HTTPException(status_code=400, detail=result.message)
    data = result.data.model_dump() if result.data is not None else None
    return {"success": True, "message": result.message, "data": data}


async def _run(operation, *args) -> dict:
    try:
        result = await operation(*args)
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=e.errors)
    except Exception as e:
        logger.error(f"[account_endpoints] {operation!r} ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
    return to_response(result)


@router.post("/sign-up-admin")
async def sign_up_admin(
    request: SignUpRequest,
    operations: AccountOperations = Depends(get_account_operations),
):
    """Create an administrator account and send the verification email."""
    return await _run(operations.sign_up_admin, request)


@router.post("/sign-up")
async def sign_up(
    request: SignUpRequest,
    operations: AccountOperations = Depends(get_account_operations),
):
    return await _run(operations.sign_up_user, request)


@router.get("/confirm-email")
async def confirm_email(
    user_id: str = Query(..., alias="userId"),
    verification_token: str = Query(..., alias="verificationToken"),
    operations: AccountOperations = Depends(get_account_operations),
):
    """Target of the link in the verification email."""
    request = ConfirmEmailRequest(user_id=user_id, verification_token=verification_token)
    return await _run(operations.confirm_email, request)


@router.get("/users/{username}")
async def get_user_by_username(
    username: str,
    operations: AccountOperations = Depends(get_account_operations),
):
    return await _run(operations.get_user_by_username, username)
