import asyncio
from typing import Annotated, Awaitable, TypeVar

from fastapi import APIRouter, Depends, Path, Query

from app.api.deps import get_account_service
from app.config import Settings, get_settings
from app.errors import RequestTimeoutError
from app.models.account import (
    INT64_MAX,
    INT64_MIN,
    AccountCreateRequest,
    AccountUpdateRequest,
    ListQuery,
)
from app.models.response import Outcome, respond
from app.services.account_service import AccountService

router = APIRouter()

T = TypeVar("T")

AccountId = Annotated[int, Path(ge=INT64_MIN, le=INT64_MAX)]
QueryInt = Annotated[int, Query(ge=INT64_MIN, le=INT64_MAX)]


async def within_deadline(coro: Awaitable[T], settings: Settings) -> T:
    """Await a service call, cancelling it once API_TIMEOUT seconds have passed."""
    try:
        return await asyncio.wait_for(coro, timeout=settings.API_TIMEOUT)
    except asyncio.TimeoutError as e:
        raise RequestTimeoutError(f"request exceeded {settings.API_TIMEOUT}s") from e


@router.post("")
async def create_account(
    request: AccountCreateRequest,
    service: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_settings),
):
    await within_deadline(service.create_account(request), settings)
    return respond(Outcome.CREATED)


@router.get("")
async def list_accounts(
    product: str = "",
    order_by: str = "",
    order_by_account_id: Annotated[str, Query(alias="order_by[account_id]")] = "",
    limit: QueryInt = 0,
    page: QueryInt = 0,
    service: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_settings),
):
    query = ListQuery(
        product=product,
        order_by=order_by or order_by_account_id,
        limit=limit,
        page=page,
    )
    result = await within_deadline(service.list_accounts(query), settings)
    return respond(
        Outcome.OK,
        result.accounts,
        total_data=result.total_data,
        total_page=result.total_page,
    )


@router.get("/{account_id}")
async def get_account(
    account_id: AccountId,
    service: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_settings),
):
    account = await within_deadline(service.get_account_detail(account_id), settings)
    return respond(Outcome.OK, account)


@router.put("/{account_id}")
async def update_account(
    account_id: AccountId,
    request: AccountUpdateRequest,
    service: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_settings),
):
    await within_deadline(service.update_account(account_id, request), settings)
    return respond(Outcome.OK)


@router.delete("/{account_id}")
async def delete_account(
    account_id: AccountId,
    service: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_settings),
):
    await within_deadline(service.delete_account(account_id), settings)
    return respond(Outcome.OK)
