import logging

from app.errors import InvalidSortTokenError, ValidationError
from app.models.account import (
    INT64_MAX,
    AccountCreateRequest,
    AccountResponse,
    AccountUpdateRequest,
    ListQuery,
    ListResult,
)
from app.repositories.account_repository import AccountStore
from app.services.transcoder import from_create_request, to_response

logger = logging.getLogger(__name__)

ORDER_BY_ASC = "ASC"
ORDER_BY_DESC = "DESC"


def parse_sort_token(token: str) -> int:
    """Map an order_by token to a sort direction: 1, -1, or 0 for unsorted."""
    if not token:
        return 0
    normalized = token.upper()
    if normalized == ORDER_BY_ASC:
        return 1
    if normalized == ORDER_BY_DESC:
        return -1
    raise InvalidSortTokenError(token)


def compute_offset(page: int, limit: int) -> int:
    if page > 0:
        return (page - 1) * limit
    return 0


def compute_total_pages(total: int, limit: int) -> int:
    if limit <= 0:
        return 0
    pages = total // limit
    if total % limit != 0:
        pages += 1
    return pages


class AccountService:
    def __init__(self, store: AccountStore, default_limit: int):
        self.store = store
        self.default_limit = default_limit

    async def create_account(self, request: AccountCreateRequest) -> None:
        await self.store.insert(from_create_request(request))
        logger.info(f"Created account {request.account_id}")

    async def list_accounts(self, query: ListQuery) -> ListResult:
        if query.limit < 0:
            raise ValidationError(f"limit must not be negative, got {query.limit}")

        limit = query.limit or self.default_limit
        offset = compute_offset(query.page, limit)
        if offset > INT64_MAX:
            raise ValidationError(f"page {query.page} with limit {limit} is out of range")
        sort_direction = parse_sort_token(query.order_by)

        accounts, total = await self.store.query(query.product, sort_direction, limit, offset)

        return ListResult(
            accounts=[to_response(a) for a in accounts],
            total_data=total,
            total_page=compute_total_pages(total, limit),
        )

    async def get_account_detail(self, account_id: int) -> AccountResponse:
        account = await self.store.get(account_id)
        return to_response(account)

    async def update_account(self, account_id: int, request: AccountUpdateRequest) -> None:
        account = await self.store.get(account_id)
        account.limit = request.limit
        account.products = request.products
        await self.store.replace(account)
        logger.info(f"Updated account {account_id}")

    async def delete_account(self, account_id: int) -> None:
        await self.store.remove(account_id)
        logger.info(f"Deleted account {account_id}")
