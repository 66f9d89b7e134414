from typing import Any

from pydantic import ValidationError as PydanticValidationError

from app.errors import DecodeError
from app.models.account import (
    Account,
    AccountCreateRequest,
    AccountDocument,
    AccountResponse,
    FacetResult,
)


def encode_account(account: Account) -> dict[str, Any]:
    """Document written to the `accounts` collection."""
    return {
        "account_id": account.account_id,
        "limit": account.limit,
        "products": list(account.products),
    }


def decode_account(doc: dict[str, Any]) -> Account:
    try:
        parsed = AccountDocument.model_validate(doc)
    except PydanticValidationError as e:
        raise DecodeError(f"malformed account document: {e}") from e
    return Account(account_id=parsed.account_id, limit=parsed.limit, products=parsed.products)


def decode_list_result(results: list[dict[str, Any]]) -> tuple[list[Account], int]:
    """
    Decode the output of the list aggregation into (accounts, total_count).

    `$facet` always yields exactly one document. Its `metadata` branch is empty
    when nothing matched the filter, which means a total of 0.
    """
    if not results:
        return [], 0
    if len(results) > 1:
        raise DecodeError(f"expected one facet document, got {len(results)}")

    try:
        facet = FacetResult.model_validate(results[0])
    except PydanticValidationError as e:
        raise DecodeError(f"malformed list result: {e}") from e

    total = facet.metadata[0].total_count if facet.metadata else 0
    accounts = [
        Account(account_id=d.account_id, limit=d.limit, products=d.products)
        for d in facet.data
    ]
    return accounts, total


def from_create_request(request: AccountCreateRequest) -> Account:
    return Account(account_id=request.account_id, limit=request.limit, products=request.products)


def to_response(account: Account) -> AccountResponse:
    return AccountResponse(
        account_id=account.account_id,
        limit=account.limit,
        products=list(account.products),
    )
