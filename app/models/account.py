from typing import Annotated, Any, List

from pydantic import BaseModel, Field, StrictInt, StrictStr, field_validator


class Account(BaseModel):
    account_id: int
    limit: int
    products: List[str] = []


class AccountDocument(BaseModel):
    """
    Shape of one document in the `accounts` collection as the driver hands it
    back. Extra keys such as `_id` are ignored.

    BSON int32 and int64 both arrive as Python ints (int64 as `bson.Int64`);
    they are widened to plain int here. Booleans and doubles are refused.
    """

    account_id: int
    limit: int
    products: List[StrictStr]

    @field_validator("account_id", "limit", mode="before")
    @classmethod
    def widen_integer(cls, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"expected a BSON integer, got {type(value).__name__}")
        return int(value)


class CountDocument(BaseModel):
    total_count: int

    @field_validator("total_count", mode="before")
    @classmethod
    def widen_integer(cls, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"expected a BSON integer, got {type(value).__name__}")
        return int(value)


class FacetResult(BaseModel):
    """The single document produced by the list aggregation's `$facet` stage."""

    metadata: List[CountDocument]
    data: List[AccountDocument]


# HTTP request/response schemas

# Range of a BSON int64.
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

BsonInt = Annotated[StrictInt, Field(ge=INT64_MIN, le=INT64_MAX)]


class AccountCreateRequest(BaseModel):
    account_id: BsonInt
    limit: BsonInt
    products: List[StrictStr]


class AccountUpdateRequest(BaseModel):
    limit: BsonInt
    products: List[StrictStr]


class AccountResponse(BaseModel):
    account_id: int
    limit: int
    products: List[str]


class ListQuery(BaseModel):
    product: str = ""
    order_by: str = ""
    limit: int = 0
    page: int = 0


class ListResult(BaseModel):
    accounts: List[AccountResponse] = Field(default_factory=list)
    total_data: int = 0
    total_page: int = 0
