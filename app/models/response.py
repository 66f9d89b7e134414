from enum import Enum
from types import MappingProxyType
from typing import Any, NamedTuple

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


class Outcome(str, Enum):
    OK = "ok"
    CREATED = "created"
    BAD_REQUEST = "bad_request"
    INTERNAL_ERROR = "internal_error"
    TIMEOUT = "timeout"


class Display(NamedTuple):
    status: int
    code: str
    message: str


OUTCOMES = MappingProxyType({
    Outcome.OK: Display(200, "000", "Successful"),
    Outcome.CREATED: Display(201, "000", "Successful"),
    Outcome.BAD_REQUEST: Display(400, "001", "Bad Request"),
    Outcome.INTERNAL_ERROR: Display(500, "001", "Internal Server Error"),
    Outcome.TIMEOUT: Display(504, "002", "Gateway Timeout"),
})


def build_envelope(
    outcome: Outcome,
    data: Any = None,
    total_data: int | None = None,
    total_page: int | None = None,
) -> dict:
    """
    Build the response body for an outcome.

    `data` is omitted when None; the paging fields are only present for list
    responses.
    """
    display = OUTCOMES[outcome]
    body: dict[str, Any] = {"code": display.code, "message": display.message}
    if total_data is not None:
        body["total_data"] = total_data
        body["total_page"] = total_page if total_page is not None else 0
    if data is not None:
        body["data"] = data
    return body


def respond(outcome: Outcome, data: Any = None, **page: int) -> JSONResponse:
    return JSONResponse(
        jsonable_encoder(build_envelope(outcome, data, **page)),
        status_code=OUTCOMES[outcome].status,
    )
