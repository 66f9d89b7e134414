"""Application errors.

Every error carries the response outcome it maps to, so the HTTP layer never
inspects error types one by one.
"""

from app.models.response import Outcome


class AppError(Exception):
    outcome = Outcome.INTERNAL_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(AppError):
    outcome = Outcome.BAD_REQUEST


class InvalidSortTokenError(ValidationError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"order_by must be ASC or DESC, got {token!r}")


class AccountNotFoundError(AppError):
    def __init__(self, account_id: int):
        self.account_id = account_id
        super().__init__(f"account {account_id} not found")


class StoreError(AppError):
    pass


class DuplicateKeyError(StoreError):
    def __init__(self, account_id: int):
        self.account_id = account_id
        super().__init__(f"account {account_id} already exists")


class DecodeError(StoreError):
    pass


class StoreTimeoutError(AppError, TimeoutError):
    outcome = Outcome.TIMEOUT


class RequestTimeoutError(AppError, TimeoutError):
    outcome = Outcome.TIMEOUT
