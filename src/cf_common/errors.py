"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Validation
  2xxx: Member
  3xxx: Deposit
  4xxx: Cow purchase
  8xxx: Admin auth
  9xxx: System
"""

from typing import Any


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
        data: Any = None,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        self.data = data
        super().__init__(message)


# --- 1xxx: Validation ---

class ValidationFailedError(AppError):
    """Carries field-level detail: ``[{"field": ..., "message": ...}, ...]``."""

    def __init__(self, errors: list[dict[str, str]]) -> None:
        super().__init__(1001, "Validation failed", 422, data=errors)
        self.errors = errors


# --- 2xxx: Member ---

class MemberNotFoundError(AppError):
    def __init__(self, member_id: str) -> None:
        super().__init__(2001, f"Member not found: {member_id}", 404)


class MemberHasDepositsError(AppError):
    def __init__(self, member_id: str) -> None:
        super().__init__(
            2002,
            "Cannot delete member with existing deposits. Deactivate instead.",
            409,
        )
        self.member_id = member_id


# --- 3xxx: Deposit ---

class DepositNotFoundError(AppError):
    def __init__(self, deposit_id: str) -> None:
        super().__init__(3001, f"Deposit not found: {deposit_id}", 404)


# --- 4xxx: Cow purchase ---

class CowPurchaseNotFoundError(AppError):
    def __init__(self, purchase_id: str) -> None:
        super().__init__(4001, f"Cow purchase not found: {purchase_id}", 404)


# --- 8xxx: Admin auth ---

class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(8001, "Invalid admin credentials", 401)


class AdminAuthRequiredError(AppError):
    """Bearer token missing, malformed, expired or of the wrong type."""

    def __init__(self) -> None:
        super().__init__(8002, "Admin authentication required", 401)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class StoreUnavailableError(AppError):
    """Record store not configured or unreachable. Message stays generic."""

    def __init__(self) -> None:
        super().__init__(9003, "Internal server error", 500)


class ReceiptStorageError(AppError):
    """Receipt file could not be written. Message stays generic."""

    def __init__(self) -> None:
        super().__init__(9004, "Internal server error", 500)
