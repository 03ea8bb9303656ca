"""Tests for cf_common.errors and cf_common.response."""

from decimal import Decimal

from pydantic import BaseModel

from src.cf_common.errors import (
    AdminAuthRequiredError,
    AppError,
    CowPurchaseNotFoundError,
    DepositNotFoundError,
    InvalidCredentialsError,
    MemberHasDepositsError,
    MemberNotFoundError,
    ReceiptStorageError,
    StoreUnavailableError,
    ValidationFailedError,
)
from src.cf_common.money import AmountOut
from src.cf_common.response import ApiResponse, error_response, success_response


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9002, message="Internal error")
        assert err.code == 9002
        assert err.message == "Internal error"
        assert err.http_status == 500
        assert err.data is None

    def test_is_exception(self) -> None:
        assert isinstance(AppError(code=1, message="x"), Exception)


class TestSpecificErrors:
    def test_validation_failed_carries_fields(self) -> None:
        errors = [{"field": "amount", "message": "must be >= 1"}]
        err = ValidationFailedError(errors)
        assert (err.code, err.http_status) == (1001, 422)
        assert err.data == errors

    def test_member_not_found(self) -> None:
        err = MemberNotFoundError("m-42")
        assert (err.code, err.http_status) == (2001, 404)
        assert "m-42" in err.message

    def test_member_has_deposits(self) -> None:
        err = MemberHasDepositsError("m-1")
        assert (err.code, err.http_status) == (2002, 409)
        assert err.message == "Cannot delete member with existing deposits. Deactivate instead."

    def test_not_found_codes(self) -> None:
        assert DepositNotFoundError("d").code == 3001
        assert CowPurchaseNotFoundError("p").code == 4001

    def test_auth_errors(self) -> None:
        assert InvalidCredentialsError().http_status == 401
        assert AdminAuthRequiredError().http_status == 401
        assert AdminAuthRequiredError().code == 8002

    def test_system_faults_stay_generic(self) -> None:
        for err in (StoreUnavailableError(), ReceiptStorageError()):
            assert err.http_status == 500
            assert err.message == "Internal server error"


class TestApiResponse:
    def test_success_envelope(self) -> None:
        resp = success_response({"id": "1"})
        assert resp.code == 0
        assert resp.message == "success"
        assert resp.data == {"id": "1"}
        assert resp.request_id.startswith("req_")
        assert resp.timestamp

    def test_error_envelope_with_data(self) -> None:
        resp = error_response(1001, "Validation failed", [{"field": "name", "message": "x"}])
        assert resp.code == 1001
        assert resp.data[0]["field"] == "name"

    def test_serializes(self) -> None:
        dumped = ApiResponse(data=[1, 2]).model_dump()
        assert set(dumped) == {"code", "message", "data", "timestamp", "request_id"}

    def test_models_dumped_with_numeric_amounts(self) -> None:
        class _Row(BaseModel):
            amount: AmountOut

        resp = success_response([_Row(amount=Decimal("150.50")), _Row(amount=Decimal("2"))])
        assert resp.data == [{"amount": 150.5}, {"amount": 2.0}]
