"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from servicekit.services.result import ServiceError, ServiceResult


class TestServiceError:
    def test_defaults(self) -> None:
        error = ServiceError(message="bad")
        assert error.code == 422
        assert error.correlation_id is None
        assert error.field is None

    def test_empty_message_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ServiceError(message="")

    def test_empty_message_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            ServiceError(message="")

    def test_frozen(self) -> None:
        error = ServiceError(message="bad")
        with pytest.raises(ValidationError):
            error.code = 500  # type: ignore[misc]

    def test_structural_equality(self) -> None:
        a = ServiceError(message="bad", code=400, correlation_id="row-1", field="name")
        b = ServiceError(message="bad", code=400, correlation_id="row-1", field="name")
        assert a == b
        assert a != ServiceError(message="bad", code=400)

    def test_to_dict_omits_absent_fields(self) -> None:
        assert ServiceError(message="bad").to_dict() == {"message": "bad", "code": 422}

    def test_to_dict_uses_id_key(self) -> None:
        error = ServiceError(message="bad", correlation_id="temp-1", field="email")
        assert error.to_dict() == {
            "message": "bad",
            "code": 422,
            "id": "temp-1",
            "field": "email",
        }

    def test_accepts_id_on_input(self) -> None:
        error = ServiceError.model_validate({"message": "bad", "id": "temp-2"})
        assert error.correlation_id == "temp-2"

    def test_non_string_id_is_stringified(self) -> None:
        assert ServiceError(message="bad", correlation_id=7).correlation_id == "7"
        assert ServiceError.model_validate({"message": "bad", "id": 12}).to_dict()["id"] == "12"

    def test_round_trip_through_mapping(self) -> None:
        error = ServiceError(message="bad", code=404, correlation_id="x")
        assert ServiceError.model_validate(error.to_dict()) == error

    @pytest.mark.parametrize(
        ("factory", "code", "message"),
        [
            (ServiceError.not_found, 404, "Record not found"),
            (ServiceError.unauthorized, 401, "Unauthorized"),
            (ServiceError.forbidden, 403, "Forbidden"),
            (ServiceError.server_error, 500, "Internal server error"),
        ],
        ids=["not_found", "unauthorized", "forbidden", "server_error"],
    )
    def test_named_constructor_defaults(self, factory, code: int, message: str) -> None:
        error = factory()
        assert error.code == code
        assert error.message == message

    def test_validation_constructor(self) -> None:
        error = ServiceError.validation("Email is invalid", field="email")
        assert error.code == 422
        assert error.field == "email"

    def test_coerce_string(self) -> None:
        assert ServiceError.coerce("oops") == ServiceError(message="oops")

    def test_coerce_record_is_identity(self) -> None:
        error = ServiceError.forbidden()
        assert ServiceError.coerce(error) is error

    def test_coerce_mapping(self) -> None:
        error = ServiceError.coerce({"message": "gone", "code": 410})
        assert error.code == 410

    def test_coerce_rejects_other_types(self) -> None:
        with pytest.raises(TypeError):
            ServiceError.coerce(42)  # type: ignore[arg-type]

    def test_from_failures(self) -> None:
        errors = ServiceError.from_failures(
            [("Name can't be blank", "name"), ("Record is stale", None)],
            correlation_id="temp-3",
        )
        assert [e.field for e in errors] == ["name", None]
        assert all(e.correlation_id == "temp-3" for e in errors)
        assert all(e.code == 422 for e in errors)


class TestServiceResult:
    def test_success_factory(self) -> None:
        result = ServiceResult.success("All good", {"id": 1})
        assert result.succeeded() is True
        assert result.failed() is False
        assert result.message == "All good"
        assert result.data == {"id": 1}
        assert result.errors == ()

    def test_success_default_message(self) -> None:
        assert ServiceResult.success().message == "Success"

    def test_failure_factory(self) -> None:
        result = ServiceResult.failure("Something went wrong", ["error1", "error2"])
        assert result.failed() is True
        assert result.data is None
        assert result.error_messages == ["error1", "error2"]

    def test_failure_normalizes_single_string(self) -> None:
        result = ServiceResult.failure("Failed", "single error")
        assert result.errors == (ServiceError(message="single error"),)

    def test_failure_normalizes_single_record(self) -> None:
        error = ServiceError.not_found()
        result = ServiceResult.failure("Failed", error)
        assert result.errors == (error,)

    def test_failure_without_errors(self) -> None:
        result = ServiceResult.failure("Timed out")
        assert result.failed()
        assert not result.has_errors()

    def test_error_alias(self) -> None:
        assert ServiceResult.error("Failed", "x") == ServiceResult.failure("Failed", "x")

    def test_has_errors_independent_of_flag(self) -> None:
        result = ServiceResult(ok=True, message="Done with warnings", errors=["minor"])
        assert result.succeeded()
        assert result.has_errors()

    def test_frozen(self) -> None:
        result = ServiceResult.success()
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]

    def test_to_dict_shape(self) -> None:
        result = ServiceResult.failure(
            "Invalid parameters",
            [ServiceError(message="bad", correlation_id="r1"), "worse"],
        )
        assert result.to_dict() == {
            "success": False,
            "message": "Invalid parameters",
            "data": None,
            "errors": [
                {"message": "bad", "code": 422, "id": "r1"},
                {"message": "worse", "code": 422},
            ],
        }

    def test_to_json(self) -> None:
        result = ServiceResult.success("ok", {"key": "value"})
        parsed = json.loads(result.to_json())
        assert parsed == {
            "success": True,
            "message": "ok",
            "data": {"key": "value"},
            "errors": [],
        }

    def test_to_json_with_plain_payload_objects(self) -> None:
        class Token:
            def __str__(self) -> str:
                return "tok-1"

        parsed = json.loads(ServiceResult.success("ok", {"token": Token()}).to_json())
        assert parsed["data"] == {"token": "tok-1"}

    def test_accepts_success_key_on_input(self) -> None:
        payload = {"success": False, "message": "no", "data": None, "errors": [{"message": "x"}]}
        result = ServiceResult.model_validate(payload)
        assert result.failed()
        assert result.to_dict() == {**payload, "errors": [{"message": "x", "code": 422}]}
