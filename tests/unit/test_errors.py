"""
Unit tests for the domain errors and the validation error message.
"""

import pytest
from fastapi.exceptions import RequestValidationError

from app.core.errors import AppError, Conflict, Forbidden, NotFound, Unauthorized, ValidationFailed
from app.middleware.errors import describe_validation_error


@pytest.mark.parametrize(
    "error_class,status_code",
    [(ValidationFailed, 400), (Unauthorized, 401), (Forbidden, 403), (NotFound, 404), (Conflict, 409)],
)
def test_status_codes(error_class, status_code):
    error = error_class("message")

    assert isinstance(error, AppError)
    assert error.status_code == status_code
    assert error.message == "message"


class TestDescribeValidationError:

    def test_missing_fields(self):
        exc = RequestValidationError([
            {"type": "missing", "loc": ("body", "name"), "msg": "Field required"},
            {"type": "missing", "loc": ("body", "client_id"), "msg": "Field required"},
        ])

        assert describe_validation_error(exc) == "Missing required fields: name, client_id"

    def test_invalid_fields(self):
        exc = RequestValidationError([
            {"type": "greater_than", "loc": ("body", "length"), "msg": "Input should be greater than 0"},
        ])

        assert describe_validation_error(exc) == "Invalid fields: length (Input should be greater than 0)"

    def test_missing_and_invalid(self):
        exc = RequestValidationError([
            {"type": "missing", "loc": ("body", "bill_number"), "msg": "Field required"},
            {"type": "decimal_parsing", "loc": ("body", "total_amount"), "msg": "Input should be a valid decimal"},
        ])

        message = describe_validation_error(exc)

        assert message.startswith("Missing required fields: bill_number; Invalid fields: total_amount")

    def test_empty(self):
        assert describe_validation_error(RequestValidationError([])) == "Invalid request"
