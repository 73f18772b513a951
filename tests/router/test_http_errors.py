"""Tests for HTTP errors and response helpers."""

import json

from conduit.router import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    HttpError,
    InternalServerError,
    NotFoundError,
    RedirectError,
    TooManyRequestsError,
    UnauthorizedError,
    ValidationError,
    error_to_response,
    json_response,
    no_content,
    redirect,
)


def error_body(response) -> dict:
    return json.loads(response.body)["error"]


class TestErrorClasses:
    def test_status_codes_and_codes(self):
        cases = [
            (BadRequestError("bad"), 400, "BAD_REQUEST"),
            (UnauthorizedError(), 401, "UNAUTHORIZED"),
            (ForbiddenError(), 403, "FORBIDDEN"),
            (NotFoundError(), 404, "NOT_FOUND"),
            (ConflictError("taken"), 409, "CONFLICT"),
            (ValidationError("invalid", {}), 422, "VALIDATION_ERROR"),
            (TooManyRequestsError(), 429, "TOO_MANY_REQUESTS"),
            (InternalServerError(), 500, "INTERNAL_SERVER_ERROR"),
        ]
        for error, status, code in cases:
            assert isinstance(error, HttpError)
            assert error.status_code == status
            assert error.code == code

    def test_default_messages(self):
        assert str(UnauthorizedError()) == "Unauthorized"
        assert str(NotFoundError()) == "Not found"
        assert str(TooManyRequestsError()) == "Too many requests"

    def test_retry_after_header(self):
        error = TooManyRequestsError(retry_after=30)
        assert error.headers["Retry-After"] == "30"

    def test_redirect_location(self):
        error = RedirectError("/next", status=301, headers={"Set-Cookie": "a=b"})
        assert error.status_code == 301
        assert error.headers == {"Set-Cookie": "a=b", "Location": "/next"}


class TestErrorToResponse:
    def test_redirect_has_empty_body_and_headers(self):
        response = error_to_response(RedirectError("/login", headers={"Set-Cookie": "session=abc"}))

        assert response.status_code == 302
        assert response.body == b""
        assert response.headers["location"] == "/login"
        assert response.headers["set-cookie"] == "session=abc"

    def test_http_error_json_body(self):
        response = error_to_response(ConflictError("Email taken"))

        assert response.status_code == 409
        assert response.headers["content-type"] == "application/json"
        assert error_body(response) == {"message": "Email taken", "code": "CONFLICT"}

    def test_validation_errors_included(self):
        response = error_to_response(ValidationError("Invalid", {"password": ["Too short"]}))

        assert error_body(response)["errors"] == {"password": ["Too short"]}

    def test_bad_request_details_included(self):
        response = error_to_response(BadRequestError("Bad JSON", details={"line": 3}))

        assert error_body(response)["details"] == {"line": 3}

    def test_too_many_requests_extras_and_header(self):
        response = error_to_response(TooManyRequestsError(retry_after=60))

        assert response.status_code == 429
        assert response.headers["retry-after"] == "60"
        assert error_body(response)["retry_after"] == 60

    def test_http_error_stack_only_in_development(self):
        assert "stack" not in error_body(error_to_response(NotFoundError()))
        assert "stack" in error_body(error_to_response(NotFoundError(), development=True))

    def test_unexpected_error_in_production(self):
        response = error_to_response(KeyError("secret"))

        assert response.status_code == 500
        assert error_body(response) == {"message": "An error occurred", "code": "INTERNAL_SERVER_ERROR"}

    def test_unexpected_error_in_development(self):
        try:
            raise ValueError("real reason")
        except ValueError as e:
            response = error_to_response(e, development=True)

        error = error_body(response)
        assert error["message"] == "real reason"
        assert "ValueError: real reason" in error["stack"]


class TestResponseHelpers:
    def test_json_response(self):
        response = json_response({"data": 1}, status=201, headers={"X-Test": "yes"})

        assert response.status_code == 201
        assert json.loads(response.body) == {"data": 1}
        assert response.headers["x-test"] == "yes"

    def test_no_content(self):
        response = no_content()

        assert response.status_code == 204
        assert response.body == b""

    def test_redirect(self):
        response = redirect("/elsewhere", status=303)

        assert response.status_code == 303
        assert response.headers["location"] == "/elsewhere"
