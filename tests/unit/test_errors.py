"""Error type tests."""

from untappd_client.errors import InvalidArgument, ServiceError, UntappdError, UnsupportedOperation


def test_service_error_to_dict():
    exc = ServiceError(500, "boom")
    assert isinstance(exc, UntappdError)
    assert exc.to_dict() == {
        "error": "ServiceError",
        "message": "Untappd service error 500: boom",
        "details": {"http_code": 500, "error": "boom"},
    }


def test_invalid_argument_records_field():
    exc = InvalidArgument("sort parameter must be one of the following: all", field="sort", value="x")
    assert exc.field == "sort"
    assert exc.details == {"field": "sort", "value": "x"}


def test_unsupported_operation_is_not_implemented():
    exc = UnsupportedOperation("checkin")
    assert isinstance(exc, NotImplementedError)
    assert "checkin" in str(exc)


def test_service_error_omits_missing_message():
    exc = ServiceError(404, None)
    assert str(exc) == "Untappd service error 404"
    assert exc.details == {"http_code": 404, "error": None}
