"""Error Hierarchy — codes, statuses and REST envelope shape for every error type."""

from donor_registry.core.errors import (
    ConflictError, DonorRegistryError, ErrorCategory, ErrorContext,
    NotFoundError, StoreError, ValidationError,
)


def test_validation_error_carries_field():
    err = ValidationError("No fields to update", "body")
    body = err.to_response()["error"]
    assert err.http_status == 400
    assert body["code"] == "VALIDATION_ERROR"
    assert body["field"] == "body"
    assert body["category"] == ErrorCategory.VALIDATION.value


def test_not_found_error_names_resource():
    err = NotFoundError("Donor", 42, ErrorContext(donor_id=42))
    assert err.http_status == 404
    assert err.message == "Donor '42' not found"
    assert err.to_response()["error"]["context"]["donor_id"] == 42


def test_conflict_error_is_409():
    err = ConflictError("District 'Chennai' could not be created or found")
    assert err.http_status == 409
    assert err.code == "CONFLICT"


def test_store_error_is_503_and_hides_driver_detail():
    err = StoreError("Connection or operational error", "execute")
    assert err.http_status == 503
    assert err.message == "Store execute failed: Connection or operational error"
    assert err.operation == "execute"


def test_all_errors_share_base():
    for err in (
        ValidationError("x", "f"), NotFoundError("Donor", 1),
        ConflictError("x"), StoreError("x", "commit"),
    ):
        assert isinstance(err, DonorRegistryError)
        assert "timestamp" in err.to_response()["error"]
