"""Error Hierarchy — status codes and response envelope of every error kind."""

import pytest

from imagix.core.errors import (
    AuthenticationError, BadRequestError, ConditionFailedError, ErrorCategory,
    ImagixError, NotFoundError, StoreError,
)


@pytest.mark.parametrize("error,status,code", [
    (BadRequestError("bad"), 400, "BAD_REQUEST"),
    (AuthenticationError(), 401, "UNAUTHENTICATED"),
    (NotFoundError("World"), 404, "NOT_FOUND"),
    (ConditionFailedError("P", "S"), 409, "CONDITION_FAILED"),
    (StoreError("boom", "get"), 503, "STORE_ERROR"),
])
def test_status_and_code(error, status, code):
    assert isinstance(error, ImagixError)
    assert error.http_status == status
    assert error.code == code
    assert set(error.to_response()) == {"message", "code"}


def test_not_found_message_names_resource():
    assert NotFoundError("Story").message == "Story not found"
    assert NotFoundError("Story").category == ErrorCategory.RESOURCE_NOT_FOUND


def test_store_error_hides_driver_detail_behind_operation():
    err = StoreError("Item lookup failed", "get")
    assert err.message == "Store get failed: Item lookup failed"
