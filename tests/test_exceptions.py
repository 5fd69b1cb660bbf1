"""Tests for the typed error catalogue"""

from common.exceptions.base_exception import CUSTOM_HTTP_EXCEPTIONS, AppHTTPException, DuplicateEdgeException, ConflictException


def test_every_error_has_a_distinct_code():
    codes = [exception_class().error_code for exception_class in CUSTOM_HTTP_EXCEPTIONS]

    assert len(codes) == len(set(codes))


def test_every_error_maps_to_an_http_status():
    for exception_class in CUSTOM_HTTP_EXCEPTIONS:
        error = exception_class()
        assert isinstance(error, AppHTTPException)
        assert 400 <= error.status_code < 600


def test_duplicate_edge_is_a_conflict():
    error = DuplicateEdgeException()

    assert isinstance(error, ConflictException)
    assert error.status_code == 409
    assert error.error_code == "DUPLICATE_EDGE"


def test_error_code_can_be_overridden_per_instance():
    error = AppHTTPException(status_code=401, detail="Authenticated user required.", error_code="UNAUTHENTICATED")

    assert error.error_code == "UNAUTHENTICATED"
    assert AppHTTPException.error_code == "APP_ERROR"
