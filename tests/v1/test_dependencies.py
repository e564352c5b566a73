# tests/v1/test_dependencies.py
import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from launch_deck.api.v1.dependencies import domain_errors, get_current_username
from launch_deck.core.errors import NotFoundError, PermissionDeniedError, ValidationError
from launch_deck.core.security import create_access_token


@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (NotFoundError("Launch not found."), 404),
        (PermissionDeniedError("nope"), 403),
        (ValidationError("bad"), 400),
    ],
)
def test_domain_errors_map_to_status(error: Exception, status_code: int) -> None:
    with pytest.raises(HTTPException) as exc_info:
        with domain_errors():
            raise error
    assert exc_info.value.status_code == status_code
    assert exc_info.value.detail == str(error)


def test_other_exceptions_pass_through() -> None:
    with pytest.raises(KeyError):
        with domain_errors():
            raise KeyError("boom")


def test_current_username_from_token() -> None:
    credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=create_access_token("pilot"))
    assert get_current_username(credentials) == "pilot"


def test_current_username_rejects_garbage() -> None:
    credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="garbage")
    with pytest.raises(HTTPException) as exc_info:
        get_current_username(credentials)
    assert exc_info.value.status_code == 401
