import pytest

from overtime_tracker.core.exceptions import GuardDeniedError
from overtime_tracker.overtime.guard import BulkDeleteGuard


@pytest.mark.parametrize("token", ["22", "", None, " 23", "023"])
def test_wrong_code_is_denied(token):
    with pytest.raises(GuardDeniedError):
        BulkDeleteGuard("23").authorize(token)


def test_authorization_is_single_use():
    auth = BulkDeleteGuard("23").authorize("23")
    auth.spend()
    assert auth.spent
    with pytest.raises(GuardDeniedError):
        auth.spend()
