from __future__ import annotations

import logging
from typing import Optional

from ..core.exceptions import GuardDeniedError

logger = logging.getLogger(__name__)


class DeleteAuthorization:
    """Permission for exactly one destructive call."""

    def __init__(self) -> None:
        self._spent = False

    @property
    def spent(self) -> bool:
        return self._spent

    def spend(self) -> None:
        if self._spent:
            raise GuardDeniedError("Delete authorization already used")
        self._spent = True


class BulkDeleteGuard:
    """Confirmation gate in front of delete-all.

    The code is a static configuration value compared as plain text. It is a
    confirmation step for the user, not an access control: no hashing and no
    rate limiting.
    """

    def __init__(self, secret: str):
        self._secret = str(secret)

    def authorize(self, token: Optional[str]) -> DeleteAuthorization:
        if token is None or str(token) != self._secret:
            logger.info("Bulk delete refused: confirmation code mismatch")
            raise GuardDeniedError("Incorrect confirmation code. Nothing was deleted.")
        return DeleteAuthorization()
