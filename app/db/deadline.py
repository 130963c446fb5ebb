# app/db/deadline.py

import time
from typing import Callable, Optional

from app.errors import OperationTimeoutError


class Deadline:
    """
    Time budget for one top-level operation, measured from construction.

    The store calls check() before every statement so an expired
    operation stops issuing work instead of hanging.
    """

    def __init__(self, seconds: float, clock: Callable[[], float] = time.monotonic):
        self.seconds = seconds
        self._clock = clock
        self._expires_at = clock() + seconds

    def remaining(self) -> float:
        return self._expires_at - self._clock()

    def expired(self) -> bool:
        return self.remaining() <= 0

    def check(self, operation: Optional[str] = None) -> None:
        if self.expired():
            what = operation or "operation"
            raise OperationTimeoutError(
                f"{what} exceeded its {self.seconds:g}s time budget"
            )
