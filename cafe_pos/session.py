"""Active staff identity and PIN check."""

from __future__ import annotations

from typing import Iterable

from cafe_pos.constant import WAITERS
from cafe_pos.debug_log import log_debug
from cafe_pos.models import Waiter


def default_roster() -> list[Waiter]:
    return [Waiter.from_snapshot(raw) for raw in WAITERS]


class Session:
    """Tracks which waiter is operating the terminal.

    The PIN check is a plain string comparison. It identifies the operator at
    a shared till and is not a security boundary; there is no hashing and no
    attempt limit.
    """

    def __init__(self, waiters: Iterable[Waiter] | None = None) -> None:
        self._waiters = list(waiters) if waiters is not None else default_roster()
        self.active: Waiter | None = None

    @property
    def waiters(self) -> list[Waiter]:
        return list(self._waiters)

    def find(self, waiter_id: str) -> Waiter | None:
        for waiter in self._waiters:
            if waiter.waiter_id == waiter_id:
                return waiter
        return None

    def authenticate(self, waiter_id: str, pin: str) -> bool:
        waiter = self.find(waiter_id)
        return waiter is not None and waiter.pin == pin

    def login(self, waiter_id: str, pin: str) -> bool:
        """Bind the waiter as active when the PIN matches."""
        if not self.authenticate(waiter_id, pin):
            log_debug(f"login_failed waiter_id={waiter_id}")
            return False
        self.active = self.find(waiter_id)
        log_debug(f"login waiter_id={waiter_id}")
        return True

    def logout(self) -> None:
        if self.active is not None:
            log_debug(f"logout waiter_id={self.active.waiter_id}")
        self.active = None
