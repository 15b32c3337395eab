from __future__ import annotations

from typing import Protocol, Sequence

from .model import LoginEvent, LoginHistoryFilter


class LoginHistoryRepository(Protocol):
    def add(self, event: LoginEvent) -> int:
        raise NotImplementedError

    def find(self, criteria: LoginHistoryFilter, *, limit: int, offset: int) -> Sequence[LoginEvent]:
        """Matching events, newest first."""

        raise NotImplementedError

    def count(self, criteria: LoginHistoryFilter) -> int:
        raise NotImplementedError
