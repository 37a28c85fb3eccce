from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from lockerdesk.core.entities.locker import Locker, LockerStatus


class LockerRepository(ABC):
    @abstractmethod
    def get(self, number: int) -> Locker | None:
        """Aggregate load: locker with its current loan and both histories."""
        raise NotImplementedError

    @abstractmethod
    def list(self, *, status: LockerStatus | None = None) -> list[Locker]:
        """All lockers ordered by number, optionally filtered by status."""
        raise NotImplementedError

    @abstractmethod
    def upsert(self, locker: Locker) -> None:
        """Create or replace a locker aggregate, keyed by number."""
        raise NotImplementedError

    @abstractmethod
    def upsert_many(self, lockers: Sequence[Locker]) -> int:
        """Bulk create-or-replace keyed by number, as one unit. Returns rows written."""
        raise NotImplementedError
