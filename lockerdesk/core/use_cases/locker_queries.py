from __future__ import annotations

from dataclasses import dataclass

from lockerdesk.core.entities.locker import Locker, LockerStatus
from lockerdesk.core.repositories.locker_repository import LockerRepository
from lockerdesk.core.use_cases.errors import NotFoundError


def require_locker(locker_repo: LockerRepository, number: int) -> Locker:
    locker = locker_repo.get(number)
    if locker is None:
        raise NotFoundError(f"Locker #{number} not found")
    return locker


@dataclass(frozen=True, slots=True)
class LockerStatsDTO:
    total: int
    available: int
    occupied: int
    maintenance: int


class GetLockerUseCase:
    def __init__(self, *, locker_repo: LockerRepository) -> None:
        self._locker_repo = locker_repo

    def execute(self, *, number: int) -> Locker:
        return require_locker(self._locker_repo, number)


class ListLockersUseCase:
    def __init__(self, *, locker_repo: LockerRepository) -> None:
        self._locker_repo = locker_repo

    def execute(self, *, status: LockerStatus | None = None) -> list[Locker]:
        return self._locker_repo.list(status=status)


class LockerStatsUseCase:
    def __init__(self, *, locker_repo: LockerRepository) -> None:
        self._locker_repo = locker_repo

    def execute(self) -> LockerStatsDTO:
        lockers = self._locker_repo.list()
        counts = {status: 0 for status in LockerStatus}
        for locker in lockers:
            counts[locker.status] += 1

        return LockerStatsDTO(
            total=len(lockers),
            available=counts[LockerStatus.AVAILABLE],
            occupied=counts[LockerStatus.OCCUPIED],
            maintenance=counts[LockerStatus.MAINTENANCE],
        )
