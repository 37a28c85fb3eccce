from __future__ import annotations

from dataclasses import replace

from loguru import logger

from lockerdesk.core.entities.locker import Locker, LockerStatus
from lockerdesk.core.repositories.locker_repository import LockerRepository
from lockerdesk.core.use_cases.errors import ValidationError


class GenerateLockersUseCase:
    """
    Create a numbered range of lockers in one block/group, or relocate the
    existing ones in that range. Status and histories of existing lockers are kept.
    """

    def __init__(self, *, locker_repo: LockerRepository) -> None:
        self._locker_repo = locker_repo

    def execute(self, *, block: str, group: str, start: int, end: int) -> list[Locker]:
        if not block.strip() or not group.strip():
            raise ValidationError("Block and group names are required")
        if start > end:
            raise ValidationError("Start number cannot be greater than end number")
        if start < 1:
            raise ValidationError("Locker numbers start at 1")

        location = f"{block.strip()} - {group.strip()}"
        existing = {locker.number: locker for locker in self._locker_repo.list()}

        lockers: list[Locker] = []
        for number in range(start, end + 1):
            current = existing.get(number)
            if current is not None:
                lockers.append(replace(current, location=location))
            else:
                lockers.append(Locker(number=number, status=LockerStatus.AVAILABLE, location=location))

        self._locker_repo.upsert_many(lockers)
        logger.info("Generated/updated lockers #{}-#{} at {!r}", start, end, location)
        return lockers
