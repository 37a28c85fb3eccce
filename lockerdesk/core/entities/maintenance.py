from __future__ import annotations

from dataclasses import dataclass

RESOLVED_SOLUTION = "Manutenção concluída"


@dataclass(slots=True)
class MaintenanceData:
    problem: str
    registered_at: str
    registered_by: str | None = None
    solution: str | None = None
    resolved_at: str | None = None
    resolved_by: str | None = None

    def resolve(self, *, resolved_at: str, resolved_by: str | None, solution: str = RESOLVED_SOLUTION) -> None:
        if self.resolved_at is not None:
            raise ValueError("Maintenance record is already resolved")
        self.resolved_at = resolved_at
        self.resolved_by = resolved_by
        self.solution = solution
