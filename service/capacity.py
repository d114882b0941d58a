"""
Per-professor class counters scoped to a single solve.
"""
from typing import Dict, Mapping

from service.errors import InternalConsistencyError, ValidationError


class CapacityTracker:
    """Counts tentative assignments against each professor's total_classes."""

    def __init__(self, limits: Mapping[str, int]):
        negative = [pid for pid, limit in limits.items() if limit < 0]
        if negative:
            raise ValidationError({
                "professor_links": [
                    f"Professor {pid} has negative total classes ({limits[pid]})" for pid in negative
                ]
            })
        self._limits: Dict[str, int] = dict(limits)
        self._counts: Dict[str, int] = {pid: 0 for pid in self._limits}

    def _check_known(self, professor_id: str):
        if professor_id not in self._limits:
            raise InternalConsistencyError(
                f"Capacity requested for professor {professor_id} who is not linked to the section",
                professor_id=professor_id
            )

    def try_reserve(self, professor_id: str) -> bool:
        self._check_known(professor_id)
        if self._counts[professor_id] + 1 > self._limits[professor_id]:
            return False
        self._counts[professor_id] += 1
        return True

    def release(self, professor_id: str):
        self._check_known(professor_id)
        if self._counts[professor_id] == 0:
            raise InternalConsistencyError(
                f"Capacity released for professor {professor_id} without a matching reservation",
                professor_id=professor_id
            )
        self._counts[professor_id] -= 1

    def load(self, professor_id: str) -> int:
        self._check_known(professor_id)
        return self._counts[professor_id]

    def limit(self, professor_id: str) -> int:
        self._check_known(professor_id)
        return self._limits[professor_id]

    def remaining(self, professor_id: str) -> int:
        return self.limit(professor_id) - self.load(professor_id)

    def loads(self) -> Dict[str, int]:
        return dict(self._counts)
