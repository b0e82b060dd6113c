from __future__ import annotations

from accounts.models import Profile
from academics.models import Course, Department
from onduty.models import ODRequest, ODStatus

STATS_GROUP = "dashboard_stats"


def quick_start_counts() -> dict[str, int]:
    """Headline counts for the super-admin quick-start cards."""
    return {
        "profiles": Profile.objects.count(),
        "departments": Department.objects.count(),
        "courses": Course.objects.count(),
        "pending_od": ODRequest.objects.filter(status=ODStatus.PENDING).count(),
    }


class GenerationCounter:
    """Monotonic counter tagging refreshes; only the latest one may publish."""

    def __init__(self) -> None:
        self._value = 0

    @property
    def value(self) -> int:
        return self._value

    def next(self) -> int:
        self._value += 1
        return self._value

    def is_current(self, generation: int) -> bool:
        return generation == self._value
