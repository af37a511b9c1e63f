from collections.abc import Callable

from django.utils import timezone

Clock = Callable[[], int]


def system_clock() -> int:
    """Current time in whole seconds since epoch."""
    return int(timezone.now().timestamp())
