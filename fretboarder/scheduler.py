"""Named one-shot timers driven by the frame loop.

The scheduler keeps its own clock and only moves it forward when
``advance(delta)`` is called, so timers fire on the thread that runs the
frame loop and tests can step time explicitly. Scheduling a name that is
already pending replaces the earlier timer.
"""

import itertools
from dataclasses import dataclass, field
from typing import Callable, Dict, List

from .logger import get_logger

logger = get_logger(__name__)


@dataclass(order=True)
class _Timer:
    deadline: float
    seq: int
    name: str = field(compare=False)
    callback: Callable[[], None] = field(compare=False)


class Scheduler:
    """Cancellable, idempotent one-shot timers keyed by name."""

    def __init__(self):
        self._now = 0.0
        self._timers: Dict[str, _Timer] = {}
        self._seq = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    def schedule(self, name: str, delay: float, callback: Callable[[], None]) -> None:
        """Run ``callback`` once, ``delay`` seconds from now.

        Args:
            name: Timer name; a pending timer with the same name is replaced
            delay: Seconds until the callback fires, clamped to >= 0
            callback: Called with no arguments
        """
        deadline = self._now + max(delay, 0.0)
        self._timers[name] = _Timer(deadline, next(self._seq), name, callback)
        logger.debug("Scheduled %s at %.3f", name, deadline)

    def cancel(self, name: str) -> bool:
        """Cancel a pending timer; returns False if none was pending."""
        return self._timers.pop(name, None) is not None

    def cancel_all(self) -> None:
        if self._timers:
            logger.debug("Cancelling %d pending timers", len(self._timers))
        self._timers.clear()

    def pending(self, name: str) -> bool:
        return name in self._timers

    def pending_names(self) -> List[str]:
        return sorted(self._timers, key=lambda n: self._timers[n])

    def advance(self, delta: float) -> int:
        """Move the clock forward and fire every timer that came due.

        Timers fire in deadline order. A callback may schedule or cancel
        other timers; newly scheduled ones fire in the same call if they are
        already due.

        Returns:
            Number of callbacks fired
        """
        if delta > 0:
            self._now += delta

        fired = 0
        while True:
            due = [t for t in self._timers.values() if t.deadline <= self._now]
            if not due:
                break
            timer = min(due)
            # Drop before calling so the callback can re-arm the same name
            del self._timers[timer.name]
            timer.callback()
            fired += 1
        return fired
