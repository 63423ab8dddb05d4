"""AoE countdowns and the shared once-per-second ticker."""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from .datemath import (
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    aoe_target_instant,
    to_aoe,
    utc_now,
)
from .logger import get_logger

logger = get_logger()

DEFAULT_TICK_INTERVAL = 1.0


class CountdownSign(str, Enum):
    FUTURE = "future"
    PAST = "past"


@dataclass(frozen=True)
class Countdown:
    """Whole days/hours/minutes/seconds to (or since) a target instant."""

    sign: CountdownSign
    days: int
    hours: int
    minutes: int
    seconds: int

    @property
    def is_past(self) -> bool:
        return self.sign is CountdownSign.PAST

    def format(self) -> str:
        """Human readable form, e.g. ``Remaining 3 days 4:05:06``.

        The day count is omitted while the target is less than a day away.
        """
        clock = f"{self.hours}:{self.minutes:02d}:{self.seconds:02d}"
        if self.is_past:
            return f"Passed {self.days} days {clock}"
        if self.days > 0:
            return f"Remaining {self.days} days {clock}"
        return f"Remaining {clock}"

    def __str__(self) -> str:
        return self.format()


def tick(target: date | datetime, now: datetime) -> Countdown:
    """Countdown from ``now`` to the start of ``target`` in AoE.

    Stateless: the caller supplies the current instant. Reaching the target
    exactly counts as past, with every component zero.
    """
    diff = (aoe_target_instant(target) - to_aoe(now)).total_seconds()

    sign = CountdownSign.FUTURE if diff > 0 else CountdownSign.PAST
    remaining = int(abs(diff))

    days, remaining = divmod(remaining, SECONDS_PER_DAY)
    hours, remaining = divmod(remaining, SECONDS_PER_HOUR)
    minutes, seconds = divmod(remaining, SECONDS_PER_MINUTE)

    return Countdown(sign=sign, days=days, hours=hours, minutes=minutes, seconds=seconds)


Listener = Callable[[str, Countdown], None]


@dataclass
class _Subscription:
    target: date
    listener: Listener


class CountdownScheduler:
    """One ticker for every mounted countdown.

    Each visible time point mounts under a key with its target date and a
    listener. Every tick recomputes all countdowns against a single ``now``
    and fans the results out. Changing a node's date means calling
    ``retarget``, which publishes against the new date right away.
    """

    def __init__(
        self,
        interval: float = DEFAULT_TICK_INTERVAL,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.interval = interval
        self.clock = clock
        self._subscriptions: dict[str, _Subscription] = {}
        self._task: asyncio.Task[None] | None = None

    def __len__(self) -> int:
        return len(self._subscriptions)

    def __contains__(self, key: object) -> bool:
        return key in self._subscriptions

    def mount(self, key: str, target: date, listener: Listener) -> Countdown:
        """Start publishing countdowns for ``key``. Publishes immediately."""
        self._subscriptions[key] = _Subscription(target=target, listener=listener)
        return self._publish(key, self.clock())

    def retarget(self, key: str, target: date) -> Countdown | None:
        """Point an existing countdown at a new date.

        Returns None if ``key`` is not mounted.
        """
        subscription = self._subscriptions.get(key)
        if subscription is None:
            return None
        subscription.target = target
        return self._publish(key, self.clock())

    def unmount(self, key: str) -> None:
        self._subscriptions.pop(key, None)

    def tick_all(self, now: datetime | None = None) -> dict[str, Countdown]:
        """Recompute and publish every mounted countdown against one instant."""
        now = now if now is not None else self.clock()
        results: dict[str, Countdown] = {}
        for key in list(self._subscriptions):
            # A listener earlier in this pass may have unmounted the key
            if key in self._subscriptions:
                results[key] = self._publish(key, now)
        return results

    def _publish(self, key: str, now: datetime) -> Countdown:
        subscription = self._subscriptions[key]
        countdown = tick(subscription.target, now)
        subscription.listener(key, countdown)
        return countdown

    async def run(self, ticks: int | None = None) -> None:
        """Tick every ``interval`` seconds until cancelled or ``ticks`` run out."""
        count = 0
        while ticks is None or count < ticks:
            await asyncio.sleep(self.interval)
            self.tick_all()
            count += 1

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task[None]:
        """Run the ticker as a background task on the current event loop."""
        if self._task is None or self._task.done():
            self._task = asyncio.get_running_loop().create_task(self.run())
            logger.debug("Countdown ticker started (%d mounted)", len(self))
        return self._task

    async def stop(self) -> None:
        """Cancel the background task and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.debug("Countdown ticker stopped")
