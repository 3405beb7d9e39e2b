"""One-shot reminder notifications for notes.

A reminder is armed with a plain timer and, when it fires, hands a
Notification to the configured notifier. The default notifier collects
notifications in an outbox that the UI drains on its next rerun, since
Streamlit cannot push to the browser from a timer thread.
"""

from __future__ import annotations

import logging
import threading
import time
import uuid
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Optional

from notes_client.metrics import REMINDER_EVENTS

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "¡Recordatorio de Nota!"
DEFAULT_BODY = "Es hora de revisar tu nota: {title}"


@dataclass(frozen=True)
class Notification:
    """A reminder that has fired."""

    title: str
    body: str
    note_id: Optional[str] = None
    fired_at: float = field(default_factory=time.time)


Notifier = Callable[[Notification], None]
TimerFactory = Callable[[float, Callable[[], None]], Any]


@dataclass
class ReminderHandle:
    """A pending reminder. Cancelling it disarms the underlying timer."""

    key: str
    note_title: str
    fire_at: float
    note_id: Optional[str] = None
    _timer: Any = field(default=None, repr=False)
    _scheduler: Optional["ReminderScheduler"] = field(default=None, repr=False)

    def cancel(self) -> bool:
        """Cancel this reminder. Returns False if it already fired or was cancelled."""
        if self._scheduler is None:
            return False
        return self._scheduler._cancel_key(self.key)


class ReminderScheduler:
    """Owns every pending reminder timer."""

    def __init__(
        self,
        notifier: Optional[Notifier] = None,
        *,
        title: str = DEFAULT_TITLE,
        body: str = DEFAULT_BODY,
        clock: Callable[[], float] = time.time,
        timer_factory: TimerFactory = threading.Timer,
    ) -> None:
        self._outbox: deque[Notification] = deque()
        self._notifier = notifier or self._outbox.append
        self._title = title
        self._body = body
        self._clock = clock
        self._timer_factory = timer_factory
        self._pending: dict[str, ReminderHandle] = {}
        self._lock = threading.Lock()

    @property
    def pending(self) -> list[ReminderHandle]:
        """Reminders that are armed and have not fired yet."""
        with self._lock:
            return sorted(self._pending.values(), key=lambda h: h.fire_at)

    def schedule(
        self,
        target_time: datetime,
        note_title: str,
        note_id: Optional[str] = None,
    ) -> Optional[ReminderHandle]:
        """Arm a reminder for target_time.

        Naive datetimes are read as local time. A target that is not in the
        future arms nothing and returns None.
        """
        fire_at = target_time.timestamp()
        delay = fire_at - self._clock()
        if delay <= 0:
            REMINDER_EVENTS.labels(event="skipped").inc()
            logger.debug("Reminder for '%s' is past due, ignoring", note_title)
            return None

        handle = ReminderHandle(
            key=uuid.uuid4().hex,
            note_title=note_title,
            fire_at=fire_at,
            note_id=note_id,
            _scheduler=self,
        )
        timer = self._timer_factory(delay, lambda: self._fire(handle.key))
        if hasattr(timer, "daemon"):
            timer.daemon = True
        handle._timer = timer

        with self._lock:
            self._pending[handle.key] = handle
        timer.start()

        REMINDER_EVENTS.labels(event="scheduled").inc()
        logger.info(
            "Reminder scheduled for '%s' in %.1fs (note=%s)", note_title, delay, note_id
        )
        return handle

    def cancel(self, note_id: str) -> int:
        """Cancel every pending reminder for a note. Returns how many were cancelled."""
        with self._lock:
            keys = [k for k, h in self._pending.items() if h.note_id == note_id]
        return sum(1 for key in keys if self._cancel_key(key))

    def cancel_all(self) -> int:
        with self._lock:
            keys = list(self._pending)
        return sum(1 for key in keys if self._cancel_key(key))

    def drain(self) -> list[Notification]:
        """Pop every notification collected by the default notifier."""
        drained: list[Notification] = []
        while self._outbox:
            drained.append(self._outbox.popleft())
        return drained

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _cancel_key(self, key: str) -> bool:
        with self._lock:
            handle = self._pending.pop(key, None)
        if handle is None:
            return False
        handle._timer.cancel()
        REMINDER_EVENTS.labels(event="cancelled").inc()
        logger.info("Reminder for '%s' cancelled", handle.note_title)
        return True

    def _fire(self, key: str) -> None:
        with self._lock:
            handle = self._pending.pop(key, None)
        if handle is None:
            return

        notification = Notification(
            title=self._title,
            body=self._body.format(title=handle.note_title),
            note_id=handle.note_id,
            fired_at=self._clock(),
        )
        REMINDER_EVENTS.labels(event="fired").inc()
        logger.info("Reminder fired: %s", notification.body)
        self._notifier(notification)
