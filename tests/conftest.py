"""Shared fixtures: an in-memory notes API and a manually fired timer."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Callable, Optional

import pytest

from notes_client.api import NotesAPIError
from notes_client.controller import NoteStoreController
from notes_client.models import ErrorKind, Note
from notes_client.reminders import ReminderScheduler

BASE_TIME = datetime(2024, 5, 1, 12, 0, 0)


class FakeNotesAPI:
    """In-memory stand-in for NotesAPI with the same method surface."""

    def __init__(self, notes: Optional[list[Note]] = None) -> None:
        self.notes: list[Note] = list(notes or [])
        self.calls: list[tuple[str, Any]] = []
        self.failures: dict[str, NotesAPIError] = {}
        self.on_list: Optional[Callable[[], None]] = None
        self._next_id = len(self.notes) + 1

    def fail(self, operation: str, kind: ErrorKind, status_code: Optional[int] = None) -> None:
        """Make the next call to `operation` raise."""
        self.failures[operation] = NotesAPIError(kind, f"{operation} failed", status_code)

    def _maybe_fail(self, operation: str) -> None:
        error = self.failures.pop(operation, None)
        if error is not None:
            raise error

    def list_notes(self) -> list[Note]:
        self.calls.append(("list", None))
        snapshot = list(self.notes)
        if self.on_list is not None:
            hook, self.on_list = self.on_list, None
            hook()
        self._maybe_fail("list")
        return snapshot

    def create_note(self, title: str, content: str) -> Optional[Note]:
        self.calls.append(("create", (title, content)))
        self._maybe_fail("create")
        note = Note(
            id=f"n{self._next_id}",
            title=title,
            content=content,
            created_at=BASE_TIME + timedelta(minutes=self._next_id),
        )
        self._next_id += 1
        self.notes.append(note)
        return note

    def update_note(self, note_id: str, title: str, content: str) -> None:
        self.calls.append(("update", (note_id, title, content)))
        self._maybe_fail("update")
        self.notes = [
            n.model_copy(update={"title": title, "content": content}) if n.id == note_id else n
            for n in self.notes
        ]

    def delete_note(self, note_id: str) -> None:
        self.calls.append(("delete", note_id))
        self._maybe_fail("delete")
        self.notes = [n for n in self.notes if n.id != note_id]


class FakeTimer:
    """Timer double that records its delay and only fires when told to."""

    created: list["FakeTimer"] = []

    def __init__(self, interval: float, function: Callable[[], None]) -> None:
        self.interval = interval
        self.function = function
        self.started = False
        self.cancelled = False
        self.daemon = False
        FakeTimer.created.append(self)

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        if not self.cancelled:
            self.function()


class FakeClock:
    def __init__(self, now: datetime = BASE_TIME) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now.timestamp()


def make_note(note_id: str, title: str, minutes: Optional[int] = 0, content: str = "body") -> Note:
    created_at = None if minutes is None else BASE_TIME + timedelta(minutes=minutes)
    return Note(id=note_id, title=title, content=content, created_at=created_at)


@pytest.fixture()
def fake_api() -> FakeNotesAPI:
    return FakeNotesAPI(
        [
            make_note("a", "Alpha", 1),
            make_note("b", "Beta", 2),
            make_note("c", "alpine", 3),
        ]
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def timers() -> list[FakeTimer]:
    FakeTimer.created = []
    return FakeTimer.created


@pytest.fixture()
def scheduler(clock: FakeClock, timers: list[FakeTimer]) -> ReminderScheduler:
    return ReminderScheduler(clock=clock, timer_factory=FakeTimer)


@pytest.fixture()
def controller(fake_api: FakeNotesAPI, scheduler: ReminderScheduler) -> NoteStoreController:
    return NoteStoreController(fake_api, scheduler)
