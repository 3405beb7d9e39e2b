"""Note store controller.

Keeps a client-side mirror of the remote note collection together with the
form/editing state of the page. Every mutation goes to the remote API and is
followed by a full refresh; the local list is never patched in place.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import TYPE_CHECKING, Optional, Union

from notes_client.api import NotesAPI, NotesAPIError
from notes_client.metrics import CACHED_NOTES, STALE_RESPONSES
from notes_client.models import Err, ErrorKind, Note, Ok, Result, SortOrder
from notes_client.reminders import ReminderHandle, ReminderScheduler

if TYPE_CHECKING:
    from notes_client.config import Settings

logger = logging.getLogger(__name__)


def derive_view(
    notes: list[Note],
    query: str = "",
    order: Optional[SortOrder] = SortOrder.NEWEST,
) -> list[Note]:
    """Filter notes by title substring (case-insensitive), then sort by creation time.

    An order of None leaves the filtered notes in their original order.
    Notes without a creation time keep their relative order after all
    dated notes.
    """
    q = query.lower()
    filtered = [n for n in notes if q in n.title.lower()] if q else list(notes)
    if order is None:
        return filtered

    dated = [n for n in filtered if n.created_at is not None]
    undated = [n for n in filtered if n.created_at is None]
    dated.sort(
        key=lambda n: n.created_at.timestamp(),
        reverse=order is SortOrder.NEWEST,
    )
    return dated + undated


class NoteStoreController:
    """Mirror of the remote notes plus the transient state of the note form."""

    def __init__(
        self,
        api: NotesAPI,
        reminders: Optional[ReminderScheduler] = None,
        *,
        enable_search: bool = True,
        enable_sort: bool = True,
    ) -> None:
        self._api = api
        self._reminders = reminders or ReminderScheduler()
        self.enable_search = enable_search
        self.enable_sort = enable_sort

        self._notes: list[Note] = []
        self._view: list[Note] = []

        self.editing_note_id: Optional[str] = None
        self.draft_title = ""
        self.draft_content = ""
        self.notification_time: Optional[datetime] = None
        self.search_query = ""
        self.sort_order = SortOrder.NEWEST

        self._lock = threading.Lock()
        self._issued_seq = 0

    @classmethod
    def from_settings(cls, settings: "Settings") -> "NoteStoreController":
        """Build a controller wired to the configured notes API."""
        api = NotesAPI(settings.notes_api_url, timeout=settings.request_timeout)
        reminders = ReminderScheduler(
            title=settings.reminder_title, body=settings.reminder_body
        )
        return cls(
            api,
            reminders,
            enable_search=settings.enable_search,
            enable_sort=settings.enable_sort,
        )

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def notes(self) -> list[Note]:
        """Every note from the last applied refresh."""
        return list(self._notes)

    @property
    def view(self) -> list[Note]:
        """The notes to display, after search and sort."""
        return list(self._view)

    @property
    def is_editing(self) -> bool:
        return self.editing_note_id is not None

    @property
    def reminders(self) -> ReminderScheduler:
        return self._reminders

    # ------------------------------------------------------------------
    # Remote operations
    # ------------------------------------------------------------------

    def refresh(self) -> Result:
        """Re-fetch the whole collection and replace the local mirror.

        A response that arrives after a newer refresh was issued is dropped.
        """
        with self._lock:
            self._issued_seq += 1
            seq = self._issued_seq

        try:
            notes = self._api.list_notes()
        except NotesAPIError as e:
            logger.warning("Refresh failed (%s): %s", e.kind.value, e)
            return Err(e.kind, e.status_code, str(e))

        with self._lock:
            if seq < self._issued_seq:
                STALE_RESPONSES.inc()
                logger.info(
                    "Discarding refresh #%d, refresh #%d is newer", seq, self._issued_seq
                )
                return Err(ErrorKind.SUPERSEDED, detail=f"refresh #{seq} superseded")
            self._notes = list(notes)
            self._recompute_view()
            CACHED_NOTES.set(len(self._notes))

        logger.debug("Refresh #%d loaded %d notes", seq, len(notes))
        return Ok(list(notes))

    def create(
        self,
        title: str,
        content: str,
        notification_time: Optional[datetime] = None,
    ) -> Result:
        """Create a note, then refresh and clear the form.

        If notification_time is given a reminder is armed for it, quoting
        the title as it was at creation.
        """
        try:
            created = self._api.create_note(title, content)
        except NotesAPIError as e:
            logger.warning("Create '%s' failed (%s): %s", title, e.kind.value, e)
            return Err(e.kind, e.status_code, str(e))

        logger.info("Created note '%s'", title)
        result = self.refresh()
        self.reset_draft()
        if notification_time is not None:
            self.schedule_reminder(
                notification_time, title, created.id if created else None
            )
        return result

    def update(self, note_id: str, title: str, content: str) -> Result:
        """Update a note, then refresh and clear the form."""
        try:
            self._api.update_note(note_id, title, content)
        except NotesAPIError as e:
            logger.warning("Update %s failed (%s): %s", note_id, e.kind.value, e)
            return Err(e.kind, e.status_code, str(e))

        logger.info("Updated note %s", note_id)
        self._reminders.cancel(note_id)
        result = self.refresh()
        self.reset_draft()
        return result

    def remove(self, note_id: str) -> Result:
        """Delete a note. The list is refreshed whether or not the delete succeeded."""
        error: Optional[Err] = None
        try:
            self._api.delete_note(note_id)
        except NotesAPIError as e:
            logger.warning("Delete %s failed (%s): %s", note_id, e.kind.value, e)
            error = Err(e.kind, e.status_code, str(e))
        else:
            logger.info("Deleted note %s", note_id)
            self._reminders.cancel(note_id)

        result = self.refresh()
        return error or result

    # ------------------------------------------------------------------
    # Form state
    # ------------------------------------------------------------------

    def begin_edit(self, note: Note) -> None:
        self.draft_title = note.title
        self.draft_content = note.content
        self.editing_note_id = note.id

    def reset_draft(self) -> None:
        self.draft_title = ""
        self.draft_content = ""
        self.editing_note_id = None
        self.notification_time = None

    def submit(self) -> Result:
        """Submit the form: update the note being edited, or create a new one."""
        if self.editing_note_id is not None:
            return self.update(self.editing_note_id, self.draft_title, self.draft_content)
        return self.create(self.draft_title, self.draft_content, self.notification_time)

    def schedule_reminder(
        self,
        target_time: datetime,
        note_title: str,
        note_id: Optional[str] = None,
    ) -> Optional[ReminderHandle]:
        """Arm a reminder. Past or present times are ignored and return None."""
        return self._reminders.schedule(target_time, note_title, note_id)

    # ------------------------------------------------------------------
    # Derived view
    # ------------------------------------------------------------------

    def apply_search(self, query: str) -> list[Note]:
        if not self.enable_search:
            logger.debug("Search is disabled, ignoring query '%s'", query)
            return self.view
        with self._lock:
            self.search_query = query
            self._recompute_view()
        return self.view

    def apply_sort(self, order: Union[SortOrder, str]) -> list[Note]:
        order = SortOrder(order)
        if not self.enable_sort:
            logger.debug("Sort is disabled, ignoring order '%s'", order.value)
            return self.view
        with self._lock:
            self.sort_order = order
            self._recompute_view()
        return self.view

    def _recompute_view(self) -> None:
        self._view = derive_view(
            self._notes,
            self.search_query if self.enable_search else "",
            self.sort_order if self.enable_sort else None,
        )
