"""Thin HTTP client for the remote notes API.

All methods return parsed models or raise NotesAPIError on failure.
Uses requests (synchronous) since Streamlit reruns are synchronous.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional
from urllib.parse import quote

import requests
from pydantic import ValidationError

from notes_client.metrics import NOTES_API_DURATION, NOTES_API_REQUESTS
from notes_client.models import ErrorKind, Note, NoteDraft

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0  # seconds
NOTES_PATH = "/api/notes"


class NotesAPIError(Exception):
    """Raised when a request to the notes API does not succeed."""

    def __init__(
        self, kind: ErrorKind, message: str, status_code: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code


class NotesAPI:
    """Client for the `/api/notes` CRUD resource."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    @property
    def collection_url(self) -> str:
        return f"{self.base_url}{NOTES_PATH}"

    def note_url(self, note_id: str) -> str:
        return f"{self.collection_url}/{quote(str(note_id), safe='')}"

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def list_notes(self) -> list[Note]:
        """GET /api/notes — the full note collection."""
        resp = self._request("list", "GET", self.collection_url)
        try:
            payload = resp.json()
        except ValueError as e:
            raise NotesAPIError(
                ErrorKind.INVALID_RESPONSE, f"List response is not JSON: {e}"
            ) from e

        if not isinstance(payload, list):
            raise NotesAPIError(
                ErrorKind.INVALID_RESPONSE,
                f"Expected a JSON array of notes, got {type(payload).__name__}",
            )
        try:
            return [Note.model_validate(item) for item in payload]
        except ValidationError as e:
            raise NotesAPIError(
                ErrorKind.INVALID_RESPONSE, f"Malformed note in list: {e}"
            ) from e

    def create_note(self, title: str, content: str) -> Optional[Note]:
        """POST /api/notes — create a note.

        Returns the created note when the response body describes one.
        The API is not required to echo the note back, so None is a
        normal outcome.
        """
        body = NoteDraft(title=title, content=content).model_dump()
        resp = self._request("create", "POST", self.collection_url, json=body)
        try:
            return Note.model_validate(resp.json())
        except ValueError:
            return None

    def update_note(self, note_id: str, title: str, content: str) -> None:
        """PUT /api/notes/{id} — replace a note's title and content."""
        body = NoteDraft(title=title, content=content).model_dump()
        self._request("update", "PUT", self.note_url(note_id), json=body)

    def delete_note(self, note_id: str) -> None:
        """DELETE /api/notes/{id} — remove a note."""
        self._request("delete", "DELETE", self.note_url(note_id))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _request(
        self, operation: str, method: str, url: str, **kwargs: Any
    ) -> requests.Response:
        start = time.perf_counter()
        try:
            resp = self._session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            NOTES_API_REQUESTS.labels(operation=operation, status="error").inc()
            logger.warning("%s %s failed: %s", method, url, e)
            raise NotesAPIError(ErrorKind.NETWORK, str(e)) from e
        finally:
            NOTES_API_DURATION.labels(operation=operation).observe(
                time.perf_counter() - start
            )

        NOTES_API_REQUESTS.labels(operation=operation, status=resp.status_code).inc()
        logger.debug("%s %s -> %d", method, url, resp.status_code)
        try:
            resp.raise_for_status()
        except requests.HTTPError as e:
            logger.warning("%s %s returned %d", method, url, resp.status_code)
            raise NotesAPIError(
                ErrorKind.HTTP_STATUS, str(e), status_code=resp.status_code
            ) from e
        # raise_for_status lets 1xx/3xx through; only 2xx counts as success
        if not 200 <= resp.status_code < 300:
            logger.warning("%s %s returned %d", method, url, resp.status_code)
            raise NotesAPIError(
                ErrorKind.HTTP_STATUS,
                f"Unexpected status {resp.status_code} for url: {url}",
                status_code=resp.status_code,
            )
        return resp
