"""Tests for notes_client.models — wire parsing and result types."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from notes_client.models import Err, ErrorKind, Note, NoteDraft, Ok, SortOrder


class TestNoteModel:
    def test_mongo_style_id(self) -> None:
        note = Note.model_validate({"_id": "abc", "title": "T", "content": "C"})
        assert note.id == "abc"
        assert note.created_at is None

    def test_plain_id(self) -> None:
        note = Note.model_validate({"id": "abc", "title": "T", "content": "C"})
        assert note.id == "abc"

    def test_numeric_id_coerced(self) -> None:
        note = Note.model_validate({"id": 42, "title": "T", "content": "C"})
        assert note.id == "42"

    def test_created_at_parsed(self) -> None:
        note = Note.model_validate(
            {"_id": "1", "title": "T", "content": "C", "createdAt": "2024-05-01T12:30:00Z"}
        )
        assert note.created_at == datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)

    def test_unknown_fields_ignored(self) -> None:
        note = Note.model_validate(
            {"_id": "1", "title": "T", "content": "C", "__v": 0, "updatedAt": "x"}
        )
        assert not hasattr(note, "updatedAt")

    def test_missing_title_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Note.model_validate({"_id": "1", "content": "C"})

    def test_missing_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Note.model_validate({"title": "T", "content": "C"})

    def test_notes_are_frozen(self) -> None:
        note = Note(id="1", title="T", content="C")
        with pytest.raises(ValidationError):
            note.title = "changed"


class TestNoteDraft:
    def test_body_has_only_title_and_content(self) -> None:
        assert NoteDraft(title="T", content="C").model_dump() == {"title": "T", "content": "C"}


class TestResults:
    def test_ok(self) -> None:
        result = Ok([Note(id="1", title="T", content="C")])
        assert result.ok is True
        assert len(result.notes) == 1

    def test_err(self) -> None:
        result = Err(ErrorKind.HTTP_STATUS, 500, "boom")
        assert result.ok is False
        assert result.kind is ErrorKind.HTTP_STATUS
        assert result.status_code == 500

    def test_sort_order_from_string(self) -> None:
        assert SortOrder("newest") is SortOrder.NEWEST
        assert SortOrder("oldest") is SortOrder.OLDEST
        with pytest.raises(ValueError):
            SortOrder("random")
