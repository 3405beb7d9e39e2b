"""Sidebar: API status, manual refresh and pending reminders."""

from __future__ import annotations

from datetime import datetime

import streamlit as st

from notes_client.config import settings
from notes_client.controller import NoteStoreController
from notes_client.reminders import ReminderHandle
from ui.components.notes import remember_result


def render(controller: NoteStoreController) -> None:
    """Render the shared sidebar."""
    with st.sidebar:
        st.title("📝 Notas")
        st.caption(settings.notes_api_url)
        st.metric("Notas", len(controller.notes))

        if st.button("🔄 Refrescar", use_container_width=True):
            remember_result(controller.refresh())

        st.divider()
        _render_pending(controller.reminders.pending)


def _render_pending(pending: list[ReminderHandle]) -> None:
    st.subheader("⏰ Recordatorios")
    if not pending:
        st.caption("Sin recordatorios pendientes.")
        return

    for handle in pending:
        when = datetime.fromtimestamp(handle.fire_at).strftime("%Y-%m-%d %H:%M")
        col_label, col_cancel = st.columns([3, 1])
        col_label.markdown(f"**{handle.note_title}**  \n{when}")
        col_cancel.button("✖", key=f"cancel_{handle.key}", on_click=handle.cancel)
