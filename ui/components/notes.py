"""Notes page: search, sort, note form and note list."""

from __future__ import annotations

from datetime import datetime, timedelta

import streamlit as st

from notes_client.config import settings
from notes_client.controller import NoteStoreController
from notes_client.formatting import format_created_at
from notes_client.models import ErrorKind, Note, Result, SortOrder

_CONTROLLER_KEY = "notes_controller"
_ERROR_KEY = "notes_error"

_SORT_LABELS: dict[SortOrder, str] = {
    SortOrder.NEWEST: "Más nuevas",
    SortOrder.OLDEST: "Más viejas",
}

_ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.NETWORK: "No se pudo contactar la API de notas.",
    ErrorKind.HTTP_STATUS: "La API de notas rechazó la solicitud.",
    ErrorKind.INVALID_RESPONSE: "La API de notas devolvió una respuesta inválida.",
}

_REMINDER_POLL_SECONDS = 5


def get_controller() -> NoteStoreController:
    """Return this session's controller, creating and loading it on first use."""
    if _CONTROLLER_KEY not in st.session_state:
        controller = NoteStoreController.from_settings(settings)
        remember_result(controller.refresh())
        st.session_state[_CONTROLLER_KEY] = controller
        _sync_form(controller)
    return st.session_state[_CONTROLLER_KEY]


def render(controller: NoteStoreController) -> None:
    """Render the notes page."""
    _render_reminders(controller)

    if error := st.session_state.get(_ERROR_KEY):
        st.error(error)

    if controller.enable_search or controller.enable_sort:
        st.header("🔎 Buscar una nota")
        _render_filters(controller)

    st.header("📝 Crear una nota" if not controller.is_editing else "✏️ Editar nota")
    _render_form(controller)

    st.divider()
    _render_list(controller)


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


def _render_filters(controller: NoteStoreController) -> None:
    if controller.enable_search:
        st.text_input(
            "Buscar por título",
            key="search_query",
            on_change=_on_search,
            args=(controller,),
        )
    if controller.enable_sort:
        st.selectbox(
            "Ordenar",
            options=list(SortOrder),
            format_func=_SORT_LABELS.__getitem__,
            key="sort_order",
            on_change=_on_sort,
            args=(controller,),
        )


def _render_form(controller: NoteStoreController) -> None:
    with st.form("note_form", clear_on_submit=False):
        st.text_input("Título", key="draft_title")
        st.text_area("Contenido", key="draft_content")

        if not controller.is_editing:
            st.checkbox("Programar notificación", key="remind")
            col_date, col_time = st.columns(2)
            col_date.date_input("Fecha", key="remind_date")
            col_time.time_input("Hora", key="remind_time")

        label = (
            "Actualizar nota"
            if controller.is_editing
            else "Agregar nota y programar notificación"
        )
        st.form_submit_button(label, type="primary", on_click=_on_submit, args=(controller,))

    if controller.is_editing:
        st.button("Cancelar edición", on_click=_on_cancel_edit, args=(controller,))


def _render_list(controller: NoteStoreController) -> None:
    view = controller.view
    if not view:
        st.info("No hay notas todavía." if not controller.notes else "Sin resultados.")
        return

    for note in view:
        with st.container(border=True):
            st.subheader(note.title)
            st.write(note.content)
            if note.created_at is not None:
                st.caption(f"Creado: {format_created_at(note.created_at, settings.date_locale)}")

            col_edit, col_delete = st.columns(2)
            col_edit.button(
                "Editar",
                key=f"edit_{note.id}",
                on_click=_on_edit,
                args=(controller, note),
                use_container_width=True,
            )
            col_delete.button(
                "Eliminar",
                key=f"delete_{note.id}",
                on_click=_on_delete,
                args=(controller, note.id),
                use_container_width=True,
            )


@st.fragment(run_every=_REMINDER_POLL_SECONDS)
def _render_reminders(controller: NoteStoreController) -> None:
    """Poll the reminder outbox and show fired reminders as toasts."""
    for notification in controller.reminders.drain():
        st.toast(f"**{notification.title}**\n\n{notification.body}", icon="⏰")


# ---------------------------------------------------------------------------
# Callbacks
# ---------------------------------------------------------------------------


def _on_submit(controller: NoteStoreController) -> None:
    title = st.session_state.draft_title
    content = st.session_state.draft_content
    # whitespace-only counts as empty
    if not title.strip() or not content.strip():
        st.session_state[_ERROR_KEY] = "El título y el contenido son obligatorios."
        return

    controller.draft_title = title
    controller.draft_content = content
    if not controller.is_editing and st.session_state.get("remind"):
        controller.notification_time = datetime.combine(
            st.session_state.remind_date, st.session_state.remind_time
        )

    remember_result(controller.submit())
    _sync_form(controller)


def _on_edit(controller: NoteStoreController, note: Note) -> None:
    controller.begin_edit(note)
    _sync_form(controller)


def _on_cancel_edit(controller: NoteStoreController) -> None:
    controller.reset_draft()
    _sync_form(controller)


def _on_delete(controller: NoteStoreController, note_id: str) -> None:
    remember_result(controller.remove(note_id))


def _on_search(controller: NoteStoreController) -> None:
    controller.apply_search(st.session_state.search_query)


def _on_sort(controller: NoteStoreController) -> None:
    controller.apply_sort(st.session_state.sort_order)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def remember_result(result: Result) -> None:
    """Keep the last failure for display; superseded refreshes are not failures."""
    if result.ok or result.kind is ErrorKind.SUPERSEDED:
        st.session_state.pop(_ERROR_KEY, None)
        return
    message = _ERROR_MESSAGES.get(result.kind, "Error desconocido.")
    if result.status_code:
        message = f"{message} (HTTP {result.status_code})"
    st.session_state[_ERROR_KEY] = message


def _sync_form(controller: NoteStoreController) -> None:
    """Copy the controller's form state into the widgets."""
    st.session_state.draft_title = controller.draft_title
    st.session_state.draft_content = controller.draft_content
    st.session_state.search_query = controller.search_query
    st.session_state.sort_order = controller.sort_order

    target = controller.notification_time
    st.session_state.remind = target is not None
    if target is None:
        target = _default_reminder_time()
    st.session_state.remind_date = target.date()
    st.session_state.remind_time = target.time().replace(second=0, microsecond=0)


def _default_reminder_time() -> datetime:
    """One hour from now, on the minute."""
    soon = datetime.now() + timedelta(hours=1)
    return soon.replace(second=0, microsecond=0)
