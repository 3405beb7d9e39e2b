"""Notes — Streamlit single-page client.

Run with:
    streamlit run ui/app.py
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Ensure the project root is on sys.path so `ui.*` and `notes_client.*`
# imports resolve regardless of the working directory Streamlit uses.
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import streamlit as st  # noqa: E402

st.set_page_config(
    page_title="Notas",
    page_icon="📝",
    layout="centered",
    initial_sidebar_state="collapsed",
)

from notes_client.config import settings  # noqa: E402
from notes_client.metrics import start_metrics_server  # noqa: E402
from ui.components import notes, sidebar  # noqa: E402

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
)


@st.cache_resource
def _metrics_server() -> bool:
    """Start the Prometheus endpoint once per process, not once per rerun."""
    return start_metrics_server(settings.metrics_port)


_metrics_server()
controller = notes.get_controller()

sidebar.render(controller)
notes.render(controller)

st.divider()
st.caption(f"Notes API: {settings.notes_api_url}")
