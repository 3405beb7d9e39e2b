"""Seed a notes API with sample notes for demos and screenshots.

Requires the notes API to be running.

Usage:
    python scripts/seed_notes.py [--base-url http://localhost:3000] [--dry-run]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Allow running as a plain script from the project root.
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from notes_client.api import NotesAPI, NotesAPIError  # noqa: E402
from notes_client.config import settings  # noqa: E402

logger = logging.getLogger("seed_notes")

# Each entry: (title, content)
NOTES: list[tuple[str, str]] = [
    (
        "Lista del súper",
        "Huevos, leche, pan, café y tortillas.",
    ),
    (
        "Ideas de proyecto",
        "Cliente de notas con recordatorios y modo sin conexión.",
    ),
    (
        "Reunión del lunes",
        "Revisar el plan de migración y asignar responsables.",
    ),
    (
        "Libros pendientes",
        "Cien años de soledad, Pedro Páramo, La tregua.",
    ),
    (
        "Alpine trip",
        "Check the weather and book the cabin two weeks ahead.",
    ),
]


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed a notes API with sample notes")
    parser.add_argument(
        "--base-url",
        default=settings.notes_api_url,
        help=f"Notes API base URL (default: {settings.notes_api_url})",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the notes that would be created without sending anything",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )

    if args.dry_run:
        for i, (title, content) in enumerate(NOTES, 1):
            print(f"[{i}/{len(NOTES)}] {title}: {content}")
        return 0

    api = NotesAPI(args.base_url, timeout=settings.request_timeout)
    failures = 0
    try:
        for i, (title, content) in enumerate(NOTES, 1):
            try:
                api.create_note(title, content)
            except NotesAPIError as e:
                failures += 1
                logger.warning("Could not create '%s' (%s): %s", title, e.kind.value, e)
                print(f"[{i}/{len(NOTES)}] FAILED  {title} ({e.kind.value}: {e})")
                continue
            print(f"[{i}/{len(NOTES)}] OK      {title}")

        total = len(api.list_notes())
    except NotesAPIError as e:
        logger.error("Could not list notes after seeding: %s", e)
        return 1
    finally:
        api.close()

    print(f"\nSeeded {len(NOTES) - failures}/{len(NOTES)} notes, API now holds {total}.")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
