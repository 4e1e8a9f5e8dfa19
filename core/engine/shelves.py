"""Shelf placement rules for library entries.

Every (old shelf, new shelf) pair maps to a side-effect function in
``TRANSITIONS``. All moves are legal; only the derived fields differ.
Re-entering CURRENTLY_READING or READ reapplies that shelf's stamps, so a
move onto READ always leaves the entry finished at 100%.
"""
import logging
from datetime import datetime, UTC
from typing import Callable, Dict, Optional, Tuple

from core.errors import InvalidArgument
from core.sa.models import LibraryEntry, Shelf

logger = logging.getLogger(__name__)

SideEffect = Callable[[LibraryEntry, datetime], None]


def _no_effect(entry: LibraryEntry, now: datetime) -> None:
    pass


def _start_reading(entry: LibraryEntry, now: datetime) -> None:
    entry.started_at = now


def _finish_reading(entry: LibraryEntry, now: datetime) -> None:
    entry.finished_at = now
    entry.progress_percentage = 100.0
    page_count = entry.book.page_count if entry.book is not None else None
    if page_count is not None:
        entry.current_page = page_count


def _created_as_read(entry: LibraryEntry, now: datetime) -> None:
    entry.finished_at = now
    entry.progress_percentage = 100.0


TRANSITIONS: Dict[Tuple[Shelf, Shelf], SideEffect] = {
    (Shelf.WANT_TO_READ, Shelf.WANT_TO_READ): _no_effect,
    (Shelf.WANT_TO_READ, Shelf.CURRENTLY_READING): _start_reading,
    (Shelf.WANT_TO_READ, Shelf.READ): _finish_reading,
    (Shelf.CURRENTLY_READING, Shelf.WANT_TO_READ): _no_effect,
    (Shelf.CURRENTLY_READING, Shelf.CURRENTLY_READING): _start_reading,
    (Shelf.CURRENTLY_READING, Shelf.READ): _finish_reading,
    (Shelf.READ, Shelf.WANT_TO_READ): _no_effect,
    (Shelf.READ, Shelf.CURRENTLY_READING): _start_reading,
    (Shelf.READ, Shelf.READ): _finish_reading,
}

# Placement of a brand new entry. Unlike a move onto READ, creation does not
# touch current_page.
ON_CREATE: Dict[Shelf, SideEffect] = {
    Shelf.WANT_TO_READ: _no_effect,
    Shelf.CURRENTLY_READING: _start_reading,
    Shelf.READ: _created_as_read,
}


def parse_shelf(value) -> Shelf:
    """Coerce a shelf name to Shelf, accepting any letter case"""
    if isinstance(value, Shelf):
        return value
    try:
        return Shelf(str(value).strip().upper())
    except ValueError:
        valid = ", ".join(s.value for s in Shelf)
        raise InvalidArgument(f"Unknown shelf '{value}'. Must be one of: {valid}") from None


def place_new_entry(entry: LibraryEntry, shelf: Shelf, now: Optional[datetime] = None) -> LibraryEntry:
    """Put a freshly created entry on its first shelf"""
    shelf = Shelf(shelf)
    ON_CREATE[shelf](entry, now or datetime.now(UTC))
    entry.shelf = shelf
    return entry


def apply_transition(entry: LibraryEntry, new_shelf: Shelf, now: Optional[datetime] = None) -> Shelf:
    """Move an entry to another shelf and apply the derived field updates.

    Args:
        entry: The library entry to move; its book should be loaded so the
               page count is available when finishing
        new_shelf: Target shelf
        now: Timestamp to record (defaults to the current UTC time)

    Returns:
        The shelf the entry was on before the move
    """
    old_shelf = Shelf(entry.shelf)
    new_shelf = Shelf(new_shelf)
    TRANSITIONS[(old_shelf, new_shelf)](entry, now or datetime.now(UTC))
    entry.shelf = new_shelf
    logger.debug("Entry %s moved %s -> %s", entry.id, old_shelf.value, new_shelf.value)
    return old_shelf
