import logging
from datetime import datetime, UTC
from typing import Optional

from core.errors import InvalidArgument
from core.sa.models import LibraryEntry, Shelf

logger = logging.getLogger(__name__)

COMPLETE = 100.0
MIN_RATING = 1
MAX_RATING = 5
MAX_NOTES_LENGTH = 1000


def validate_progress(current_page: Optional[int] = None, progress_percentage: Optional[float] = None) -> None:
    """Check progress inputs before anything is written.

    Raises:
        InvalidArgument: If the page is negative or the percentage is outside [0, 100]
    """
    if current_page is not None:
        if isinstance(current_page, bool) or not isinstance(current_page, int):
            raise InvalidArgument("Current page must be a whole number")
        if current_page < 0:
            raise InvalidArgument("Current page must be at least 0")
    if progress_percentage is not None:
        if isinstance(progress_percentage, bool) or not isinstance(progress_percentage, (int, float)):
            raise InvalidArgument("Progress percentage must be a number")
        if progress_percentage < 0 or progress_percentage > COMPLETE:
            raise InvalidArgument("Progress percentage must be between 0 and 100")


def validate_rating(rating) -> int:
    """Return the rating if it is a whole number from 1 to 5"""
    if rating is None or isinstance(rating, bool) or not isinstance(rating, int):
        raise InvalidArgument("Rating must be a whole number between 1 and 5")
    if rating < MIN_RATING or rating > MAX_RATING:
        raise InvalidArgument("Rating must be between 1 and 5")
    return rating


def validate_notes(notes: Optional[str]) -> Optional[str]:
    if notes is not None and len(notes) > MAX_NOTES_LENGTH:
        raise InvalidArgument("Notes cannot exceed 1000 characters")
    return notes


def percentage_for_page(current_page: int, page_count: Optional[int]) -> Optional[float]:
    """Percentage complete for a page, capped at 100.

    Returns:
        None when the book's page count is unknown or not positive
    """
    if page_count is None or page_count <= 0:
        return None
    return min(current_page / page_count * 100.0, COMPLETE)


def apply_progress(
    entry: LibraryEntry,
    current_page: Optional[int] = None,
    progress_percentage: Optional[float] = None,
    now: Optional[datetime] = None
) -> bool:
    """Record reading progress on an entry.

    A percentage derived from the page and the book's page count takes
    precedence over an explicit percentage. Reaching 100% moves the entry
    to READ and stamps finished_at, whatever shelf it was on.

    Args:
        entry: The library entry, with its book loaded
        current_page: Page the reader is on
        progress_percentage: Explicit percentage complete
        now: Timestamp to record (defaults to the current UTC time)

    Returns:
        True if this update completed the book
    """
    validate_progress(current_page, progress_percentage)

    derived = None
    if current_page is not None:
        entry.current_page = current_page
        page_count = entry.book.page_count if entry.book is not None else None
        derived = percentage_for_page(current_page, page_count)

    if derived is not None:
        entry.progress_percentage = derived
    elif progress_percentage is not None:
        entry.progress_percentage = float(progress_percentage)

    if entry.progress_percentage is not None and entry.progress_percentage >= COMPLETE:
        entry.shelf = Shelf.READ
        entry.finished_at = now or datetime.now(UTC)
        logger.info("Entry %s reached 100%%, moved to %s", entry.id, Shelf.READ.value)
        return True
    return False
