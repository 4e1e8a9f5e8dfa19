# tests/test_engine.py
import pytest
from datetime import datetime, UTC

from core.engine.shelves import TRANSITIONS, apply_transition, parse_shelf, place_new_entry
from core.engine.progress import apply_progress, percentage_for_page, validate_progress, validate_rating
from core.engine.ratings import RatingAggregator
from core.errors import InvalidArgument, NotFound
from core.sa.models import Book, LibraryEntry, Review, Shelf

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)
EARLIER = datetime(2024, 1, 1, 8, 0, tzinfo=UTC)

def make_entry(shelf=None, page_count=200):
    entry = LibraryEntry(user_id=1, book_id=1)
    entry.book = Book(title="Test Book", author="Test Author", page_count=page_count)
    if shelf is not None:
        entry.shelf = shelf
    return entry

def test_transition_table_covers_every_pair():
    """Every (old, new) shelf pair has a side effect"""
    assert set(TRANSITIONS) == {(old, new) for old in Shelf for new in Shelf}

@pytest.mark.parametrize("old_shelf", [Shelf.WANT_TO_READ, Shelf.READ])
def test_move_to_currently_reading_sets_started_at(old_shelf):
    entry = make_entry(old_shelf)
    previous = apply_transition(entry, Shelf.CURRENTLY_READING, NOW)
    assert previous == old_shelf
    assert entry.shelf == Shelf.CURRENTLY_READING
    assert entry.started_at == NOW

@pytest.mark.parametrize("old_shelf", [Shelf.WANT_TO_READ, Shelf.CURRENTLY_READING, Shelf.READ])
def test_move_to_read_completes_entry(old_shelf):
    entry = make_entry(old_shelf, page_count=320)
    apply_transition(entry, Shelf.READ, NOW)
    assert entry.shelf == Shelf.READ
    assert entry.finished_at == NOW
    assert entry.progress_percentage == 100.0
    assert entry.current_page == 320

def test_move_to_read_without_page_count_leaves_page():
    entry = make_entry(Shelf.CURRENTLY_READING, page_count=None)
    entry.current_page = 42
    apply_transition(entry, Shelf.READ, NOW)
    assert entry.progress_percentage == 100.0
    assert entry.current_page == 42

def test_move_back_to_want_to_read_keeps_fields():
    entry = make_entry(Shelf.READ)
    entry.started_at = EARLIER
    entry.finished_at = EARLIER
    entry.progress_percentage = 100.0
    apply_transition(entry, Shelf.WANT_TO_READ, NOW)
    assert entry.shelf == Shelf.WANT_TO_READ
    assert entry.started_at == EARLIER
    assert entry.finished_at == EARLIER
    assert entry.progress_percentage == 100.0

def test_same_shelf_move_on_want_to_read_changes_nothing():
    entry = make_entry(Shelf.WANT_TO_READ)
    entry.started_at = EARLIER
    entry.progress_percentage = 40.0
    apply_transition(entry, Shelf.WANT_TO_READ, NOW)
    assert entry.started_at == EARLIER
    assert entry.finished_at is None
    assert entry.progress_percentage == 40.0

def test_same_shelf_move_restarts_reading():
    entry = make_entry(Shelf.CURRENTLY_READING)
    entry.started_at = EARLIER
    entry.progress_percentage = 40.0
    apply_transition(entry, Shelf.CURRENTLY_READING, NOW)
    assert entry.shelf == Shelf.CURRENTLY_READING
    assert entry.started_at == NOW
    assert entry.finished_at is None
    assert entry.progress_percentage == 40.0

def test_same_shelf_move_refinishes_read_entry():
    entry = make_entry(Shelf.READ, page_count=200)
    entry.finished_at = EARLIER
    entry.current_page = 80
    entry.progress_percentage = 40.0
    apply_transition(entry, Shelf.READ, NOW)
    assert entry.shelf == Shelf.READ
    assert entry.finished_at == NOW
    assert entry.progress_percentage == 100.0
    assert entry.current_page == 200

def test_place_new_entry_on_each_shelf():
    want = place_new_entry(make_entry(), Shelf.WANT_TO_READ, NOW)
    assert want.started_at is None and want.finished_at is None

    reading = place_new_entry(make_entry(), Shelf.CURRENTLY_READING, NOW)
    assert reading.started_at == NOW
    assert reading.finished_at is None

    done = place_new_entry(make_entry(page_count=300), Shelf.READ, NOW)
    assert done.shelf == Shelf.READ
    assert done.finished_at == NOW
    assert done.progress_percentage == 100.0
    # Creation does not fill in the page
    assert done.current_page is None

def test_parse_shelf_accepts_any_case():
    assert parse_shelf("currently_reading") == Shelf.CURRENTLY_READING
    assert parse_shelf(" Read ") == Shelf.READ
    assert parse_shelf(Shelf.WANT_TO_READ) == Shelf.WANT_TO_READ

def test_parse_shelf_rejects_unknown():
    with pytest.raises(InvalidArgument) as exc:
        parse_shelf("DID_NOT_FINISH")
    assert "WANT_TO_READ" in exc.value.message

def test_percentage_for_page():
    assert percentage_for_page(50, 200) == 25.0
    assert percentage_for_page(250, 200) == 100.0
    assert percentage_for_page(10, None) is None
    assert percentage_for_page(10, 0) is None

@pytest.mark.parametrize("page, percent", [(-1, None), (None, -0.1), (None, 100.5), (True, None), ("5", None)])
def test_validate_progress_rejects(page, percent):
    with pytest.raises(InvalidArgument):
        validate_progress(page, percent)

def test_validate_progress_accepts_bounds():
    validate_progress(0, 0)
    validate_progress(None, 100)

@pytest.mark.parametrize("rating", [0, 6, None, 3.5, True])
def test_validate_rating_rejects(rating):
    with pytest.raises(InvalidArgument):
        validate_rating(rating)

def test_page_derived_percentage_wins():
    entry = make_entry(Shelf.CURRENTLY_READING, page_count=200)
    completed = apply_progress(entry, current_page=50, progress_percentage=90.0, now=NOW)
    assert completed is False
    assert entry.current_page == 50
    assert entry.progress_percentage == 25.0
    assert entry.shelf == Shelf.CURRENTLY_READING

def test_explicit_percentage_used_without_page_count():
    entry = make_entry(Shelf.CURRENTLY_READING, page_count=None)
    apply_progress(entry, current_page=50, progress_percentage=30.0, now=NOW)
    assert entry.current_page == 50
    assert entry.progress_percentage == 30.0

def test_reaching_last_page_marks_read():
    entry = make_entry(Shelf.CURRENTLY_READING, page_count=200)
    completed = apply_progress(entry, current_page=200, now=NOW)
    assert completed is True
    assert entry.shelf == Shelf.READ
    assert entry.finished_at == NOW
    assert entry.progress_percentage == 100.0

def test_hundred_percent_completes_from_want_to_read():
    entry = make_entry(Shelf.WANT_TO_READ)
    assert apply_progress(entry, progress_percentage=100, now=NOW) is True
    assert entry.shelf == Shelf.READ
    assert entry.finished_at == NOW

def test_pages_past_the_end_are_capped():
    entry = make_entry(Shelf.CURRENTLY_READING, page_count=200)
    apply_progress(entry, current_page=260, now=NOW)
    assert entry.progress_percentage == 100.0
    assert entry.current_page == 260

def test_aggregator_recomputes_from_reviews(db_session, sample_book, sample_user, other_user):
    db_session.add_all([
        Review(user_id=sample_user.id, book_id=sample_book.id, content="Loved every page.", rating=5),
        Review(user_id=other_user.id, book_id=sample_book.id, content="Good, not great.", rating=2),
    ])
    db_session.flush()

    average, count = RatingAggregator(db_session).recompute(sample_book.id)
    db_session.commit()

    assert (average, count) == (3.5, 2)
    db_session.refresh(sample_book)
    assert sample_book.average_rating == 3.5
    assert sample_book.ratings_count == 2

def test_aggregator_resets_when_no_reviews(db_session, sample_book):
    sample_book.average_rating = 4.2
    sample_book.ratings_count = 7
    db_session.commit()

    assert RatingAggregator(db_session).recompute(sample_book.id) == (0.0, 0)
    db_session.commit()
    db_session.refresh(sample_book)
    assert sample_book.ratings_count == 0

def test_aggregator_missing_book(db_session):
    with pytest.raises(NotFound):
        RatingAggregator(db_session).recompute(9999)

def test_recompute_all(db_session, multiple_books, sample_user):
    db_session.add(Review(user_id=sample_user.id, book_id=multiple_books[0].id, content="A sweeping epic.", rating=4))
    db_session.commit()

    assert RatingAggregator(db_session).recompute_all() == len(multiple_books)
    db_session.commit()
    db_session.refresh(multiple_books[0])
    assert multiple_books[0].average_rating == 4.0
    assert multiple_books[0].ratings_count == 1
