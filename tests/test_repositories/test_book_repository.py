# tests/test_repositories/test_book_repository.py
import pytest
from core.sa.repositories.book import BookRepository
from core.sa.models import Book, LibraryEntry, Review, Favourite, Shelf

@pytest.fixture
def book_repo(db_session):
    """Fixture to create a BookRepository instance"""
    return BookRepository(db_session)

def test_get_by_id(book_repo, sample_book):
    book = book_repo.get_by_id(sample_book.id)
    assert book is not None
    assert book.title == "Project Hail Mary"

def test_get_by_nonexistent_id(book_repo):
    assert book_repo.get_by_id(9999) is None

def test_get_by_external_ids(book_repo, sample_book):
    assert book_repo.get_by_google_books_id("gb_hail_mary").id == sample_book.id
    assert book_repo.get_by_isbn("9780593135204").id == sample_book.id
    assert book_repo.get_by_google_books_id("missing") is None

def test_get_for_update(book_repo, sample_book):
    book = book_repo.get_for_update(sample_book.id)
    assert book is sample_book

def test_search_books_matches_title_and_author(book_repo, multiple_books):
    """Search is a case-insensitive substring match on title or author"""
    results = book_repo.search_books("sanderson")
    assert [b.title for b in results] == ["The Way of Kings", "Words of Radiance"]

    results = book_repo.search_books("MARTIAN")
    assert len(results) == 1
    assert results[0].author == "Andy Weir"

def test_search_books_empty_query_returns_all(book_repo, multiple_books):
    results = book_repo.search_books("")
    assert len(results) == len(multiple_books)
    # Ordered by title
    assert [b.title for b in results] == sorted(b.title for b in multiple_books)

def test_search_books_pagination(book_repo, multiple_books):
    first = book_repo.search_books(None, limit=2, offset=0)
    second = book_repo.search_books(None, limit=2, offset=2)
    assert len(first) == 2
    assert len(second) == 2
    assert {b.id for b in first}.isdisjoint({b.id for b in second})

def test_count_books(book_repo, multiple_books):
    assert book_repo.count_books() == 5
    assert book_repo.count_books("brandon") == 2
    assert book_repo.count_books("nothing matches") == 0

def test_get_by_author(book_repo, multiple_books):
    results = book_repo.get_by_author("weir")
    assert [b.title for b in results] == ["The Martian"]

def test_get_by_category_is_case_insensitive(book_repo, multiple_books):
    results = book_repo.get_by_category("Science Fiction")
    assert {b.title for b in results} == {"The Martian", "Dune"}

def test_create_book_starts_with_empty_aggregate(book_repo, db_session):
    book = book_repo.create_book(title="New Book", author="New Author", average_rating=4.7, ratings_count=120)
    db_session.commit()
    assert book.id is not None
    assert book.average_rating == 0.0
    assert book.ratings_count == 0
    assert book.categories == []

def test_delete_book_sweeps_owned_records(book_repo, db_session, sample_book, sample_user):
    db_session.add_all([
        LibraryEntry(user_id=sample_user.id, book_id=sample_book.id, shelf=Shelf.READ),
        Review(user_id=sample_user.id, book_id=sample_book.id, content="Worth reading twice.", rating=5),
        Favourite(user_id=sample_user.id, book_id=sample_book.id),
    ])
    db_session.commit()

    book_repo.delete_book(sample_book)
    db_session.commit()

    assert db_session.query(Book).count() == 0
    assert db_session.query(LibraryEntry).count() == 0
    assert db_session.query(Review).count() == 0
    assert db_session.query(Favourite).count() == 0
