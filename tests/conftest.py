# tests/conftest.py
import os
import sys
import pytest
from pathlib import Path

# Add project root to Python path
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from sqlalchemy.orm import Session

from core.sa.database import Database
from core.sa.models import Base, Book, User

@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory):
    """Create a temporary directory for the test database."""
    test_dir = tmp_path_factory.mktemp("test_db")
    return str(test_dir / "test_bookbuddy.db")

@pytest.fixture(scope="session")
def test_db_url(test_db_path):
    return f"sqlite:///{test_db_path}"

@pytest.fixture(scope="session")
def database(test_db_url, test_db_path):
    """Create a test database instance"""
    db = Database(test_db_url)

    # Drop all tables and recreate schema
    db.drop_db()
    db.init_db()

    yield db

    db.engine.dispose()
    try:
        os.remove(test_db_path)
    except OSError:
        pass  # Ignore errors if file doesn't exist

@pytest.fixture(scope="function")
def db_session(database):
    """Create a new database session for a test"""
    session: Session = database.get_session()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture(autouse=True)
def cleanup_db(db_session):
    """Clean up database tables before each test"""
    # Children first so foreign keys stay satisfied
    for table in reversed(Base.metadata.sorted_tables):
        db_session.execute(table.delete())
    db_session.commit()
    yield
    db_session.rollback()

@pytest.fixture
def sample_user(db_session):
    """Create a sample user for testing."""
    user = User(username="reader", email="reader@example.com", first_name="Test", last_name="Reader")
    db_session.add(user)
    db_session.commit()
    return user

@pytest.fixture
def other_user(db_session):
    user = User(username="critic", email="critic@example.com")
    db_session.add(user)
    db_session.commit()
    return user

@pytest.fixture
def sample_book(db_session):
    """Create a sample book with a known page count."""
    book = Book(
        title="Project Hail Mary",
        author="Andy Weir",
        isbn="9780593135204",
        description="A lone astronaut must save the earth.",
        publisher="Ballantine Books",
        published_date="2021-05-04",
        page_count=200,
        categories=["Fiction", "Science Fiction"],
        language="en",
        google_books_id="gb_hail_mary"
    )
    db_session.add(book)
    db_session.commit()
    return book

@pytest.fixture
def book_without_pages(db_session):
    book = Book(title="Untracked Pages", author="Anonymous", categories=[])
    db_session.add(book)
    db_session.commit()
    return book

@pytest.fixture
def multiple_books(db_session):
    """Create several books by different authors for search tests."""
    books = []
    data = [
        ("The Way of Kings", "Brandon Sanderson", ["Fantasy"]),
        ("Words of Radiance", "Brandon Sanderson", ["Fantasy", "Epic"]),
        ("The Martian", "Andy Weir", ["Science Fiction"]),
        ("Dune", "Frank Herbert", ["science fiction", "Classics"]),
        ("Circe", "Madeline Miller", ["Mythology"]),
    ]
    for i, (title, author, categories) in enumerate(data, start=1):
        book = Book(
            title=title,
            author=author,
            page_count=100 * i,
            categories=categories,
            google_books_id=f"gb_{i}"
        )
        db_session.add(book)
        books.append(book)
    db_session.commit()
    return books

@pytest.fixture
def catalog_records():
    """Catalog hits as the Google Books client would return them."""
    from core.catalog.google_books import BookRecord
    return [
        BookRecord(
            title="The Hobbit",
            author="J.R.R. Tolkien",
            google_books_id="gb_hobbit",
            isbn="9780547928227",
            page_count=300,
            categories=["Fantasy"],
            language="en"
        ),
        BookRecord(
            title="The Fellowship of the Ring",
            author="J.R.R. Tolkien",
            google_books_id="gb_fellowship",
            isbn="9780547928210",
            page_count=423,
            categories=["Fantasy"]
        ),
    ]

@pytest.fixture
def mock_catalog(catalog_records):
    """A catalog client that never touches the network."""
    from unittest.mock import Mock
    from core.catalog.google_books import GoogleBooksClient

    catalog = Mock(spec=GoogleBooksClient)
    catalog.search.return_value = catalog_records
    catalog.fetch_by_id.side_effect = lambda external_id: next(
        (r for r in catalog_records if r.google_books_id == external_id), None
    )
    return catalog
