# tests/test_services/test_favourite_service.py
import pytest
from core.errors import NotFound, Conflict
from core.services import FavouriteService

@pytest.fixture
def favourite_service(db_session):
    return FavouriteService(db_session)

def test_add_and_check(favourite_service, sample_user, sample_book):
    assert favourite_service.is_favourite(sample_user.id, sample_book.id) is False
    favourite_service.add_to_favourites(sample_user.id, sample_book.id)
    assert favourite_service.is_favourite(sample_user.id, sample_book.id) is True
    assert [b.id for b in favourite_service.get_favourite_books(sample_user.id)] == [sample_book.id]
    assert favourite_service.count_favourites(sample_user.id) == 1

def test_add_twice_conflicts(favourite_service, sample_user, sample_book):
    favourite_service.add_to_favourites(sample_user.id, sample_book.id)
    with pytest.raises(Conflict):
        favourite_service.add_to_favourites(sample_user.id, sample_book.id)

def test_add_missing_records(favourite_service, sample_user, sample_book):
    with pytest.raises(NotFound):
        favourite_service.add_to_favourites(9999, sample_book.id)
    with pytest.raises(NotFound):
        favourite_service.add_to_favourites(sample_user.id, 9999)

def test_remove(favourite_service, sample_user, sample_book):
    favourite_service.add_to_favourites(sample_user.id, sample_book.id)
    favourite_service.remove_from_favourites(sample_user.id, sample_book.id)
    assert favourite_service.is_favourite(sample_user.id, sample_book.id) is False
    with pytest.raises(NotFound):
        favourite_service.remove_from_favourites(sample_user.id, sample_book.id)
