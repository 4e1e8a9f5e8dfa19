# tests/test_catalog.py
import pytest
import requests
from unittest.mock import Mock

from core.catalog.google_books import GoogleBooksClient, BookRecord, sanitize_categories

VOLUME = {
    "id": "zyTCAlFPjgYC",
    "volumeInfo": {
        "title": "The Google Story",
        "authors": ["David A. Vise", "Mark Malseed"],
        "publisher": "Random House",
        "publishedDate": "2005-11-15",
        "description": "Here is the story behind one of the most remarkable Internet successes.",
        "industryIdentifiers": [
            {"type": "OTHER", "identifier": "UOM:39015061454213"},
            {"type": "ISBN_13", "identifier": "9780553804577"},
            {"type": "ISBN_10", "identifier": "055380457X"}
        ],
        "pageCount": 207,
        "categories": ["Browsers (Computer programs)", " ", "Internet"],
        "imageLinks": {
            "smallThumbnail": "http://books.google.com/small.jpg",
            "thumbnail": "http://books.google.com/thumb.jpg"
        },
        "language": "en"
    }
}

def make_response(payload=None, status_code=200):
    response = Mock()
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    return response

@pytest.fixture
def http():
    return Mock(spec=requests.Session)

@pytest.fixture
def client(http):
    return GoogleBooksClient(base_url="https://books.test/v1/", api_key="secret", timeout=5, session=http)

def test_search_parses_volumes(client, http):
    http.get.return_value = make_response({"items": [VOLUME]})

    records = client.search("google story")

    assert len(records) == 1
    record = records[0]
    assert isinstance(record, BookRecord)
    assert record.google_books_id == "zyTCAlFPjgYC"
    assert record.author == "David A. Vise, Mark Malseed"
    assert record.isbn == "9780553804577"
    assert record.cover_image_url == "http://books.google.com/thumb.jpg"
    assert record.page_count == 207
    assert record.categories == ["Browsers (Computer programs)", "Internet"]
    assert record.published_date == "2005-11-15"

    http.get.assert_called_once_with(
        "https://books.test/v1/volumes",
        params={"q": "google story", "maxResults": 20, "key": "secret"},
        timeout=5
    )

@pytest.mark.parametrize("requested, sent", [(100, 40), (0, 1), (15, 15)])
def test_search_clamps_max_results(client, http, requested, sent):
    http.get.return_value = make_response({"items": []})
    client.search("anything", max_results=requested)
    assert http.get.call_args.kwargs["params"]["maxResults"] == sent

def test_blank_query_skips_request(client, http):
    assert client.search("   ") == []
    http.get.assert_not_called()

def test_defaults_for_sparse_volume(client, http):
    http.get.return_value = make_response({"items": [
        {"id": "sparse", "volumeInfo": {"title": "  ", "imageLinks": {"smallThumbnail": "http://small.jpg"}}},
        {"id": "no_info"}
    ]})

    records = client.search("sparse")

    assert len(records) == 1
    assert records[0].title == "Untitled"
    assert records[0].author == "Unknown Author"
    assert records[0].isbn is None
    assert records[0].cover_image_url == "http://small.jpg"
    assert records[0].categories == []

def test_http_error_yields_empty_result(client, http):
    http.get.return_value = make_response(status_code=503)
    assert client.search("outage") == []

def test_network_error_yields_empty_result(client, http):
    http.get.side_effect = requests.ConnectionError("unreachable")
    assert client.search("offline") == []
    assert client.fetch_by_id("zyTCAlFPjgYC") is None

def test_invalid_json_yields_empty_result(client, http):
    response = make_response()
    response.json.side_effect = ValueError("not json")
    http.get.return_value = response
    assert client.search("garbled") == []

def test_fetch_by_id(client, http):
    http.get.return_value = make_response(VOLUME)
    record = client.fetch_by_id("zyTCAlFPjgYC")
    assert record.title == "The Google Story"
    assert http.get.call_args.args[0] == "https://books.test/v1/volumes/zyTCAlFPjgYC"

def test_fetch_by_id_unknown(client, http):
    http.get.return_value = make_response(status_code=404)
    assert client.fetch_by_id("missing") is None
    assert client.fetch_by_id("") is None

def test_no_api_key_is_not_sent(http):
    http.get.return_value = make_response({})
    GoogleBooksClient(base_url="https://books.test/v1", api_key="", session=http).search("q")
    assert "key" not in http.get.call_args.kwargs["params"]

def test_record_to_dict():
    record = BookRecord(title="T", author="A", google_books_id="id")
    data = record.to_dict()
    assert data["google_books_id"] == "id"
    assert data["categories"] == []

def test_sanitize_categories():
    assert sanitize_categories(None) == []
    assert sanitize_categories([" Fiction ", "", None, "Poetry"]) == ["Fiction", "Poetry"]
