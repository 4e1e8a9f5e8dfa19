import logging
from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any, List

import requests

from core.config import settings

logger = logging.getLogger(__name__)

# Google Books rejects maxResults outside 1..40
MAX_RESULTS_LIMIT = 40


@dataclass
class BookRecord:
    """Book metadata as reported by the catalog"""
    title: str
    author: str
    google_books_id: Optional[str]
    isbn: Optional[str] = None
    description: Optional[str] = None
    publisher: Optional[str] = None
    published_date: Optional[str] = None
    page_count: Optional[int] = None
    cover_image_url: Optional[str] = None
    categories: List[str] = field(default_factory=list)
    language: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class GoogleBooksClient:
    """Client for the Google Books volumes API.

    Catalog failures never propagate: network and HTTP errors are logged
    and surface as an empty result.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        self.base_url = (base_url or settings.google_books_base_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.google_books_api_key
        self.timeout = timeout if timeout is not None else settings.google_books_timeout
        self.session = session or requests.Session()

    def search(self, query: str, max_results: int = 20) -> List[BookRecord]:
        """Search the catalog by free text.

        Args:
            query: Free-text query
            max_results: Maximum number of records, clamped to 1..40

        Returns:
            List of BookRecord objects, empty on any failure
        """
        if not query or not query.strip():
            return []
        params = {
            "q": query.strip(),
            "maxResults": max(1, min(max_results, MAX_RESULTS_LIMIT)),
        }
        data = self._get("volumes", params)
        if not data:
            return []

        records = []
        for item in data.get("items") or []:
            record = self._parse_item(item)
            if record is not None:
                records.append(record)
        return records

    def fetch_by_id(self, external_id: str) -> Optional[BookRecord]:
        """Fetch a single volume by its Google Books ID.

        Returns:
            BookRecord or None if the volume is unknown or the request failed
        """
        if not external_id or not external_id.strip():
            return None
        data = self._get(f"volumes/{external_id.strip()}", {})
        if not data:
            return None
        return self._parse_item(data)

    def _get(self, endpoint: str, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        url = f"{self.base_url}/{endpoint}"
        if self.api_key:
            params["key"] = self.api_key

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            logger.error("Error calling Google Books API (%s): %s", endpoint, e)
            return None
        except ValueError as e:
            logger.error("Google Books API returned invalid JSON (%s): %s", endpoint, e)
            return None

    def _parse_item(self, item: Dict[str, Any]) -> Optional[BookRecord]:
        info = item.get("volumeInfo")
        if not info:
            logger.warning("VolumeInfo is missing for item: %s", item.get("id"))
            return None

        title = info.get("title")
        if not title or not title.strip():
            title = "Untitled"

        authors = [a for a in info.get("authors") or [] if a]
        author = ", ".join(authors) if authors else "Unknown Author"

        isbn = None
        for identifier in info.get("industryIdentifiers") or []:
            if identifier.get("type") in ("ISBN_13", "ISBN_10"):
                isbn = identifier.get("identifier")
                break

        image_links = info.get("imageLinks") or {}
        cover = image_links.get("thumbnail") or image_links.get("smallThumbnail")

        return BookRecord(
            title=title,
            author=author,
            google_books_id=item.get("id"),
            isbn=isbn,
            description=info.get("description"),
            publisher=info.get("publisher"),
            published_date=info.get("publishedDate"),
            page_count=info.get("pageCount"),
            cover_image_url=cover,
            categories=sanitize_categories(info.get("categories")),
            language=info.get("language"),
        )


def sanitize_categories(categories: Optional[List[str]]) -> List[str]:
    """Drop blank categories and trim the rest"""
    if not categories:
        return []
    return [c.strip() for c in categories if c and c.strip()]
