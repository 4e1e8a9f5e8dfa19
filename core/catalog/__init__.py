from .google_books import BookRecord, GoogleBooksClient, sanitize_categories

__all__ = ['BookRecord', 'GoogleBooksClient', 'sanitize_categories']
