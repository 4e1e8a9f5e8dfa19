import click
from contextlib import contextmanager
from functools import wraps
from typing import Iterator

from sqlalchemy.orm import Session

from core.errors import LibraryError
from core.sa.database import Database

@contextmanager
def open_session(ctx: click.Context) -> Iterator[Session]:
    """Open a session on the database selected for this CLI invocation.

    Services commit their own transactions; the session is only closed here.
    """
    db: Database = ctx.obj['db']
    session = db.get_session()
    try:
        yield session
    finally:
        session.close()

def report_errors(command):
    """Print library errors in red and abort with a non-zero exit code"""
    @wraps(command)
    def wrapper(*args, **kwargs):
        try:
            return command(*args, **kwargs)
        except LibraryError as e:
            click.echo(click.style(f"Error: {e.message}", fg='red'), err=True)
            raise click.Abort() from e
    return wrapper

def format_book(book) -> str:
    rating = f"{book.average_rating:.2f} ({book.ratings_count})" if book.ratings_count else "no reviews"
    return f"[{book.id}] {book.title} by {book.author} - {rating}"

def format_entry(entry) -> str:
    line = f"[{entry.book_id}] {entry.book.title} - {entry.shelf.value}"
    if entry.progress_percentage is not None:
        line += f" {entry.progress_percentage:.0f}%"
    if entry.rating is not None:
        line += f" rated {entry.rating}/5"
    return line
