import click
from core.sa.models import Shelf
from core.services import LibraryService
from ..utils import open_session, report_errors, format_entry

SHELF_CHOICE = click.Choice([s.value for s in Shelf], case_sensitive=False)

@click.group()
def shelf():
    """Manage a user's shelves"""
    pass

@shelf.command()
@click.argument('book_id', type=int)
@click.option('--user-id', type=int, required=True, help='Owner of the shelf')
@click.option('--shelf', 'shelf_name', type=SHELF_CHOICE, default=Shelf.WANT_TO_READ.value, help='Shelf to place the book on')
@click.option('--notes', default=None, help='Private notes (max 1000 characters)')
@click.pass_context
@report_errors
def add(ctx, book_id: int, user_id: int, shelf_name: str, notes: str):
    """Add a book to a user's library"""
    with open_session(ctx) as session:
        entry = LibraryService(session).add_to_library(user_id, book_id, shelf_name, notes=notes)
        click.echo(click.style("Added: ", fg='green') + format_entry(entry))

@shelf.command()
@click.argument('book_id', type=int)
@click.argument('shelf_name', type=SHELF_CHOICE)
@click.option('--user-id', type=int, required=True)
@click.pass_context
@report_errors
def move(ctx, book_id: int, shelf_name: str, user_id: int):
    """Move a book to another shelf"""
    with open_session(ctx) as session:
        entry = LibraryService(session).move_shelf(user_id, book_id, shelf_name)
        click.echo(click.style("Moved: ", fg='green') + format_entry(entry))

@shelf.command()
@click.argument('book_id', type=int)
@click.option('--user-id', type=int, required=True)
@click.option('--page', type=int, default=None, help='Current page')
@click.option('--percent', type=float, default=None, help='Progress percentage (0-100)')
@click.pass_context
@report_errors
def progress(ctx, book_id: int, user_id: int, page: int, percent: float):
    """Record reading progress; reaching 100% marks the book as read"""
    if page is None and percent is None:
        raise click.UsageError("Provide --page or --percent")
    with open_session(ctx) as session:
        entry = LibraryService(session).update_progress(
            user_id, book_id, current_page=page, progress_percentage=percent
        )
        click.echo(format_entry(entry))

@shelf.command()
@click.argument('book_id', type=int)
@click.argument('rating', type=int)
@click.option('--user-id', type=int, required=True)
@click.pass_context
@report_errors
def rate(ctx, book_id: int, rating: int, user_id: int):
    """Set a personal 1-5 rating"""
    with open_session(ctx) as session:
        entry = LibraryService(session).rate_book(user_id, book_id, rating)
        click.echo(format_entry(entry))

@shelf.command(name='list')
@click.option('--user-id', type=int, required=True)
@click.option('--shelf', 'shelf_name', type=SHELF_CHOICE, default=None, help='Only list this shelf')
@click.option('--limit', default=20, type=int)
@click.pass_context
@report_errors
def list_entries(ctx, user_id: int, shelf_name: str, limit: int):
    """List a user's books, most recently updated first"""
    with open_session(ctx) as session:
        service = LibraryService(session)
        if shelf_name:
            entries = service.get_books_by_shelf(user_id, shelf_name, limit=limit)
        else:
            entries = service.get_reading_timeline(user_id, limit=limit)
        if not entries:
            click.echo("No books found")
            return
        for entry in entries:
            click.echo(format_entry(entry))
