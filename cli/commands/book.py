import click
from core.engine.ratings import RatingAggregator
from core.services import BookService
from ..utils import open_session, report_errors, format_book

@click.group()
def book():
    """Book related commands"""
    pass

@book.command()
@click.argument('query')
@click.option('--external', is_flag=True, help='Search Google Books instead of the local catalog')
@click.option('--limit', default=20, type=int, help='Maximum number of results')
@click.pass_context
@report_errors
def search(ctx, query: str, external: bool, limit: int):
    """Search books by title or author

    Example:
        bookbuddy book search "hail mary"
        bookbuddy book search "andy weir" --external
    """
    with open_session(ctx) as session:
        service = BookService(session)
        if external:
            records = service.search_catalog(query, max_results=limit)
            if not records:
                click.echo("No books found in Google Books")
                return
            for record in records:
                click.echo(f"[{record.google_books_id}] {record.title} by {record.author}")
            return

        books = service.search_books(query, limit=limit)
        if not books:
            click.echo("No books found")
            return
        for b in books:
            click.echo(format_book(b))

@book.command(name='import')
@click.argument('google_books_id', required=False)
@click.option('--query', help='Import every hit of a Google Books search instead of a single volume')
@click.option('--limit', default=10, type=int, help='Maximum number of search hits to import')
@click.pass_context
@report_errors
def import_book(ctx, google_books_id: str, query: str, limit: int):
    """Import books from Google Books

    Example:
        bookbuddy book import zyTCAlFPjgYC
        bookbuddy book import --query "the way of kings" --limit 5
    """
    if not google_books_id and not query:
        raise click.UsageError("Provide a Google Books ID or --query")

    with open_session(ctx) as session:
        service = BookService(session)
        if query:
            books = service.import_top_from_catalog(query, max_results=limit)
            click.echo(click.style(f"Imported {len(books)} books", fg='green'))
            for b in books:
                click.echo(f"  {format_book(b)}")
        else:
            b = service.import_from_catalog(google_books_id)
            click.echo(click.style("Imported: ", fg='green') + format_book(b))

@book.command(name='recompute-ratings')
@click.pass_context
@report_errors
def recompute_ratings(ctx):
    """Rebuild every book's rating aggregate from its reviews"""
    with ctx.obj['db'].get_db() as session:
        count = RatingAggregator(session).recompute_all()
    click.echo(click.style(f"Recomputed ratings for {count} books", fg='green'))
