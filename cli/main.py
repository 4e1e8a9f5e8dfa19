# cli/main.py
import click
from core.config import configure_logging
from core.sa.database import Database
from .commands.db import db
from .commands.book import book
from .commands.shelf import shelf
from .commands.review import review

@click.group()
@click.option('--database-url', envvar='DATABASE_URL', default=None, help='Database connection string')
@click.option('--log-level', default=None, help='Logging level (defaults to LOG_LEVEL)')
@click.pass_context
def cli(ctx, database_url, log_level):
    """BookBuddy CLI"""
    configure_logging(log_level)
    ctx.ensure_object(dict)
    ctx.obj['db'] = Database(database_url)

cli.add_command(db)
cli.add_command(book)
cli.add_command(shelf)
cli.add_command(review)

def main():
    """Entry point for the CLI"""
    cli()

if __name__ == '__main__':
    main()
