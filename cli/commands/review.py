import click
from core.services import ReviewService
from ..utils import open_session, report_errors

@click.group()
def review():
    """Write and remove book reviews"""
    pass

@review.command()
@click.argument('book_id', type=int)
@click.option('--user-id', type=int, required=True)
@click.option('--rating', type=int, required=True, help='Rating from 1 to 5')
@click.option('--content', required=True, help='Review text (10-5000 characters)')
@click.pass_context
@report_errors
def create(ctx, book_id: int, user_id: int, rating: int, content: str):
    """Review a book; its average rating is updated immediately"""
    with open_session(ctx) as session:
        r = ReviewService(session).create_review(user_id, book_id, content, rating)
        book = r.book
        click.echo(click.style(f"Review {r.id} created", fg='green'))
        click.echo(f"{book.title} now averages {book.average_rating:.2f} over {book.ratings_count} reviews")

@review.command()
@click.argument('review_id', type=int)
@click.option('--user-id', type=int, required=True)
@click.pass_context
@report_errors
def delete(ctx, review_id: int, user_id: int):
    """Delete one of your reviews"""
    with open_session(ctx) as session:
        ReviewService(session).delete_review(review_id, user_id)
        click.echo(click.style(f"Review {review_id} deleted", fg='green'))
