"""Create library tables

Revision ID: 3f1c9a7d2b10
Revises: 
Create Date: 2026-10-19 09:12:41.204118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('user',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('first_name', sa.String(length=255), nullable=True),
        sa.Column('last_name', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
        sa.UniqueConstraint('email')
    )

    op.create_table('book',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('author', sa.String(length=500), nullable=False),
        sa.Column('isbn', sa.String(length=20), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('publisher', sa.String(length=255), nullable=True),
        sa.Column('published_date', sa.String(length=50), nullable=True),
        sa.Column('page_count', sa.Integer(), nullable=True),
        sa.Column('cover_image_url', sa.String(length=1024), nullable=True),
        sa.Column('categories', sa.JSON(), nullable=False),
        sa.Column('language', sa.String(length=20), nullable=True),
        sa.Column('google_books_id', sa.String(length=255), nullable=True),
        sa.Column('open_library_id', sa.String(length=255), nullable=True),
        sa.Column('average_rating', sa.Float(), nullable=False),
        sa.Column('ratings_count', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('isbn'),
        sa.UniqueConstraint('google_books_id')
    )
    op.create_index('idx_book_title', 'book', ['title'])
    op.create_index('idx_book_author', 'book', ['author'])

    op.create_table('library_entry',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('book_id', sa.Integer(), nullable=False),
        sa.Column('shelf', sa.Enum('WANT_TO_READ', 'CURRENTLY_READING', 'READ', name='shelf', native_enum=False, length=32), nullable=False),
        sa.Column('current_page', sa.Integer(), nullable=True),
        sa.Column('progress_percentage', sa.Float(), nullable=True),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('finished_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=True),
        sa.Column('notes', sa.String(length=1000), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id']),
        sa.ForeignKeyConstraint(['book_id'], ['book.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'book_id', name='uix_library_entry_user_book'),
        sa.CheckConstraint('rating IS NULL OR (rating >= 1 AND rating <= 5)', name='ck_library_entry_rating')
    )
    op.create_index('idx_library_entry_user_shelf', 'library_entry', ['user_id', 'shelf'])
    op.create_index('idx_library_entry_updated_at', 'library_entry', ['updated_at'])

    op.create_table('review',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('book_id', sa.Integer(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id']),
        sa.ForeignKeyConstraint(['book_id'], ['book.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'book_id', name='uix_review_user_book'),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_review_rating')
    )
    op.create_index('idx_review_book_id', 'review', ['book_id'])

    op.create_table('favourite',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('book_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id']),
        sa.ForeignKeyConstraint(['book_id'], ['book.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'book_id', name='uix_favourite_user_book')
    )


def downgrade() -> None:
    op.drop_table('favourite')
    op.drop_index('idx_review_book_id', table_name='review')
    op.drop_table('review')
    op.drop_index('idx_library_entry_updated_at', table_name='library_entry')
    op.drop_index('idx_library_entry_user_shelf', table_name='library_entry')
    op.drop_table('library_entry')
    op.drop_index('idx_book_author', table_name='book')
    op.drop_index('idx_book_title', table_name='book')
    op.drop_table('book')
    op.drop_table('user')
