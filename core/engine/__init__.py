from .shelves import TRANSITIONS, apply_transition, parse_shelf, place_new_entry
from .progress import apply_progress, percentage_for_page, validate_progress, validate_rating
from .ratings import RatingAggregator

__all__ = [
    'TRANSITIONS',
    'apply_transition',
    'parse_shelf',
    'place_new_entry',
    'apply_progress',
    'percentage_for_page',
    'validate_progress',
    'validate_rating',
    'RatingAggregator'
]
