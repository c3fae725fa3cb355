# core/rating.py
"""Running-mean rating aggregation for mentor profiles."""
from core.errors import ValidationFailure

MIN_RATING = 1
MAX_RATING = 5


def validate_rating(rating) -> int:
    if isinstance(rating, bool) or not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationFailure(
            "Rating must be between 1 and 5",
            [f"rating: must be an integer from {MIN_RATING} to {MAX_RATING}"],
        )
    return rating


def fold_rating(current: float, count: int, rating: int) -> float:
    return (current * count + rating) / (count + 1)


def submit_rating(mentor, rating):
    """
    Fold one rating into the mentor's mean. Individual ratings are not kept,
    so a submitted rating can't be edited or withdrawn.
    """
    rating = validate_rating(rating)
    count = mentor.total_ratings or 0
    mentor.rating = fold_rating(mentor.rating or 0.0, count, rating)
    mentor.total_ratings = count + 1
    return mentor
