# core/rental.py
"""
Book rental state machine.

    Available --rent--> Rented Out --return--> Available

"Unavailable" is only ever set by the owner editing the book; no rental
action leaves or enters it.
"""
from datetime import datetime, timedelta
from typing import Optional

from core.access import Actor
from core.errors import AuthorizationFailure, BusinessRuleFailure, ValidationFailure
from models import BookStatus, utcnow

DEFAULT_RENTAL_PERIOD_DAYS = 30


def resolve_rental_period(rental_period) -> int:
    if rental_period is None:
        return DEFAULT_RENTAL_PERIOD_DAYS
    # bool is an int subclass; reject it explicitly
    if isinstance(rental_period, bool) or not isinstance(rental_period, int) or rental_period < 1:
        raise ValidationFailure(
            "Rental period must be a positive number of days",
            ["rental_period: must be a positive integer"],
        )
    return rental_period


def rent(book, actor: Actor, rental_period: Optional[int] = None, now: Optional[datetime] = None):
    if book.status != BookStatus.AVAILABLE.value:
        raise BusinessRuleFailure("Book is not available for rent")
    if book.owner_id == actor.id:
        raise BusinessRuleFailure("Cannot rent your own book")

    days = resolve_rental_period(rental_period)
    start = now or utcnow()

    book.renter_id = actor.id
    book.status = BookStatus.RENTED_OUT.value
    book.rental_start_date = start
    book.rental_end_date = start + timedelta(days=days)
    return book


def can_return(book, actor: Actor) -> bool:
    return actor.is_admin or actor.id in (book.owner_id, book.renter_id)


def return_book(book, actor: Actor):
    if not can_return(book, actor):
        raise AuthorizationFailure()
    if book.status != BookStatus.RENTED_OUT.value:
        raise BusinessRuleFailure("Book is not rented out")

    book.renter_id = None
    book.status = BookStatus.AVAILABLE.value
    book.rental_start_date = None
    book.rental_end_date = None
    return book


def check_status_edit(book, new_status: Optional[str]) -> None:
    """Owner edits may move a book between Available and Unavailable only."""
    if new_status is None or new_status == book.status:
        return
    if new_status == BookStatus.RENTED_OUT.value:
        raise BusinessRuleFailure("A book can only be rented out through a rental")
    if book.status == BookStatus.RENTED_OUT.value:
        raise BusinessRuleFailure("Book is rented out; return it before changing its status")
