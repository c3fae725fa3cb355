from datetime import datetime, timedelta

import pytest

from core import rental
from core.access import Actor
from core.errors import AuthorizationFailure, BusinessRuleFailure, ValidationFailure
from models import Book

OWNER = Actor(id=1, role="student")
RENTER = Actor(id=2, role="student")
STRANGER = Actor(id=3, role="student")
ADMIN = Actor(id=4, role="admin")

NOW = datetime(2024, 1, 10, 12, 0, 0)


def make_book(status="Available"):
    return Book(
        title="Calculus",
        author="Spivak",
        subject="Mathematics",
        price=500,
        rental_price=50,
        location="Hostel B",
        owner_id=OWNER.id,
        status=status,
    )


def snapshot(book):
    return (book.status, book.renter_id, book.rental_start_date, book.rental_end_date)


class TestRent:
    def test_rent_sets_renter_and_dates(self):
        book = rental.rent(make_book(), RENTER, 7, now=NOW)
        assert book.status == "Rented Out"
        assert book.renter_id == RENTER.id
        assert book.rental_start_date == NOW
        assert book.rental_end_date == NOW + timedelta(days=7)

    def test_default_period_is_thirty_days(self):
        book = rental.rent(make_book(), RENTER)
        assert book.rental_end_date - book.rental_start_date == timedelta(days=30)

    @pytest.mark.parametrize("status", ["Rented Out", "Unavailable"])
    def test_rent_requires_available(self, status):
        book = make_book(status)
        before = snapshot(book)
        with pytest.raises(BusinessRuleFailure):
            rental.rent(book, RENTER)
        assert snapshot(book) == before

    @pytest.mark.parametrize("status", ["Available", "Rented Out", "Unavailable"])
    def test_owner_can_never_rent_own_book(self, status):
        book = make_book(status)
        before = snapshot(book)
        with pytest.raises(BusinessRuleFailure):
            rental.rent(book, OWNER)
        assert snapshot(book) == before

    @pytest.mark.parametrize("period", [0, -3, 2.5, "7", True])
    def test_rental_period_must_be_positive_integer(self, period):
        book = make_book()
        with pytest.raises(ValidationFailure):
            rental.rent(book, RENTER, period)
        assert book.status == "Available"
        assert book.renter_id is None


class TestReturn:
    @pytest.mark.parametrize("actor", [RENTER, OWNER, ADMIN])
    def test_renter_owner_or_admin_can_return(self, actor):
        book = rental.rent(make_book(), RENTER, 7, now=NOW)
        rental.return_book(book, actor)
        assert snapshot(book) == ("Available", None, None, None)

    def test_stranger_cannot_return(self):
        book = rental.rent(make_book(), RENTER, 7, now=NOW)
        before = snapshot(book)
        with pytest.raises(AuthorizationFailure):
            rental.return_book(book, STRANGER)
        assert snapshot(book) == before

    def test_cannot_return_book_that_is_not_rented(self):
        with pytest.raises(BusinessRuleFailure):
            rental.return_book(make_book(), OWNER)


class TestStatusEdits:
    def test_owner_may_toggle_unavailable(self):
        rental.check_status_edit(make_book(), "Unavailable")
        rental.check_status_edit(make_book("Unavailable"), "Available")

    def test_cannot_edit_status_of_rented_book(self):
        book = rental.rent(make_book(), RENTER, now=NOW)
        with pytest.raises(BusinessRuleFailure):
            rental.check_status_edit(book, "Available")

    def test_cannot_set_rented_out_by_edit(self):
        with pytest.raises(BusinessRuleFailure):
            rental.check_status_edit(make_book(), "Rented Out")
