# routers/books.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session, selectinload

from core import rental
from core.access import Actor, ensure_can_mutate
from core.query import ListingSpec, parse_page
from core.repository import Repository
from db import get_db
from deps import get_current_actor
from models import Book
from schemas import (
    BookCreate,
    BookDetail,
    BookList,
    BookOut,
    BookUpdate,
    MessageOut,
    RentIn,
    validate_payload,
)
from storage import save_uploads

logger = logging.getLogger(__name__)

router = APIRouter()

books = Repository(Book, "Book", populate=[selectinload(Book.owner), selectinload(Book.renter)])

LISTING = ListingSpec(
    contains={"subject": Book.subject, "location": Book.location},
    search=(Book.title, Book.author, Book.subject),
    order_by=(Book.created_at.desc(),),
)


def book_form(
    title: Optional[str] = Form(None),
    author: Optional[str] = Form(None),
    isbn: Optional[str] = Form(None),
    subject: Optional[str] = Form(None),
    edition: Optional[str] = Form(None),
    condition: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    rental_price: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
) -> dict:
    fields = {
        "title": title,
        "author": author,
        "isbn": isbn,
        "subject": subject,
        "edition": edition,
        "condition": condition,
        "price": price,
        "rental_price": rental_price,
        "status": status,
        "location": location,
    }
    return {key: value for key, value in fields.items() if value is not None}


@router.get("", response_model=BookList)
def get_books(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    subject: Optional[str] = None,
    location: Optional[str] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
):
    window = parse_page(page, limit)
    filters = LISTING.build_filters({"subject": subject, "location": location, "search": search})
    items, total = books.list(db, filters, window, LISTING.order_by)
    return BookList(
        books=[BookOut.model_validate(b) for b in items],
        total_pages=window.total_pages(total),
        current_page=window.page,
        total=total,
    )


@router.get("/user/{user_id}", response_model=List[BookOut])
def get_user_books(user_id: int, db: Session = Depends(get_db)):
    items = books.list_by(db, Book.owner_id == user_id, order_by=(Book.created_at.desc(),))
    return [BookOut.model_validate(b) for b in items]


@router.get("/{book_id}", response_model=BookDetail)
def get_book(book_id: int, db: Session = Depends(get_db)):
    return BookDetail.model_validate(books.get(db, book_id))


@router.post("", response_model=BookOut, status_code=status.HTTP_201_CREATED)
def create_book(
    form: dict = Depends(book_form),
    book_images: Optional[List[UploadFile]] = File(None),
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    payload = validate_payload(BookCreate, form)
    fields = payload.model_dump()
    fields["images"] = save_uploads(book_images, "book_images")
    fields["owner_id"] = actor.id
    return BookOut.model_validate(books.create(db, fields))


@router.put("/{book_id}", response_model=BookOut)
def update_book(
    book_id: int,
    form: dict = Depends(book_form),
    book_images: Optional[List[UploadFile]] = File(None),
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    book = books.get(db, book_id)
    ensure_can_mutate(actor, book.owner_id)

    changes = validate_payload(BookUpdate, form).model_dump(exclude_unset=True)
    rental.check_status_edit(book, changes.get("status"))

    images = save_uploads(book_images, "book_images")
    if images:
        changes["images"] = images
    return BookOut.model_validate(books.update(db, book, changes))


@router.delete("/{book_id}", response_model=MessageOut)
def delete_book(book_id: int, actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    book = books.get(db, book_id, populate=[])
    ensure_can_mutate(actor, book.owner_id)
    books.delete(db, book)
    return MessageOut(message="Book removed")


@router.put("/{book_id}/rent", response_model=BookOut)
def rent_book(
    book_id: int,
    payload: Optional[RentIn] = Body(None),
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    book = books.get(db, book_id, populate=[])
    rental.rent(book, actor, payload.rental_period if payload else None)
    book = books.save(db, book)
    logger.info("Book %s rented by user %s until %s", book.id, actor.id, book.rental_end_date)
    return BookOut.model_validate(book)


@router.put("/{book_id}/return", response_model=BookOut)
def return_book(book_id: int, actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    book = books.get(db, book_id, populate=[])
    rental.return_book(book, actor)
    book = books.save(db, book)
    logger.info("Book %s returned by user %s", book.id, actor.id)
    return BookOut.model_validate(book)
