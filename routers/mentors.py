# routers/mentors.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session, selectinload

from core.access import Actor, ensure_can_mutate
from core.errors import DuplicateFailure
from core.query import ListingSpec, parse_page
from core.rating import submit_rating
from core.repository import Repository
from db import get_db
from deps import get_current_actor
from models import Mentor, Role, User
from schemas import (
    MentorCreate,
    MentorDetail,
    MentorList,
    MentorOut,
    MentorUpdate,
    MessageOut,
    RatingIn,
)

logger = logging.getLogger(__name__)

router = APIRouter()

mentors = Repository(Mentor, "Mentor", populate=[selectinload(Mentor.user)])

LISTING = ListingSpec(
    contains={"subject": Mentor.subjects},
    search=(Mentor.bio, Mentor.subjects),
    order_by=(Mentor.rating.desc(), Mentor.created_at.desc()),
)


def _set_role(db: Session, user_id: int, role: Role) -> None:
    user = db.query(User).filter(User.id == user_id).first()
    # admins keep their role whatever happens to their mentor profile
    if user is not None and user.role != Role.ADMIN.value:
        user.role = role.value


@router.get("", response_model=MentorList)
def get_mentors(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    subject: Optional[str] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
):
    window = parse_page(page, limit)
    filters = LISTING.build_filters({"subject": subject, "search": search})
    items, total = mentors.list(db, filters, window, LISTING.order_by)
    return MentorList(
        mentors=[MentorOut.model_validate(m) for m in items],
        total_pages=window.total_pages(total),
        current_page=window.page,
        total=total,
    )


@router.get("/{mentor_id}", response_model=MentorDetail)
def get_mentor(mentor_id: int, db: Session = Depends(get_db)):
    return MentorDetail.model_validate(mentors.get(db, mentor_id))


@router.post("", response_model=MentorOut, status_code=status.HTTP_201_CREATED)
def create_mentor(payload: MentorCreate, actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    if db.query(Mentor).filter(Mentor.user_id == actor.id).first():
        raise DuplicateFailure("Mentor profile already exists")

    _set_role(db, actor.id, Role.MENTOR)
    fields = payload.model_dump()
    fields["user_id"] = actor.id
    return MentorOut.model_validate(mentors.create(db, fields))


@router.put("/{mentor_id}", response_model=MentorOut)
def update_mentor(
    mentor_id: int,
    payload: MentorUpdate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    mentor = mentors.get(db, mentor_id, populate=[])
    ensure_can_mutate(actor, mentor.user_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    return MentorOut.model_validate(mentors.update(db, mentor, changes))


@router.delete("/{mentor_id}", response_model=MessageOut)
def delete_mentor(mentor_id: int, actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    mentor = mentors.get(db, mentor_id, populate=[])
    ensure_can_mutate(actor, mentor.user_id)

    # the profile owner goes back to student, not whoever deleted it
    _set_role(db, mentor.user_id, Role.STUDENT)
    mentors.delete(db, mentor)
    return MessageOut(message="Mentor profile removed")


@router.put("/{mentor_id}/rate", response_model=MentorOut)
def rate_mentor(
    mentor_id: int,
    payload: RatingIn,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    mentor = mentors.get(db, mentor_id, populate=[])
    submit_rating(mentor, payload.rating)
    mentor = mentors.save(db, mentor)
    logger.info(
        "Mentor %s rated by user %s: now %.3f over %d ratings",
        mentor.id, actor.id, mentor.rating, mentor.total_ratings,
    )
    return MentorOut.model_validate(mentor)
