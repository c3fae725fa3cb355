# routers/pyqs.py
import logging
import os
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session, selectinload

from core.access import Actor, ensure_can_mutate
from core.errors import NotFoundFailure, ValidationFailure
from core.query import ListingSpec, as_int, as_str, one_of, parse_page
from core.repository import Repository
from db import get_db
from deps import get_current_actor, get_current_user
from models import PYQ, ExamType, User
from schemas import MessageOut, PYQCreate, PYQList, PYQOut, PYQUpdate, validate_payload
from storage import is_present, save_upload

logger = logging.getLogger(__name__)

router = APIRouter()

pyqs = Repository(PYQ, "PYQ", populate=[selectinload(PYQ.uploaded_by)])

LISTING = ListingSpec(
    exact={
        "semester": (PYQ.semester, as_str),
        "year": (PYQ.year, as_int),
        "exam_type": (PYQ.exam_type, one_of(ExamType)),
    },
    contains={"course": PYQ.course, "subject": PYQ.subject},
    order_by=(PYQ.year.desc(), PYQ.created_at.desc()),
)


def pyq_form(
    course: Optional[str] = Form(None),
    subject: Optional[str] = Form(None),
    semester: Optional[str] = Form(None),
    exam_type: Optional[str] = Form(None),
    exam_term: Optional[str] = Form(None),
    year: Optional[str] = Form(None),
) -> dict:
    fields = {
        "course": course,
        "subject": subject,
        "semester": semester,
        "exam_type": exam_type,
        "exam_term": exam_term,
        "year": year,
    }
    return {key: value for key, value in fields.items() if value is not None}


@router.get("", response_model=PYQList)
def get_pyqs(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    course: Optional[str] = None,
    subject: Optional[str] = None,
    semester: Optional[str] = None,
    year: Optional[str] = None,
    exam_type: Optional[str] = None,
    db: Session = Depends(get_db),
):
    window = parse_page(page, limit)
    filters = LISTING.build_filters({
        "course": course,
        "subject": subject,
        "semester": semester,
        "year": year,
        "exam_type": exam_type,
    })
    items, total = pyqs.list(db, filters, window, LISTING.order_by)
    return PYQList(
        pyqs=[PYQOut.model_validate(p) for p in items],
        total_pages=window.total_pages(total),
        current_page=window.page,
        total=total,
    )


@router.get("/user/{user_id}", response_model=List[PYQOut])
def get_user_pyqs(user_id: int, db: Session = Depends(get_db)):
    items = pyqs.list_by(db, PYQ.uploaded_by_id == user_id, order_by=(PYQ.created_at.desc(),))
    return [PYQOut.model_validate(p) for p in items]


@router.get("/{pyq_id}", response_model=PYQOut)
def get_pyq(pyq_id: int, db: Session = Depends(get_db)):
    return PYQOut.model_validate(pyqs.get(db, pyq_id))


@router.post("", response_model=PYQOut, status_code=status.HTTP_201_CREATED)
def create_pyq(
    form: dict = Depends(pyq_form),
    pyq_file: Optional[UploadFile] = File(None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    payload = validate_payload(PYQCreate, form)
    if not is_present(pyq_file):
        raise ValidationFailure("Validation error", ["pyq_file: a question paper file is required"])

    fields = payload.model_dump()
    fields["file"] = save_upload(pyq_file, "pyq_file")
    fields["uploaded_by_id"] = user.id
    fields["college"] = user.college or ""
    return PYQOut.model_validate(pyqs.create(db, fields))


@router.put("/{pyq_id}", response_model=PYQOut)
def update_pyq(
    pyq_id: int,
    form: dict = Depends(pyq_form),
    pyq_file: Optional[UploadFile] = File(None),
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    pyq = pyqs.get(db, pyq_id, populate=[])
    ensure_can_mutate(actor, pyq.uploaded_by_id)

    changes = validate_payload(PYQUpdate, form).model_dump(exclude_unset=True)
    if is_present(pyq_file):
        changes["file"] = save_upload(pyq_file, "pyq_file")
    return PYQOut.model_validate(pyqs.update(db, pyq, changes))


@router.delete("/{pyq_id}", response_model=MessageOut)
def delete_pyq(pyq_id: int, actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    pyq = pyqs.get(db, pyq_id, populate=[])
    ensure_can_mutate(actor, pyq.uploaded_by_id)
    pyqs.delete(db, pyq)
    return MessageOut(message="PYQ removed")


@router.get("/{pyq_id}/download")
def download_pyq(pyq_id: int, db: Session = Depends(get_db)):
    pyq = pyqs.get(db, pyq_id, populate=[])
    if not os.path.isfile(pyq.file):
        raise NotFoundFailure("File")

    pyq.downloads = PYQ.downloads + 1
    db.commit()
    logger.info("PYQ %s downloaded", pyq_id)
    return FileResponse(pyq.file, filename=os.path.basename(pyq.file))
