# schemas.py
"""
Request bodies and response projections.

Input models reject unknown enum values and missing required fields before
any business logic runs. Output models only expose the public user fields;
the password hash has no output field at all.
"""
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, StrictInt, ValidationError, field_validator

from core.errors import ValidationFailure
from models import Availability, BlogCategory, BookCondition, BookStatus, ExamType


def format_errors(exc) -> List[str]:
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err["loc"] if part not in ("body", "query", "path"))
        messages.append(f"{location}: {err['msg']}" if location else err["msg"])
    return messages


def validate_payload(model, data: Dict[str, Any]):
    """Build `model` from already-parsed form/query data, raising ValidationFailure."""
    try:
        return model(**data)
    except ValidationError as exc:
        raise ValidationFailure("Validation error", format_errors(exc))


class InputModel(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True, str_strip_whitespace=True)


def _split_items(values: Optional[List[str]]) -> Optional[List[str]]:
    # accepts ["a", "b"] as well as ["a, b"] from a single form field
    if values is None:
        return None
    items = []
    for value in values:
        for part in str(value).split(","):
            part = part.strip()
            if part and part not in items:
                items.append(part)
    return items


# ---------- auth ----------

class RegisterIn(InputModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)
    college: str = ""
    year: str = ""
    phone: str = ""
    role: Literal["student", "mentor"] = "student"


class LoginIn(InputModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ProfileUpdate(InputModel):
    name: Optional[str] = Field(None, min_length=1)
    college: Optional[str] = None
    year: Optional[str] = None
    phone: Optional[str] = None


# ---------- books ----------

class BookCreate(InputModel):
    title: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    isbn: Optional[str] = None
    subject: str = Field(..., min_length=1)
    edition: Optional[str] = None
    condition: BookCondition = BookCondition.GOOD
    price: float = Field(..., ge=0)
    rental_price: float = Field(..., ge=0)
    status: BookStatus = BookStatus.AVAILABLE
    location: str = Field(..., min_length=1)

    @field_validator("status")
    @classmethod
    def not_rented(cls, value):
        if value in (BookStatus.RENTED_OUT, BookStatus.RENTED_OUT.value):
            raise ValueError("a book can only become Rented Out through a rental")
        return value


class BookUpdate(InputModel):
    title: Optional[str] = Field(None, min_length=1)
    author: Optional[str] = Field(None, min_length=1)
    isbn: Optional[str] = None
    subject: Optional[str] = Field(None, min_length=1)
    edition: Optional[str] = None
    condition: Optional[BookCondition] = None
    price: Optional[float] = Field(None, ge=0)
    rental_price: Optional[float] = Field(None, ge=0)
    status: Optional[BookStatus] = None
    location: Optional[str] = Field(None, min_length=1)

    @field_validator("status")
    @classmethod
    def not_rented(cls, value):
        if value in (BookStatus.RENTED_OUT, BookStatus.RENTED_OUT.value):
            raise ValueError("a book can only become Rented Out through a rental")
        return value


class RentIn(InputModel):
    rental_period: Optional[StrictInt] = Field(
        None, validation_alias=AliasChoices("rental_period", "rentalPeriod")
    )


# ---------- mentors ----------

class MentorCreate(InputModel):
    subjects: List[str] = Field(..., min_length=1)
    bio: str = Field(..., min_length=1)
    experience: Optional[str] = None
    education: Optional[str] = None
    hourly_rate: Optional[float] = Field(None, ge=0)
    availability: Availability = Availability.AVAILABLE

    @field_validator("subjects")
    @classmethod
    def clean_subjects(cls, value):
        items = _split_items(value)
        if not items:
            raise ValueError("at least one subject is required")
        return items


class MentorUpdate(InputModel):
    subjects: Optional[List[str]] = None
    bio: Optional[str] = Field(None, min_length=1)
    experience: Optional[str] = None
    education: Optional[str] = None
    hourly_rate: Optional[float] = Field(None, ge=0)
    availability: Optional[Availability] = None

    @field_validator("subjects")
    @classmethod
    def clean_subjects(cls, value):
        if value is None:
            return value
        items = _split_items(value)
        if not items:
            raise ValueError("at least one subject is required")
        return items


class RatingIn(BaseModel):
    rating: StrictInt


# ---------- pyqs ----------

class PYQCreate(InputModel):
    course: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1)
    semester: str = Field(..., min_length=1)
    exam_type: ExamType
    exam_term: str = Field(..., min_length=1)
    year: int = Field(..., ge=1900, le=2100)


class PYQUpdate(InputModel):
    course: Optional[str] = Field(None, min_length=1)
    subject: Optional[str] = Field(None, min_length=1)
    semester: Optional[str] = Field(None, min_length=1)
    exam_type: Optional[ExamType] = None
    exam_term: Optional[str] = Field(None, min_length=1)
    year: Optional[int] = Field(None, ge=1900, le=2100)


# ---------- blogs ----------

class BlogCreate(InputModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    category: BlogCategory
    tags: List[str] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, value):
        return _split_items(value) or []


class BlogUpdate(InputModel):
    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = Field(None, min_length=1)
    category: Optional[BlogCategory] = None
    tags: Optional[List[str]] = None

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, value):
        return _split_items(value)


class CommentIn(InputModel):
    comment: str = Field(..., min_length=1, max_length=2000)


# ---------- responses ----------

class OutputModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class UserSummary(OutputModel):
    id: int
    name: str
    email: str
    college: Optional[str] = None
    avatar: Optional[str] = None


class UserProfile(UserSummary):
    year: Optional[str] = None


class UserContact(UserProfile):
    phone: Optional[str] = None


class UserOut(UserContact):
    role: str
    created_at: datetime


class AuthData(UserOut):
    token: str


class BookOut(OutputModel):
    id: int
    title: str
    author: str
    isbn: Optional[str] = None
    subject: str
    edition: Optional[str] = None
    condition: str
    price: float
    rental_price: float
    status: str
    images: List[str] = []
    location: str
    owner_id: int
    owner: UserSummary
    renter_id: Optional[int] = None
    renter: Optional[UserSummary] = None
    rental_start_date: Optional[datetime] = None
    rental_end_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class BookDetail(BookOut):
    owner: UserContact


class BookList(BaseModel):
    books: List[BookOut]
    total_pages: int
    current_page: int
    total: int


class MentorOut(OutputModel):
    id: int
    user_id: int
    user: UserProfile
    subjects: List[str]
    bio: str
    experience: Optional[str] = None
    education: Optional[str] = None
    hourly_rate: Optional[float] = None
    availability: str
    rating: float
    total_ratings: int
    created_at: datetime
    updated_at: datetime


class MentorDetail(MentorOut):
    user: UserContact


class MentorList(BaseModel):
    mentors: List[MentorOut]
    total_pages: int
    current_page: int
    total: int


class PYQOut(OutputModel):
    id: int
    course: str
    subject: str
    semester: str
    exam_type: str
    exam_term: str
    year: int
    file: str
    college: str
    downloads: int
    uploaded_by_id: int
    uploaded_by: UserSummary
    created_at: datetime
    updated_at: datetime


class PYQList(BaseModel):
    pyqs: List[PYQOut]
    total_pages: int
    current_page: int
    total: int


class CommentOut(OutputModel):
    id: int
    user_id: int
    user: UserSummary
    comment: str
    created_at: datetime


class BlogOut(OutputModel):
    id: int
    title: str
    content: str
    category: str
    tags: List[str] = []
    image: Optional[str] = None
    views: int
    author_id: int
    author: UserSummary
    likes: List[int] = Field(default_factory=list, validation_alias=AliasChoices("liked_by", "likes"))
    comments: List[CommentOut] = []
    created_at: datetime
    updated_at: datetime


class BlogList(BaseModel):
    blogs: List[BlogOut]
    total_pages: int
    current_page: int
    total: int


class MessageOut(BaseModel):
    success: bool = True
    message: str
