# models.py
import enum
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from db import Base


def utcnow() -> datetime:
    # stored naive; every timestamp in the database is UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Role(str, enum.Enum):
    STUDENT = "student"
    MENTOR = "mentor"
    ADMIN = "admin"


class BookCondition(str, enum.Enum):
    NEW = "New"
    LIKE_NEW = "Like New"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


class BookStatus(str, enum.Enum):
    AVAILABLE = "Available"
    RENTED_OUT = "Rented Out"
    UNAVAILABLE = "Unavailable"


class Availability(str, enum.Enum):
    AVAILABLE = "Available"
    BUSY = "Busy"
    AWAY = "Away"


class ExamType(str, enum.Enum):
    MIDTERM = "Midterm"
    FINAL = "Final"
    QUIZ = "Quiz"


class BlogCategory(str, enum.Enum):
    STUDY_TIPS = "Study Tips"
    TECHNOLOGY = "Technology"
    EXPERIENCES = "Experiences"
    CAREER_GUIDANCE = "Career Guidance"
    EXAM_PREPARATION = "Exam Preparation"


class TimestampMixin:
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)  # pbkdf2 hash, never serialized
    college = Column(String, default="")
    year = Column(String, default="")
    phone = Column(String, default="")
    avatar = Column(String, nullable=True)
    role = Column(String, nullable=False, default=Role.STUDENT.value)

    mentor_profile = relationship("Mentor", back_populates="user", uselist=False)


class Book(TimestampMixin, Base):
    __tablename__ = "books"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    author = Column(String, nullable=False)
    isbn = Column(String, nullable=True)
    subject = Column(String, nullable=False)
    edition = Column(String, nullable=True)
    condition = Column(String, nullable=False, default=BookCondition.GOOD.value)
    price = Column(Float, nullable=False)
    rental_price = Column(Float, nullable=False)
    status = Column(String, nullable=False, default=BookStatus.AVAILABLE.value)
    images = Column(JSON, nullable=False, default=list)
    location = Column(String, nullable=False)

    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    renter_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    rental_start_date = Column(DateTime, nullable=True)
    rental_end_date = Column(DateTime, nullable=True)

    version_id = Column(Integer, nullable=False)

    owner = relationship("User", foreign_keys=[owner_id])
    renter = relationship("User", foreign_keys=[renter_id])

    __mapper_args__ = {"version_id_col": version_id}


class Mentor(TimestampMixin, Base):
    __tablename__ = "mentors"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    subjects = Column(JSON, nullable=False, default=list)
    bio = Column(Text, nullable=False)
    experience = Column(String, nullable=True)
    education = Column(String, nullable=True)
    hourly_rate = Column(Float, nullable=True)
    availability = Column(String, nullable=False, default=Availability.AVAILABLE.value)

    rating = Column(Float, nullable=False, default=0.0)
    total_ratings = Column(Integer, nullable=False, default=0)

    version_id = Column(Integer, nullable=False)

    user = relationship("User", back_populates="mentor_profile")

    __mapper_args__ = {"version_id_col": version_id}


class PYQ(TimestampMixin, Base):
    __tablename__ = "pyqs"

    id = Column(Integer, primary_key=True, index=True)
    course = Column(String, nullable=False)
    subject = Column(String, nullable=False)
    semester = Column(String, nullable=False)
    exam_type = Column(String, nullable=False)
    exam_term = Column(String, nullable=False)
    year = Column(Integer, nullable=False)
    file = Column(String, nullable=False)
    college = Column(String, nullable=False, default="")
    downloads = Column(Integer, nullable=False, default=0)

    uploaded_by_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    uploaded_by = relationship("User")


class Blog(TimestampMixin, Base):
    __tablename__ = "blogs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    category = Column(String, nullable=False)
    tags = Column(JSON, nullable=False, default=list)
    image = Column(String, nullable=True)
    views = Column(Integer, nullable=False, default=0)

    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    author = relationship("User")
    comments = relationship(
        "Comment",
        back_populates="blog",
        order_by="Comment.id",
        cascade="all, delete-orphan",
    )
    likes = relationship("BlogLike", cascade="all, delete-orphan")

    @property
    def liked_by(self):
        return [like.user_id for like in self.likes]


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    blog_id = Column(Integer, ForeignKey("blogs.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    comment = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    blog = relationship("Blog", back_populates="comments")
    user = relationship("User")


class BlogLike(Base):
    __tablename__ = "blog_likes"
    __table_args__ = (UniqueConstraint("blog_id", "user_id", name="uq_blog_like"),)

    id = Column(Integer, primary_key=True)
    blog_id = Column(Integer, ForeignKey("blogs.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
