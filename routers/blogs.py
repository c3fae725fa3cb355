# routers/blogs.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session, selectinload

from core.access import Actor, ensure_can_mutate
from core.engagement import add_comment, remove_comment, toggle_like
from core.query import ListingSpec, one_of, parse_page
from core.repository import Repository
from db import get_db
from deps import get_current_actor
from models import Blog, BlogCategory, Comment
from schemas import (
    BlogCreate,
    BlogList,
    BlogOut,
    BlogUpdate,
    CommentIn,
    MessageOut,
    validate_payload,
)
from storage import is_present, save_upload

logger = logging.getLogger(__name__)

router = APIRouter()

blogs = Repository(
    Blog,
    "Blog",
    populate=[
        selectinload(Blog.author),
        selectinload(Blog.likes),
        selectinload(Blog.comments).selectinload(Comment.user),
    ],
)

# mutations load likes and comments so the ORM collections can be edited
EDITABLE = [selectinload(Blog.likes), selectinload(Blog.comments)]

LISTING = ListingSpec(
    exact={"category": (Blog.category, one_of(BlogCategory))},
    search=(Blog.title, Blog.content, Blog.tags),
    order_by=(Blog.created_at.desc(),),
)


def blog_form(
    title: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    tags: Optional[List[str]] = Form(None),
) -> dict:
    fields = {"title": title, "content": content, "category": category, "tags": tags}
    return {key: value for key, value in fields.items() if value is not None}


@router.get("", response_model=BlogList)
def get_blogs(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    category: Optional[str] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
):
    window = parse_page(page, limit)
    filters = LISTING.build_filters({"category": category, "search": search})
    items, total = blogs.list(db, filters, window, LISTING.order_by)
    return BlogList(
        blogs=[BlogOut.model_validate(b) for b in items],
        total_pages=window.total_pages(total),
        current_page=window.page,
        total=total,
    )


@router.get("/user/{user_id}", response_model=List[BlogOut])
def get_user_blogs(user_id: int, db: Session = Depends(get_db)):
    items = blogs.list_by(db, Blog.author_id == user_id, order_by=(Blog.created_at.desc(),))
    return [BlogOut.model_validate(b) for b in items]


@router.get("/{blog_id}", response_model=BlogOut)
def get_blog(blog_id: int, db: Session = Depends(get_db)):
    blog = blogs.get(db, blog_id, populate=[])
    # every fetch counts, no per-viewer dedup
    blog.views = Blog.views + 1
    db.commit()
    return BlogOut.model_validate(blogs.get(db, blog_id))


@router.post("", response_model=BlogOut, status_code=status.HTTP_201_CREATED)
def create_blog(
    form: dict = Depends(blog_form),
    blog_image: Optional[UploadFile] = File(None),
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    fields = validate_payload(BlogCreate, form).model_dump()
    if is_present(blog_image):
        fields["image"] = save_upload(blog_image, "blog_image")
    fields["author_id"] = actor.id
    return BlogOut.model_validate(blogs.create(db, fields))


@router.put("/{blog_id}", response_model=BlogOut)
def update_blog(
    blog_id: int,
    form: dict = Depends(blog_form),
    blog_image: Optional[UploadFile] = File(None),
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    blog = blogs.get(db, blog_id, populate=[])
    ensure_can_mutate(actor, blog.author_id)

    changes = validate_payload(BlogUpdate, form).model_dump(exclude_unset=True)
    if is_present(blog_image):
        changes["image"] = save_upload(blog_image, "blog_image")
    return BlogOut.model_validate(blogs.update(db, blog, changes))


@router.delete("/{blog_id}", response_model=MessageOut)
def delete_blog(blog_id: int, actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    blog = blogs.get(db, blog_id, populate=EDITABLE)
    ensure_can_mutate(actor, blog.author_id)
    blogs.delete(db, blog)
    return MessageOut(message="Blog removed")


@router.put("/{blog_id}/like", response_model=BlogOut)
def like_blog(blog_id: int, actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    blog = blogs.get(db, blog_id, populate=EDITABLE)
    liked = toggle_like(blog, actor.id)
    blog = blogs.save(db, blog)
    logger.info("Blog %s %s by user %s", blog_id, "liked" if liked else "unliked", actor.id)
    return BlogOut.model_validate(blog)


@router.post("/{blog_id}/comment", response_model=BlogOut, status_code=status.HTTP_201_CREATED)
def comment_blog(
    blog_id: int,
    payload: CommentIn,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    blog = blogs.get(db, blog_id, populate=EDITABLE)
    add_comment(blog, actor.id, payload.comment)
    return BlogOut.model_validate(blogs.save(db, blog))


@router.delete("/{blog_id}/comment/{comment_id}", response_model=BlogOut)
def delete_comment(
    blog_id: int,
    comment_id: int,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    blog = blogs.get(db, blog_id, populate=EDITABLE)
    remove_comment(blog, comment_id, actor)
    return BlogOut.model_validate(blogs.save(db, blog))
