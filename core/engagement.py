# core/engagement.py
from core.access import Actor, ensure_can_delete_comment
from core.errors import NotFoundFailure
from models import BlogLike, Comment


def toggle_like(blog, user_id: int) -> bool:
    """Flip the user's like on the blog. Returns True when the blog is now liked."""
    for like in blog.likes:
        if like.user_id == user_id:
            blog.likes.remove(like)
            return False
    blog.likes.append(BlogLike(user_id=user_id))
    return True


def add_comment(blog, user_id: int, text: str) -> Comment:
    comment = Comment(user_id=user_id, comment=text)
    blog.comments.append(comment)
    return comment


def find_comment(blog, comment_id: int) -> Comment:
    for comment in blog.comments:
        if comment.id == comment_id:
            return comment
    raise NotFoundFailure("Comment")


def remove_comment(blog, comment_id: int, actor: Actor) -> Comment:
    comment = find_comment(blog, comment_id)
    ensure_can_delete_comment(actor, comment.user_id, blog.author_id)
    blog.comments.remove(comment)
    return comment
