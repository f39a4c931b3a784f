import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from models.post import Comment, Like, Post
from services.errors import AlreadyLiked, NotFound, NotLiked, Unauthorized, ValidationError
from services.firestore import FirestoreDB, PostDict

logger = logging.getLogger(__name__)


def first_index_of_user(items: List[Dict[str, Any]], user_id: str) -> int:
    """Index of the first entry whose `user` is user_id, or -1"""
    for index, item in enumerate(items):
        if item.get("user") == user_id:
            return index
    return -1


def without_index(items: List[Dict[str, Any]], index: int) -> List[Dict[str, Any]]:
    return items[:index] + items[index + 1:]


def require_post(post: Optional[PostDict]) -> PostDict:
    if post is None:
        raise NotFound()
    return post


class PostService:
    def __init__(self, db: FirestoreDB):
        self.db = db

    @staticmethod
    def require_text(text: Optional[str]) -> str:
        """Reject missing or whitespace-only text; anything else is stored as sent"""
        if text is None or not text.strip():
            raise ValidationError()
        return text

    def author_snapshot(self, user_id: str) -> Dict[str, Optional[str]]:
        """Display data of a user, frozen at the time of the call"""
        profile = self.db.get_user_profile(user_id) or {}
        return {
            "authorName": profile.get("username") or "Unknown",
            "authorAvatar": profile.get("profileIcon"),
        }

    def create_post(self, author_id: str, text: str) -> Post:
        """Create a new post with no likes or comments"""
        text = self.require_text(text)
        post_data = {
            "author": author_id,
            **self.author_snapshot(author_id),
            "text": text,
            "likes": [],
            "comments": [],
            "createdAt": datetime.now(timezone.utc),
        }
        post_id = self.db.create_post(post_data)
        logger.info("User %s created post %s", author_id, post_id)
        return Post(id=post_id, **post_data)

    def list_posts(self) -> List[Post]:
        """All posts, newest first"""
        return [Post(**post) for post in self.db.get_all_posts()]

    def get_post(self, post_id: str) -> Post:
        return Post(**require_post(self.db.get_post(post_id)))

    def delete_post(self, post_id: str, caller_id: str) -> None:
        """Delete a post; only its author may do so"""

        def check(post: Optional[PostDict]) -> None:
            post = require_post(post)
            if post["author"] != caller_id:
                raise Unauthorized()

        self.db.delete_post(post_id, check)
        logger.info("User %s deleted post %s", caller_id, post_id)

    def like_post(self, post_id: str, caller_id: str) -> List[Like]:
        """Add the caller's like to the front of the likes"""

        def apply(post: Optional[PostDict]) -> PostDict:
            likes = require_post(post).get("likes", [])
            if first_index_of_user(likes, caller_id) >= 0:
                raise AlreadyLiked()
            return {"likes": [{"user": caller_id}] + likes}

        updates = self.db.update_post(post_id, apply)
        return [Like(**like) for like in updates["likes"]]

    def unlike_post(self, post_id: str, caller_id: str) -> List[Like]:
        """Remove the first like belonging to the caller"""

        def apply(post: Optional[PostDict]) -> PostDict:
            likes = require_post(post).get("likes", [])
            remove_index = first_index_of_user(likes, caller_id)
            if remove_index < 0:
                raise NotLiked()
            return {"likes": without_index(likes, remove_index)}

        updates = self.db.update_post(post_id, apply)
        return [Like(**like) for like in updates["likes"]]

    def add_comment(self, post_id: str, author_id: str, text: str) -> List[Comment]:
        """Add a comment to the front of a post's comments"""
        text = self.require_text(text)
        new_comment = {
            "id": uuid.uuid4().hex,
            "user": author_id,
            **self.author_snapshot(author_id),
            "text": text,
            "createdAt": datetime.now(timezone.utc),
        }

        def apply(post: Optional[PostDict]) -> PostDict:
            comments = require_post(post).get("comments", [])
            return {"comments": [new_comment] + comments}

        updates = self.db.update_post(post_id, apply)
        return [Comment(**comment) for comment in updates["comments"]]

    def delete_comment(self, post_id: str, comment_id: str, caller_id: str) -> List[Comment]:
        """
        Delete a comment the caller wrote

        The removed entry is the caller's first comment on the post, which is
        not necessarily the comment identified by comment_id.
        """

        def apply(post: Optional[PostDict]) -> PostDict:
            comments = require_post(post).get("comments", [])
            comment = next((c for c in comments if c.get("id") == comment_id), None)
            if comment is None:
                raise NotFound("Comment does not exist")
            if comment.get("user") != caller_id:
                raise Unauthorized()
            remove_index = first_index_of_user(comments, caller_id)
            return {"comments": without_index(comments, remove_index)}

        updates = self.db.update_post(post_id, apply)
        return [Comment(**comment) for comment in updates["comments"]]
