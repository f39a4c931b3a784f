from typing import List

from fastapi import APIRouter

from dependencies import CurrentUser, Posts
from models.post import Comment, CommentRequest, Like, MessageResponse, Post, PostRequest

router = APIRouter()


@router.post("", response_model=Post)
def create_post(post_data: PostRequest, current_user: CurrentUser, posts: Posts):
    """Create a new post"""
    return posts.create_post(current_user.user_id, post_data.text)


@router.get("", response_model=List[Post])
def get_posts(current_user: CurrentUser, posts: Posts):
    """Get all posts, newest first"""
    return posts.list_posts()


@router.get("/{post_id}", response_model=Post)
def get_post(post_id: str, current_user: CurrentUser, posts: Posts):
    """Get a single post"""
    return posts.get_post(post_id)


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(post_id: str, current_user: CurrentUser, posts: Posts):
    """Delete a post owned by the current user"""
    posts.delete_post(post_id, current_user.user_id)
    return {"msg": "Post removed"}


@router.put("/like/{post_id}", response_model=List[Like])
def like_post(post_id: str, current_user: CurrentUser, posts: Posts):
    """Like a post"""
    return posts.like_post(post_id, current_user.user_id)


@router.put("/unlike/{post_id}", response_model=List[Like])
def unlike_post(post_id: str, current_user: CurrentUser, posts: Posts):
    """Unlike a post"""
    return posts.unlike_post(post_id, current_user.user_id)


@router.post("/comment/{post_id}", response_model=List[Comment])
def add_comment(post_id: str, comment: CommentRequest, current_user: CurrentUser, posts: Posts):
    """Comment on a post"""
    return posts.add_comment(post_id, current_user.user_id, comment.text)


@router.delete("/comment/{post_id}/{comment_id}", response_model=List[Comment])
def delete_comment(post_id: str, comment_id: str, current_user: CurrentUser, posts: Posts):
    """Delete one of the current user's comments on a post"""
    return posts.delete_comment(post_id, comment_id, current_user.user_id)
