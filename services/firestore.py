import functools
import logging
from typing import Any, Callable, Dict, List, Optional

from google.api_core.exceptions import GoogleAPIError
from google.cloud import firestore

from config import POSTS_COLLECTION, USERS_COLLECTION
from services.errors import StoreError

logger = logging.getLogger(__name__)

PostDict = Dict[str, Any]


def store_call(func):
    """Log Firestore failures and re-raise them as StoreError"""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except GoogleAPIError as e:
            logger.error("Firestore call %s failed: %s", func.__name__, e)
            raise StoreError() from e

    return wrapper


class FirestoreDB:
    def __init__(self, client: firestore.Client):
        self.db = client

    def collection(self, name: str):
        return self.db.collection(name)

    def close(self) -> None:
        """Release the underlying client's channels"""
        self.db.close()

    @staticmethod
    def _to_dict(snapshot) -> PostDict:
        data = snapshot.to_dict()
        data["id"] = snapshot.id
        return data

    @store_call
    def get_user_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Get a user's profile document, or None if the user has none"""
        snapshot = self.collection(USERS_COLLECTION).document(user_id).get()
        if not snapshot.exists:
            return None
        return snapshot.to_dict()

    @store_call
    def create_post(self, post_data: PostDict) -> str:
        """Create a new post and return its generated id"""
        new_post_ref = self.collection(POSTS_COLLECTION).document()
        new_post_ref.set(post_data)
        return new_post_ref.id

    @store_call
    def get_all_posts(self) -> List[PostDict]:
        """Get all posts sorted by creation date descending"""
        posts_ref = self.collection(POSTS_COLLECTION).order_by(
            "createdAt", direction=firestore.Query.DESCENDING
        ).stream()
        return [self._to_dict(doc) for doc in posts_ref]

    @store_call
    def get_post(self, post_id: str) -> Optional[PostDict]:
        """Get a post by ID"""
        snapshot = self.collection(POSTS_COLLECTION).document(post_id).get()
        if not snapshot.exists:
            return None
        return self._to_dict(snapshot)

    @store_call
    def update_post(self, post_id: str, mutate: Callable[[Optional[PostDict]], PostDict]) -> PostDict:
        """
        Read-modify-write a post inside a transaction

        Args:
            post_id: id of the post to update
            mutate: receives the current post (None if missing) and returns the
                fields to update; raising aborts the transaction

        Returns:
            The field updates that were committed
        """
        post_ref = self.collection(POSTS_COLLECTION).document(post_id)
        transaction = self.db.transaction()

        @firestore.transactional
        def update_in_transaction(transaction, post_ref):
            snapshot = post_ref.get(transaction=transaction)
            post = self._to_dict(snapshot) if snapshot.exists else None
            updates = mutate(post)
            transaction.update(post_ref, updates)
            return updates

        return update_in_transaction(transaction, post_ref)

    @store_call
    def delete_post(self, post_id: str, check: Callable[[Optional[PostDict]], None]) -> None:
        """Delete a post after `check` accepted its current state"""
        post_ref = self.collection(POSTS_COLLECTION).document(post_id)
        transaction = self.db.transaction()

        @firestore.transactional
        def delete_in_transaction(transaction, post_ref):
            snapshot = post_ref.get(transaction=transaction)
            check(self._to_dict(snapshot) if snapshot.exists else None)
            transaction.delete(post_ref)

        delete_in_transaction(transaction, post_ref)
