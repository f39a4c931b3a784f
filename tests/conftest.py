import copy
import threading
import uuid
from typing import Any, Callable, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

import dependencies
from main import create_app
from services.posts import PostService

USERS = {
    "U1": {"username": "Ada", "profileIcon": "https://example.com/ada.png", "email": "ada@example.com"},
    "U2": {"username": "Grace", "profileIcon": "https://example.com/grace.png", "email": "grace@example.com"},
}


class InMemoryPostStore:
    """Same interface as FirestoreDB, backed by dicts"""

    def __init__(self, users: Optional[Dict[str, Dict[str, Any]]] = None):
        self.users = copy.deepcopy(users or {})
        self.posts: Dict[str, Dict[str, Any]] = {}
        self.lock = threading.Lock()
        self.closed = False

    def close(self) -> None:
        self.closed = True

    def get_user_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        profile = self.users.get(user_id)
        return copy.deepcopy(profile) if profile is not None else None

    def create_post(self, post_data: Dict[str, Any]) -> str:
        post_id = uuid.uuid4().hex
        with self.lock:
            self.posts[post_id] = copy.deepcopy(post_data)
        return post_id

    def _load(self, post_id: str) -> Optional[Dict[str, Any]]:
        post = self.posts.get(post_id)
        if post is None:
            return None
        return {**copy.deepcopy(post), "id": post_id}

    def get_all_posts(self) -> List[Dict[str, Any]]:
        posts = [self._load(post_id) for post_id in self.posts]
        return sorted(posts, key=lambda post: post["createdAt"], reverse=True)

    def get_post(self, post_id: str) -> Optional[Dict[str, Any]]:
        return self._load(post_id)

    def update_post(self, post_id: str, mutate: Callable) -> Dict[str, Any]:
        with self.lock:
            updates = mutate(self._load(post_id))
            self.posts[post_id].update(copy.deepcopy(updates))
            return updates

    def delete_post(self, post_id: str, check: Callable) -> None:
        with self.lock:
            check(self._load(post_id))
            del self.posts[post_id]


def fake_verify_id_token(token: str, **kwargs) -> Dict[str, Any]:
    if not token.startswith("token-"):
        raise ValueError("Could not verify token")
    uid = token[len("token-"):]
    return {"uid": uid, "email": USERS.get(uid, {}).get("email")}


@pytest.fixture
def auth() -> Callable[[str], Dict[str, str]]:
    def headers(user_id: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer token-{user_id}"}

    return headers


@pytest.fixture
def store() -> InMemoryPostStore:
    return InMemoryPostStore(USERS)


@pytest.fixture
def service(store) -> PostService:
    return PostService(store)


@pytest.fixture
def app(store, monkeypatch):
    monkeypatch.setattr(dependencies, "verify_id_token", fake_verify_id_token)
    app = create_app(use_lifespan=False)
    app.state.firestore = store
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
