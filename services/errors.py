from typing import Any, Dict, List, Optional


class PostServiceError(Exception):
    """Base class for errors raised by the post service and store"""
    status_code = 500
    msg = "Server Error"

    def __init__(self, msg: Optional[str] = None):
        if msg is not None:
            self.msg = msg
        super().__init__(self.msg)

    def body(self) -> Dict[str, Any]:
        return {"msg": self.msg}


class ValidationError(PostServiceError):
    status_code = 400
    msg = "text is required"

    def __init__(self, msg: Optional[str] = None, param: str = "text", location: str = "body"):
        super().__init__(msg)
        self.param = param
        self.location = location

    @property
    def errors(self) -> List[Dict[str, str]]:
        return [{"msg": self.msg, "param": self.param, "location": self.location}]

    def body(self) -> Dict[str, Any]:
        return {"msg": self.errors}


class NotFound(PostServiceError):
    status_code = 404
    msg = "Post not found"


class Unauthorized(PostServiceError):
    status_code = 401
    msg = "User not authorized"


class AlreadyLiked(PostServiceError):
    status_code = 400
    msg = "Post already liked"


class NotLiked(PostServiceError):
    status_code = 400
    msg = "Post has not yet been liked"


class StoreError(PostServiceError):
    """The document store failed; the cause is logged, never returned"""
    status_code = 500
    msg = "Server Error"
