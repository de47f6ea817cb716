from app.schemas.blog import (
    BlogCreate,
    BlogDeleteResponse,
    BlogDetailResponse,
    BlogResponse,
    BlogUpdate,
)
from app.schemas.comment import CommentCreate, CommentResponse
from app.schemas.health import HealthCheckResponse, WelcomeResponse
from app.schemas.query import (
    BLOG_SORT_FIELDS,
    USER_SORT_FIELDS,
    BlogQuery,
    SortSpec,
    UserQuery,
)
from app.schemas.user import (
    AuthorResponse,
    CommenterResponse,
    UserCreate,
    UserDeleteResponse,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "AuthorResponse",
    "BLOG_SORT_FIELDS",
    "BlogCreate",
    "BlogDeleteResponse",
    "BlogDetailResponse",
    "BlogQuery",
    "BlogResponse",
    "BlogUpdate",
    "CommentCreate",
    "CommentResponse",
    "CommenterResponse",
    "HealthCheckResponse",
    "SortSpec",
    "USER_SORT_FIELDS",
    "UserCreate",
    "UserDeleteResponse",
    "UserQuery",
    "UserResponse",
    "UserUpdate",
    "WelcomeResponse",
]
