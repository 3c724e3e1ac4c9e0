from datetime import datetime

from pydantic import BaseModel, Field, StrictInt, StrictStr

# Range of the INTEGER columns that hold ids and votes.
INT4_MIN = -(2**31)
INT4_MAX = 2**31 - 1


# --- Topic ---

class TopicCreate(BaseModel):
    slug: StrictStr = Field(min_length=1, max_length=100)
    description: StrictStr = Field(max_length=300)


class TopicResponse(BaseModel):
    slug: str
    description: str


class TopicEnvelope(BaseModel):
    topic: TopicResponse


class TopicListEnvelope(BaseModel):
    topics: list[TopicResponse]


# --- User ---

class UserResponse(BaseModel):
    username: str
    name: str
    avatar_url: str | None = None


class UserEnvelope(BaseModel):
    user: UserResponse


class UserListEnvelope(BaseModel):
    users: list[UserResponse]


# --- Votes ---

class VoteUpdate(BaseModel):
    # Strict: null, booleans, floats and numeric strings are all rejected.
    inc_votes: StrictInt = Field(ge=INT4_MIN, le=INT4_MAX)


# --- Comment ---

class CommentCreate(BaseModel):
    username: StrictStr
    body: StrictStr = Field(min_length=1, max_length=500)


class CommentResponse(BaseModel):
    comment_id: int
    article_id: int
    author: str
    body: str
    votes: int
    created_at: datetime


class CommentEnvelope(BaseModel):
    comment: CommentResponse


class CommentListEnvelope(BaseModel):
    comments: list[CommentResponse]


# --- Article ---

class ArticleCreate(BaseModel):
    author: StrictStr
    title: StrictStr = Field(min_length=1, max_length=150)
    body: StrictStr
    topic: StrictStr


class ArticleResponse(BaseModel):
    article_id: int
    title: str
    body: str
    votes: int
    topic: str
    author: str
    created_at: datetime
    # Kept as a string, the way the count aggregate has always been served.
    comment_count: str | None = None


class ArticleEnvelope(BaseModel):
    article: ArticleResponse


class ArticleListEnvelope(BaseModel):
    articles: list[ArticleResponse]
    total_count: str
