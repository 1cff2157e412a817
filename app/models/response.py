from typing import Literal

from app.models.camel_model import CamelModel


class Post(CamelModel):
    id: str
    title: str
    date: str
    slug: str
    post_path: str
    content: str
    summary: str
    description: str | None = None
    tags: list[str] = []
    images: list[str] = []
    toc: str | None = None
    reading_time: int


class PostSummary(CamelModel):
    id: str
    title: str
    date: str
    slug: str
    post_path: str
    summary: str
    tags: list[str] = []


class Page(CamelModel):
    exclusive_start_key: str | None = None
    posts: list[PostSummary]


class ContentIssue(CamelModel):
    path: str
    kind: str
    message: str
    severity: Literal["error", "warning"] = "error"
