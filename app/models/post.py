import datetime

import pendulum
from pydantic import BaseModel, ConfigDict, constr, field_validator

from app import settings
from app.models.camel_model import CamelModel


class FrontMatter(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: constr(strip_whitespace=True, min_length=1)
    date: datetime.datetime
    draft: bool = False
    description: str | None = None
    slug: str | None = None
    tags: list[str] = []

    @field_validator("date", mode="before")
    @classmethod
    def to_aware_datetime(cls, value):
        if isinstance(value, str):
            return pendulum.parse(value, tz=settings.default_timezone)
        if isinstance(value, datetime.datetime):
            return pendulum.instance(value, tz=settings.default_timezone)
        if isinstance(value, datetime.date):
            return pendulum.datetime(
                value.year, value.month, value.day, tz=settings.default_timezone
            )
        return value


class Post(CamelModel):
    id: str
    section: str
    title: str
    date: str
    draft: bool = False
    slug: str
    post_path: str
    content: str
    description: str | None = None
    tags: list[str] = []
    source_path: str

    @property
    def is_draft(self) -> bool:
        return self.draft


class RenderedPost(CamelModel):
    post: Post
    html: str
    summary: str
    images: list[str] = []
    toc: str = ""
    reading_time: int
    word_count: int
