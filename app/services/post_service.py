from collections import Counter

import pendulum
from aws_lambda_powertools import Logger

from app import settings
from app.exceptions import PostNotFoundException
from app.models.post import Post, RenderedPost
from app.models.response import Page, PostSummary
from app.models.response import Post as PostResponse
from app.repositories.content_repository import ContentRepository
from app.services.markdown_renderer import MarkdownRenderer

POSTS_SECTION = "posts"
PAGES_SECTION = ""
RESPONSE_FIELDS = {"id", "title", "date", "slug", "post_path", "tags"}


class PostService:
    ERROR_POST_NOT_FOUND = "The requested post was not found"

    def __init__(
        self,
        repository: ContentRepository | None = None,
        include_drafts: bool | None = None,
        include_future: bool | None = None,
    ):
        self._logger = Logger(utc=True)
        self._repo = repository or ContentRepository()
        self._renderer = MarkdownRenderer()
        self.include_drafts = (
            settings.include_drafts if include_drafts is None else include_drafts
        )
        self.include_future = (
            settings.include_future if include_future is None else include_future
        )

    def _is_visible(self, post: Post, now: pendulum.DateTime) -> bool:
        if post.draft and not self.include_drafts:
            return False
        return self.include_future or pendulum.parse(post.date) <= now

    def get_documents(self, section: str | None = POSTS_SECTION) -> list[Post]:
        """Visible documents of ``section`` (every section when None), newest first."""
        now = pendulum.now()
        documents = [
            post
            for post in self._repo.get_all_documents()
            if (section is None or post.section == section)
            and self._is_visible(post, now)
        ]
        return sorted(
            documents, key=lambda post: pendulum.parse(post.date), reverse=True
        )

    def render(self, post: Post) -> RenderedPost:
        return self._renderer.render(post)

    def _post_to_response(self, post: Post) -> PostResponse:
        rendered = self.render(post)
        return PostResponse(
            **post.model_dump(include=RESPONSE_FIELDS | {"description"}),
            content=rendered.html,
            summary=rendered.summary,
            images=rendered.images,
            toc=rendered.toc or None,
            reading_time=rendered.reading_time,
        )

    def _post_to_summary(self, post: Post) -> PostSummary:
        return PostSummary(
            **post.model_dump(include=RESPONSE_FIELDS),
            summary=self.render(post).summary,
        )

    def _find(self, section: str, **fields: str) -> Post:
        post = next(
            (
                post
                for post in self.get_documents(section)
                if all(getattr(post, k) == v for k, v in fields.items())
            ),
            None,
        )
        if not post:
            self._logger.warning(f"Post not found: {section=} {fields=}")
            raise PostNotFoundException(self.ERROR_POST_NOT_FOUND)
        return post

    def get_post_by_slug(self, slug: str) -> Post:
        return self._find(POSTS_SECTION, slug=slug)

    def get_post(self, slug: str) -> PostResponse:
        return self._post_to_response(self.get_post_by_slug(slug))

    def get_by_post_path(self, post_path: str) -> PostResponse:
        return self._post_to_response(self._find(POSTS_SECTION, post_path=post_path))

    def get_page(self, slug: str) -> PostResponse:
        return self._post_to_response(self._find(PAGES_SECTION, slug=slug))

    def get_posts(
        self, exclusive_start_key: str | None = None, tag: str | None = None
    ) -> Page:
        posts = [
            post
            for post in self.get_documents()
            if tag is None or tag in post.tags
        ]
        start = 0
        if exclusive_start_key:
            start = next(
                (
                    idx + 1
                    for idx, post in enumerate(posts)
                    if post.id == exclusive_start_key
                ),
                len(posts),
            )
        page = posts[start : start + settings.page_size]
        last_key = page[-1].id if page and start + len(page) < len(posts) else None
        return Page(
            exclusive_start_key=last_key,
            posts=[self._post_to_summary(post) for post in page],
        )

    def get_archive(self) -> dict[str, int]:
        posts = self.get_documents()
        if not posts:
            return {}
        dates = [
            pendulum.parse(post.date).in_timezone(settings.default_timezone)
            for post in posts
        ]
        archive = {}
        for dt in pendulum.interval(
            min(dates).start_of("month"), max(dates).end_of("month")
        ).range("months"):
            archive[dt.format("YYYY-MM")] = sum(
                1
                for date in dates
                if dt.start_of("month") <= date <= dt.end_of("month")
            )
        return archive

    def get_tags(self) -> dict[str, int]:
        counter = Counter(tag for post in self.get_documents() for tag in post.tags)
        return dict(sorted(counter.items()))
