import itertools
from difflib import SequenceMatcher
from pathlib import PurePosixPath
from urllib.parse import urlparse

from aws_lambda_powertools import Logger

from app import settings
from app.exceptions import FrontMatterException
from app.models.post import Post
from app.models.response import ContentIssue
from app.repositories.content_repository import ContentRepository
from app.services.markdown_renderer import MarkdownRenderer


class ContentChecker:
    """Reports content problems without stopping at the first broken file.

    Every file is parsed on its own so a single bad front matter block does
    not hide the remaining issues. Near-duplicates are detected by comparing
    the Markdown bodies pairwise with :class:`difflib.SequenceMatcher`.
    """

    def __init__(
        self,
        repository: ContentRepository | None = None,
        duplicate_threshold: float | None = None,
    ):
        self._logger = Logger(utc=True)
        self._repo = repository or ContentRepository()
        self._renderer = MarkdownRenderer()
        self.duplicate_threshold = (
            settings.duplicate_threshold
            if duplicate_threshold is None
            else duplicate_threshold
        )

    def check(self) -> list[ContentIssue]:
        issues: list[ContentIssue] = []
        posts: list[Post] = []
        for path in self._repo.list_paths():
            try:
                posts.append(self._repo.get_document(path))
            except FrontMatterException as e:
                issues.append(
                    ContentIssue(
                        path=path.relative_to(self._repo.content_dir).as_posix(),
                        kind="front-matter",
                        message=str(e.detail),
                    )
                )
        issues.extend(self._check_paths(posts))
        issues.extend(self._check_images(posts))
        issues.extend(self._check_duplicates(posts))
        self._logger.info(
            f"Checked content: documents={len(posts)} issues={len(issues)}"
        )
        return issues

    def _check_paths(self, posts: list[Post]) -> list[ContentIssue]:
        issues = []
        seen: dict[str, Post] = {}
        for post in posts:
            if post.post_path in seen:
                issues.append(
                    ContentIssue(
                        path=post.source_path,
                        kind="duplicate-path",
                        message=f"Output path '{post.post_path}' is already "
                        f"used by {seen[post.post_path].source_path}",
                    )
                )
            else:
                seen[post.post_path] = post
        return issues

    def _check_images(self, posts: list[Post]) -> list[ContentIssue]:
        issues = []
        for post in posts:
            for src in self._renderer.render(post).images:
                url = urlparse(src)
                if url.scheme or url.netloc:
                    continue
                if url.path.startswith("/"):
                    target = self._repo.content_dir / url.path.lstrip("/")
                else:
                    parent = PurePosixPath(post.source_path).parent
                    target = self._repo.content_dir / parent / url.path
                if not target.exists():
                    issues.append(
                        ContentIssue(
                            path=post.source_path,
                            kind="missing-image",
                            message=f"Image '{src}' not found",
                            severity="warning",
                        )
                    )
        return issues

    def _check_duplicates(self, posts: list[Post]) -> list[ContentIssue]:
        issues = []
        for first, second in itertools.combinations(posts, 2):
            ratio = SequenceMatcher(
                None, first.content, second.content, autojunk=False
            ).ratio()
            if ratio >= self.duplicate_threshold:
                self._logger.warning(
                    f"Near-duplicate documents: {first.id=} {second.id=} {ratio=:.2f}"
                )
                issues.append(
                    ContentIssue(
                        path=second.source_path,
                        kind="near-duplicate",
                        message=f"{ratio:.0%} similar to {first.source_path}",
                        severity="warning",
                    )
                )
        return issues
