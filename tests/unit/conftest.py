from pathlib import Path

import pytest

from app.repositories.content_repository import ContentRepository
from app.services.content_checker import ContentChecker
from app.services.front_matter import FrontMatterParser
from app.services.markdown_renderer import MarkdownRenderer
from app.services.post_service import PostService
from app.services.publisher_service import PublisherService
from app.services.site_builder import SiteBuilder


@pytest.fixture
def content_checker(content_repository: ContentRepository) -> ContentChecker:
    return ContentChecker(content_repository)


@pytest.fixture
def front_matter_parser() -> FrontMatterParser:
    return FrontMatterParser()


@pytest.fixture
def markdown_renderer() -> MarkdownRenderer:
    return MarkdownRenderer()


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "public"


@pytest.fixture
def post_service(content_repository: ContentRepository) -> PostService:
    return PostService(content_repository, include_drafts=False, include_future=False)


@pytest.fixture
def publisher_service() -> PublisherService:
    return PublisherService()


@pytest.fixture
def site_builder(
    content_repository: ContentRepository, post_service: PostService
) -> SiteBuilder:
    return SiteBuilder(post_service, content_repository, base_url="/")
