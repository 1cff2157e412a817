from pathlib import Path

import pendulum
from aws_lambda_powertools import Logger
from slugify import slugify

from app import settings
from app.exceptions import ContentNotFoundException, FrontMatterException
from app.models.post import Post
from app.services.front_matter import FrontMatterParser

MARKDOWN_SUFFIX = ".md"
SECTION_INDEX = "_index.md"


class ContentRepository:
    def __init__(self, content_dir: Path | None = None):
        self._logger = Logger(utc=True)
        self._parser = FrontMatterParser()
        self.content_dir = Path(content_dir or settings.content_dir)

    def _ensure_root(self) -> Path:
        if not self.content_dir.is_dir():
            error = f"Content directory '{self.content_dir}' not found"
            self._logger.error(error)
            raise ContentNotFoundException(error)
        return self.content_dir

    def _is_visible(self, path: Path) -> bool:
        relative = path.relative_to(self.content_dir)
        return not any(part.startswith(".") for part in relative.parts)

    def list_paths(self) -> list[Path]:
        root = self._ensure_root()
        return sorted(
            path
            for path in root.rglob(f"*{MARKDOWN_SUFFIX}")
            if path.is_file() and path.name != SECTION_INDEX and self._is_visible(path)
        )

    def list_assets(self) -> list[Path]:
        root = self._ensure_root()
        return sorted(
            path
            for path in root.rglob("*")
            if path.is_file()
            and path.suffix != MARKDOWN_SUFFIX
            and self._is_visible(path)
        )

    def get_document(self, path: Path) -> Post:
        path = Path(path)
        relative = path.relative_to(self.content_dir)
        self._logger.debug(f"Loading document: {relative=}")
        try:
            with open(path, encoding="utf-8") as f:
                text = f.read()
        except UnicodeDecodeError as e:
            self._logger.warning(f"Document is not valid UTF-8: {relative=}")
            raise FrontMatterException(f"{relative} is not valid UTF-8: {e.reason}")
        front_matter, body = self._parser.parse(text, str(relative))

        section = relative.parts[0] if len(relative.parts) > 1 else ""
        # Page bundles keep their content in posts/<name>/index.md
        stem = path.parent.name if path.stem == "index" and section else path.stem
        slug = slugify(front_matter.slug or stem)
        date = pendulum.instance(front_matter.date)
        return Post(
            id=relative.with_suffix("").as_posix(),
            section=section,
            title=front_matter.title,
            date=date.to_iso8601_string(),
            draft=front_matter.draft,
            slug=slug,
            post_path=(
                f"{date.year}/{date.month}/{date.day}/{slug}" if section else slug
            ),
            content=body,
            description=front_matter.description,
            tags=front_matter.tags,
            source_path=relative.as_posix(),
        )

    def get_all_documents(self) -> list[Post]:
        return [self.get_document(path) for path in self.list_paths()]
