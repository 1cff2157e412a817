import shutil
from pathlib import Path

import pendulum
from aws_lambda_powertools import Logger
from jinja2 import (
    Environment,
    PackageLoader,
    StrictUndefined,
    TemplateError,
    select_autoescape,
)
from slugify import slugify

from app import settings
from app.exceptions import BuildException
from app.models.post import RenderedPost
from app.repositories.content_repository import ContentRepository
from app.services.post_service import PAGES_SECTION, POSTS_SECTION, PostService

INDEX_FILE = "index.html"
RSS_FILE = "index.xml"
BUNDLE_INDEX = "index.md"


def _date_format(value: str, fmt: str = "MMMM D, YYYY") -> str:
    return pendulum.parse(value).format(fmt)


def _rfc822(value: str) -> str:
    return pendulum.parse(value).format("ddd, DD MMM YYYY HH:mm:ss ZZ")


def _build_environment(base_url: str) -> Environment:
    def url_for(path: str = "") -> str:
        url = f"{base_url.rstrip('/')}/{path.strip('/')}"
        return url if url.endswith("/") else f"{url}/"

    env = Environment(
        loader=PackageLoader("app", "templates"),
        autoescape=select_autoescape(["html", "xml"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.globals["url_for"] = url_for
    env.filters["date_format"] = _date_format
    env.filters["rfc822"] = _rfc822
    env.filters["slugify"] = slugify
    return env


class SiteBuilder:
    def __init__(
        self,
        post_service: PostService | None = None,
        repository: ContentRepository | None = None,
        base_url: str | None = None,
    ):
        self._logger = Logger(utc=True)
        self._repo = repository or ContentRepository()
        self._post_service = post_service or PostService(self._repo)
        self._env = _build_environment(base_url or settings.base_url)

    def build(self, output_dir: Path | None = None, clean: bool = False) -> list[Path]:
        output_dir = Path(output_dir or settings.output_dir)
        if clean and output_dir.exists():
            self._logger.info(f"Removing previous build: {output_dir=}")
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        posts = [
            self._post_service.render(post)
            for post in self._post_service.get_documents(POSTS_SECTION)
        ]
        pages = [
            self._post_service.render(page)
            for page in self._post_service.get_documents(PAGES_SECTION)
        ]
        written = []
        for item in posts + pages:
            written.append(
                self._write(
                    output_dir / item.post.post_path / INDEX_FILE,
                    "single.html",
                    item=item,
                    pages=pages,
                )
            )
        written.append(
            self._write(
                output_dir / INDEX_FILE,
                "list.html",
                title=settings.app_name,
                items=posts,
                pages=pages,
            )
        )
        written.extend(self._write_tags(output_dir, posts, pages))
        written.append(
            self._write(
                output_dir / "archive" / INDEX_FILE,
                "archive.html",
                title="Archive",
                archive=self._group_by_month(posts),
                pages=pages,
            )
        )
        written.append(
            self._write(
                output_dir / RSS_FILE,
                RSS_FILE,
                title=settings.app_name,
                items=posts,
                build_date=pendulum.now().to_iso8601_string(),
            )
        )
        written.extend(self._copy_assets(output_dir, posts + pages))
        self._logger.info(
            f"Site built: {output_dir=} posts={len(posts)} pages={len(pages)} "
            f"files={len(written)}"
        )
        return written

    def _write(self, target: Path, template_name: str, **context) -> Path:
        try:
            html = self._env.get_template(template_name).render(**context)
        except TemplateError as e:
            self._logger.exception(f"Template rendering failed: {template_name=}")
            raise BuildException(f"Could not render {template_name}: {e}")
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            f.write(html)
        self._logger.debug(f"Written: {target=}")
        return target

    def _write_tags(
        self, output_dir: Path, posts: list[RenderedPost], pages: list[RenderedPost]
    ) -> list[Path]:
        tags: dict[str, list[RenderedPost]] = {}
        for item in posts:
            for tag in item.post.tags:
                tags.setdefault(tag, []).append(item)
        return [
            self._write(
                output_dir / "tags" / slugify(tag) / INDEX_FILE,
                "list.html",
                title=f"#{tag}",
                items=items,
                pages=pages,
            )
            for tag, items in sorted(tags.items())
        ]

    def _group_by_month(
        self, posts: list[RenderedPost]
    ) -> list[tuple[str, list[RenderedPost]]]:
        archive: dict[str, list[RenderedPost]] = {}
        for item in posts:
            month = (
                pendulum.parse(item.post.date)
                .in_timezone(settings.default_timezone)
                .format("YYYY-MM")
            )
            archive.setdefault(month, []).append(item)
        return list(archive.items())

    def _copy_assets(
        self, output_dir: Path, items: list[RenderedPost]
    ) -> list[Path]:
        content_dir = self._repo.content_dir
        # Bundle resources go next to their page. Hidden bundles publish nothing.
        bundles: dict[Path, str | None] = {
            path.parent: None
            for path in self._repo.list_paths()
            if path.name == BUNDLE_INDEX
            and len(path.relative_to(content_dir).parts) > 1
        }
        bundles.update(
            {
                (content_dir / item.post.source_path).parent: item.post.post_path
                for item in items
                if item.post.source_path.endswith(f"/{BUNDLE_INDEX}")
            }
        )
        copied = []
        for asset in self._repo.list_assets():
            bundle = next((p for p in asset.parents if p in bundles), None)
            if bundle is None:
                target = output_dir / asset.relative_to(content_dir)
            elif bundles[bundle] is None:
                self._logger.debug(f"Skipping resource of hidden bundle: {asset=}")
                continue
            else:
                target = output_dir / bundles[bundle] / asset.relative_to(bundle)
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(asset, target)
            copied.append(target)
        return copied
