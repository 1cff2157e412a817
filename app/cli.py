import json
import logging
import os
import sys
from argparse import ArgumentParser
from pathlib import Path

import pendulum
import uvicorn
from fastapi import HTTPException
from jinja2 import Environment, PackageLoader
from slugify import slugify

from app import settings
from app.exceptions import InvalidSlugException, PostAlreadyExistsException
from app.repositories.content_repository import ContentRepository
from app.services.content_checker import ContentChecker
from app.services.post_service import PostService
from app.services.publisher_service import PublisherService
from app.services.site_builder import SiteBuilder

logging.basicConfig(format="%(message)s", level=logging.INFO)
logger = logging.getLogger(__name__)

ARCHETYPE = "archetype.md"


def _content_dir(args) -> Path:
    return Path(args.content_dir or settings.content_dir)


def new(args) -> int:
    slug = slugify(args.title)
    if not slug:
        raise InvalidSlugException(f"Title {args.title!r} does not yield a file name")
    path = _content_dir(args) / args.section / f"{slug}.md"
    if path.exists():
        raise PostAlreadyExistsException(f"File {path} already exists")
    template = Environment(
        loader=PackageLoader("app", "templates"), keep_trailing_newline=True
    ).get_template(ARCHETYPE)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(
            template.render(
                title=json.dumps(args.title, ensure_ascii=False),
                date=pendulum.now(settings.default_timezone).to_iso8601_string(),
            )
        )
    logger.info(f"Created {path}")
    return 0


def build(args) -> int:
    repository = ContentRepository(_content_dir(args))
    builder = SiteBuilder(
        post_service=PostService(
            repository,
            include_drafts=args.drafts or None,
            include_future=args.future or None,
        ),
        repository=repository,
        base_url=args.base_url,
    )
    written = builder.build(args.output_dir, clean=args.clean)
    logger.info(f"Built {len(written)} files")
    return 0


def check(args) -> int:
    issues = ContentChecker(ContentRepository(_content_dir(args))).check()
    for issue in issues:
        logger.info(
            f"{issue.severity.upper()} {issue.path} [{issue.kind}] {issue.message}"
        )
    errors = sum(1 for issue in issues if issue.severity == "error")
    logger.info(f"{len(issues)} issue(s), {errors} error(s)")
    return 1 if errors else 0


def serve(args) -> int:
    if args.content_dir:
        # --reload imports the app in a new process that only sees the environment
        settings.content_dir = Path(args.content_dir)
        os.environ["CONTENT_DIR"] = args.content_dir
    uvicorn.run("app.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def publish(args) -> int:
    PublisherService().publish(args.output_dir)
    logger.info("Site published")
    return 0


parser = ArgumentParser(description="Build, check and publish the blog content")
parser.add_argument(
    "-c", "--content-dir", type=str, help="path of the content directory"
)
subparsers = parser.add_subparsers(dest="command", required=True)

new_parser = subparsers.add_parser("new", help="create a new draft")
new_parser.add_argument("title", type=str, help="title of the new post")
new_parser.add_argument("-s", "--section", default="posts", help="content section")
new_parser.set_defaults(func=new)

build_parser = subparsers.add_parser("build", help="render the static site")
build_parser.add_argument("-o", "--output-dir", type=Path, help="output directory")
build_parser.add_argument("-b", "--base-url", type=str, help="base url of the site")
build_parser.add_argument("--drafts", action="store_true", help="include drafts")
build_parser.add_argument(
    "--future", action="store_true", help="include future posts"
)
build_parser.add_argument(
    "--clean", action="store_true", help="remove previous output"
)
build_parser.set_defaults(func=build)

check_parser = subparsers.add_parser("check", help="validate the content")
check_parser.set_defaults(func=check)

serve_parser = subparsers.add_parser("serve", help="serve the read API")
serve_parser.add_argument("--host", default="localhost")
serve_parser.add_argument("--port", type=int, default=8080)
serve_parser.add_argument("--reload", action="store_true")
serve_parser.set_defaults(func=serve)

publish_parser = subparsers.add_parser("publish", help="upload the built site")
publish_parser.add_argument("-o", "--output-dir", type=Path, help="output directory")
publish_parser.set_defaults(func=publish)


def main(argv: list[str] | None = None) -> int:
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except HTTPException as e:
        logger.error(e.detail)
        return 2


if __name__ == "__main__":
    sys.exit(main())
