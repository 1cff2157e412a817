from pathlib import Path
from random import randint

import pendulum
import pytest

from app.repositories.content_repository import ContentRepository
from tests.helpers.utils import K8S_AND_POSTGRES, front_matter


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    path = tmp_path / "content"
    path.mkdir()
    return path


@pytest.fixture
def make_document(content_dir: Path, faker):
    def make(
        relative: str | None = None,
        title: str | None = None,
        date: pendulum.DateTime | None = None,
        draft: bool = False,
        body: str | None = None,
        **extra,
    ) -> Path:
        title = title or faker.sentence().rstrip(".")
        date = date or pendulum.now().subtract(days=randint(1, 365))
        path = content_dir / (relative or f"posts/{faker.slug()}.md")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            front_matter(
                title.replace("'", ""), date.to_iso8601_string(), draft, **extra
            )
            + "\n"
            + (body if body is not None else "\n\n".join(faker.paragraphs(3))),
            encoding="utf-8",
        )
        return path

    return make


@pytest.fixture
def blog(make_document, content_dir: Path) -> Path:
    """A small blog: two published posts, a draft, a future post and a page."""
    make_document(
        "posts/k8s-and-postgres.md",
        title="Kubernetes and Postgres",
        date=pendulum.datetime(2024, 3, 9, 10, 30, tz="Europe/Budapest"),
        body=K8S_AND_POSTGRES,
        tags=["kubernetes", "postgres"],
    )
    make_document(
        "posts/hello-world.md",
        title="Hello World",
        date=pendulum.datetime(2024, 1, 15, 8, 0, tz="UTC"),
        body="First post on the new blog.",
        tags=["meta"],
    )
    make_document(
        "posts/work-in-progress.md",
        title="Work in progress",
        date=pendulum.datetime(2024, 2, 1, tz="UTC"),
        draft=True,
    )
    make_document(
        "posts/from-the-future.md",
        title="From the future",
        date=pendulum.now().add(years=1),
    )
    make_document(
        "projects.md",
        title="Projects",
        date=pendulum.datetime(2023, 12, 1, tz="UTC"),
        body="Side projects: an eBPF extension header, an energy estimator "
        "and a ptrace based debugger.",
    )
    (content_dir / "images").mkdir()
    (content_dir / "images" / "cluster.png").write_bytes(b"\x89PNG")
    return content_dir


@pytest.fixture
def content_repository(content_dir: Path) -> ContentRepository:
    return ContentRepository(content_dir)
