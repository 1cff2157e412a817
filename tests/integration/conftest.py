from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app import deps
from app.main import app
from app.repositories.content_repository import ContentRepository
from app.services.post_service import PostService


@pytest.fixture
def test_client(blog: Path) -> TestClient:
    app.dependency_overrides[deps.post_service] = lambda: PostService(
        ContentRepository(blog), include_drafts=False, include_future=False
    )
    yield TestClient(app, raise_server_exceptions=True)
    app.dependency_overrides = {}
