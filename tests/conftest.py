"""Pytest configuration and fixtures."""

import pytest

from fastapi.testclient import TestClient

from blog_catalog.blogs import BlogService
from blog_catalog.config import Settings
from blog_catalog.main import create_app
from blog_catalog.taxonomy import AuthorService, CategoryService, TagService


@pytest.fixture()
def settings(tmp_path):
    """Settings pointing at a fresh data directory."""
    return Settings(data_dir=tmp_path / "data")


@pytest.fixture()
def clock():
    """A clock that advances one second per call."""
    ticks = iter(range(10_000))

    def now() -> str:
        n = next(ticks)
        return f"2024-01-01T{n // 3600:02d}:{n // 60 % 60:02d}:{n % 60:02d}.000Z"

    return now


@pytest.fixture()
def blog_service(settings, clock):
    return BlogService(settings.blogs_file, clock=clock)


@pytest.fixture()
def category_service(settings):
    return CategoryService(settings.categories_file)


@pytest.fixture()
def tag_service(settings):
    return TagService(settings.tags_file)


@pytest.fixture()
def author_service(settings):
    return AuthorService(settings.authors_file)


@pytest.fixture()
def client(settings):
    """Create a test client backed by a temporary data directory."""
    app = create_app(settings=settings)
    with TestClient(app) as c:
        yield c
