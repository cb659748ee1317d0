"""
Blog service: list, lookup by slug, create and delete.

Every mutation reads the whole ``blogs.json`` list, builds the new list
and writes it back. Two concurrent ``create`` calls both read the list
before either writes, so the second write drops the first post. The
collection is assumed to have a single writer.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from .errors import ValidationError
from .models import Author, Blog, Category, CreateBlogRequest, ExpandedBlog, Tag
from .storage import Collection, generate_id
from .taxonomy import load_entities, validate_records
from .text import allocate_unique, slugify


logger = logging.getLogger(__name__)


def utc_now_iso() -> str:
    """Current instant as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _dedupe(ids: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(ids))


class BlogService:
    def __init__(
        self,
        location: Union[str, Path],
        clock: Callable[[], str] = utc_now_iso,
    ):
        self.collection = Collection(location)
        self.clock = clock

    def _load(self) -> List[Blog]:
        return load_entities(self.collection, Blog)

    def list_all(self) -> List[Blog]:
        """Return every blog, newest first."""
        return sorted(self._load(), key=lambda b: b.created_at, reverse=True)

    def get_by_slug(self, slug: str) -> Optional[Blog]:
        return next((b for b in self._load() if b.slug == slug), None)

    def create(self, req: CreateBlogRequest) -> Blog:
        """Create a blog and persist it at the head of the collection.

        The slug is derived from the title and suffixed with ``-2``,
        ``-3``... when already taken. Titles with no letter or digit
        would produce an empty slug and are rejected.

        Raises
        ------
        ValidationError
            If the title does not yield a usable slug.
        """
        title = req.title.strip()
        if not slugify(title):
            raise ValidationError("title must contain at least one letter or digit")

        records = self.collection.read_all()
        blogs = validate_records(self.collection, records, Blog)
        slug = allocate_unique(title, {b.slug for b in blogs})
        image_url = req.image_url.strip() if req.image_url is not None else None
        blog = Blog(
            id=generate_id("blog"),
            slug=slug,
            title=title,
            image_url=image_url,
            content=req.content.strip(),
            category_ids=_dedupe(req.category_ids),
            tag_ids=_dedupe(req.tag_ids),
            author_id=req.author_id,
            created_at=self.clock(),
        )
        self.collection.write_all([blog.to_record()] + records)
        logger.info("Created blog %s (%s)", blog.id, blog.slug)
        return blog

    def delete_by_slug(self, slug: str) -> bool:
        """Remove the blog with ``slug``. Returns whether one was removed."""
        records = self.collection.read_all()
        blogs = validate_records(self.collection, records, Blog)
        remaining = [r for r, b in zip(records, blogs) if b.slug != slug]
        if len(remaining) == len(records):
            return False
        self.collection.write_all(remaining)
        logger.info("Deleted blog %s", slug)
        return True


def expand_blog(
    blog: Blog,
    categories: Iterable[Category],
    tags: Iterable[Tag],
    authors: Iterable[Author],
) -> ExpandedBlog:
    """Join a blog's category, tag and author IDs to the entities.

    IDs with no matching entity are dropped; an unknown author gives
    ``author=None``.
    """
    cat_map = {c.id: c for c in categories}
    tag_map = {t.id: t for t in tags}
    author = next((a for a in authors if a.id == blog.author_id), None)
    return ExpandedBlog(
        blog=blog,
        categories=[cat_map[i] for i in blog.category_ids if i in cat_map],
        tags=[tag_map[i] for i in blog.tag_ids if i in tag_map],
        author=author,
    )
