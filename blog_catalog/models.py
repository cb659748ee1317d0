# blog_catalog/models.py
"""
Pydantic models for the stored entities and the request bodies.

Entities are serialised with camelCase field names (``categoryIds``,
``createdAt``...), both in the collection files and over HTTP. Input
accepts camelCase or snake_case.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_record(self) -> dict:
        """Dump to the dict stored in a collection file."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Author(CamelModel):
    id: str
    name: str
    bio: Optional[str] = None


class Category(CamelModel):
    id: str
    name: str


class Tag(CamelModel):
    id: str
    name: str


class Blog(CamelModel):
    """A published blog post.

    ``slug`` is derived from the title when the post is created and
    never changes. ``category_ids`` and ``tag_ids`` hold opaque IDs
    without duplicates; nothing stops them from pointing at deleted or
    unknown entities. ``created_at`` is an ISO-8601 UTC timestamp, so
    comparing two of them as strings orders them chronologically.
    """

    id: str
    slug: str
    title: str
    image_url: Optional[str] = None
    content: str
    category_ids: List[str] = Field(default_factory=list)
    tag_ids: List[str] = Field(default_factory=list)
    author_id: str
    created_at: str


class ExpandedBlog(CamelModel):
    """A blog joined with the entities its IDs point at."""

    blog: Blog
    categories: List[Category] = Field(default_factory=list)
    tags: List[Tag] = Field(default_factory=list)
    author: Optional[Author] = None


def _required(value: str, field: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(f"{field} is required")
    return value


class CreateTaxonomyRequest(CamelModel):
    name: str

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        return _required(v, "name")


class CreateAuthorRequest(CreateTaxonomyRequest):
    bio: Optional[str] = None


class CreateBlogRequest(CamelModel):
    title: str
    content: str
    image_url: Optional[str] = None
    category_ids: List[str]
    tag_ids: List[str]
    author_id: str

    @field_validator("title", "content", "author_id")
    @classmethod
    def _not_blank(cls, v: str, info) -> str:
        return _required(v, info.field_name)


class DeleteResult(BaseModel):
    deleted: bool
