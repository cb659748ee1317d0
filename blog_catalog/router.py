"""
Route definitions for blogs, categories, tags and authors.

Endpoints under /api:
- GET    /blogs                   : list blogs, newest first
- POST   /blogs                   : create a blog
- GET    /blogs/{slug}            : get one blog
- GET    /blogs/{slug}/expanded   : blog with its categories, tags and author
- DELETE /blogs/{slug}            : delete a blog
- GET    /categories, /tags, /authors : list, sorted by name
- POST   /categories, /tags, /authors : create by name (idempotent)
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request

from .blogs import BlogService, expand_blog
from .errors import NotFoundError, ValidationError
from .models import (
    Author,
    Blog,
    Category,
    CreateAuthorRequest,
    CreateBlogRequest,
    CreateTaxonomyRequest,
    DeleteResult,
    ExpandedBlog,
    Tag,
)
from .taxonomy import AuthorService, CategoryService, TagService

router = APIRouter(prefix="/api")


def get_blog_service(request: Request) -> BlogService:
    return request.app.state.blogs


def get_category_service(request: Request) -> CategoryService:
    return request.app.state.categories


def get_tag_service(request: Request) -> TagService:
    return request.app.state.tags


def get_author_service(request: Request) -> AuthorService:
    return request.app.state.authors


@router.get("/blogs", response_model=List[Blog], tags=["blogs"])
def list_blogs(blogs: BlogService = Depends(get_blog_service)):
    return blogs.list_all()


@router.post("/blogs", response_model=Blog, status_code=201, tags=["blogs"])
def create_blog(
    req: CreateBlogRequest,
    blogs: BlogService = Depends(get_blog_service),
    authors: AuthorService = Depends(get_author_service),
):
    if authors.get_by_id(req.author_id) is None:
        raise ValidationError(f"Unknown author: {req.author_id}")
    return blogs.create(req)


@router.get("/blogs/{slug}", response_model=Blog, tags=["blogs"])
def get_blog(slug: str, blogs: BlogService = Depends(get_blog_service)):
    blog = blogs.get_by_slug(slug)
    if blog is None:
        raise NotFoundError(f"Blog not found: {slug}")
    return blog


@router.get("/blogs/{slug}/expanded", response_model=ExpandedBlog, tags=["blogs"])
def get_expanded_blog(
    slug: str,
    blogs: BlogService = Depends(get_blog_service),
    categories: CategoryService = Depends(get_category_service),
    tags: TagService = Depends(get_tag_service),
    authors: AuthorService = Depends(get_author_service),
):
    blog = blogs.get_by_slug(slug)
    if blog is None:
        raise NotFoundError(f"Blog not found: {slug}")
    return expand_blog(blog, categories.list_all(), tags.list_all(), authors.list_all())


@router.delete("/blogs/{slug}", response_model=DeleteResult, tags=["blogs"])
def delete_blog(slug: str, blogs: BlogService = Depends(get_blog_service)):
    if not blogs.delete_by_slug(slug):
        raise NotFoundError(f"Blog not found: {slug}")
    return DeleteResult(deleted=True)


@router.get("/categories", response_model=List[Category], tags=["taxonomy"])
def list_categories(categories: CategoryService = Depends(get_category_service)):
    return categories.list_all()


@router.post("/categories", response_model=Category, status_code=201, tags=["taxonomy"])
def create_category(
    req: CreateTaxonomyRequest,
    categories: CategoryService = Depends(get_category_service),
):
    return categories.create_by_name(req.name)


@router.get("/tags", response_model=List[Tag], tags=["taxonomy"])
def list_tags(tags: TagService = Depends(get_tag_service)):
    return tags.list_all()


@router.post("/tags", response_model=Tag, status_code=201, tags=["taxonomy"])
def create_tag(req: CreateTaxonomyRequest, tags: TagService = Depends(get_tag_service)):
    return tags.create_by_name(req.name)


@router.get("/authors", response_model=List[Author], tags=["taxonomy"])
def list_authors(authors: AuthorService = Depends(get_author_service)):
    return authors.list_all()


@router.post("/authors", response_model=Author, status_code=201, tags=["taxonomy"])
def create_author(req: CreateAuthorRequest, authors: AuthorService = Depends(get_author_service)):
    return authors.create_by_name(req.name, bio=req.bio)
