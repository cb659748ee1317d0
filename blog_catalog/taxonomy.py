"""
Category, tag and author services.

All three share the same contract: ``list_all`` returns the collection
sorted by name, and ``create_by_name`` is idempotent. Creating an
entity whose name already exists (compared case-insensitively after
trimming) returns the stored entity unchanged instead of adding a
duplicate.

Blank names are rejected by the request models before reaching these
services; the services do not validate again.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Generic, List, Optional, Type, TypeVar, Union

import pydantic

from .errors import StorageError
from .models import Author, Category, Tag
from .storage import Collection, generate_id


logger = logging.getLogger(__name__)

T = TypeVar("T", Category, Tag, Author)
M = TypeVar("M", bound=pydantic.BaseModel)


def validate_records(collection: Collection, records: List[dict], model: Type[M]) -> List[M]:
    """Validate raw ``records`` read from ``collection`` into ``model``."""
    try:
        return [model.model_validate(r) for r in records]
    except pydantic.ValidationError as exc:
        logger.error("Malformed record in %s: %s", collection.location, exc)
        raise StorageError(collection.location, f"malformed record: {exc}") from exc


def load_entities(collection: Collection, model: Type[M]) -> List[M]:
    """Read a collection and validate every record into ``model``."""
    return validate_records(collection, collection.read_all(), model)


class TaxonomyService(Generic[T]):
    model: Type[T]
    id_prefix: str

    def __init__(self, location: Union[str, Path]):
        self.collection = Collection(location)

    def _load(self) -> List[T]:
        return load_entities(self.collection, self.model)

    def list_all(self) -> List[T]:
        return sorted(self._load(), key=lambda e: e.name)

    def get_by_id(self, entity_id: str) -> Optional[T]:
        return next((e for e in self._load() if e.id == entity_id), None)

    def build(self, entity_id: str, name: str, **extra: Any) -> T:
        return self.model(id=entity_id, name=name)

    def create_by_name(self, name: str, **extra: Any) -> T:
        name = name.strip()
        records = self.collection.read_all()
        items = validate_records(self.collection, records, self.model)
        # Linear scan is fine for collections of a few hundred entries
        wanted = name.lower()
        existing = next((e for e in items if e.name.lower() == wanted), None)
        if existing is not None:
            logger.debug("%s %r already exists as %s", self.model.__name__, name, existing.id)
            return existing

        item = self.build(generate_id(self.id_prefix), name, **extra)
        # Stored records are written back as read; only the new one is added
        self.collection.write_all(records + [item.to_record()])
        logger.info("Created %s %s (%r)", self.model.__name__.lower(), item.id, name)
        return item


class CategoryService(TaxonomyService[Category]):
    model = Category
    id_prefix = "cat"


class TagService(TaxonomyService[Tag]):
    model = Tag
    id_prefix = "tag"


class AuthorService(TaxonomyService[Author]):
    model = Author
    id_prefix = "auth"

    def build(self, entity_id: str, name: str, bio: Optional[str] = None, **extra: Any) -> Author:
        return Author(id=entity_id, name=name, bio=bio.strip() if bio is not None else None)

    def create_by_name(self, name: str, bio: Optional[str] = None, **extra: Any) -> Author:
        return super().create_by_name(name, bio=bio)
