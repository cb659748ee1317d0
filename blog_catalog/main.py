# blog_catalog/main.py
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from . import __version__
from .blogs import BlogService
from .catalog import catalog_router
from .config import Settings, get_settings
from .errors import NotFoundError, StorageError, ValidationError
from .router import router as api_router
from .taxonomy import AuthorService, CategoryService, TagService


logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title="Blog Catalog",
        description=(
            "Blog posts with categories, tags and authors, stored as JSON "
            "collections, with a filterable and paginated catalogue."
        ),
        version=__version__,
    )
    app.state.settings = settings
    app.state.blogs = BlogService(settings.blogs_file)
    app.state.categories = CategoryService(settings.categories_file)
    app.state.tags = TagService(settings.tags_file)
    app.state.authors = AuthorService(settings.authors_file)

    @app.exception_handler(ValidationError)
    async def _validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError):
        messages = []
        for err in exc.errors():
            loc = ".".join(str(p) for p in err.get("loc", ())[1:])
            messages.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
        return JSONResponse(status_code=400, content={"detail": "; ".join(messages)})

    @app.exception_handler(NotFoundError)
    async def _not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(StorageError)
    async def _storage_error(request: Request, exc: StorageError):
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})

    # Health check
    @app.get("/")
    def health_check():
        return {"status": "ok", "data_dir": str(settings.data_dir)}

    app.include_router(api_router)
    app.include_router(catalog_router)
    return app


app = create_app()
