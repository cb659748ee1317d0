"""
Catalog package for the blog catalog.

This package holds the client-side query layer: the ``FilterState``
schema, the pure query engine that filters, sorts and paginates an
in-memory blog list, the filter store with its reducers, and the
synchronizer that keeps the filter state and the URL query string in
step. The router exposes the same query over HTTP so that a front-end
can forward its URL parameters unchanged.
"""

from .router import router as catalog_router  # noqa: F401
