"""
Blog catalog service.

Blog posts tagged with categories, tags and an author, persisted as
whole-file JSON collections, plus a catalogue query layer that filters,
sorts and paginates the posts and keeps its state in sync with a URL
query string.
"""

__version__ = "1.0.0"
