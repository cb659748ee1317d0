# blog_catalog/storage.py
"""
Whole-document JSON persistence for the four collections.

Each collection (blogs, categories, tags, authors) lives in its own
JSON file holding a single array. There is no partial-write API: every
mutation reads the full list, computes a new list and writes it back
with ``write_all``. A missing file reads as an empty collection, which
is the expected first-run state.

Writes go to a temporary file in the same directory and are moved into
place with ``os.replace`` so a reader never observes a half-written
document. Two callers doing read/modify/write on the same collection
can still lose one of the updates; the last writer wins.
"""

from __future__ import annotations

import json
import logging
import os
import random
import stat
import string
import tempfile
import threading
import time
from pathlib import Path
from typing import Any, Dict, List, Union

from .errors import StorageError


logger = logging.getLogger(__name__)

Location = Union[str, Path]
Record = Dict[str, Any]

_BASE36 = string.digits + string.ascii_lowercase

# Serialises the physical file replacement inside this process
_write_lock = threading.Lock()


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits: List[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_id(prefix: str) -> str:
    """Return ``<prefix>_<base36 millis>_<6 random base36 chars>``.

    IDs sort by creation time within one process and are practically
    unique there. Nothing guards against clock skew across machines;
    user-facing uniqueness is enforced on names and slugs instead.
    """
    stamp = _to_base36(int(time.time() * 1000))
    suffix = "".join(random.choices(_BASE36, k=6))
    return f"{prefix}_{stamp}_{suffix}"


def read_all(location: Location) -> List[Record]:
    """Load every record stored at ``location``.

    Returns
    -------
    List[Record]
        The decoded list. An absent file yields ``[]``; so does a
        document whose top level is not a list.

    Raises
    ------
    StorageError
        When the file exists but cannot be read or is not valid JSON.
    """
    path = Path(location)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.debug("Collection %s does not exist yet, reading as empty", path)
        return []
    except (OSError, ValueError) as exc:
        logger.error("Error reading collection %s: %s", path, exc)
        raise StorageError(path, f"cannot read collection: {exc}") from exc

    if not isinstance(data, list):
        logger.warning(
            "Collection %s holds a %s instead of a list, reading as empty",
            path,
            type(data).__name__,
        )
        return []
    logger.debug("Read %d records from %s", len(data), path)
    return data


def write_all(location: Location, records: List[Record]) -> None:
    """Replace the collection stored at ``location`` with ``records``.

    The list is written pretty-printed with a trailing newline. Missing
    parent directories are created first.

    Raises
    ------
    StorageError
        When the document cannot be serialised or written. The previous
        file content is left untouched in that case.
    """
    path = Path(location)
    try:
        payload = json.dumps(records, ensure_ascii=False, indent=2) + "\n"
    except (TypeError, ValueError) as exc:
        logger.error("Cannot serialise collection %s: %s", path, exc)
        raise StorageError(path, f"cannot serialise collection: {exc}") from exc

    with _write_lock:
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            # mkstemp creates 0600; keep the mode of the file being replaced
            try:
                mode = stat.S_IMODE(os.stat(path).st_mode)
            except FileNotFoundError:
                mode = 0o644
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, path)
        except OSError as exc:
            logger.error("Error writing collection %s: %s", path, exc)
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(path, f"cannot write collection: {exc}") from exc
    logger.debug("Wrote %d records to %s", len(records), path)


class Collection:
    """A named JSON collection bound to one file."""

    def __init__(self, location: Location):
        self.location = Path(location)

    def read_all(self) -> List[Record]:
        return read_all(self.location)

    def write_all(self, records: List[Record]) -> None:
        write_all(self.location, records)

    def __repr__(self) -> str:
        return f"Collection({str(self.location)!r})"
