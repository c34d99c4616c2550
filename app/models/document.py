import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any

# Array field whose length is reported as cPCount in listings
CP_FIELD = "cP"


class ListingMode(str, Enum):
    """How a document listing treats documents it cannot summarise."""

    STRICT = "strict"  # first failure fails the whole listing
    BEST_EFFORT = "best_effort"  # failures are reported per document


def count_cp_entries(document: Any) -> int:
    """Length of the document's cP array, 0 when absent or not an array."""
    if isinstance(document, dict):
        entries = document.get(CP_FIELD)
        if isinstance(entries, list):
            return len(entries)
    return 0


def serialize_document(document: Any) -> str:
    """Pretty-printed JSON, non-ASCII kept as-is.

    Lone surrogates cannot be encoded as UTF-8, so a document containing one
    is written with every non-ASCII character escaped instead.
    """
    content = json.dumps(document, indent=2, ensure_ascii=False)
    try:
        content.encode("utf-8")
    except UnicodeEncodeError:
        content = json.dumps(document, indent=2)
    return content


def format_modified(mtime: float) -> str:
    """Render a filesystem mtime as ISO-8601 UTC with milliseconds, e.g.
    ``2025-03-14T09:26:53.589Z``."""
    moment = datetime.fromtimestamp(mtime, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
