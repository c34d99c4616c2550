"""Shared filename validators.

These raise ``ValueError``; the storage layer turns that into a client error.
"""

MAX_FILENAME_LENGTH = 255

FORBIDDEN_FILENAME_CHARS = ["/", "\\", "\x00"]


def validate_storage_filename(v: str) -> str:
    """Validate a client-supplied document filename.

    A usable name is a single path segment: non-empty, no separators, no NUL,
    and not one of the relative directory entries.

    Args:
        v: The filename to validate

    Returns:
        The filename, unchanged

    Raises:
        ValueError: If the filename could leave the storage directory
    """
    if not isinstance(v, str) or not v:
        raise ValueError("Filename cannot be empty")

    if len(v) > MAX_FILENAME_LENGTH:
        raise ValueError(
            f"Filename cannot be longer than {MAX_FILENAME_LENGTH} characters"
        )

    for char in FORBIDDEN_FILENAME_CHARS:
        if char in v:
            raise ValueError(f"Filename cannot contain {char!r}")

    if v in (".", ".."):
        raise ValueError("Filename cannot be a directory reference")

    return v
