"""Document schemas for API requests and responses."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class DocumentSaveRequest(BaseModel):
    """Body of ``POST /save-file``."""

    filename: str = Field(
        ...,
        description="Document filename inside the documents directory; a single path segment",
        examples=["harbour-route.json"],
    )
    data: Any = Field(
        ...,
        description="Any JSON value; stored pretty-printed",
        examples=[{"name": "Harbour route", "cP": [[12.5, 40.1], [13.0, 41.7]]}],
    )


class DocumentMessageResponse(BaseModel):
    """Acknowledgement returned by save and delete."""

    message: str = Field(..., examples=["File saved successfully!"])


class DocumentExistsResponse(BaseModel):
    """Presence check result."""

    exists: bool = Field(..., examples=[True])


class DocumentMetadata(BaseModel):
    """One entry of the document listing.

    ``error`` is only set in best-effort listings, for documents that could
    not be read, parsed or stat'ed; ``modified`` is then null.
    """

    model_config = ConfigDict(populate_by_name=True)

    filename: str = Field(..., examples=["harbour-route.json"])
    modified: Optional[str] = Field(
        None,
        description="Last modification time, ISO-8601 UTC with milliseconds",
        examples=["2025-03-14T09:26:53.589Z"],
    )
    cp_count: int = Field(
        0,
        alias="cPCount",
        ge=0,
        description="Length of the document's cP array (0 when absent or not an array)",
        examples=[5],
    )
    error: Optional[str] = Field(
        None,
        description="Why the document could not be summarised (best-effort mode)",
    )
