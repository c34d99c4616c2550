"""Map image upload schemas."""

from pydantic import BaseModel, ConfigDict, Field


class MapUploadResponse(BaseModel):
    """Result of ``POST /upload``."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = Field(True, examples=[True])
    map_file: str = Field(
        ...,
        alias="mapFile",
        description="Public path of the stored image",
        examples=["/maps/20250314_092653.png"],
    )
    scaled: bool = Field(
        False,
        description="Always false; images are stored as uploaded",
        examples=[False],
    )
