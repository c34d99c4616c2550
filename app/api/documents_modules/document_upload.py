"""
Map image upload endpoint.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from app.models.schemas import APIErrorResponse, MapUploadResponse
from app.services.upload_service import MapUploadService
from .common import get_upload_service, log_operation_start, log_operation_success

router = APIRouter()


@router.post(
    "/upload",
    response_model=MapUploadResponse,
    summary="Upload Map Image",
    operation_id="uploadMap",
    description="""Upload a PNG or JPEG map image as multipart field `file`.

The image is stored as `YYYYMMDD_HHMMSS<ext>` and served back under `/maps`.

**Example Request:**
```bash
curl -X POST "http://localhost:3000/upload" -F "file=@harbour.png"
```""",
    responses={
        400: {
            "model": APIErrorResponse,
            "description": "No file sent, or MIME type not png/jpeg",
        },
        500: {"model": APIErrorResponse, "description": "Image could not be written"},
    },
)
async def upload_map(
    file: Optional[UploadFile] = File(None, description="PNG or JPEG image"),
    upload_service: MapUploadService = Depends(get_upload_service),
):
    log_operation_start(
        "Map upload",
        filename=file.filename if file else None,
        content_type=file.content_type if file else None,
    )

    result = await upload_service.upload_map(file)

    log_operation_success("Map upload", map_file=result.map_file)
    return result
