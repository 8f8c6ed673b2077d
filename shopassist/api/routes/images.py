"""Image upload endpoint for the ShopAssist API.

Stores the upload, writes a resized JPEG next to it and returns simulated
"visually similar" products.
"""

import logging
import random
import time
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from shopassist.api.dependencies import get_catalog, get_settings
from shopassist.api.exceptions import ImageProcessingError, ImageTooLargeError, InvalidRequestError
from shopassist.config import Settings
from shopassist.recommender.catalog import Catalog
from shopassist.recommender.images import ANALYSIS_CONFIDENCE, analyze_image_for_products, resize_image

# Configure module logger
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(
    prefix="/api",
    tags=["images"],
)


def _upload_filename(original: Optional[str]) -> str:
    suffix = Path(original or "").suffix.lstrip(".") or "jpg"
    unique = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return f"upload-{unique}.{suffix}"


@router.post("/upload-image")
def upload_image(
    image: Optional[UploadFile] = File(default=None),
    catalog: Catalog = Depends(get_catalog),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Accept an image upload and suggest similar products.

    Raises:
        InvalidRequestError: No file, or the file is not an image.
        ImageTooLargeError: The file exceeds the configured size limit.
        ImageProcessingError: The image could not be decoded or resized.
    """
    if image is None:
        raise InvalidRequestError("No image file provided")
    if not (image.content_type or "").startswith("image/"):
        raise InvalidRequestError(
            "Only image files are allowed!",
            details={"content_type": image.content_type},
        )

    data = image.file.read()
    if len(data) > settings.max_upload_bytes:
        raise ImageTooLargeError(len(data), settings.max_upload_bytes)

    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    filename = _upload_filename(image.filename)
    processed_filename = f"processed-{filename}"

    try:
        (upload_dir / filename).write_bytes(data)
        resize_image(data, upload_dir / processed_filename)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to process image {filename}: {e}", exc_info=True)
        raise ImageProcessingError(filename, e)

    similar = analyze_image_for_products(catalog)
    logger.info(
        "Image uploaded",
        extra={"image_filename": filename, "size_bytes": len(data), "num_similar": len(similar)},
    )

    return {
        "success": True,
        "filename": filename,
        "processedFilename": processed_filename,
        "similarProducts": similar,
        "message": "Image analyzed successfully! I found these visually similar products:",
        "analysisConfidence": ANALYSIS_CONFIDENCE,
    }
