"""Runtime settings for the ShopAssist service.

All settings come from environment variables with development defaults, so
the service runs from a fresh checkout without any configuration.
"""

import os
from dataclasses import dataclass

DEFAULT_CATALOG_PATH = "data/productData.json"
DEFAULT_UPLOAD_DIR = "uploads"
DEFAULT_STATIC_DIR = "public"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024
DEFAULT_PORT = 3000


@dataclass
class Settings:
    """Service configuration.

    Attributes:
        catalog_path: JSON file holding the product catalog.
        upload_dir: Directory for uploaded and resized images.
        static_dir: Directory served at ``/`` when it exists.
        log_level: Root logging level.
        max_upload_bytes: Largest accepted image upload.
        host: Interface the development server binds to.
        port: Port the development server listens on.
    """

    catalog_path: str = DEFAULT_CATALOG_PATH
    upload_dir: str = DEFAULT_UPLOAD_DIR
    static_dir: str = DEFAULT_STATIC_DIR
    log_level: str = DEFAULT_LOG_LEVEL
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``SHOPASSIST_*`` variables and ``PORT``."""
        return cls(
            catalog_path=os.getenv("SHOPASSIST_CATALOG_PATH", DEFAULT_CATALOG_PATH),
            upload_dir=os.getenv("SHOPASSIST_UPLOAD_DIR", DEFAULT_UPLOAD_DIR),
            static_dir=os.getenv("SHOPASSIST_STATIC_DIR", DEFAULT_STATIC_DIR),
            log_level=os.getenv("SHOPASSIST_LOG_LEVEL", DEFAULT_LOG_LEVEL),
            max_upload_bytes=int(
                os.getenv("SHOPASSIST_MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES)
            ),
            host=os.getenv("SHOPASSIST_HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", DEFAULT_PORT)),
        )
