"""
Media component - image library.
"""

from .component import (
    INVALID_TYPE,
    TOO_LARGE,
    generate_file_name,
    run_delete_image,
    run_list_images,
    run_list_library,
    run_upload_image,
    sanitize_file_name,
)
from .models import UploadConfig, UploadImageInput, UploadImageOutput

__all__ = [
    "INVALID_TYPE",
    "TOO_LARGE",
    "generate_file_name",
    "run_delete_image",
    "run_list_images",
    "run_list_library",
    "run_upload_image",
    "sanitize_file_name",
    "UploadConfig",
    "UploadImageInput",
    "UploadImageOutput",
]
