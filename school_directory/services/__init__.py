from .upload_service import UploadService
from .school_service import SchoolService

__all__ = [
    "UploadService",
    "SchoolService"
]
