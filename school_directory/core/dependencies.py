from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from school_directory.core.database import get_db
from school_directory.services.upload_service import UploadService
from school_directory.services.school_service import SchoolService


# Service providers
def get_upload_service() -> UploadService:
    """Provide UploadService bound to the configured upload folder"""
    return UploadService()


async def get_school_service(
    db: AsyncSession = Depends(get_db),
    upload_service: UploadService = Depends(get_upload_service)
) -> SchoolService:
    """Provide SchoolService instance"""
    return SchoolService(db, upload_service)
