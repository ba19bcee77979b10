from typing import List, Optional, Dict, Any

from fastapi import UploadFile
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select, desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from school_directory.models import School
from school_directory.schemas.school.requests import SchoolCreateRequest, find_missing_fields
from school_directory.services.upload_service import UploadService
from school_directory.core.logging import logger, log_function_call
from school_directory.core.exceptions import (
    MissingFieldsException,
    InvalidSchoolDataException,
    DatabaseOperationException,
)


class SchoolService:
    def __init__(self, db: AsyncSession, upload_service: UploadService):
        """Initialize SchoolService with database session and upload service"""
        self.db = db
        self.upload_service = upload_service

    def validate_school_data(self, values: Dict[str, Any]) -> SchoolCreateRequest:
        """
        Validate school fields before creation

        Args:
            values: Raw text fields of the registration form

        Raises:
            MissingFieldsException: If any required field is absent or blank
            InvalidSchoolDataException: If a field violates its format rules
        """
        missing = find_missing_fields(values)
        if missing:
            raise MissingFieldsException(fields=missing)

        try:
            return SchoolCreateRequest.model_validate(values)
        except PydanticValidationError as e:
            errors = {
                ".".join(str(part) for part in err["loc"]): err["msg"]
                for err in e.errors()
            }
            raise InvalidSchoolDataException(errors=errors) from e

    @staticmethod
    def has_image(image: Optional[UploadFile]) -> bool:
        # Browsers send an empty, unnamed part when no file was chosen
        return image is not None and bool(image.filename)

    async def create_school(self, values: Dict[str, Any], image: Optional[UploadFile] = None) -> School:
        """Validate the registration, store the image if any, and insert one row"""
        school_data = self.validate_school_data(values)

        image_name = None
        if self.has_image(image):
            image_name = await self.upload_service.save_image(image)

        new_school = School(**school_data.to_db_dict(image=image_name))
        try:
            self.db.add(new_school)
            await self.db.commit()
            await self.db.refresh(new_school)
        except SQLAlchemyError as e:
            await self.db.rollback()
            self.upload_service.delete(image_name)
            logger.error(f"Error inserting school {school_data.name!r}: {e}")
            raise DatabaseOperationException(str(e)) from e

        logger.info(f"Created school {new_school.id}: {new_school.name}")
        return new_school

    @log_function_call(logger)
    async def list_schools(self) -> List[School]:
        """Return every school, most recently created first"""
        query = select(School).order_by(desc(School.created_at), desc(School.id))
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching schools: {e}")
            raise DatabaseOperationException(str(e)) from e
        return list(result.scalars().all())
