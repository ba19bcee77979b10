from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from school_directory.core.dependencies import get_school_service
from school_directory.core.errors import (
    BadRequestError,
    DatabaseError,
    ServerError,
    UploadError,
    ValidationError,
)
from school_directory.core.exceptions import (
    DatabaseOperationException,
    FileTooLargeException,
    InvalidFileTypeException,
    InvalidSchoolDataException,
    MissingFieldsException,
    UploadWriteException,
)
from school_directory.schemas.common.error import ErrorResponse
from school_directory.schemas.school.responses import (
    SchoolCreatedResponse,
    SchoolListResponse,
    SchoolResponse,
)
from school_directory.services.school_service import SchoolService

router = APIRouter(tags=["Schools"])

ALLOWED_METHODS = "GET, POST"


@router.get(
    "/schools",
    response_model=SchoolListResponse,
    responses={500: {"model": ErrorResponse, "description": "Database unavailable"}}
)
async def list_schools(
    school_service: SchoolService = Depends(get_school_service)
) -> SchoolListResponse:
    """List every registered school, newest first."""
    try:
        schools = await school_service.list_schools()
    except DatabaseOperationException as e:
        raise DatabaseError("Failed to fetch schools", details=e.message)

    return SchoolListResponse(
        schools=[SchoolResponse.model_validate(school) for school in schools]
    )


@router.post(
    "/schools",
    status_code=status.HTTP_201_CREATED,
    response_model=SchoolCreatedResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid fields"},
        500: {"model": ErrorResponse, "description": "Upload or database failure"}
    }
)
async def create_school(
    name: Optional[str] = Form(None),
    address: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    state: Optional[str] = Form(None),
    contact: Optional[str] = Form(None),
    email_id: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    school_service: SchoolService = Depends(get_school_service)
) -> SchoolCreatedResponse:
    """Register a school from a multipart form with an optional image."""
    values = {
        "name": name,
        "address": address,
        "city": city,
        "state": state,
        "contact": contact,
        "email_id": email_id,
    }
    try:
        school = await school_service.create_school(values, image)
    except MissingFieldsException as e:
        raise BadRequestError(e.message)
    except InvalidSchoolDataException as e:
        raise ValidationError(e.message, details=e.errors)
    except (FileTooLargeException, InvalidFileTypeException) as e:
        raise UploadError(e.message, details={"field": "image"})
    except UploadWriteException as e:
        raise ServerError("Failed to add school", details=e.message)
    except DatabaseOperationException as e:
        raise DatabaseError("Failed to add school", details=e.message)

    return SchoolCreatedResponse(school_id=school.id)


@router.api_route(
    "/schools",
    methods=["PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"],
    include_in_schema=False
)
async def schools_method_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        headers={"Allow": ALLOWED_METHODS}
    )
