# school_directory/schemas/__init__.py
from .common.error import ErrorResponse
from .school import (
    SchoolCreateRequest,
    SchoolResponse,
    SchoolListResponse,
    SchoolCreatedResponse
)

__all__ = [
    "ErrorResponse",
    "SchoolCreateRequest",
    "SchoolResponse",
    "SchoolListResponse",
    "SchoolCreatedResponse"
]
