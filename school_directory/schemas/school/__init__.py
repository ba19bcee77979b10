# school_directory/schemas/school/__init__.py
from .base import (
    SchoolBase,
    CONTACT_PATTERN,
    NAME_MIN_LENGTH,
    ADDRESS_MIN_LENGTH,
    CITY_MIN_LENGTH,
    STATE_MIN_LENGTH
)
from .requests import SchoolCreateRequest, REQUIRED_FIELDS, find_missing_fields
from .responses import SchoolResponse, SchoolListResponse, SchoolCreatedResponse

__all__ = [
    'SchoolBase',
    'CONTACT_PATTERN',
    'NAME_MIN_LENGTH',
    'ADDRESS_MIN_LENGTH',
    'CITY_MIN_LENGTH',
    'STATE_MIN_LENGTH',
    'SchoolCreateRequest',
    'REQUIRED_FIELDS',
    'find_missing_fields',
    'SchoolResponse',
    'SchoolListResponse',
    'SchoolCreatedResponse'
]
