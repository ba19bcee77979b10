from .api import ApiError, SchoolDirectoryClient
from .browser import SchoolBrowser
from .form import FormBusyError, FormState, SchoolFormController
from .search import filter_schools
from .validation import ImageFile, validate_form

__all__ = [
    "ApiError",
    "SchoolDirectoryClient",
    "SchoolBrowser",
    "FormBusyError",
    "FormState",
    "SchoolFormController",
    "filter_schools",
    "ImageFile",
    "validate_form"
]
