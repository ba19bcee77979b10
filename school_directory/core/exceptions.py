# school_directory/core/exceptions.py

class BaseAppException(Exception):
    """Base exception class for the application"""
    def __init__(self, message: str = "Application error"):
        self.message = message
        super().__init__(self.message)


class MissingFieldsException(BaseAppException):
    """Raised when a required school field is absent or blank"""
    def __init__(self, message="All fields except image are required", fields=None):
        self.fields = list(fields or [])
        super().__init__(message)


class InvalidSchoolDataException(BaseAppException):
    """Raised when school fields fail format validation"""
    def __init__(self, message="Invalid school details", errors=None):
        self.errors = dict(errors or {})
        super().__init__(message)


class UploadException(BaseAppException):
    """Base class for image upload failures"""
    pass


class FileTooLargeException(UploadException):
    """Raised when an uploaded image exceeds the size limit"""
    def __init__(self, max_size: int):
        self.max_size = max_size
        super().__init__(f"Image must be at most {max_size // (1024 * 1024)}MB")


class InvalidFileTypeException(UploadException):
    """Raised when an uploaded file is not a supported image type"""
    def __init__(self, content_type: str):
        self.content_type = content_type
        super().__init__(f"Unsupported image type: {content_type or 'unknown'}")


class UploadWriteException(UploadException):
    """Raised when an uploaded image cannot be written to disk"""
    def __init__(self, message="Failed to store uploaded image"):
        super().__init__(message)


class DatabaseOperationException(BaseAppException):
    """Raised when a database operation fails"""
    def __init__(self, message="Database operation failed"):
        super().__init__(message)
