import re
from typing import Dict, Optional, Any, Set

from pydantic import BaseModel

from school_directory.core.config import settings
from school_directory.schemas.school.base import (
    CONTACT_PATTERN,
    NAME_MIN_LENGTH,
    ADDRESS_MIN_LENGTH,
    CITY_MIN_LENGTH,
    STATE_MIN_LENGTH,
)

EMAIL_PATTERN = re.compile(r"^[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}$", re.IGNORECASE)
CONTACT_RE = re.compile(CONTACT_PATTERN)


class ImageFile(BaseModel):
    """An image picked in the registration form"""
    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


# field -> (required message, min length, min length message)
TEXT_RULES = {
    "name": ("School name is required", NAME_MIN_LENGTH, "Name must be at least {n} characters"),
    "email_id": ("Email is required", None, None),
    "address": ("Address is required", ADDRESS_MIN_LENGTH, "Address must be at least {n} characters"),
    "city": ("City is required", CITY_MIN_LENGTH, "City must be at least {n} characters"),
    "state": ("State is required", STATE_MIN_LENGTH, "State must be at least {n} characters"),
    "contact": ("Contact number is required", None, None),
}


def validate_image(
    image: Optional[ImageFile],
    max_size: Optional[int] = None,
    allowed_types: Optional[Set[str]] = None
) -> Optional[str]:
    """Return an error message for an unacceptable image, None otherwise"""
    if image is None:
        return None
    max_size = max_size or settings.MAX_UPLOAD_SIZE
    allowed_types = allowed_types or settings.ALLOWED_IMAGE_TYPES
    if image.content_type.lower() not in allowed_types:
        return "Only PNG, JPG, GIF or WEBP images are allowed"
    if image.size > max_size:
        return f"Image must be at most {max_size // (1024 * 1024)}MB"
    return None


def validate_form(values: Dict[str, Any], image: Optional[ImageFile] = None) -> Dict[str, str]:
    """
    Validate registration form values the same way the API does.

    Returns a mapping of field name to the first error message for that
    field; an empty mapping means the form may be submitted.
    """
    errors: Dict[str, str] = {}

    for field, (required_message, min_length, min_message) in TEXT_RULES.items():
        value = (values.get(field) or "").strip()
        if not value:
            errors[field] = required_message
        elif min_length and len(value) < min_length:
            errors[field] = min_message.format(n=min_length)

    email = (values.get("email_id") or "").strip()
    if "email_id" not in errors and not EMAIL_PATTERN.match(email):
        errors["email_id"] = "Invalid email address"

    contact = (values.get("contact") or "").strip()
    if "contact" not in errors and not CONTACT_RE.match(contact):
        errors["contact"] = "Contact number must be exactly 10 digits"

    image_error = validate_image(image)
    if image_error:
        errors["image"] = image_error

    return errors
