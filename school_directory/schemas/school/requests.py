from typing import Optional, Dict, Any, List, Tuple
from .base import SchoolBase

# Text fields every school registration must carry; image is optional
REQUIRED_FIELDS: Tuple[str, ...] = ("name", "address", "city", "state", "contact", "email_id")


def find_missing_fields(values: Dict[str, Any]) -> List[str]:
    """Return the required fields that are absent or blank in ``values``"""
    missing = []
    for field in REQUIRED_FIELDS:
        value = values.get(field)
        if value is None or not str(value).strip():
            missing.append(field)
    return missing


class SchoolCreateRequest(SchoolBase):
    """Validated text fields of a school registration"""

    def to_db_dict(self, image: Optional[str] = None) -> dict:
        """Convert model to database-friendly dictionary"""
        data = self.model_dump()
        data["email_id"] = str(data["email_id"])
        data["image"] = image
        return data
