from pydantic import BaseModel, EmailStr, Field

CONTACT_PATTERN = r"^[0-9]{10}$"

NAME_MIN_LENGTH = 3
ADDRESS_MIN_LENGTH = 10
CITY_MIN_LENGTH = 2
STATE_MIN_LENGTH = 2


class SchoolBase(BaseModel):
    name: str = Field(min_length=NAME_MIN_LENGTH, max_length=255)
    address: str = Field(min_length=ADDRESS_MIN_LENGTH, max_length=500)
    city: str = Field(min_length=CITY_MIN_LENGTH, max_length=100)
    state: str = Field(min_length=STATE_MIN_LENGTH, max_length=100)
    contact: str = Field(pattern=CONTACT_PATTERN, examples=["9876543210"])
    email_id: EmailStr

    class Config:
        from_attributes = True
        str_strip_whitespace = True
